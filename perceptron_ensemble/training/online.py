"""
OnlineTrainer - Instance-by-Instance Perceptron Rule
====================================================

Weights are updated after every instance:

    activation = w . x (+ b)
    predicted  = sign(activation)
    error      = target - predicted
    w         += 0.5 * lr * error * x
    b         += 0.5 * lr * error          (bias enabled only)

Training stops after ``max_iterations`` epochs or after the first epoch in
which no weight changed.

Example Usage:
    ```python
    from perceptron_ensemble.training import OnlineTrainer

    trainer = OnlineTrainer(random_state=7)
    weights = trainer.train(X, y)
    if not weights.converged:
        print(f"hit the cap after {weights.n_epochs} epochs")
    ```
"""

from typing import Optional
import numpy as np
import logging

from perceptron_ensemble.core.interfaces.i_trainer import EpochCallback
from perceptron_ensemble.core.registry import registered
from perceptron_ensemble.core.types.model import WeightVector
from perceptron_ensemble.training.base import BaseTrainer


logger = logging.getLogger(__name__)


@registered('trainer', 'online', metadata={'description': 'Online perceptron rule'})
class OnlineTrainer(BaseTrainer):
    """Perceptron rule with per-instance updates and early stopping."""

    @property
    def name(self) -> str:
        return "online"

    def _train_implementation(self,
                              X: np.ndarray,
                              targets: np.ndarray,
                              weights: np.ndarray,
                              bias: Optional[float],
                              callback: Optional[EpochCallback]) -> WeightVector:
        step = 0.5 * self._learning_rate
        debug = logger.isEnabledFor(logging.DEBUG)

        epoch = 0
        changed = True
        while epoch < self._max_iterations:
            epoch += 1
            changed = False
            n_errors = 0

            for x, target in zip(X, targets):
                activation = x @ weights
                if bias is not None:
                    activation += bias

                error = target - self.sign(activation)
                if error == 0:
                    continue

                n_errors += 1
                delta = step * error * x
                if np.any(delta != 0):
                    weights += delta
                    changed = True
                if bias is not None:
                    bias += step * error
                    changed = True

            if debug:
                logger.debug(f"online epoch {epoch}: {n_errors} errors")

            if self._stop_requested(callback, epoch, weights):
                logger.info(f"Online training stopped by callback at epoch {epoch}")
                break
            if not changed:
                break

        return WeightVector(
            weights=weights,
            bias=None if bias is None else float(bias),
            n_epochs=epoch,
            converged=not changed,
        )
