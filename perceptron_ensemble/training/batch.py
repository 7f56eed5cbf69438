"""
BatchTrainer - Accumulated Gradient-Style Rule
==============================================

Same initialization and error computation as the online rule, but every
instance in an epoch is scored against the weights from the start of that
epoch. The deltas are summed and applied once per epoch:

    w += sum_i 0.5 * lr * error_i * x_i

The activation is computed from scratch for every instance. The batch rule
always runs exactly ``max_iterations`` epochs unless the callback stops it.
"""

from typing import Optional
import numpy as np
import logging

from perceptron_ensemble.core.interfaces.i_trainer import EpochCallback
from perceptron_ensemble.core.registry import registered
from perceptron_ensemble.core.types.model import WeightVector
from perceptron_ensemble.training.base import BaseTrainer


logger = logging.getLogger(__name__)


@registered('trainer', 'batch', metadata={'description': 'Batch accumulated rule'})
class BatchTrainer(BaseTrainer):
    """
    Batch rule: one weight update per epoch.

    ``WeightVector.converged`` reports whether the last epoch left the
    weights unchanged (a fixed point); it never shortens training.
    """

    @property
    def name(self) -> str:
        return "batch"

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

            activations = X @ weights
            if bias is not None:
                activations = activations + bias
            errors = targets - self.sign(activations)

            delta = step * (errors @ X)
            changed = bool(np.any(delta != 0))
            weights += delta
            if bias is not None:
                bias_delta = step * float(errors.sum())
                bias += bias_delta
                changed = changed or bias_delta != 0

            if debug:
                logger.debug(
                    f"batch epoch {epoch}: {int(np.count_nonzero(errors))} errors"
                )

            if self._stop_requested(callback, epoch, weights):
                logger.info(f"Batch training stopped by callback at epoch {epoch}")
                break

        return WeightVector(
            weights=weights,
            bias=None if bias is None else float(bias),
            n_epochs=epoch,
            converged=not changed,
        )
