"""
BaseTrainer - Shared Machinery for Linear Training Rules
=========================================================

Both the online and the batch rule share:
- weight initialization from U[0, 1) with a seeded generator
- an explicit, optional bias term
- the three-valued sign activation
- the target encoding of 0/1 labels
- the iteration cap and the per-epoch callback

Target encodings:
----------------
- 'signed' (default): label 0 -> -1, label 1 -> +1. With sign() outputs in
  {-1, 0, +1} this is the textbook perceptron and converges on linearly
  separable data.
- 'binary': the raw 0/1 label is the target. This reproduces the historical
  benchmark behaviour, where a correct class-0 prediction of -1 still
  produces an error of +1.

Subclasses implement ``_train_implementation``.
"""

from abc import abstractmethod
from typing import Any, Dict, Optional, Tuple
import numpy as np
import logging

from perceptron_ensemble.core.interfaces.i_trainer import ITrainer, EpochCallback
from perceptron_ensemble.core.types.model import WeightVector
from perceptron_ensemble.utils.validation import (
    check_choice,
    check_positive,
    check_type,
    validate_binary_labels,
    validate_features,
)


logger = logging.getLogger(__name__)


TARGET_ENCODINGS = ('signed', 'binary')


class BaseTrainer(ITrainer):
    """
    Abstract base for weight-learning rules.

    Every trainer owns its hyperparameters; two trainers never share a
    learning rate or a random generator.

    Attributes:
        _learning_rate (float): Step size (default 1.0)
        _max_iterations (int): Epoch cap (default 1000)
        _bias (bool): Whether to learn an explicit bias term
        _target_encoding (str): 'signed' or 'binary'
        _random_state: Seed for weight initialization
    """

    def __init__(self,
                 learning_rate: float = 1.0,
                 max_iterations: int = 1000,
                 bias: bool = False,
                 target_encoding: str = 'signed',
                 random_state: Optional[int] = None):
        self._learning_rate = learning_rate
        self._max_iterations = max_iterations
        self._bias = bias
        self._target_encoding = target_encoding
        self._random_state = random_state
        self._validate_parameters()

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    def initialize(self, config: Dict[str, Any]) -> None:
        self._learning_rate = config.get('learning_rate', self._learning_rate)
        self._max_iterations = config.get('max_iterations', self._max_iterations)
        self._bias = config.get('bias', self._bias)
        self._target_encoding = config.get('target_encoding', self._target_encoding)
        self._random_state = config.get('random_state', self._random_state)
        self._validate_parameters()

    def get_params(self) -> Dict[str, Any]:
        return {
            'learning_rate': self._learning_rate,
            'max_iterations': self._max_iterations,
            'bias': self._bias,
            'target_encoding': self._target_encoding,
            'random_state': self._random_state,
        }

    @property
    def learning_rate(self) -> float:
        return self._learning_rate

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    # =========================================================================
    # TRAINING
    # =========================================================================

    def train(self,
              X: np.ndarray,
              y: np.ndarray,
              callback: Optional[EpochCallback] = None) -> WeightVector:
        """
        Learn a weight vector.

        Args:
            X: Training features, shape (n_samples, n_features)
            y: Labels in {0, 1}
            callback: Called as ``callback(epoch, weights)`` after every
                epoch; returning a truthy value stops training

        Returns:
            WeightVector with the final weights, the epoch count and whether
            training stopped on an unchanged epoch
        """
        X = validate_features(X)
        y = validate_binary_labels(y, n_samples=X.shape[0])

        rng = np.random.default_rng(self._random_state)
        weights, bias = self._init_weights(X.shape[1], rng)
        targets = self.encode_targets(y)

        logger.debug(
            f"{self.name}: training on {X.shape[0]} instances x {X.shape[1]} features "
            f"(lr={self._learning_rate}, max_iterations={self._max_iterations})"
        )

        result = self._train_implementation(X, targets, weights, bias, callback)

        logger.debug(
            f"{self.name}: finished after {result.n_epochs} epochs "
            f"(converged={result.converged})"
        )
        return result

    @abstractmethod
    def _train_implementation(self,
                              X: np.ndarray,
                              targets: np.ndarray,
                              weights: np.ndarray,
                              bias: Optional[float],
                              callback: Optional[EpochCallback]) -> WeightVector:
        """Run the learning rule starting from the initial weights."""
        pass

    # =========================================================================
    # SHARED HELPERS
    # =========================================================================

    def _init_weights(self,
                      n_features: int,
                      rng: np.random.Generator) -> Tuple[np.ndarray, Optional[float]]:
        """Draw initial weights (and bias, if enabled) from U[0, 1)."""
        weights = rng.random(n_features)
        bias = float(rng.random()) if self._bias else None
        return weights, bias

    def encode_targets(self, y: np.ndarray) -> np.ndarray:
        """Map 0/1 labels to training targets according to the encoding."""
        y = np.asarray(y, dtype=np.float64)
        if self._target_encoding == 'signed':
            return 2.0 * y - 1.0
        return y

    @staticmethod
    def sign(activation):
        """Three-valued sign: -1, 0 or +1."""
        return np.sign(activation)

    @staticmethod
    def _stop_requested(callback: Optional[EpochCallback],
                        epoch: int,
                        weights: np.ndarray) -> bool:
        if callback is None:
            return False
        return bool(callback(epoch, weights.copy()))

    def _validate_parameters(self) -> None:
        check_type(self._learning_rate, (int, float), name='learning_rate')
        check_positive(self._learning_rate, name='learning_rate')
        check_type(self._max_iterations, int, name='max_iterations')
        check_positive(self._max_iterations, name='max_iterations')
        check_type(self._bias, bool, name='bias')
        check_choice(self._target_encoding, TARGET_ENCODINGS, name='target_encoding')

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(learning_rate={self._learning_rate}, "
                f"max_iterations={self._max_iterations}, bias={self._bias})")
