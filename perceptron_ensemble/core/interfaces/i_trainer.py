"""
ITrainer Interface
==================

Abstract interface for weight-learning rules.

A trainer turns a training set into a WeightVector. Trainers hold their own
hyperparameters (learning rate, iteration cap, seed); nothing is shared
between trainer instances, so several can run concurrently.

Example Usage:
    ```python
    trainer = OnlineTrainer()
    trainer.initialize({'learning_rate': 1.0, 'max_iterations': 1000,
                        'random_state': 7})
    weights = trainer.train(X, y)
    print(weights.n_epochs, weights.converged)
    ```
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional
import numpy as np

from perceptron_ensemble.core.types.model import WeightVector


# Called after every epoch with (epoch, current weights); truthy return stops training
EpochCallback = Callable[[int, np.ndarray], Optional[bool]]


class ITrainer(ABC):
    """Abstract interface for weight-learning rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier ('online', 'batch')."""
        pass

    @abstractmethod
    def initialize(self, config: Dict[str, Any]) -> None:
        """
        Configure the trainer.

        Args:
            config: Keys 'learning_rate', 'max_iterations', 'bias',
                'target_encoding', 'random_state'
        """
        pass

    @abstractmethod
    def train(self,
              X: np.ndarray,
              y: np.ndarray,
              callback: Optional[EpochCallback] = None) -> WeightVector:
        """
        Learn a weight vector.

        Args:
            X: Training features, shape (n_samples, n_features)
            y: Labels in {0, 1}
            callback: Optional per-epoch hook

        Returns:
            WeightVector: The trained model
        """
        pass

    @abstractmethod
    def get_params(self) -> Dict[str, Any]:
        """Get trainer hyperparameters."""
        pass
