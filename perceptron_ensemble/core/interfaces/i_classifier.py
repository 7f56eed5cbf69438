"""
IClassifier Interface
=====================

This module defines the abstract interface for all classifiers in the toolkit.

Classifiers are responsible for:
- Learning to map continuous feature vectors to a binary label
- Predicting labels for new data
- Providing a class distribution per instance

Classifier Types Supported:
- Single linear models (perceptron, enhanced perceptron)
- Ensembles of linear models voting by majority

Example Usage:
    ```python
    classifier = LinearClassifier()
    classifier.initialize({'algorithm': 'online', 'standardize': True})
    classifier.fit(X_train, y_train)
    predictions = classifier.predict(X_test)
    distribution = classifier.predict_proba(X_test)
    ```
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
import numpy as np


class IClassifier(ABC):
    """
    Abstract interface for binary classifiers.

    Attributes:
        name (str): Unique identifier for this classifier
        is_fitted (bool): Whether the classifier has been trained

    Prediction Output:
        - predict(): Returns labels in {0, 1}
        - predict_proba(): Returns (n_samples, 2) class distribution
    """

    # =========================================================================
    # ABSTRACT PROPERTIES
    # =========================================================================

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Unique identifier for this classifier.

        Returns:
            str: Classifier name (e.g., "perceptron", "perceptron_ensemble")
        """
        pass

    @property
    @abstractmethod
    def is_fitted(self) -> bool:
        """True if fit() has been called successfully."""
        pass

    # =========================================================================
    # ABSTRACT METHODS
    # =========================================================================

    @abstractmethod
    def initialize(self, config: Dict[str, Any]) -> None:
        """
        Initialize the classifier with configuration.

        Args:
            config: Dictionary containing classifier-specific settings
                Common keys:
                - 'random_state': Seed for every random draw

        Raises:
            ConfigurationError: If a setting is out of range
        """
        pass

    @abstractmethod
    def fit(self, X: np.ndarray, y: np.ndarray, **kwargs) -> 'IClassifier':
        """
        Train the classifier on data.

        Args:
            X: Training features, shape (n_samples, n_features)
            y: Training labels, shape (n_samples,), values in {0, 1}

        Returns:
            Self for method chaining

        Raises:
            InvalidInputKindError: If X is not numeric
            ValueError: If shapes or labels are invalid
        """
        pass

    @abstractmethod
    def predict(self, X: np.ndarray) -> np.ndarray:
        """
        Predict labels for input data.

        Args:
            X: Input features, shape (n_samples, n_features) or (n_features,)

        Returns:
            np.ndarray: Predicted labels, shape (n_samples,)

        Raises:
            ModelNotFittedError: If classifier is not fitted
        """
        pass

    @abstractmethod
    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """
        Predict the class distribution for input data.

        Returns:
            np.ndarray: Shape (n_samples, 2), each row sums to 1.0
        """
        pass

    @abstractmethod
    def get_params(self) -> Dict[str, Any]:
        """Get classifier parameters."""
        pass

    @abstractmethod
    def set_params(self, **params) -> 'IClassifier':
        """Set classifier parameters."""
        pass

    # =========================================================================
    # OPTIONAL METHODS - Override if needed
    # =========================================================================

    def score(self, X: np.ndarray, y: np.ndarray) -> float:
        """
        Calculate accuracy on test data.

        Returns:
            float: Fraction of correct predictions
        """
        predictions = self.predict(X)
        return float(np.mean(predictions == np.asarray(y)))

    def get_training_history(self) -> Optional[Dict[str, list]]:
        """Training history, or None for classifiers without one."""
        return getattr(self, '_training_history', None)

    def __repr__(self) -> str:
        fitted_str = "fitted" if self.is_fitted else "not fitted"
        return f"{self.__class__.__name__}(name='{self.name}', {fitted_str})"

    def __call__(self, X: np.ndarray) -> np.ndarray:
        """Equivalent to predict()."""
        return self.predict(X)
