"""
BaseClassifier - Abstract Base Class for Binary Classifiers
===========================================================

This module provides the abstract base class for the toolkit's classifiers.
It implements the IClassifier interface and holds the behaviour shared by
single linear models and ensembles.

Architecture:
- BaseClassifier (abstract) -> IClassifier interface
    ├── LinearClassifier -> perceptron, enhanced_perceptron
    └── BaggedEnsemble -> perceptron_ensemble

Design Principles:
- Inputs are validated once, here, before any subclass code runs
- Labels are always 0/1; multi-class data is binarized by the loader
- Caller-owned arrays are never modified
- Hooks for subclass-specific behaviour

Example:
    ```python
    class MyClassifier(BaseClassifier):
        @property
        def name(self) -> str:
            return "my_classifier"

        def _fit_implementation(self, X, y, **kwargs):
            ...

        def _predict_implementation(self, X):
            ...

        def _predict_proba_implementation(self, X):
            ...
    ```
"""

from abc import abstractmethod
from typing import Dict, List, Optional, Any
import numpy as np
import logging

from perceptron_ensemble.core.interfaces.i_classifier import IClassifier
from perceptron_ensemble.core.types.dataset import Dataset
from perceptron_ensemble.core.exceptions import ModelNotFittedError, PredictionError
from perceptron_ensemble.utils.validation import (
    ensure_2d,
    validate_binary_labels,
    validate_features,
)


logger = logging.getLogger(__name__)


class BaseClassifier(IClassifier):
    """
    Abstract base class for binary classifiers.

    This class provides:
    - Configuration handling with per-class defaults
    - Training/prediction input validation
    - Training history and metadata tracking
    - Dataset entry point (build_classifier)

    Subclasses must implement:
    - name (property): Unique identifier
    - _fit_implementation(): Actual training logic
    - _predict_implementation(): Actual prediction logic
    - _predict_proba_implementation(): Class distribution logic

    Attributes:
        _config (Dict): Configuration parameters
        _is_fitted (bool): Training status
        _n_features (int): Feature count seen during fit
        _training_history (Dict): Per-fit training records
        _metadata (Dict): Additional metadata for tracking
    """

    def __init__(self):
        self._config: Dict[str, Any] = self._default_config()
        self._is_fitted: bool = False
        self._n_features: int = 0
        self._training_history: Dict[str, List[Any]] = {}
        self._metadata: Dict[str, Any] = {}
        self._random_state: Optional[int] = self._config.get('random_state')

    # =========================================================================
    # ABSTRACT PROPERTIES AND METHODS
    # =========================================================================

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this classifier type."""
        pass

    @abstractmethod
    def _fit_implementation(self, X: np.ndarray, y: np.ndarray, **kwargs) -> None:
        """
        Actual training implementation.

        Args:
            X: Training data (validated float64, may be the caller's array;
                do not modify)
            y: Training labels in {0, 1}
        """
        pass

    @abstractmethod
    def _predict_implementation(self, X: np.ndarray) -> np.ndarray:
        """Predict labels for validated 2D input."""
        pass

    @abstractmethod
    def _predict_proba_implementation(self, X: np.ndarray) -> np.ndarray:
        """Class distribution (n_samples, 2) for validated 2D input."""
        pass

    def _default_config(self) -> Dict[str, Any]:
        """Configuration defaults. Override in subclasses."""
        return {'random_state': None}

    def _initialize_implementation(self, config: Dict[str, Any]) -> None:
        """Subclass-specific initialization. Override if needed."""
        pass

    # =========================================================================
    # IMPLEMENTED PROPERTIES
    # =========================================================================

    @property
    def is_fitted(self) -> bool:
        return self._is_fitted

    @property
    def n_features(self) -> int:
        """Feature count seen during fit (0 before fitting)."""
        return self._n_features

    @property
    def classes_(self) -> np.ndarray:
        """Class labels; always [0, 1]."""
        return np.array([0, 1])

    @property
    def config(self) -> Dict[str, Any]:
        return self._config.copy()

    # =========================================================================
    # CORE API IMPLEMENTATION
    # =========================================================================

    def initialize(self, config: Dict[str, Any]) -> None:
        """
        Initialize classifier with configuration.

        Unknown keys are kept in the config but otherwise ignored.

        Args:
            config: Configuration dictionary (merged over the defaults)
        """
        logger.debug(f"Initializing {self.name} classifier with config: {config}")

        self._config = self._default_config()
        self._config.update(config)
        self._random_state = self._config.get('random_state')

        self._initialize_implementation(self._config)

    def fit(self, X: np.ndarray, y: np.ndarray, **kwargs) -> 'BaseClassifier':
        """
        Train the classifier.

        Args:
            X: Training features, shape (n_samples, n_features)
            y: Training labels in {0, 1}

        Returns:
            Self for method chaining

        Raises:
            InvalidInputKindError: If X is not numeric
            ValueError: If shapes or labels are invalid
        """
        X = validate_features(X, name='X')
        y = validate_binary_labels(y, n_samples=X.shape[0])

        logger.debug(f"Fitting {self.name} on data with shape {X.shape}")

        self._n_features = X.shape[1]
        self._training_history = {}
        self._metadata['n_training_samples'] = int(len(y))
        self._metadata['n_features'] = int(X.shape[1])
        self._metadata['class_distribution'] = {
            int(c): int(np.sum(y == c)) for c in (0, 1)
        }

        self._is_fitted = False
        self._fit_implementation(X, y, **kwargs)
        self._is_fitted = True

        return self

    def build_classifier(self, dataset: Dataset) -> 'BaseClassifier':
        """
        Train from a Dataset.

        Attribute kinds are checked before any training work is done.

        Raises:
            InvalidInputKindError: If any attribute is not continuous
        """
        dataset.check_continuous()
        logger.info(f"Building {self.name} on '{dataset.name or 'dataset'}' "
                    f"({dataset.n_instances} instances, {dataset.n_features} features)")
        self._metadata['dataset'] = dataset.name
        return self.fit(dataset.X, dataset.y)

    def predict(self, X: np.ndarray) -> np.ndarray:
        """
        Predict class labels.

        Args:
            X: Input data, shape (n_samples, n_features) or (n_features,)

        Returns:
            Labels in {0, 1}, shape (n_samples,)

        Raises:
            ModelNotFittedError: If classifier not fitted
            PredictionError: If the feature count differs from training
        """
        X = self._validate_prediction_input(X)
        return self._predict_implementation(X)

    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """
        Predict the class distribution.

        Returns:
            Array (n_samples, 2); column j is the weight of class j
        """
        X = self._validate_prediction_input(X)
        return self._predict_proba_implementation(X)

    def predict_one(self, x: np.ndarray) -> int:
        """Label of a single instance."""
        return int(self.predict(np.asarray(x).reshape(1, -1))[0])

    def distribution_for_instance(self, x: np.ndarray) -> np.ndarray:
        """Class distribution of a single instance, shape (2,)."""
        return self.predict_proba(np.asarray(x).reshape(1, -1))[0]

    def get_params(self) -> Dict[str, Any]:
        return self._config.copy()

    def set_params(self, **params) -> 'BaseClassifier':
        """Update configuration. Takes effect on the next fit."""
        self._config.update(params)
        self._random_state = self._config.get('random_state')
        self._initialize_implementation(self._config)
        return self

    # =========================================================================
    # EXTENDED FUNCTIONALITY
    # =========================================================================

    def get_training_history(self) -> Optional[Dict[str, List[Any]]]:
        if not self._training_history:
            return None
        return {key: list(values) for key, values in self._training_history.items()}

    def get_metadata(self) -> Dict[str, Any]:
        return self._metadata.copy()

    def summary(self) -> str:
        """Human-readable summary of the classifier."""
        lines = [
            f"{'='*50}",
            f"{self.name.upper()} Classifier Summary",
            f"{'='*50}",
            f"Fitted: {self.is_fitted}",
        ]

        if self._metadata:
            lines.append("\nTraining Info:")
            for key, value in self._metadata.items():
                lines.append(f"  {key}: {value}")

        lines.append(f"{'='*50}")
        return '\n'.join(lines)

    # =========================================================================
    # VALIDATION HELPERS
    # =========================================================================

    def _validate_prediction_input(self, X: np.ndarray) -> np.ndarray:
        if not self._is_fitted:
            raise ModelNotFittedError(self.name)

        X = np.asarray(X)
        if X.ndim not in (1, 2):
            raise PredictionError(f"expected 1D or 2D input, got {X.ndim}D", X.shape)
        X = validate_features(ensure_2d(X), name='X')

        if X.shape[1] != self._n_features:
            raise PredictionError(
                f"expected {self._n_features} features, got {X.shape[1]}", X.shape
            )
        return X

    # =========================================================================
    # MAGIC METHODS
    # =========================================================================

    def __repr__(self) -> str:
        fitted_str = "fitted" if self.is_fitted else "not fitted"
        return f"{self.__class__.__name__}(name='{self.name}', {fitted_str})"

    def __str__(self) -> str:
        return self.summary()
