"""
LinearClassifier - Threshold Linear Models
==========================================

This module provides the single linear classifiers of the toolkit.

Two presets are registered:

1. perceptron
   - Raw features, online rule only
   - The plain classifier of the historical benchmark

2. enhanced_perceptron
   - Per-feature standardization (z-score by default)
   - Online or batch rule, or a cross-validated choice between them

Decision rule:
-------------
    weighted_sum = x . w (+ b)
    threshold    = sum(w)
    label        = 1 if weighted_sum > threshold else 0

The input is standardized into a copy with the training statistics before
the weighted sum is taken; the caller's array is never modified.

With standardization on, the rule is applied to the z-scored row ``z``:
``z . w > sum(w)`` is ``(z - 1) . w > 0``, a boundary through the point one
standard deviation above the training mean rather than through the mean.
Training learns ``w`` through the origin of z-space, so class 1 instances
within one standard deviation of the mean can fall on the class 0 side even
when the training set is separable. The ``perceptron`` preset works on raw
features and has no such shift.

Example:
    ```python
    from perceptron_ensemble.classifiers import LinearClassifier

    clf = LinearClassifier()
    clf.initialize({'algorithm': 'batch', 'max_iterations': 500,
                    'random_state': 3})
    clf.fit(X_train, y_train)
    labels = clf.predict(X_test)

    # Let cross-validation choose between the two rules
    clf.set_params(model_selection=True)
    clf.fit(X_train, y_train)
    print(clf.algorithm_, clf.selection_scores_)
    ```
"""

from typing import Dict, Optional, Any
import numpy as np
import logging

# Importing the package registers the 'online' and 'batch' trainers
import perceptron_ensemble.training  # noqa: F401
from perceptron_ensemble.core.registry import get_registry, registered
from perceptron_ensemble.core.types.model import StandardizationParams, WeightVector
from perceptron_ensemble.core.interfaces.i_trainer import EpochCallback
from perceptron_ensemble.preprocessing.standardizer import (
    Standardizer,
    STANDARDIZATION_MODES,
    ZERO_VARIANCE_POLICIES,
)
from perceptron_ensemble.training.selection import ModelSelector, ALGORITHMS
from perceptron_ensemble.training.base import TARGET_ENCODINGS
from perceptron_ensemble.utils.validation import validate_config_value
from perceptron_ensemble.classifiers.base import BaseClassifier


logger = logging.getLogger(__name__)


@registered('classifier', 'enhanced_perceptron',
            metadata={'description': 'Standardized linear model, online or batch rule'})
class LinearClassifier(BaseClassifier):
    """
    Linear threshold classifier trained by the online or batch rule.

    Configuration Options:
        - algorithm: 'online' (default) or 'batch'
        - standardize: Standardize features before training (default: True)
        - standardization_mode: 'zscore' (default) or 'legacy'
        - zero_variance: 'raise' (default) or 'zero'
        - model_selection: Choose the algorithm by cross-validation (default: False)
        - selection_folds: Folds for model selection (default: 10)
        - selection_seed: Fold assignment seed (default: 1)
        - selection_n_jobs: Folds evaluated concurrently (default: 1)
        - learning_rate: Step size (default: 1.0)
        - max_iterations: Epoch cap (default: 1000)
        - bias: Learn an explicit bias term (default: False)
        - target_encoding: 'signed' (default) or 'binary'
        - random_state: Weight initialization seed

    Attributes:
        _weights: Trained WeightVector
        _std_params: StandardizationParams fitted on the training set
        _selector: ModelSelector used by the last fit, if any
    """

    def __init__(self):
        super().__init__()

        self._weights: Optional[WeightVector] = None
        self._std_params: Optional[StandardizationParams] = None
        self._standardizer: Optional[Standardizer] = None
        self._selector: Optional[ModelSelector] = None
        self._algorithm_used: Optional[str] = None

        self._initialize_implementation(self._config)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def name(self) -> str:
        return 'enhanced_perceptron'

    @property
    def weights_(self) -> Optional[WeightVector]:
        """Trained weights (None before fitting)."""
        return self._weights

    @property
    def standardization_params_(self) -> Optional[StandardizationParams]:
        return self._std_params

    @property
    def algorithm_(self) -> Optional[str]:
        """Algorithm used by the last fit ('online' or 'batch')."""
        return self._algorithm_used

    @property
    def selection_scores_(self) -> Dict[str, float]:
        """Cross-validated percent correct per algorithm (empty without selection)."""
        if self._selector is None:
            return {}
        return dict(self._selector.scores_)

    # =========================================================================
    # INITIALIZATION
    # =========================================================================

    def _default_config(self) -> Dict[str, Any]:
        return {
            'algorithm': 'online',
            'standardize': True,
            'standardization_mode': 'zscore',
            'zero_variance': 'raise',
            'model_selection': False,
            'selection_folds': 10,
            'selection_seed': 1,
            'selection_n_jobs': 1,
            'learning_rate': 1.0,
            'max_iterations': 1000,
            'bias': False,
            'target_encoding': 'signed',
            'random_state': None,
        }

    def _initialize_implementation(self, config: Dict[str, Any]) -> None:
        validate_config_value(config, 'algorithm', choices=list(ALGORITHMS))
        validate_config_value(config, 'standardize', expected_type=bool)
        validate_config_value(config, 'standardization_mode',
                              choices=list(STANDARDIZATION_MODES))
        validate_config_value(config, 'zero_variance',
                              choices=list(ZERO_VARIANCE_POLICIES))
        validate_config_value(config, 'model_selection', expected_type=bool)
        validate_config_value(config, 'selection_folds', expected_type=int, min_val=2)
        validate_config_value(config, 'target_encoding', choices=list(TARGET_ENCODINGS))

    def _trainer_config(self) -> Dict[str, Any]:
        return {
            'learning_rate': self._config['learning_rate'],
            'max_iterations': self._config['max_iterations'],
            'bias': self._config['bias'],
            'target_encoding': self._config['target_encoding'],
            'random_state': self._random_state,
        }

    # =========================================================================
    # TRAINING
    # =========================================================================

    def _fit_implementation(self,
                            X: np.ndarray,
                            y: np.ndarray,
                            callback: Optional[EpochCallback] = None,
                            **kwargs) -> None:
        if self._config['standardize']:
            self._standardizer = Standardizer(
                mode=self._config['standardization_mode'],
                zero_variance=self._config['zero_variance'],
            )
            X_train, self._std_params = self._standardizer.fit_transform(X)
        else:
            self._standardizer = None
            self._std_params = None
            X_train = X

        algorithm = self._config['algorithm']
        self._selector = None
        if self._config['model_selection']:
            self._selector = ModelSelector(
                n_folds=self._config['selection_folds'],
                random_state=self._config['selection_seed'],
                n_jobs=self._config['selection_n_jobs'],
            )
            algorithm = self._selector.select(X_train, y, builder=self._make_candidate)

        trainer = get_registry().create('trainer', algorithm, self._trainer_config())
        self._weights = trainer.train(X_train, y, callback=callback)
        self._algorithm_used = algorithm

        self._record_history(algorithm)

    def _make_candidate(self, algorithm: str) -> 'LinearClassifier':
        """Unfitted copy trained on already standardized data with a fixed rule."""
        candidate = LinearClassifier()
        config = dict(self._config)
        config.update({
            'algorithm': algorithm,
            'standardize': False,
            'model_selection': False,
        })
        candidate.initialize(config)
        return candidate

    def _record_history(self, algorithm: str) -> None:
        self._training_history = {
            'algorithm': [algorithm],
            'n_epochs': [self._weights.n_epochs],
            'converged': [self._weights.converged],
        }
        self._metadata['algorithm'] = algorithm
        self._metadata['n_epochs'] = self._weights.n_epochs
        self._metadata['converged'] = self._weights.converged

        logger.debug(
            f"{self.name} trained with '{algorithm}' rule: "
            f"{self._weights.n_epochs} epochs, converged={self._weights.converged}"
        )

    # =========================================================================
    # PREDICTION
    # =========================================================================

    def _prepare(self, X: np.ndarray) -> np.ndarray:
        if self._std_params is None:
            return X
        return self._standardizer.transform(X, self._std_params, copy=True)

    def decision_function(self, X: np.ndarray) -> np.ndarray:
        """
        Weighted sum minus threshold; positive values are class 1.

        Returns:
            Array (n_samples,)
        """
        X = self._validate_prediction_input(X)
        X_eval = self._prepare(X)
        return self._weights.activation(X_eval) - self._weights.threshold

    def _predict_implementation(self, X: np.ndarray) -> np.ndarray:
        X_eval = self._prepare(X)
        weighted_sum = self._weights.activation(X_eval)
        return (weighted_sum > self._weights.threshold).astype(np.int64)

    def _predict_proba_implementation(self, X: np.ndarray) -> np.ndarray:
        labels = self._predict_implementation(X)
        distribution = np.zeros((len(labels), 2))
        distribution[np.arange(len(labels)), labels] = 1.0
        return distribution


@registered('classifier', 'perceptron',
            metadata={'description': 'Plain perceptron on raw features'})
class Perceptron(LinearClassifier):
    """
    The plain perceptron: raw features, online rule.

    Standardization may still be switched on explicitly; the batch rule and
    model selection are not available and are reset with a warning.
    """

    @property
    def name(self) -> str:
        return 'perceptron'

    def _default_config(self) -> Dict[str, Any]:
        config = super()._default_config()
        config['standardize'] = False
        return config

    def _initialize_implementation(self, config: Dict[str, Any]) -> None:
        super()._initialize_implementation(config)

        if config.get('algorithm', 'online') != 'online':
            logger.warning(
                f"perceptron only supports the online rule, "
                f"ignoring algorithm='{config['algorithm']}'"
            )
            config['algorithm'] = 'online'
        if config.get('model_selection'):
            logger.warning("perceptron does not support model selection, disabling it")
            config['model_selection'] = False
