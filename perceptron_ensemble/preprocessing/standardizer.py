"""
Feature Standardizer
====================

This module implements per-feature standardization for continuous attributes.

Statistics:
----------
- mean: arithmetic mean of each column
- std: population standard deviation of each column (ddof=0)

Modes:
-----
1. zscore (default): ``(x - mean) / std``
   - Each training column ends up with mean 0 and std 1

2. legacy: ``x - mean / std``
   - The operator-precedence form of the historical benchmark program,
     kept only to reproduce its numbers

Zero-variance columns:
---------------------
A constant column has std == 0, up to rounding. The ``zero_variance`` policy decides:
- 'raise' (default): DegenerateStandardizationError naming the columns
- 'zero': zscore maps the column to 0, legacy leaves it unchanged
Neither policy ever produces NaN or Inf.

Usage Example:
    ```python
    from perceptron_ensemble.preprocessing import Standardizer

    standardizer = Standardizer()
    standardizer.initialize({'mode': 'zscore', 'zero_variance': 'zero'})

    X_train_std, params = standardizer.fit_transform(X_train)
    X_test_std = standardizer.transform(X_test, params)
    ```
"""

from typing import Dict, Any, Optional, Tuple
import numpy as np
import logging

from perceptron_ensemble.core.registry import registered
from perceptron_ensemble.core.types.model import StandardizationParams
from perceptron_ensemble.core.exceptions import (
    DegenerateStandardizationError,
    ModelNotFittedError,
)
from perceptron_ensemble.utils.validation import check_choice, validate_features


logger = logging.getLogger(__name__)


STANDARDIZATION_MODES = ('zscore', 'legacy')
ZERO_VARIANCE_POLICIES = ('raise', 'zero')


@registered('preprocessor', 'standardizer')
class Standardizer:
    """
    Per-feature standardizer.

    Fitting produces an immutable StandardizationParams record. The
    standardizer also remembers the last fitted params so that
    ``transform(X)`` works without passing them explicitly.

    Attributes:
        _mode (str): 'zscore' or 'legacy'
        _zero_variance (str): 'raise' or 'zero'
        _params (StandardizationParams): Last fitted statistics

    Example:
        >>> std = Standardizer(mode='legacy')
        >>> params = std.fit(X)
        >>> X_legacy = std.transform(X)
    """

    def __init__(self, mode: str = 'zscore', zero_variance: str = 'raise'):
        self._mode = mode
        self._zero_variance = zero_variance
        self._params: Optional[StandardizationParams] = None
        self._validate_parameters()

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def name(self) -> str:
        return "standardizer"

    @property
    def is_fitted(self) -> bool:
        return self._params is not None

    @property
    def params(self) -> Optional[StandardizationParams]:
        """Statistics from the most recent fit, or None."""
        return self._params

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    def initialize(self, config: Dict[str, Any]) -> None:
        """
        Configure the standardizer.

        Args:
            config: Configuration dictionary with keys:
                - 'mode' (str, optional): 'zscore' or 'legacy'. Default: 'zscore'
                - 'zero_variance' (str, optional): 'raise' or 'zero'. Default: 'raise'

        Raises:
            ValueError: If mode or policy is invalid
        """
        self._mode = config.get('mode', self._mode)
        self._zero_variance = config.get('zero_variance', self._zero_variance)
        self._validate_parameters()
        logger.debug(
            f"Standardizer initialized: mode={self._mode}, "
            f"zero_variance={self._zero_variance}"
        )

    def get_params(self) -> Dict[str, Any]:
        return {'mode': self._mode, 'zero_variance': self._zero_variance}

    def set_params(self, **params) -> 'Standardizer':
        if 'mode' in params:
            self._mode = params['mode']
        if 'zero_variance' in params:
            self._zero_variance = params['zero_variance']
        self._validate_parameters()
        return self

    # =========================================================================
    # FIT / TRANSFORM
    # =========================================================================

    def fit(self, X: np.ndarray) -> StandardizationParams:
        """
        Compute per-feature mean and population standard deviation.

        Args:
            X: Training features, shape (n_samples, n_features)

        Returns:
            StandardizationParams: Fitted statistics

        Raises:
            DegenerateStandardizationError: If a column is constant and the
                policy is 'raise'
        """
        X = validate_features(X)

        means = X.mean(axis=0)
        stds = X.std(axis=0)

        params = StandardizationParams(
            means=means,
            stds=stds,
            mode=self._mode,
            zero_variance=self._zero_variance,
        )

        constant = params.constant_columns
        if len(constant) > 0:
            if self._zero_variance == 'raise':
                raise DegenerateStandardizationError(constant.tolist())
            logger.debug(f"Constant columns mapped by 'zero' policy: {constant.tolist()}")

        self._params = params
        return params

    def transform(self,
                  X: np.ndarray,
                  params: Optional[StandardizationParams] = None,
                  copy: bool = True) -> np.ndarray:
        """
        Standardize X with fitted statistics.

        Args:
            X: Features, shape (n_samples, n_features) or (n_features,)
            params: Statistics to use (defaults to the last fit)
            copy: If False and X is a float64 array, X is modified in place

        Returns:
            Standardized array with the same shape as X

        Raises:
            ModelNotFittedError: If no params are given and fit() was not called
            ValueError: If the feature count does not match the params
        """
        params = params or self._params
        if params is None:
            raise ModelNotFittedError(self.name)

        if copy:
            out = np.array(X, dtype=np.float64)
        else:
            out = np.asarray(X, dtype=np.float64)

        if out.shape[-1] != params.n_features:
            raise ValueError(
                f"Expected {params.n_features} features, got {out.shape[-1]}"
            )

        return self._apply(out, params)

    def fit_transform(self, X: np.ndarray) -> Tuple[np.ndarray, StandardizationParams]:
        """Fit on X and return (standardized copy of X, params)."""
        params = self.fit(X)
        return self.transform(X, params), params

    # =========================================================================
    # PRIVATE METHODS
    # =========================================================================

    def _validate_parameters(self) -> None:
        check_choice(self._mode, STANDARDIZATION_MODES, name='mode')
        check_choice(self._zero_variance, ZERO_VARIANCE_POLICIES, name='zero_variance')

    @staticmethod
    def _apply(out: np.ndarray, params: StandardizationParams) -> np.ndarray:
        """Apply params to ``out`` in place and return it."""
        means, stds = params.means, params.stds
        varying = params.varying
        safe_stds = np.where(varying, stds, 1.0)

        if params.mode == 'zscore':
            out -= means
            out /= safe_stds
            # centred value of a constant column is 0
            out[..., ~varying] = 0.0
        else:
            out -= np.where(varying, means / safe_stds, 0.0)

        return out
