"""
Model State Types
=================

Value objects produced by training and owned by classifiers:

1. StandardizationParams: per-feature mean/std fitted on a training set
2. WeightVector: learned linear model with an explicit optional bias
3. FeatureMask: features excluded from one ensemble member

All three are frozen dataclasses; retraining replaces them wholesale.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np


# Relative tolerance below which a column counts as constant. Rounding leaves
# a std of ~1e-17 on a column like [0.1] * 10 instead of exactly 0.
ZERO_VARIANCE_TOLERANCE = 1e-12


def zero_variance_mask(means: np.ndarray, stds: np.ndarray) -> np.ndarray:
    """True for columns whose std is zero up to floating-point rounding."""
    return stds <= ZERO_VARIANCE_TOLERANCE * np.maximum(1.0, np.abs(means))


@dataclass(frozen=True)
class StandardizationParams:
    """
    Per-feature standardization statistics.

    Attributes:
        means: Arithmetic mean of each feature column
        stds: Population standard deviation of each feature column
        mode: 'zscore' or 'legacy'
        zero_variance: Policy applied to constant columns ('raise' or 'zero')
    """
    means: np.ndarray
    stds: np.ndarray
    mode: str = 'zscore'
    zero_variance: str = 'raise'

    @property
    def n_features(self) -> int:
        return int(self.means.shape[0])

    @property
    def varying(self) -> np.ndarray:
        """Boolean mask of columns with non-zero variance."""
        return ~zero_variance_mask(self.means, self.stds)

    @property
    def constant_columns(self) -> np.ndarray:
        """Indices of zero-variance columns."""
        return np.flatnonzero(~self.varying)


@dataclass(frozen=True)
class WeightVector:
    """
    A trained linear model.

    The bias is a separate optional term, never a slot of ``weights``.

    Attributes:
        weights: One weight per feature
        bias: Bias term, or None when training ran without one
        n_epochs: Number of epochs actually run
        converged: True if training stopped on an epoch without weight changes
    """
    weights: np.ndarray
    bias: Optional[float] = None
    n_epochs: int = 0
    converged: bool = False

    @property
    def n_features(self) -> int:
        return int(self.weights.shape[0])

    @property
    def has_bias(self) -> bool:
        return self.bias is not None

    @property
    def threshold(self) -> float:
        """Decision threshold: the sum of the feature weights."""
        return float(np.sum(self.weights))

    def activation(self, X: np.ndarray) -> np.ndarray:
        """Dot product of each row with the weights, plus bias if present."""
        out = np.asarray(X, dtype=np.float64) @ self.weights
        if self.bias is not None:
            out = out + self.bias
        return out


@dataclass(frozen=True)
class FeatureMask:
    """
    Feature subset used by one ensemble member.

    The kept indices are computed once from the excluded set, so projecting
    an instance never depends on the order in which columns are removed.

    Attributes:
        excluded: Sorted original indices left out of the member
        n_features: Feature count of the full dataset
    """
    excluded: Tuple[int, ...]
    n_features: int

    @property
    def kept(self) -> np.ndarray:
        """Original indices used by the member, ascending."""
        excluded = set(self.excluded)
        return np.array(
            [i for i in range(self.n_features) if i not in excluded],
            dtype=np.intp,
        )

    @property
    def n_kept(self) -> int:
        return self.n_features - len(self.excluded)

    def apply(self, X: np.ndarray) -> np.ndarray:
        """Project rows of X (or a single instance) onto the kept features."""
        X = np.asarray(X)
        if X.ndim == 1:
            return X[self.kept]
        return X[:, self.kept]
