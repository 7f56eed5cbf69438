"""
Preprocessing Module
====================

Feature preprocessing applied before linear training.

- Standardizer: per-feature z-score (or legacy) standardization

Usage Example:
    ```python
    from perceptron_ensemble.preprocessing import Standardizer

    X_std, params = Standardizer().fit_transform(X_train)
    ```
"""

from perceptron_ensemble.preprocessing.standardizer import (
    Standardizer,
    STANDARDIZATION_MODES,
    ZERO_VARIANCE_POLICIES,
)

__all__ = [
    'Standardizer',
    'STANDARDIZATION_MODES',
    'ZERO_VARIANCE_POLICIES',
]
