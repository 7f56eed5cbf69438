"""
Validation Utilities
====================

This module provides validation functions used across the toolkit.

Validation Categories:
---------------------
1. Type Validation: Check argument types
2. Range Validation: Check numeric ranges and choices
3. Array Validation: Check feature matrices and label vectors

Example Usage:
    ```python
    from perceptron_ensemble.utils.validation import (
        validate_features, validate_binary_labels, check_range
    )

    X = validate_features(X, name='X_train')
    validate_binary_labels(y, n_samples=len(X))
    check_range(proportion, min_val=0.0, max_val=1.0, name='proportion')
    ```
"""

from typing import Dict, List, Optional, Any, Union, Tuple, Type, Sequence
import numpy as np
import logging

from perceptron_ensemble.core.exceptions import InvalidInputKindError

logger = logging.getLogger(__name__)


# =============================================================================
# BASIC TYPE CHECKING
# =============================================================================

def check_type(value: Any,
               expected_type: Union[Type, Tuple[Type, ...]],
               name: str = 'value') -> None:
    """
    Check if value is of expected type.

    Raises:
        TypeError: If type doesn't match
    """
    if not isinstance(value, expected_type):
        if isinstance(expected_type, tuple):
            expected_str = ' or '.join(t.__name__ for t in expected_type)
        else:
            expected_str = expected_type.__name__

        raise TypeError(
            f"'{name}' must be {expected_str}, got {type(value).__name__}"
        )


# =============================================================================
# NUMERIC VALIDATION
# =============================================================================

def check_range(value: Union[int, float],
                min_val: Optional[Union[int, float]] = None,
                max_val: Optional[Union[int, float]] = None,
                name: str = 'value',
                inclusive: bool = True) -> None:
    """
    Check if value is within range.

    Args:
        value: Value to check
        min_val: Minimum allowed value (or None for no minimum)
        max_val: Maximum allowed value (or None for no maximum)
        name: Name of the value
        inclusive: Whether range is inclusive

    Raises:
        ValueError: If value is out of range

    Example:
        >>> check_range(learning_rate, min_val=0.0, name='learning_rate', inclusive=False)
    """
    if min_val is not None:
        if inclusive and value < min_val:
            raise ValueError(f"'{name}' must be >= {min_val}, got {value}")
        elif not inclusive and value <= min_val:
            raise ValueError(f"'{name}' must be > {min_val}, got {value}")

    if max_val is not None:
        if inclusive and value > max_val:
            raise ValueError(f"'{name}' must be <= {max_val}, got {value}")
        elif not inclusive and value >= max_val:
            raise ValueError(f"'{name}' must be < {max_val}, got {value}")


def check_positive(value: Union[int, float],
                   name: str = 'value',
                   allow_zero: bool = False) -> None:
    """
    Check if value is positive.

    Raises:
        ValueError: If value is not positive
    """
    if allow_zero:
        if value < 0:
            raise ValueError(f"'{name}' must be non-negative, got {value}")
    else:
        if value <= 0:
            raise ValueError(f"'{name}' must be positive, got {value}")


def check_probability(value: float, name: str = 'value') -> None:
    """Check if value is a valid probability (0-1)."""
    check_range(value, min_val=0.0, max_val=1.0, name=name)


def check_choice(value: Any, choices: Sequence[Any], name: str = 'value') -> None:
    """
    Check that value is one of the allowed choices.

    Raises:
        ValueError: If value is not allowed
    """
    if value not in choices:
        raise ValueError(f"'{name}' must be one of {list(choices)}, got {value!r}")


def validate_config_value(config: Dict[str, Any],
                          key: str,
                          expected_type: Optional[Union[Type, Tuple[Type, ...]]] = None,
                          min_val: Optional[Union[int, float]] = None,
                          max_val: Optional[Union[int, float]] = None,
                          choices: Optional[List[Any]] = None) -> None:
    """
    Validate a specific configuration value (skipped when the key is absent).
    """
    if key not in config:
        return

    value = config[key]

    if expected_type is not None:
        check_type(value, expected_type, name=key)

    if min_val is not None or max_val is not None:
        check_range(value, min_val=min_val, max_val=max_val, name=key)

    if choices is not None:
        check_choice(value, choices, name=key)


# =============================================================================
# ARRAY VALIDATION
# =============================================================================

def validate_array(array: np.ndarray,
                   expected_ndim: Optional[int] = None,
                   min_samples: Optional[int] = None,
                   allow_nan: bool = False,
                   allow_inf: bool = False,
                   name: str = 'array') -> None:
    """
    Validate numpy array properties.

    Args:
        array: Array to validate
        expected_ndim: Expected number of dimensions
        min_samples: Minimum number of samples (first dimension)
        allow_nan: Whether NaN values are allowed
        allow_inf: Whether Inf values are allowed
        name: Name of the array

    Raises:
        TypeError: If not a numpy array
        ValueError: If array doesn't meet criteria
    """
    if not isinstance(array, np.ndarray):
        raise TypeError(f"'{name}' must be a numpy array, got {type(array).__name__}")

    if expected_ndim is not None and array.ndim != expected_ndim:
        raise ValueError(
            f"'{name}' must be {expected_ndim}D, got {array.ndim}D (shape={array.shape})"
        )

    if min_samples is not None and array.shape[0] < min_samples:
        raise ValueError(
            f"'{name}' must have at least {min_samples} samples, "
            f"got {array.shape[0]}"
        )

    if not allow_nan and np.any(np.isnan(array)):
        raise ValueError(f"'{name}' contains NaN values")

    if not allow_inf and np.any(np.isinf(array)):
        raise ValueError(f"'{name}' contains Inf values")


def validate_features(X: Any, name: str = 'X') -> np.ndarray:
    """
    Check that X is a finite, continuous 2D feature matrix.

    Args:
        X: Feature matrix (array-like)
        name: Name for error messages

    Returns:
        X as a float64 array

    Raises:
        InvalidInputKindError: If the values are not numeric
        ValueError: If X is not 2D, empty, or contains NaN/Inf
    """
    X = np.asarray(X)

    if X.dtype == bool or not np.issubdtype(X.dtype, np.number):
        raise InvalidInputKindError([name], [str(X.dtype)])

    X = X.astype(np.float64, copy=False)
    validate_array(X, expected_ndim=2, min_samples=1, name=name)

    if X.shape[1] == 0:
        raise ValueError(f"'{name}' has no feature columns")

    return X


def validate_binary_labels(labels: Any,
                           n_samples: Optional[int] = None,
                           name: str = 'y') -> np.ndarray:
    """
    Validate binary classification labels.

    Args:
        labels: Label array
        n_samples: Expected number of samples
        name: Name of the labels

    Returns:
        Labels as an int64 array

    Raises:
        ValueError: If labels are not 1D or not drawn from {0, 1}
    """
    labels = np.asarray(labels)

    if labels.ndim != 1:
        raise ValueError(f"'{name}' must be 1D, got {labels.ndim}D")

    if n_samples is not None and len(labels) != n_samples:
        raise ValueError(
            f"'{name}' length ({len(labels)}) doesn't match data samples ({n_samples})"
        )

    unique_labels = np.unique(labels)
    if not np.all(np.isin(unique_labels, (0, 1))):
        raise ValueError(
            f"'{name}' must contain only the labels 0 and 1, got {unique_labels.tolist()}. "
            f"Binarize multi-class labels before training."
        )

    return labels.astype(np.int64)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def ensure_2d(array: np.ndarray, name: str = 'array') -> np.ndarray:
    """
    Ensure array is 2D, reshaping a single instance to one row.
    """
    if array.ndim == 1:
        return array.reshape(1, -1)
    elif array.ndim == 2:
        return array
    else:
        raise ValueError(f"'{name}' must be 1D or 2D, got {array.ndim}D")


def validate_same_length(*arrays: np.ndarray,
                         names: Optional[List[str]] = None) -> None:
    """Validate that all arrays have the same length (first dimension)."""
    if len(arrays) < 2:
        return

    lengths = [len(a) for a in arrays]

    if len(set(lengths)) > 1:
        names = names or [f'array_{i}' for i in range(len(arrays))]
        length_info = ', '.join(f'{n}={l}' for n, l in zip(names, lengths))
        raise ValueError(f"Arrays must have same length: {length_info}")
