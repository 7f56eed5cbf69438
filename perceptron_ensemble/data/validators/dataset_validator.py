"""
Dataset Validator
=================

Structural checks for datasets before they reach a classifier.

Validation Levels:
-----------------
1. Structure: 2D features, 1D labels, matching lengths
2. Values: No NaN/Inf in the feature matrix
3. Labels: Binary labels from {0, 1}
4. Kinds: Every attribute continuous (numeric)

Constant-valued columns and single-class label vectors are reported as
warnings: they are legal, but z-score standardization with the 'raise'
policy rejects constant columns, and a single-class training set cannot
teach a boundary.

Usage Example:
    ```python
    from perceptron_ensemble.data.validators import DatasetValidator

    validator = DatasetValidator()
    result = validator.validate(dataset)

    if not result.is_valid:
        for error in result.errors:
            print(f"Validation error: {error}")

    validator.assert_valid(dataset)  # Raises ValidationError if invalid
    ```
"""

from typing import Dict, List, Any, Optional, Union
import numpy as np
import logging

from perceptron_ensemble.core.types.dataset import Dataset, NUMERIC
from perceptron_ensemble.core.types.model import zero_variance_mask
from perceptron_ensemble.core.exceptions import DataError


logger = logging.getLogger(__name__)


# =============================================================================
# VALIDATION RESULT CLASS
# =============================================================================

class ValidationResult:
    """
    Container for validation results.

    Attributes:
        is_valid (bool): Overall validation result
        errors (List[str]): List of error messages
        warnings (List[str]): List of warning messages
        info (Dict): Additional validation information
    """

    def __init__(self):
        self.is_valid: bool = True
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self.info: Dict[str, Any] = {}

    def add_error(self, message: str) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(message)

    def merge(self, other: 'ValidationResult') -> None:
        if not other.is_valid:
            self.is_valid = False
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.info.update(other.info)

    def __bool__(self) -> bool:
        return self.is_valid

    def __repr__(self) -> str:
        status = "VALID" if self.is_valid else "INVALID"
        return (
            f"ValidationResult({status}, "
            f"errors={len(self.errors)}, "
            f"warnings={len(self.warnings)})"
        )


# =============================================================================
# VALIDATION ERROR
# =============================================================================

class ValidationError(DataError):
    """
    Raised by DatasetValidator.assert_valid().

    Attributes:
        errors (List[str]): List of validation errors
        warnings (List[str]): List of validation warnings
    """

    def __init__(self,
                 message: str,
                 errors: Optional[List[str]] = None,
                 warnings: Optional[List[str]] = None):
        self.errors = errors or []
        self.warnings = warnings or []
        details = "; ".join(self.errors)
        super().__init__(message, details, "Fix the dataset or binarize its labels.")


# =============================================================================
# DATASET VALIDATOR
# =============================================================================

class DatasetValidator:
    """
    Validator for Dataset objects and raw (X, y) pairs.

    Attributes:
        _strict (bool): Treat warnings as errors
        _require_both_classes (bool): Single-class labels become an error

    Example:
        >>> validator = DatasetValidator(strict=False)
        >>> validator.validate(dataset).is_valid
        True
    """

    def __init__(self,
                 strict: bool = False,
                 require_both_classes: bool = False):
        self._strict = strict
        self._require_both_classes = require_both_classes
        logger.debug(f"DatasetValidator initialized (strict={strict})")

    # =========================================================================
    # MAIN VALIDATION METHODS
    # =========================================================================

    def validate(self,
                 data: Union[Dataset, np.ndarray],
                 y: Optional[np.ndarray] = None) -> ValidationResult:
        """
        Validate a Dataset, or a feature matrix with its labels.

        Args:
            data: Dataset or feature matrix
            y: Labels (required when data is an array)

        Returns:
            ValidationResult with is_valid, errors, and warnings
        """
        result = ValidationResult()

        if isinstance(data, Dataset):
            self._validate_kinds(data, result)
            X, labels = data.X, data.y
            result.info['name'] = data.name
        elif isinstance(data, np.ndarray):
            if y is None:
                result.add_error("Labels are required when validating a bare array")
                return result
            X, labels = data, np.asarray(y)
        else:
            result.add_error(
                f"Unsupported data type: {type(data).__name__}. "
                f"Expected Dataset or numpy array."
            )
            return result

        if self._validate_structure(X, labels, result):
            self._validate_values(X, result)
            self._validate_labels(labels, result)

        if self._strict and result.warnings:
            for warning in result.warnings:
                result.add_error(f"[strict] {warning}")
            result.warnings.clear()

        return result

    def assert_valid(self,
                     data: Union[Dataset, np.ndarray],
                     y: Optional[np.ndarray] = None,
                     message: str = "Dataset validation failed") -> None:
        """
        Raises:
            ValidationError: If data is invalid
        """
        result = self.validate(data, y)
        if not result.is_valid:
            raise ValidationError(message, errors=result.errors, warnings=result.warnings)

    def is_valid(self,
                 data: Union[Dataset, np.ndarray],
                 y: Optional[np.ndarray] = None) -> bool:
        return self.validate(data, y).is_valid

    # =========================================================================
    # SPECIFIC VALIDATORS
    # =========================================================================

    def _validate_kinds(self, dataset: Dataset, result: ValidationResult) -> None:
        offending = [
            f"{name} ({kind})"
            for name, kind in zip(dataset.feature_names, dataset.attribute_kinds)
            if kind != NUMERIC
        ]
        if offending:
            result.add_error(f"Non-continuous attributes: {', '.join(offending)}")

    def _validate_structure(self,
                            X: np.ndarray,
                            y: np.ndarray,
                            result: ValidationResult) -> bool:
        """Shape checks; returns False if value checks cannot run."""
        X = np.asarray(X)
        if X.ndim != 2:
            result.add_error(f"Features must be 2D, got {X.ndim}D (shape={X.shape})")
            return False
        if y.ndim != 1:
            result.add_error(f"Labels must be 1D, got {y.ndim}D")
            return False
        if len(X) != len(y):
            result.add_error(
                f"Features and labels differ in length: {len(X)} vs {len(y)}"
            )
            return False
        if len(X) == 0:
            result.add_error("Dataset has no instances")
            return False
        if X.shape[1] == 0:
            result.add_error("Dataset has no feature columns")
            return False

        result.info['n_instances'] = int(X.shape[0])
        result.info['n_features'] = int(X.shape[1])
        return True

    def _validate_values(self, X: np.ndarray, result: ValidationResult) -> None:
        X = np.asarray(X)
        if not np.issubdtype(X.dtype, np.number):
            result.add_error(f"Features must be numeric, got dtype {X.dtype}")
            return

        n_nan = int(np.sum(np.isnan(X)))
        if n_nan > 0:
            result.add_error(f"Features contain {n_nan} NaN values")

        n_inf = int(np.sum(np.isinf(X)))
        if n_inf > 0:
            result.add_error(f"Features contain {n_inf} Inf values")

        if n_nan == 0 and n_inf == 0:
            constant = np.flatnonzero(zero_variance_mask(X.mean(axis=0), X.std(axis=0)))
            if len(constant) > 0:
                result.add_warning(
                    f"Constant-valued columns at indices {constant.tolist()}"
                )
            result.info['constant_columns'] = constant.tolist()

    def _validate_labels(self, y: np.ndarray, result: ValidationResult) -> None:
        unique = np.unique(y)
        if not np.all(np.isin(unique, (0, 1))):
            result.add_error(
                f"Labels must be 0 or 1, got {unique.tolist()}; binarize first"
            )
            return

        result.info['class_distribution'] = {
            int(c): int(np.sum(y == c)) for c in unique
        }
        if len(unique) < 2:
            message = f"Only one class present: {unique.tolist()}"
            if self._require_both_classes:
                result.add_error(message)
            else:
                result.add_warning(message)

    def __repr__(self) -> str:
        return f"DatasetValidator(strict={self._strict})"
