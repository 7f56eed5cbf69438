"""
Custom Exceptions
=================

This module defines all custom exceptions for the perceptron ensemble toolkit.

Exception Hierarchy:
-------------------
PerceptronEnsembleError (Base)
├── DataError
│   ├── DataLoadError
│   ├── DataValidationError
│   └── InvalidInputKindError
├── ProcessingError
│   └── DegenerateStandardizationError
├── ClassificationError
│   ├── ModelNotFittedError
│   └── PredictionError
├── ConfigurationError
│   ├── ConfigValidationError
│   └── ExhaustedRandomDrawError
└── ComponentError
    ├── ComponentNotFoundError
    └── RegistrationError

Example Usage:
    ```python
    from perceptron_ensemble.core.exceptions import InvalidInputKindError

    try:
        clf.build_classifier(dataset)
    except InvalidInputKindError as e:
        logger.error(f"Dataset rejected: {e}")
    ```
"""

from typing import List, Optional, Sequence


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class PerceptronEnsembleError(Exception):
    """
    Base exception for all toolkit errors.

    Provides consistent error message formatting.

    Attributes:
        message: Error message
        details: Additional error details
        suggestion: Suggestion for fixing the error
    """

    def __init__(self,
                 message: str,
                 details: str = '',
                 suggestion: str = ''):
        self.message = message
        self.details = details
        self.suggestion = suggestion

        full_message = message
        if details:
            full_message += f"\nDetails: {details}"
        if suggestion:
            full_message += f"\nSuggestion: {suggestion}"

        super().__init__(full_message)


# =============================================================================
# DATA ERRORS
# =============================================================================

class DataError(PerceptronEnsembleError):
    """Base exception for data-related errors."""
    pass


class DataLoadError(DataError):
    """Raised when a dataset cannot be loaded from a file."""

    def __init__(self,
                 file_path: str,
                 reason: str = 'Unknown error',
                 original_error: Optional[Exception] = None):
        message = f"Failed to load data from '{file_path}'"
        details = reason

        if original_error:
            details += f" (Original error: {original_error})"

        suggestion = "Check that the file exists and is a valid ARFF file."

        super().__init__(message, details, suggestion)
        self.file_path = file_path
        self.original_error = original_error


class DataValidationError(DataError):
    """Raised when dataset validation fails."""

    def __init__(self,
                 field: str,
                 expected: str,
                 actual: str):
        message = f"Data validation failed for '{field}'"
        details = f"Expected: {expected}, Got: {actual}"
        suggestion = "Check data format and the label binarization step."

        super().__init__(message, details, suggestion)
        self.field = field
        self.expected = expected
        self.actual = actual


class InvalidInputKindError(DataError):
    """
    Raised when a dataset contains non-continuous attributes.

    The linear classifiers only accept numeric feature columns; the check
    runs before any training starts.
    """

    def __init__(self,
                 attributes: Sequence[str],
                 kinds: Optional[Sequence[str]] = None):
        attributes = list(attributes)
        message = "Dataset contains non-continuous attributes"
        details = f"Offending attributes: {attributes}"
        if kinds:
            details += f" (kinds: {list(kinds)})"
        suggestion = "Remove or numerically encode nominal/string attributes before training."

        super().__init__(message, details, suggestion)
        self.attributes = attributes
        self.kinds = list(kinds) if kinds else []


# =============================================================================
# PROCESSING ERRORS
# =============================================================================

class ProcessingError(PerceptronEnsembleError):
    """Base exception for preprocessing errors."""
    pass


class DegenerateStandardizationError(ProcessingError):
    """Raised when a feature column has zero variance during standardization."""

    def __init__(self, columns: Sequence[int]):
        columns = [int(c) for c in columns]
        message = f"Cannot standardize {len(columns)} constant-valued column(s)"
        details = f"Zero standard deviation at feature indices {columns}"
        suggestion = (
            "Drop constant columns, or set zero_variance='zero' to map them to 0."
        )

        super().__init__(message, details, suggestion)
        self.columns = columns


# =============================================================================
# CLASSIFICATION ERRORS
# =============================================================================

class ClassificationError(PerceptronEnsembleError):
    """Base exception for classification errors."""
    pass


class ModelNotFittedError(ClassificationError):
    """Raised when trying to use an unfitted model."""

    def __init__(self, model_name: str = 'Model'):
        message = f"{model_name} has not been fitted"
        details = "The model must be trained before making predictions."
        suggestion = "Call fit() or build_classifier() before predict()."

        super().__init__(message, details, suggestion)
        self.model_name = model_name


class PredictionError(ClassificationError):
    """Raised when prediction fails."""

    def __init__(self,
                 reason: str = '',
                 input_shape: Optional[tuple] = None):
        message = "Prediction failed"
        details = reason
        if input_shape:
            details += f" (Input shape: {input_shape})"
        suggestion = "Check that input data matches the training feature count."

        super().__init__(message, details, suggestion)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(PerceptronEnsembleError):
    """Base exception for configuration errors."""
    pass


class ConfigValidationError(ConfigurationError):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        message = "Configuration validation failed"
        details = "; ".join(errors)
        suggestion = "Fix the listed configuration values."

        super().__init__(message, details, suggestion)
        self.errors = errors


class ExhaustedRandomDrawError(ConfigurationError):
    """
    Raised when the feature-subset sampler cannot produce the requested draw.

    Happens when more distinct indices are requested than exist, or when the
    retry budget of the collision-retry sampler runs out.
    """

    def __init__(self,
                 requested: int,
                 available: int,
                 reason: str = ''):
        message = (
            f"Cannot draw {requested} distinct feature indices "
            f"from {available} available"
        )
        details = reason
        suggestion = "Check the ensemble 'proportion' setting (must be in (0, 1])."

        super().__init__(message, details, suggestion)
        self.requested = requested
        self.available = available


# =============================================================================
# COMPONENT ERRORS
# =============================================================================

class ComponentError(PerceptronEnsembleError):
    """Base exception for component registry errors."""
    pass


class ComponentNotFoundError(ComponentError):
    """Raised when a component is not found in the registry."""

    def __init__(self,
                 category: str,
                 name: str,
                 available: Optional[List[str]] = None):
        message = f"Component '{name}' not found in category '{category}'"
        details = f"Available: {available}" if available is not None else ""
        suggestion = "Check the component name or register it first."

        super().__init__(message, details, suggestion)
        self.category = category
        self.name = name


class RegistrationError(ComponentError):
    """Raised when component registration fails."""

    def __init__(self,
                 category: str,
                 name: str,
                 reason: str = ''):
        message = f"Failed to register '{name}' in category '{category}'"
        details = reason
        suggestion = "Use a valid category, or pass overwrite=True to replace."

        super().__init__(message, details, suggestion)
        self.category = category
        self.name = name


__all__ = [
    'PerceptronEnsembleError',
    'DataError',
    'DataLoadError',
    'DataValidationError',
    'InvalidInputKindError',
    'ProcessingError',
    'DegenerateStandardizationError',
    'ClassificationError',
    'ModelNotFittedError',
    'PredictionError',
    'ConfigurationError',
    'ConfigValidationError',
    'ExhaustedRandomDrawError',
    'ComponentError',
    'ComponentNotFoundError',
    'RegistrationError',
]
