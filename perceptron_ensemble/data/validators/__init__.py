"""
Data Validators
===============

- DatasetValidator: structural, value, label and attribute-kind checks
- ValidationResult: errors, warnings and info of one validation run
- ValidationError: raised by DatasetValidator.assert_valid()
"""

from perceptron_ensemble.data.validators.dataset_validator import (
    DatasetValidator,
    ValidationResult,
    ValidationError,
)

__all__ = [
    'DatasetValidator',
    'ValidationResult',
    'ValidationError',
]
