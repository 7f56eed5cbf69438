"""
Data Module
===========

Dataset loading and validation.

Sub-modules:
-----------
- loaders: ARFF loading and label binarization
- validators: Dataset validation

Usage Examples:
    ```python
    from perceptron_ensemble.data import ArffLoader, DatasetValidator

    train, test = ArffLoader().load_pair('data/train.arff', 'data/test.arff')

    result = DatasetValidator().validate(train)
    print(f"Valid: {result.is_valid}, warnings: {result.warnings}")
    ```
"""

from perceptron_ensemble.data.loaders import (
    ArffLoader,
    binarize_labels,
    load_arff,
)

from perceptron_ensemble.data.validators import (
    DatasetValidator,
    ValidationResult,
    ValidationError,
)

__all__ = [
    # Loaders
    'ArffLoader',
    'binarize_labels',
    'load_arff',

    # Validators
    'DatasetValidator',
    'ValidationResult',
    'ValidationError',
]
