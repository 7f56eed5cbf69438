"""
Core Data Types
===============

- Dataset: labelled feature matrix with attribute kinds
- StandardizationParams: fitted per-feature mean/std
- WeightVector: trained linear model
- FeatureMask: ensemble member feature subset
"""

from perceptron_ensemble.core.types.dataset import (
    Dataset,
    NUMERIC,
    NOMINAL,
    STRING,
    DATE,
    ATTRIBUTE_KINDS,
)
from perceptron_ensemble.core.types.model import (
    StandardizationParams,
    WeightVector,
    FeatureMask,
)

__all__ = [
    'Dataset',
    'NUMERIC',
    'NOMINAL',
    'STRING',
    'DATE',
    'ATTRIBUTE_KINDS',
    'StandardizationParams',
    'WeightVector',
    'FeatureMask',
]
