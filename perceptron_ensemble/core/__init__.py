"""
Core Module
===========

The core module of the toolkit, containing:
- Abstract interfaces for classifiers and trainers
- Data types (dataset, weight vectors, standardization params)
- Configuration management
- Component registry
- Custom exceptions

Quick Start:
-----------
```python
from perceptron_ensemble.core import Dataset, get_config, get_registry

config = get_config()
print(config.get('ensemble.size'))  # 50

trainer = get_registry().create('trainer', 'online', {'random_state': 3})
```
"""

from perceptron_ensemble.core.interfaces import (
    IClassifier,
    ITrainer,
    EpochCallback,
)

from perceptron_ensemble.core.types import (
    Dataset,
    StandardizationParams,
    WeightVector,
    FeatureMask,
)

from perceptron_ensemble.core.config import (
    ConfigManager,
    get_config,
    load_config,
)

from perceptron_ensemble.core.registry import (
    ComponentRegistry,
    get_registry,
    registered,
)

from perceptron_ensemble.core.exceptions import (
    PerceptronEnsembleError,
    DataError,
    DataLoadError,
    DataValidationError,
    InvalidInputKindError,
    ProcessingError,
    DegenerateStandardizationError,
    ClassificationError,
    ModelNotFittedError,
    PredictionError,
    ConfigurationError,
    ConfigValidationError,
    ExhaustedRandomDrawError,
    ComponentError,
    ComponentNotFoundError,
    RegistrationError,
)

__all__ = [
    # Interfaces
    'IClassifier',
    'ITrainer',
    'EpochCallback',

    # Types
    'Dataset',
    'StandardizationParams',
    'WeightVector',
    'FeatureMask',

    # Configuration
    'ConfigManager',
    'get_config',
    'load_config',

    # Registry
    'ComponentRegistry',
    'get_registry',
    'registered',

    # Exceptions
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
