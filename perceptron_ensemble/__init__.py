"""
Perceptron Ensemble
===================

Binary linear classifiers for continuous tabular data, and a random-subspace
ensemble built from them.

Features:
---------
- Plain perceptron with the online update rule
- Enhanced perceptron: z-score standardization, online or batch rule, and
  optional cross-validated choice between the two
- Majority-vote ensemble over random feature subsets, trainable on a
  thread pool with reproducible seeding
- ARFF loading with class binarization
- Benchmark against scikit-learn baselines with CSV reports

Quick Start:
-----------
```python
import perceptron_ensemble as pe

pe.setup_logging(level='INFO')

train = pe.load_arff('data/train.arff')
test = pe.load_arff('data/test.arff')

clf = pe.create_ensemble(size=50, proportion=0.5, random_state=1)
clf.build_classifier(train)
print(clf.predict(test.X))
```

Project Structure:
-----------------
perceptron_ensemble/
├── core/               # Interfaces, types, config, registry, exceptions
├── data/               # ARFF loading and dataset validation
├── preprocessing/      # Standardization
├── training/           # Online/batch rules and model selection
├── classifiers/        # Perceptron, linear classifier, ensemble, factory
├── evaluation/         # Cross-validation, metrics, benchmark
└── utils/              # Logging, validation, parallel helpers
"""

# Version
__version__ = '1.0.0'

from perceptron_ensemble import core
from perceptron_ensemble import utils

# Convenience imports
from perceptron_ensemble.core import (
    # Configuration
    get_config,
    load_config,
    ConfigManager,

    # Registry
    get_registry,
    ComponentRegistry,

    # Types
    Dataset,
    WeightVector,
    StandardizationParams,
    FeatureMask,
)

from perceptron_ensemble.utils import (
    setup_logging,
    get_logger,
)

from perceptron_ensemble.classifiers import (
    Perceptron,
    LinearClassifier,
    BaggedEnsemble,
    ClassifierFactory,
    create_classifier,
    create_perceptron,
    create_enhanced_perceptron,
    create_ensemble,
)

from perceptron_ensemble.data import load_arff

__all__ = [
    # Modules
    'core',
    'utils',

    # Configuration
    'get_config',
    'load_config',
    'ConfigManager',

    # Registry
    'get_registry',
    'ComponentRegistry',

    # Types
    'Dataset',
    'WeightVector',
    'StandardizationParams',
    'FeatureMask',

    # Classifiers
    'Perceptron',
    'LinearClassifier',
    'BaggedEnsemble',
    'ClassifierFactory',
    'create_classifier',
    'create_perceptron',
    'create_enhanced_perceptron',
    'create_ensemble',

    # Data
    'load_arff',

    # Logging
    'setup_logging',
    'get_logger',

    # Version
    '__version__',
]
