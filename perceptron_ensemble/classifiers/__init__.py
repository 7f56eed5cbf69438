"""
Classifiers Package
===================

Binary classifiers over continuous features.

Package Structure:
    classifiers/
    ├── __init__.py          # This file - public API
    ├── base.py              # BaseClassifier abstract class
    ├── factory.py           # ClassifierFactory for dynamic creation
    └── models/
        ├── linear.py        # Perceptron, LinearClassifier
        └── ensemble.py      # BaggedEnsemble

Typical Usage:

    1. Single linear model:
        ```python
        from perceptron_ensemble.classifiers import create_enhanced_perceptron

        clf = create_enhanced_perceptron(model_selection=True, random_state=0)
        clf.fit(X_train, y_train)
        predictions = clf.predict(X_test)
        ```

    2. Ensemble from a loaded dataset:
        ```python
        from perceptron_ensemble.classifiers import create_ensemble
        from perceptron_ensemble.data import load_arff

        train = load_arff('train.arff')
        ensemble = create_ensemble(size=50, proportion=0.5, random_state=1)
        ensemble.build_classifier(train)
        ```

    3. Using ClassifierFactory:
        ```python
        from perceptron_ensemble.classifiers import ClassifierFactory

        clf = ClassifierFactory.from_config({'name': 'perceptron',
                                             'max_iterations': 200})
        ```
"""

# Base classes
from .base import BaseClassifier

# Models
from .models import (
    LinearClassifier,
    Perceptron,
    BaggedEnsemble,
    EnsembleMember,
)

# Factory
from .factory import (
    ClassifierFactory,
    create_classifier,
    create_perceptron,
    create_enhanced_perceptron,
    create_ensemble,
)

__all__ = [
    # Base classes
    'BaseClassifier',

    # Models
    'LinearClassifier',
    'Perceptron',
    'BaggedEnsemble',
    'EnsembleMember',

    # Factory
    'ClassifierFactory',
    'create_classifier',
    'create_perceptron',
    'create_enhanced_perceptron',
    'create_ensemble',
]
