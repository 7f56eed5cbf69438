"""
Core Interfaces Module
======================

Abstract interfaces implemented by the toolkit's components:

- IClassifier: Interface for binary classifiers
- ITrainer: Interface for weight-learning rules
"""

from perceptron_ensemble.core.interfaces.i_classifier import IClassifier
from perceptron_ensemble.core.interfaces.i_trainer import ITrainer, EpochCallback

__all__ = [
    'IClassifier',
    'ITrainer',
    'EpochCallback',
]
