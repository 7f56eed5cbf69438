"""
Classifier Models Package
=========================

- linear: LinearClassifier (enhanced_perceptron) and Perceptron
- ensemble: BaggedEnsemble (perceptron_ensemble)
"""

from .linear import LinearClassifier, Perceptron
from .ensemble import (
    BaggedEnsemble,
    EnsembleMember,
    draw_excluded_features,
    n_excluded_features,
)

__all__ = [
    'LinearClassifier',
    'Perceptron',
    'BaggedEnsemble',
    'EnsembleMember',
    'draw_excluded_features',
    'n_excluded_features',
]
