"""
Data Loaders
============

- ArffLoader: Weka ARFF files (last attribute is the class)
- binarize_labels: map class values to 0/1
- load_arff: convenience function
"""

from perceptron_ensemble.data.loaders.arff_loader import (
    ArffLoader,
    binarize_labels,
    load_arff,
)

__all__ = [
    'ArffLoader',
    'binarize_labels',
    'load_arff',
]
