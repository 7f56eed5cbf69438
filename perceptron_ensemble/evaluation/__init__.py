"""
Evaluation Module
=================

- cross_validation: k-fold accuracy estimates used by model selection
- metrics: accuracy, confusion matrix, TPR, TNR, balanced accuracy
- benchmark: comparison against scikit-learn baselines (import it directly,
  ``from perceptron_ensemble.evaluation.benchmark import Benchmark``)
"""

from perceptron_ensemble.evaluation.cross_validation import (
    CrossValidationResult,
    make_folds,
    cross_validate,
    cross_validate_accuracy,
)
from perceptron_ensemble.evaluation.metrics import (
    ClassificationMetrics,
    accuracy,
    confusion_matrix,
    true_positive_rate,
    true_negative_rate,
    balanced_accuracy,
    evaluate_predictions,
)

__all__ = [
    'CrossValidationResult',
    'make_folds',
    'cross_validate',
    'cross_validate_accuracy',
    'ClassificationMetrics',
    'accuracy',
    'confusion_matrix',
    'true_positive_rate',
    'true_negative_rate',
    'balanced_accuracy',
    'evaluate_predictions',
]
