"""
Classification Metrics
======================

Binary metrics used to compare classifiers. Class 1 is the positive class.

- accuracy: fraction of correct predictions
- confusion matrix: rows are true labels, columns predictions, order [0, 1]
- TPR (sensitivity): TP / (TP + FN)
- TNR (specificity): TN / (TN + FP)
- balanced accuracy: (TPR + TNR) / 2

A rate whose denominator is zero (the class is absent from y_true) is 0.0.

Example Usage:
    ```python
    from perceptron_ensemble.evaluation.metrics import evaluate_predictions

    metrics = evaluate_predictions(y_test, clf.predict(X_test))
    print(metrics.balanced_accuracy)
    ```
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict
import numpy as np

from sklearn import metrics as sk_metrics

from perceptron_ensemble.utils.validation import validate_same_length


@dataclass(frozen=True)
class ClassificationMetrics:
    """Metrics of one classifier on one test set."""
    accuracy: float
    tpr: float
    tnr: float
    balanced_accuracy: float
    confusion: np.ndarray

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result['confusion'] = self.confusion.tolist()
        return result


def confusion_matrix(y_true: np.ndarray, y_pred: np.ndarray) -> np.ndarray:
    """2x2 confusion matrix with label order [0, 1]."""
    validate_same_length(np.asarray(y_true), np.asarray(y_pred), names=['y_true', 'y_pred'])
    return sk_metrics.confusion_matrix(y_true, y_pred, labels=[0, 1])


def accuracy(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Fraction of correct predictions."""
    validate_same_length(np.asarray(y_true), np.asarray(y_pred), names=['y_true', 'y_pred'])
    return float(sk_metrics.accuracy_score(y_true, y_pred))


def true_positive_rate(confusion: np.ndarray) -> float:
    tn, fp, fn, tp = np.asarray(confusion).ravel()
    return float(tp / (tp + fn)) if (tp + fn) > 0 else 0.0


def true_negative_rate(confusion: np.ndarray) -> float:
    tn, fp, fn, tp = np.asarray(confusion).ravel()
    return float(tn / (tn + fp)) if (tn + fp) > 0 else 0.0


def balanced_accuracy(tpr: float, tnr: float) -> float:
    return (tpr + tnr) / 2.0


def evaluate_predictions(y_true: np.ndarray, y_pred: np.ndarray) -> ClassificationMetrics:
    """
    Compute every metric for one set of predictions.

    Args:
        y_true: True labels in {0, 1}
        y_pred: Predicted labels in {0, 1}

    Returns:
        ClassificationMetrics
    """
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)

    confusion = confusion_matrix(y_true, y_pred)
    tpr = true_positive_rate(confusion)
    tnr = true_negative_rate(confusion)

    return ClassificationMetrics(
        accuracy=accuracy(y_true, y_pred),
        tpr=tpr,
        tnr=tnr,
        balanced_accuracy=balanced_accuracy(tpr, tnr),
        confusion=confusion,
    )
