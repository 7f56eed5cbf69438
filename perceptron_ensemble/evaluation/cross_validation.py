"""
Cross-Validation Harness
========================

k-fold estimation of percent-correct accuracy for any classifier builder.

Fold assignment:
---------------
- StratifiedKFold when every class has at least k members
- shuffled KFold otherwise (this includes leave-one-out, k == n)

Both are seeded with ``random_state`` so two candidates evaluated with the
same seed see exactly the same folds.

Example Usage:
    ```python
    from perceptron_ensemble.evaluation import cross_validate

    result = cross_validate(lambda: create_perceptron(), X, y, n_folds=10,
                            random_state=1)
    print(f"{result.accuracy:.2f}% over {result.n_folds} folds")
    ```
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple
import numpy as np
import logging

from sklearn.model_selection import KFold, StratifiedKFold

from perceptron_ensemble.utils.parallel import run_parallel
from perceptron_ensemble.utils.validation import (
    check_type,
    validate_binary_labels,
    validate_features,
)


logger = logging.getLogger(__name__)


ClassifierBuilder = Callable[[], object]


@dataclass
class CrossValidationResult:
    """
    Outcome of one cross-validation run.

    Attributes:
        accuracy: Percent correct aggregated over all folds (0-100)
        n_correct: Correct predictions across all folds
        n_total: Instances evaluated (every instance exactly once)
        n_folds: Number of folds used
        fold_accuracies: Percent correct of each fold
    """
    accuracy: float
    n_correct: int
    n_total: int
    n_folds: int
    fold_accuracies: List[float] = field(default_factory=list)


def make_folds(y: np.ndarray,
               n_folds: int,
               random_state: Optional[int] = 1) -> List[Tuple[np.ndarray, np.ndarray]]:
    """
    Build (train_indices, test_indices) pairs.

    Args:
        y: Labels
        n_folds: Number of folds (2 <= n_folds <= len(y))
        random_state: Shuffle seed

    Returns:
        List of index pairs, one per fold
    """
    y = np.asarray(y)
    check_type(n_folds, int, name='n_folds')
    if n_folds < 2 or n_folds > len(y):
        raise ValueError(
            f"n_folds must be between 2 and the number of instances ({len(y)}), "
            f"got {n_folds}"
        )

    _, counts = np.unique(y, return_counts=True)
    if counts.min() >= n_folds:
        splitter = StratifiedKFold(n_splits=n_folds, shuffle=True,
                                   random_state=random_state)
        splits = splitter.split(np.zeros(len(y)), y)
    else:
        splitter = KFold(n_splits=n_folds, shuffle=True, random_state=random_state)
        splits = splitter.split(np.zeros(len(y)))

    return [(train, test) for train, test in splits]


def cross_validate(builder: ClassifierBuilder,
                   X: np.ndarray,
                   y: np.ndarray,
                   n_folds: int = 10,
                   random_state: Optional[int] = 1,
                   n_jobs: int = 1) -> CrossValidationResult:
    """
    Estimate accuracy by k-fold cross-validation.

    Args:
        builder: Zero-argument callable returning a fresh, unfitted classifier
        X: Features, shape (n_samples, n_features)
        y: Labels in {0, 1}
        n_folds: Number of folds
        random_state: Fold assignment seed
        n_jobs: Folds evaluated concurrently

    Returns:
        CrossValidationResult
    """
    X = validate_features(X)
    y = validate_binary_labels(y, n_samples=X.shape[0])
    folds = make_folds(y, n_folds, random_state)

    def evaluate_fold(fold: Tuple[np.ndarray, np.ndarray]) -> int:
        train_idx, test_idx = fold
        classifier = builder()
        classifier.fit(X[train_idx], y[train_idx])
        predictions = classifier.predict(X[test_idx])
        return int(np.sum(predictions == y[test_idx]))

    fold_correct = run_parallel(evaluate_fold, folds, n_jobs=n_jobs)

    n_correct = int(sum(fold_correct))
    n_total = int(sum(len(test) for _, test in folds))
    fold_accuracies = [
        100.0 * correct / len(test) for correct, (_, test) in zip(fold_correct, folds)
    ]

    result = CrossValidationResult(
        accuracy=100.0 * n_correct / n_total,
        n_correct=n_correct,
        n_total=n_total,
        n_folds=len(folds),
        fold_accuracies=fold_accuracies,
    )
    logger.debug(
        f"Cross-validation: {result.accuracy:.2f}% ({n_correct}/{n_total}) "
        f"over {result.n_folds} folds"
    )
    return result


def cross_validate_accuracy(builder: ClassifierBuilder,
                            X: np.ndarray,
                            y: np.ndarray,
                            n_folds: int = 10,
                            random_state: Optional[int] = 1,
                            n_jobs: int = 1) -> float:
    """Percent correct over all folds. See cross_validate()."""
    return cross_validate(builder, X, y, n_folds, random_state, n_jobs).accuracy
