"""
Benchmark Driver
================

Compares the perceptron ensemble with scikit-learn baselines over train/test
ARFF pairs.

For each dataset pair every classifier is built on the training file, timed
in milliseconds, and scored on the test file. Results are written as CSV:

- One file per metric (accuracy, tpr, tnr, balanced, timings): one row per
  dataset, one column per classifier
- A case-study file for a single dataset: one row per metric, each row
  prefixed with its label

Columns follow ``CLASSIFIER_NAMES``.

Example:
    ```python
    from perceptron_ensemble.evaluation.benchmark import Benchmark

    bench = Benchmark(output_dir='results', random_state=0)
    results = bench.run([('data/a_TRAIN.arff', 'data/a_TEST.arff')])
    bench.save_metric_files(results)
    ```
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union
import logging
import time

import pandas as pd
from sklearn.ensemble import RandomForestClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.neighbors import KNeighborsClassifier
from sklearn.svm import SVC
from sklearn.tree import DecisionTreeClassifier

from perceptron_ensemble.core.config import get_config
from perceptron_ensemble.core.types.dataset import Dataset
from perceptron_ensemble.classifiers.factory import create_ensemble
from perceptron_ensemble.data.loaders.arff_loader import ArffLoader
from perceptron_ensemble.evaluation.metrics import evaluate_predictions
from perceptron_ensemble.utils.logging import log_execution_time


logger = logging.getLogger(__name__)


CLASSIFIER_NAMES = (
    'DecisionTree',
    'RandomForest',
    'SupportVector',
    'LogisticRegression',
    'K Nearest',
    'Ensemble',
)

FILE_HEADER = ', '.join(CLASSIFIER_NAMES)

METRICS = ('accuracy', 'tpr', 'tnr', 'balanced', 'timings')

CASE_STUDY_ROWS = (
    ('Accuracy: ', 'accuracy'),
    ('Balanced Accuracy: ', 'balanced'),
    ('TPR: ', 'tpr'),
    ('TNR: ', 'tnr'),
    ('Timings: ', 'timings'),
)

Builder = Callable[[], Any]


@dataclass
class DatasetResult:
    """Scores of every classifier on one dataset, in column order."""
    name: str
    accuracy: List[float] = field(default_factory=list)
    tpr: List[float] = field(default_factory=list)
    tnr: List[float] = field(default_factory=list)
    balanced: List[float] = field(default_factory=list)
    timings: List[float] = field(default_factory=list)

    def row(self, metric: str) -> List[float]:
        return getattr(self, metric)


class Benchmark:
    """
    Train and score the ensemble against the baseline classifiers.

    Args:
        output_dir: Directory for CSV files (config: benchmark.output_dir)
        n_neighbors: k for the nearest-neighbour baseline (config default: 1)
        random_state: Seed for the randomized classifiers
        ensemble_config: Extra options passed to create_ensemble()
    """

    def __init__(self,
                 output_dir: Optional[Union[str, Path]] = None,
                 n_neighbors: Optional[int] = None,
                 random_state: Optional[int] = None,
                 ensemble_config: Optional[Dict[str, Any]] = None):
        section = get_config().get_section('benchmark')

        self.output_dir = Path(output_dir if output_dir is not None
                               else section.get('output_dir', 'results'))
        self.n_neighbors = n_neighbors if n_neighbors is not None \
            else section.get('n_neighbors', 1)
        self.random_state = random_state if random_state is not None \
            else section.get('random_state', 0)
        self.ensemble_config = dict(ensemble_config or {})
        self._loader = ArffLoader()

    # =========================================================================
    # CLASSIFIERS
    # =========================================================================

    def builders(self) -> List[Tuple[str, Builder]]:
        """Fresh-classifier builders, in column order."""
        seed = self.random_state
        ensemble_config = {'random_state': seed, **self.ensemble_config}
        return [
            ('DecisionTree', lambda: DecisionTreeClassifier(random_state=seed)),
            ('RandomForest', lambda: RandomForestClassifier(random_state=seed)),
            ('SupportVector', lambda: SVC(kernel='linear')),
            ('LogisticRegression', lambda: LogisticRegression(max_iter=1000)),
            ('K Nearest', lambda: KNeighborsClassifier(n_neighbors=self.n_neighbors)),
            ('Ensemble', lambda: create_ensemble(**ensemble_config)),
        ]

    # =========================================================================
    # EVALUATION
    # =========================================================================

    def evaluate(self, train: Dataset, test: Dataset) -> DatasetResult:
        """Build every classifier on ``train`` and score it on ``test``."""
        train.check_continuous()
        test.check_continuous()

        result = DatasetResult(name=train.name)
        for name, build in self.builders():
            classifier = build()

            start = time.perf_counter()
            classifier.fit(train.X, train.y)
            elapsed_ms = (time.perf_counter() - start) * 1000.0

            scores = evaluate_predictions(test.y, classifier.predict(test.X))
            result.accuracy.append(scores.accuracy)
            result.tpr.append(scores.tpr)
            result.tnr.append(scores.tnr)
            result.balanced.append(scores.balanced_accuracy)
            result.timings.append(elapsed_ms)

            logger.debug(
                f"{train.name} / {name}: accuracy={scores.accuracy:.4f}, "
                f"balanced={scores.balanced_accuracy:.4f}, build={elapsed_ms:.1f}ms"
            )
        return result

    def evaluate_files(self,
                       train_path: Union[str, Path],
                       test_path: Union[str, Path]) -> DatasetResult:
        train, test = self._loader.load_pair(train_path, test_path)
        return self.evaluate(train, test)

    @log_execution_time(level=logging.INFO)
    def run(self, pairs: Sequence[Tuple[Union[str, Path], Union[str, Path]]]) -> List[DatasetResult]:
        """
        Evaluate every (train, test) file pair.

        Returns:
            One DatasetResult per pair, in input order
        """
        results = []
        for train_path, test_path in pairs:
            logger.info(f"Benchmarking {train_path}")
            results.append(self.evaluate_files(train_path, test_path))
        return results

    # =========================================================================
    # OUTPUT
    # =========================================================================

    def save_metric_files(self,
                          results: Sequence[DatasetResult],
                          suffix: str = '') -> Dict[str, Path]:
        """
        Write one CSV per metric.

        Returns:
            Mapping of metric name to written file
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        written = {}
        for metric in METRICS:
            path = self.output_dir / f"{metric}{suffix}.csv"
            write_results(path, [result.row(metric) for result in results])
            written[metric] = path
        logger.info(f"Wrote {len(written)} metric files to {self.output_dir}")
        return written

    def save_case_study(self,
                        result: DatasetResult,
                        filename: str = 'caseStudy.csv') -> Path:
        """Write the labelled per-metric layout for one dataset."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / filename
        write_case_study(path, result)
        logger.info(f"Wrote case study for '{result.name}' to {path}")
        return path


# =============================================================================
# CSV WRITERS
# =============================================================================

def results_frame(rows: Sequence[Sequence[float]],
                  index: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Scores as a float DataFrame with one column per classifier."""
    return pd.DataFrame(list(rows), columns=list(CLASSIFIER_NAMES),
                        index=index, dtype=float)


def write_results(path: Union[str, Path], rows: Sequence[Sequence[float]]) -> None:
    """Header line, then one row of classifier scores per dataset."""
    frame = results_frame(rows)
    with open(path, 'w', newline='') as handle:
        handle.write(FILE_HEADER + '\n')
        frame.to_csv(handle, header=False, index=False, lineterminator='\n')


def write_case_study(path: Union[str, Path], result: DatasetResult) -> None:
    """Header line, then one labelled row per metric."""
    labels = [label for label, _ in CASE_STUDY_ROWS]
    frame = results_frame([result.row(metric) for _, metric in CASE_STUDY_ROWS],
                          index=labels)
    # labels run straight into the first value, with no separator
    lines = frame.to_csv(header=False, index=False, lineterminator='\n').splitlines()
    with open(path, 'w', newline='') as handle:
        handle.write(FILE_HEADER + '\n')
        for label, line in zip(frame.index, lines):
            handle.write(f"{label}{line}\n")


def run_benchmark(pairs: Sequence[Tuple[Union[str, Path], Union[str, Path]]],
                  **kwargs) -> List[DatasetResult]:
    """
    Evaluate all pairs and write the per-metric CSVs.

    Example:
        >>> run_benchmark([('a_TRAIN.arff', 'a_TEST.arff')], output_dir='out')
    """
    bench = Benchmark(**kwargs)
    results = bench.run(pairs)
    bench.save_metric_files(results)
    return results
