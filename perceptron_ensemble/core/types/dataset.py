"""
Dataset Types
=============

This module defines the labelled dataset container consumed by the
classifiers.

Data Types:
----------
1. Dataset: Feature matrix, binary labels and per-attribute kinds
2. Attribute kind constants (numeric, nominal, string, date)

Design Principles:
-----------------
- Numpy-backed for performance
- Attribute kinds travel with the data so the continuous-only capability
  check can run before training
- Selecting a feature subset returns a new Dataset; the original is untouched

Example Usage:
    ```python
    from perceptron_ensemble.core.types import Dataset

    dataset = Dataset.from_arrays(X, y, name='twonorm')
    dataset.check_continuous()
    reduced = dataset.select_features([0, 2, 5])
    ```
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Sequence
import numpy as np

from perceptron_ensemble.core.exceptions import (
    DataValidationError,
    InvalidInputKindError,
)


# Attribute kinds, named after the ARFF attribute types
NUMERIC = 'numeric'
NOMINAL = 'nominal'
STRING = 'string'
DATE = 'date'

ATTRIBUTE_KINDS = (NUMERIC, NOMINAL, STRING, DATE)


@dataclass(frozen=False)
class Dataset:
    """
    Labelled dataset with continuous features and a binary class.

    Attributes:
        X: Feature matrix, shape (n_instances, n_features)
        y: Class labels, shape (n_instances,), values in {0, 1}
        attribute_kinds: Kind of each feature column
        feature_names: Name of each feature column
        name: Relation/dataset name
        class_names: Original class names before binarization (optional)
        metadata: Additional dataset metadata
    """
    X: np.ndarray
    y: np.ndarray
    attribute_kinds: List[str] = field(default_factory=list)
    feature_names: List[str] = field(default_factory=list)
    name: str = ''
    class_names: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate shapes and fill default names/kinds."""
        self.X = np.asarray(self.X)
        self.y = np.asarray(self.y)

        if self.X.ndim != 2:
            raise DataValidationError(
                'X', '2D array (n_instances, n_features)', f'{self.X.ndim}D array'
            )
        if self.y.ndim != 1:
            raise DataValidationError('y', '1D label vector', f'{self.y.ndim}D array')
        if len(self.X) != len(self.y):
            raise DataValidationError(
                'n_instances', f'{len(self.X)} labels', f'{len(self.y)} labels'
            )

        n_features = self.X.shape[1]
        if not self.attribute_kinds:
            self.attribute_kinds = [NUMERIC] * n_features
        if not self.feature_names:
            self.feature_names = [f'attr{i}' for i in range(n_features)]

        if len(self.attribute_kinds) != n_features:
            raise DataValidationError(
                'attribute_kinds', f'{n_features} entries', f'{len(self.attribute_kinds)} entries'
            )
        if len(self.feature_names) != n_features:
            raise DataValidationError(
                'feature_names', f'{n_features} entries', f'{len(self.feature_names)} entries'
            )

    # =========================================================================
    # CONSTRUCTORS
    # =========================================================================

    @classmethod
    def from_arrays(cls,
                    X: np.ndarray,
                    y: np.ndarray,
                    name: str = '',
                    feature_names: Optional[Sequence[str]] = None) -> 'Dataset':
        """Create an all-numeric dataset from arrays."""
        return cls(
            X=np.asarray(X, dtype=np.float64),
            y=np.asarray(y).astype(np.int64),
            feature_names=list(feature_names) if feature_names else [],
            name=name,
        )

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def n_instances(self) -> int:
        """Number of instances."""
        return int(self.X.shape[0])

    @property
    def n_features(self) -> int:
        """Number of feature columns (class excluded)."""
        return int(self.X.shape[1])

    @property
    def is_continuous(self) -> bool:
        """Whether every feature column is numeric."""
        return not self.non_continuous_attributes()

    def non_continuous_attributes(self) -> List[str]:
        """Names of the feature columns that are not numeric."""
        return [
            name for name, kind in zip(self.feature_names, self.attribute_kinds)
            if kind != NUMERIC
        ]

    def check_continuous(self) -> None:
        """
        Fail fast if any attribute is not continuous.

        Raises:
            InvalidInputKindError: If a nominal/string/date attribute is present
        """
        offending = self.non_continuous_attributes()
        if offending:
            kinds = [
                kind for kind in self.attribute_kinds if kind != NUMERIC
            ]
            raise InvalidInputKindError(offending, kinds)

    def class_distribution(self) -> Dict[int, int]:
        """Count of instances per label."""
        labels, counts = np.unique(self.y, return_counts=True)
        return {int(label): int(count) for label, count in zip(labels, counts)}

    # =========================================================================
    # TRANSFORMS
    # =========================================================================

    def select_features(self, indices: Sequence[int]) -> 'Dataset':
        """
        Return a new dataset restricted to the given feature columns.

        Args:
            indices: Column indices to keep, in output order

        Returns:
            Dataset with copied feature data
        """
        indices = [int(i) for i in indices]
        return Dataset(
            X=self.X[:, indices].copy(),
            y=self.y.copy(),
            attribute_kinds=[self.attribute_kinds[i] for i in indices],
            feature_names=[self.feature_names[i] for i in indices],
            name=self.name,
            class_names=list(self.class_names),
            metadata=dict(self.metadata),
        )

    def copy(self) -> 'Dataset':
        """Deep copy of the dataset."""
        return self.select_features(range(self.n_features))

    def __len__(self) -> int:
        return self.n_instances

    def __repr__(self) -> str:
        return (
            f"Dataset(name='{self.name}', instances={self.n_instances}, "
            f"features={self.n_features}, classes={self.class_distribution()})"
        )
