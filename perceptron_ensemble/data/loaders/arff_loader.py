"""
ARFF Data Loader
================

Loads Weka ARFF files into Dataset objects.

ARFF Layout:
-----------
- The last attribute is the class
- Every other attribute is a feature; its kind (numeric, nominal, date,
  string) is recorded so that classifiers can reject non-continuous data
  before training

Class binarization:
------------------
The classifiers only handle labels 0 and 1.
- Two-valued nominal class: values map to 0 and 1 in declaration order
- More than two classes: the most frequent class becomes 1 and every
  other class becomes 0. Ties go to the class declared first.
- Numeric class: distinct values are treated as classes in sorted order

Usage Example:
    ```python
    from perceptron_ensemble.data.loaders import ArffLoader, load_arff

    dataset = load_arff('data/bank.arff')
    print(dataset.class_distribution())

    loader = ArffLoader()
    train, test = loader.load_pair('data/train.arff', 'data/test.arff')
    ```
"""

from typing import Dict, List, Optional, Any, Sequence, Tuple, Union
from pathlib import Path
import logging
import os

import numpy as np
from scipy.io import arff

from perceptron_ensemble.core.registry import registered
from perceptron_ensemble.core.types.dataset import (
    Dataset,
    NUMERIC,
    NOMINAL,
    STRING,
    DATE,
)
from perceptron_ensemble.core.exceptions import (
    DataLoadError,
    DataValidationError,
    InvalidInputKindError,
)


logger = logging.getLogger(__name__)


# scipy reports 'numeric' for real/integer attributes
_KIND_MAP = {
    'numeric': NUMERIC,
    'real': NUMERIC,
    'integer': NUMERIC,
    'nominal': NOMINAL,
    'date': DATE,
    'string': STRING,
}

MISSING_NOMINAL = '?'


# =============================================================================
# LABEL BINARIZATION
# =============================================================================

def binarize_labels(labels: Sequence[Any],
                    class_order: Optional[Sequence[Any]] = None,
                    positive_class: Optional[Any] = None) -> Tuple[np.ndarray, Any]:
    """
    Map class values to 0/1.

    Args:
        labels: Class value of every instance
        class_order: Declared classes, in declaration order (defaults to the
            sorted distinct values)
        positive_class: Class mapped to 1; when None it is chosen from the
            labels (second declared class for two classes, most frequent
            class otherwise)

    Returns:
        (binary labels, positive class)

    Example:
        >>> binarize_labels(['a', 'b', 'b', 'c'], class_order=['a', 'b', 'c'])
        (array([0, 1, 1, 0]), 'b')
    """
    labels = np.asarray(labels)
    if class_order is None:
        class_order = list(np.unique(labels))
    class_order = list(class_order)

    if positive_class is None:
        if len(class_order) <= 2:
            positive_class = class_order[-1]
        else:
            counts = [int(np.sum(labels == c)) for c in class_order]
            # argmax returns the first maximum, so declaration order breaks ties
            positive_class = class_order[int(np.argmax(counts))]

    binary = (labels == positive_class).astype(np.int64)
    return binary, positive_class


# =============================================================================
# ARFF LOADER
# =============================================================================

@registered('data_loader', 'arff')
class ArffLoader:
    """
    Loader for ARFF files using ``scipy.io.arff``.

    Attributes:
        _config (Dict): Loader configuration
        _binarize (bool): Binarize multi-class labels (default: True)
        _positive_class: Force the class mapped to 1

    Example:
        >>> loader = ArffLoader()
        >>> loader.initialize({'binarize': True})
        >>> dataset = loader.load('train.arff')
    """

    def __init__(self):
        self._config: Dict[str, Any] = {}
        self._binarize: bool = True
        self._positive_class: Optional[Any] = None

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def name(self) -> str:
        return "arff"

    @property
    def supported_extensions(self) -> List[str]:
        return [".arff"]

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    def initialize(self, config: Dict[str, Any]) -> None:
        """
        Args:
            config: Configuration dictionary
                - 'binarize' (bool, optional): Binarize labels (default: True)
                - 'positive_class' (optional): Class value mapped to 1
        """
        self._config = config.copy()
        self._binarize = config.get('binarize', True)
        self._positive_class = config.get('positive_class')

    # =========================================================================
    # LOADING
    # =========================================================================

    def load(self,
             file_path: Union[str, Path],
             positive_class: Optional[Any] = None) -> Dataset:
        """
        Load an ARFF file.

        Args:
            file_path: Path to the ARFF file
            positive_class: Class value mapped to 1 (overrides config)

        Returns:
            Dataset with binary labels (unless binarization is disabled)

        Raises:
            DataLoadError: If the file is missing or cannot be parsed
            InvalidInputKindError: If the file declares string attributes,
                which the ARFF reader cannot represent
        """
        file_path = Path(file_path)
        logger.info(f"Loading ARFF data from: {file_path}")

        self._validate_file_path(file_path)
        data, meta = self._parse_file(file_path)

        names = list(meta.names())
        if len(names) < 2:
            raise DataLoadError(
                str(file_path), "need at least one feature and a class attribute"
            )

        feature_names, class_name = names[:-1], names[-1]
        kinds = [self._attribute_kind(meta, name) for name in feature_names]
        X = np.column_stack([
            self._column_values(data[name], meta, name) for name in feature_names
        ]) if len(data) else np.empty((0, len(feature_names)))

        raw_labels, class_order = self._class_values(data[class_name], meta, class_name)
        if self._binarize:
            y, positive = binarize_labels(
                raw_labels,
                class_order,
                positive_class if positive_class is not None else self._positive_class,
            )
        else:
            y, positive = raw_labels, None

        dataset = Dataset(
            X=X,
            y=y,
            attribute_kinds=kinds,
            feature_names=feature_names,
            name=str(meta.name),
            class_names=[str(c) for c in class_order],
            metadata={
                'source_file': str(file_path),
                'class_attribute': class_name,
                'positive_class': positive,
            },
        )

        logger.info(
            f"Loaded '{dataset.name}': {dataset.n_instances} instances, "
            f"{dataset.n_features} features, classes={dataset.class_distribution()}"
        )
        return dataset

    def load_pair(self,
                  train_path: Union[str, Path],
                  test_path: Union[str, Path]) -> Tuple[Dataset, Dataset]:
        """
        Load a train/test pair so both use the same positive class.

        The positive class is chosen on the training file.
        """
        train = self.load(train_path)
        test = self.load(test_path, positive_class=train.metadata.get('positive_class'))
        return train, test

    def validate_file(self, file_path: Union[str, Path]) -> bool:
        """Check existence, extension and readability."""
        file_path = Path(file_path)
        return (
            file_path.exists()
            and file_path.suffix.lower() in self.supported_extensions
            and os.access(file_path, os.R_OK)
        )

    # =========================================================================
    # PRIVATE METHODS
    # =========================================================================

    def _validate_file_path(self, file_path: Path) -> None:
        if not file_path.exists():
            raise DataLoadError(str(file_path), "file not found")
        if not file_path.is_file():
            raise DataLoadError(str(file_path), "not a file")

    def _parse_file(self, file_path: Path):
        try:
            return arff.loadarff(str(file_path))
        except NotImplementedError as e:
            # scipy refuses string (and relational) attributes
            raise InvalidInputKindError(self._string_attributes(file_path), [STRING]) from e
        except (arff.ArffError, ValueError, UnicodeDecodeError) as e:
            raise DataLoadError(str(file_path), str(e), e) from e

    @staticmethod
    def _string_attributes(file_path: Path) -> List[str]:
        """Names of attributes declared with type 'string' in the header."""
        names = []
        with open(file_path, encoding='utf-8', errors='replace') as handle:
            for line in handle:
                parts = line.split()
                if not parts:
                    continue
                if parts[0].lower() == '@data':
                    break
                if parts[0].lower() == '@attribute' and len(parts) >= 3 \
                        and parts[-1].lower() == 'string':
                    names.append(parts[1].strip("'\""))
        return names or [file_path.name]

    @staticmethod
    def _attribute_kind(meta, name: str) -> str:
        kind, _ = meta[name]
        return _KIND_MAP.get(kind, kind)

    @staticmethod
    def _column_values(column: np.ndarray, meta, name: str) -> np.ndarray:
        """Feature column as float64; nominal values become declaration indices."""
        kind, values = meta[name]
        if kind == 'nominal':
            lookup = {v: float(i) for i, v in enumerate(values)}
            return np.array(
                [lookup.get(_decode(v), np.nan) for v in column], dtype=np.float64
            )
        if kind == 'date':
            return column.astype('datetime64[s]').astype(np.int64).astype(np.float64)
        return column.astype(np.float64)

    @staticmethod
    def _class_values(column: np.ndarray, meta, name: str) -> Tuple[np.ndarray, List[Any]]:
        kind, values = meta[name]
        if kind == 'nominal':
            labels = np.array([_decode(v) for v in column], dtype=object)
            if np.any(labels == MISSING_NOMINAL):
                raise DataValidationError(
                    name, "a class value for every instance", "missing values"
                )
            return labels, list(values)

        labels = column.astype(np.float64)
        if np.any(np.isnan(labels)):
            raise DataValidationError(
                name, "a class value for every instance", "missing values"
            )
        return labels, list(np.unique(labels))

    def __repr__(self) -> str:
        return f"ArffLoader(binarize={self._binarize})"


def _decode(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode('utf-8')
    return str(value)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def load_arff(file_path: Union[str, Path], **config) -> Dataset:
    """
    Load an ARFF file with a default loader.

    Example:
        >>> dataset = load_arff('data/train.arff')
    """
    loader = ArffLoader()
    loader.initialize(config)
    return loader.load(file_path)
