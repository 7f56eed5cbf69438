"""
Unit Tests for Validators
=========================

Tests for DatasetValidator and the array/config validation helpers.

Run tests:
    pytest tests/unit/test_validators.py -v
"""

import pytest
import numpy as np

from perceptron_ensemble.core.types.dataset import Dataset, NUMERIC, STRING
from perceptron_ensemble.core.exceptions import InvalidInputKindError
from perceptron_ensemble.data.validators import (
    DatasetValidator,
    ValidationError,
    ValidationResult,
)
from perceptron_ensemble.utils.validation import (
    check_choice,
    check_probability,
    check_range,
    check_type,
    ensure_2d,
    validate_binary_labels,
    validate_config_value,
    validate_features,
    validate_same_length,
)


# =============================================================================
# TEST FIXTURES
# =============================================================================

@pytest.fixture
def valid_dataset(separable_data):
    X, y, _, _ = separable_data
    return Dataset.from_arrays(X, y, name='toy')


# =============================================================================
# DATASET VALIDATOR TESTS
# =============================================================================

class TestDatasetValidator:
    """Test suite for DatasetValidator."""

    def test_valid_dataset(self, valid_dataset):
        result = DatasetValidator().validate(valid_dataset)
        assert result.is_valid
        assert bool(result)
        assert result.errors == []
        assert result.info['n_instances'] == 8
        assert result.info['class_distribution'] == {0: 4, 1: 4}

    def test_valid_arrays(self, separable_data):
        X, y, _, _ = separable_data
        assert DatasetValidator().is_valid(X, y)

    def test_array_without_labels(self, separable_data):
        X, _, _, _ = separable_data
        result = DatasetValidator().validate(X)
        assert not result.is_valid

    def test_unsupported_type(self):
        result = DatasetValidator().validate([[1.0, 2.0]])
        assert not result.is_valid

    def test_non_continuous_attribute(self, separable_data):
        X, y, _, _ = separable_data
        dataset = Dataset(X=X, y=y, attribute_kinds=[NUMERIC, STRING],
                          feature_names=['a', 'b'])
        result = DatasetValidator().validate(dataset)
        assert not result.is_valid
        assert 'b (string)' in result.errors[0]

    def test_nan_values(self, separable_data):
        X, y, _, _ = separable_data
        X = X.copy()
        X[0, 0] = np.nan
        result = DatasetValidator().validate(X, y)
        assert not result.is_valid
        assert any('NaN' in e for e in result.errors)

    def test_inf_values(self, separable_data):
        X, y, _, _ = separable_data
        X = X.copy()
        X[1, 1] = np.inf
        assert not DatasetValidator().is_valid(X, y)

    def test_length_mismatch(self, separable_data):
        X, y, _, _ = separable_data
        assert not DatasetValidator().is_valid(X, y[:-1])

    def test_non_binary_labels(self, separable_data):
        X, _, _, _ = separable_data
        result = DatasetValidator().validate(X, np.arange(len(X)))
        assert not result.is_valid
        assert any('binarize' in e for e in result.errors)

    def test_constant_column_is_warning(self):
        X = np.array([[1.0, 5.0], [2.0, 5.0]])
        result = DatasetValidator().validate(X, np.array([0, 1]))
        assert result.is_valid
        assert result.info['constant_columns'] == [1]
        assert len(result.warnings) == 1

    def test_inexact_constant_column_is_warning(self):
        X = np.column_stack([np.full(10, 0.1), np.arange(10.0)])
        result = DatasetValidator().validate(X, np.array([0, 1] * 5))
        assert result.info['constant_columns'] == [0]

    def test_single_class(self, separable_data):
        X, _, _, _ = separable_data
        y = np.ones(len(X), dtype=int)

        assert DatasetValidator().is_valid(X, y)
        assert not DatasetValidator(require_both_classes=True).is_valid(X, y)

    def test_strict_promotes_warnings(self):
        X = np.array([[1.0, 5.0], [2.0, 5.0]])
        result = DatasetValidator(strict=True).validate(X, np.array([0, 1]))
        assert not result.is_valid
        assert result.warnings == []
        assert result.errors[0].startswith('[strict]')

    def test_assert_valid(self, valid_dataset, separable_data):
        DatasetValidator().assert_valid(valid_dataset)

        X, _, _, _ = separable_data
        with pytest.raises(ValidationError) as exc_info:
            DatasetValidator().assert_valid(X, np.full(len(X), 3))
        assert exc_info.value.errors

    def test_result_merge(self):
        a, b = ValidationResult(), ValidationResult()
        b.add_error('broken')
        b.add_warning('odd')
        a.merge(b)
        assert not a.is_valid
        assert a.errors == ['broken']
        assert a.warnings == ['odd']


# =============================================================================
# VALIDATION HELPER TESTS
# =============================================================================

class TestValidationHelpers:
    """Tests for utils.validation."""

    def test_validate_features_casts(self):
        X = validate_features(np.array([[1, 2], [3, 4]]))
        assert X.dtype == np.float64

    @pytest.mark.parametrize('X', [
        np.array([['a', 'b']]),
        np.array([[True, False]]),
    ])
    def test_validate_features_kind(self, X):
        with pytest.raises(InvalidInputKindError):
            validate_features(X)

    @pytest.mark.parametrize('X', [
        np.array([1.0, 2.0]),
        np.empty((0, 2)),
        np.empty((3, 0)),
        np.array([[np.nan, 1.0]]),
    ])
    def test_validate_features_shape_and_values(self, X):
        with pytest.raises(ValueError):
            validate_features(X)

    def test_validate_binary_labels(self):
        labels = validate_binary_labels([0, 1, 1], n_samples=3)
        assert labels.dtype == np.int64

        with pytest.raises(ValueError):
            validate_binary_labels([0, 1], n_samples=3)
        with pytest.raises(ValueError):
            validate_binary_labels([0, 2])
        with pytest.raises(ValueError):
            validate_binary_labels([[0, 1]])

    def test_check_type(self):
        check_type(3, int)
        with pytest.raises(TypeError):
            check_type('3', int, name='size')

    def test_check_range(self):
        check_range(0.5, min_val=0.0, max_val=1.0)
        with pytest.raises(ValueError):
            check_range(1.5, max_val=1.0)
        with pytest.raises(ValueError):
            check_range(-1, min_val=0)

    def test_check_probability(self):
        check_probability(0.0)
        with pytest.raises(ValueError):
            check_probability(1.1)

    def test_check_choice(self):
        check_choice('online', ('online', 'batch'))
        with pytest.raises(ValueError):
            check_choice('sgd', ('online', 'batch'), name='algorithm')

    def test_validate_config_value(self):
        config = {'size': 10, 'mode': 'zscore'}
        validate_config_value(config, 'size', expected_type=int, min_val=1)
        validate_config_value(config, 'mode', choices=['zscore', 'legacy'])
        validate_config_value(config, 'absent', expected_type=int)

        with pytest.raises(ValueError):
            validate_config_value(config, 'size', max_val=5)

    def test_ensure_2d(self):
        assert ensure_2d(np.array([1.0, 2.0])).shape == (1, 2)
        assert ensure_2d(np.ones((3, 2))).shape == (3, 2)
        with pytest.raises(ValueError):
            ensure_2d(np.ones((2, 2, 2)))

    def test_validate_same_length(self):
        validate_same_length(np.ones(3), np.zeros(3))
        with pytest.raises(ValueError):
            validate_same_length(np.ones(3), np.zeros(2), names=['a', 'b'])
