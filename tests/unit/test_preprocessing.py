"""
Unit Tests for Preprocessing
============================

Tests for the per-feature Standardizer.

Test Coverage:
- z-score and legacy modes
- Zero-variance policies
- Fit/transform contracts (copies, shapes, unfitted use)
- Registry creation

Run tests:
    pytest tests/unit/test_preprocessing.py -v
"""

import pytest
import numpy as np

from perceptron_ensemble.core.registry import get_registry
from perceptron_ensemble.core.exceptions import (
    DegenerateStandardizationError,
    InvalidInputKindError,
    ModelNotFittedError,
)
from perceptron_ensemble.preprocessing import Standardizer


# =============================================================================
# TEST FIXTURES
# =============================================================================

@pytest.fixture
def simple_X():
    # means [2, 20], population stds [1, 10]
    return np.array([[1.0, 10.0], [3.0, 30.0]])


@pytest.fixture
def constant_X():
    return np.array([[1.0, 5.0], [2.0, 5.0], [3.0, 5.0]])


# =============================================================================
# STANDARDIZER TESTS
# =============================================================================

class TestStandardizer:
    """Test suite for Standardizer."""

    def test_defaults(self):
        std = Standardizer()
        assert std.name == 'standardizer'
        assert std.get_params() == {'mode': 'zscore', 'zero_variance': 'raise'}
        assert not std.is_fitted

    def test_fit_statistics(self, simple_X):
        params = Standardizer().fit(simple_X)
        np.testing.assert_allclose(params.means, [2.0, 20.0])
        np.testing.assert_allclose(params.stds, [1.0, 10.0])
        assert params.n_features == 2

    def test_zscore(self, simple_X):
        X_std, _ = Standardizer().fit_transform(simple_X)
        np.testing.assert_allclose(X_std, [[-1.0, -1.0], [1.0, 1.0]])

    def test_zscore_training_columns_are_unit(self):
        rng = np.random.default_rng(0)
        X = rng.normal(loc=5.0, scale=3.0, size=(50, 4))
        X_std, _ = Standardizer().fit_transform(X)
        np.testing.assert_allclose(X_std.mean(axis=0), 0.0, atol=1e-12)
        np.testing.assert_allclose(X_std.std(axis=0), 1.0, atol=1e-12)

    def test_legacy(self, simple_X):
        std = Standardizer(mode='legacy')
        X_std, _ = std.fit_transform(simple_X)
        # x - mean / std
        np.testing.assert_allclose(X_std, [[-1.0, 8.0], [1.0, 28.0]])

    def test_constant_column_raises(self, constant_X):
        with pytest.raises(DegenerateStandardizationError) as exc_info:
            Standardizer().fit(constant_X)
        assert exc_info.value.columns == [1]

    def test_constant_column_zero_policy_zscore(self, constant_X):
        std = Standardizer(zero_variance='zero')
        X_std, params = std.fit_transform(constant_X)
        np.testing.assert_array_equal(X_std[:, 1], 0.0)
        assert np.all(np.isfinite(X_std))
        assert params.constant_columns.tolist() == [1]

    def test_constant_column_zero_policy_legacy(self, constant_X):
        std = Standardizer(mode='legacy', zero_variance='zero')
        X_std, _ = std.fit_transform(constant_X)
        np.testing.assert_array_equal(X_std[:, 1], 5.0)
        assert np.all(np.isfinite(X_std))

    def test_inexact_constant_column_raises(self):
        # 0.1 has no exact binary form, so np.std leaves ~1e-17 instead of 0
        X = np.column_stack([np.full(10, 0.1), np.arange(10.0)])
        with pytest.raises(DegenerateStandardizationError) as exc_info:
            Standardizer().fit(X)
        assert exc_info.value.columns == [0]

    def test_inexact_constant_column_zero_policy(self):
        X = np.column_stack([np.full(10, 0.1), np.arange(10.0)])
        X_std, params = Standardizer(zero_variance='zero').fit_transform(X)
        np.testing.assert_array_equal(X_std[:, 0], 0.0)
        assert params.constant_columns.tolist() == [0]

    def test_small_scale_column_is_not_constant(self):
        X = np.array([[1e-6, 1.0], [2e-6, 2.0], [3e-6, 3.0]])
        params = Standardizer().fit(X)
        assert params.constant_columns.tolist() == []

    def test_transform_uses_training_statistics(self, simple_X):
        std = Standardizer()
        params = std.fit(simple_X)
        out = std.transform(np.array([[2.0, 40.0]]), params)
        np.testing.assert_allclose(out, [[0.0, 2.0]])

    def test_transform_defaults_to_last_fit(self, simple_X):
        std = Standardizer()
        std.fit(simple_X)
        np.testing.assert_allclose(std.transform(simple_X), [[-1.0, -1.0], [1.0, 1.0]])

    def test_transform_single_instance(self, simple_X):
        std = Standardizer()
        std.fit(simple_X)
        np.testing.assert_allclose(std.transform(np.array([3.0, 30.0])), [1.0, 1.0])

    def test_transform_does_not_modify_input(self, simple_X):
        original = simple_X.copy()
        std = Standardizer()
        std.fit(simple_X)
        std.transform(simple_X)
        np.testing.assert_array_equal(simple_X, original)

    def test_transform_in_place(self, simple_X):
        std = Standardizer()
        std.fit(simple_X)
        out = std.transform(simple_X, copy=False)
        assert out is simple_X

    def test_transform_before_fit(self, simple_X):
        with pytest.raises(ModelNotFittedError):
            Standardizer().transform(simple_X)

    def test_transform_feature_mismatch(self, simple_X):
        std = Standardizer()
        std.fit(simple_X)
        with pytest.raises(ValueError):
            std.transform(np.ones((2, 3)))

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidInputKindError):
            Standardizer().fit(np.array([['a', 'b'], ['c', 'd']]))

    def test_invalid_mode(self):
        with pytest.raises(ValueError):
            Standardizer(mode='minmax')

    def test_invalid_policy(self):
        std = Standardizer()
        with pytest.raises(ValueError):
            std.set_params(zero_variance='ignore')

    def test_initialize(self, simple_X):
        std = Standardizer()
        std.initialize({'mode': 'legacy'})
        assert std.get_params()['mode'] == 'legacy'
        assert std.get_params()['zero_variance'] == 'raise'

    def test_created_from_registry(self):
        std = get_registry().create('preprocessor', 'standardizer', {'mode': 'legacy'})
        assert isinstance(std, Standardizer)
        assert std.get_params()['mode'] == 'legacy'
