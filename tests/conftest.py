"""
Shared pytest fixtures.
"""

import numpy as np
import pytest

from perceptron_ensemble.core.config import ConfigManager


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts from the built-in configuration defaults."""
    ConfigManager.reset()
    yield
    ConfigManager.reset()


@pytest.fixture
def separable_data():
    """Two well separated clusters on the positive and negative quadrants."""
    X_train = np.array([
        [11.0, 12.0], [12.0, 11.0], [14.0, 13.0], [13.0, 15.0],
        [-2.0, -3.0], [-3.0, -1.0], [-1.0, -4.0], [-4.0, -2.0],
    ])
    y_train = np.array([1, 1, 1, 1, 0, 0, 0, 0])
    X_test = np.array([[12.0, 13.0], [15.0, 14.0], [-1.0, -2.0], [-3.0, -1.0]])
    y_test = np.array([1, 1, 0, 0])
    return X_train, y_train, X_test, y_test


@pytest.fixture
def xor_data():
    X = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
    y = np.array([0, 1, 1, 0])
    return X, y


@pytest.fixture
def random_data():
    """Noisy binary data with more features than the toy sets."""
    rng = np.random.default_rng(42)
    n_samples, n_features = 60, 6
    X = rng.normal(size=(n_samples, n_features))
    y = (X[:, 0] + 0.5 * X[:, 1] + 0.1 * rng.normal(size=n_samples) > 0).astype(int)
    return X, y
