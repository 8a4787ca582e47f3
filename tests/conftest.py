"""
Test configuration and fixtures for lazysample.

This module provides pytest fixtures, markers and statistical helpers
shared by the unit and integration tests.
"""

import itertools

import numpy as np
import pytest
from scipy import stats

from lazysample import Grid, IntegerRange, Modular, UnitInterval


@pytest.fixture(scope="session")
def test_seed():
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def rng(test_seed):
    """Fresh seeded generator for each test."""
    return np.random.default_rng(test_seed)


@pytest.fixture
def modular_4():
    return Modular(4)


@pytest.fixture
def byte_range():
    """All values of an unsigned 8-bit integer."""
    return IntegerRange.from_dtype(np.uint8)


@pytest.fixture
def grid_256():
    return Grid(256)


@pytest.fixture
def unit_interval():
    return UnitInterval()


@pytest.fixture
def counting_sequence():
    """Deterministic sequence 0, 1, 2, ..."""
    return itertools.count()


@pytest.fixture
def statistical_config():
    """Configuration for statistical tests."""
    return {
        'n_samples': 10000,      # Number of samples for statistical tests
        'alpha': 0.001,          # Significance level for goodness-of-fit tests
        'mean_sigmas': 5,        # Allowed deviation of sample means, in standard errors
    }


class TestStatUtils:
    """Utility functions for statistical testing."""

    @staticmethod
    def frequencies(samples, values) -> np.ndarray:
        """Empirical frequency of each of the given values."""
        samples = np.asarray(samples)
        return np.array([np.mean(samples == v) for v in values])

    @staticmethod
    def chi_squared_passes(samples, values, weights, alpha: float = 0.001) -> bool:
        """Chi-squared goodness of fit of discrete samples against unnormalized weights."""
        samples = np.asarray(samples)
        observed = np.array([np.sum(samples == v) for v in values])
        weights = np.asarray(weights, dtype=float)
        expected = weights / weights.sum() * len(samples)
        _, p_value = stats.chisquare(observed, expected)
        return p_value > alpha


@pytest.fixture
def stat_utils():
    """Statistical utility functions for testing."""
    return TestStatUtils()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual functions/methods"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for module interactions"
    )
    config.addinivalue_line(
        "markers", "statistical: Tests that verify statistical properties"
    )
    config.addinivalue_line(
        "markers", "edge_case: Tests for edge cases and error conditions"
    )
    config.addinivalue_line(
        "markers", "reproducibility: Tests for deterministic behavior"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers based on test paths."""
    for item in items:
        if "unit" in item.path.parts:
            item.add_marker(pytest.mark.unit)
        if "integration" in item.path.parts:
            item.add_marker(pytest.mark.integration)
