"""
Unit tests for distributions and weight evaluation.
"""

import math

import numpy as np
import pytest

from lazysample import (
    Conditional, Distribution, cauchy, evaluate, multivariate_normal, normal, tabulated, uniform,
)
from lazysample.exceptions import InvalidWeightError


class TestEvaluate:

    def test_plain_function_is_distribution(self):
        def weight(x):
            return x + 1.0
        assert isinstance(weight, Distribution)
        assert evaluate(weight, 1) == 2.0

    def test_returns_float(self):
        assert isinstance(evaluate(lambda x: np.float32(0.5), 0), float)

    @pytest.mark.edge_case
    @pytest.mark.parametrize("bad", [-1.0, float("nan"), float("inf")])
    def test_invalid_weights(self, bad):
        with pytest.raises(InvalidWeightError):
            evaluate(lambda x: bad, 0)

    def test_zero_is_valid(self):
        assert evaluate(lambda x: 0.0, 0) == 0.0


class TestBuiltins:

    def test_uniform(self):
        w = uniform()
        assert w(0) == w(123) == 1.0

    def test_normal_peak(self):
        w = normal(0.5, 0.2)
        assert w(0.5) == pytest.approx(1.0)
        assert w(0.7) == pytest.approx(math.exp(-0.5))
        assert w(0.3) == pytest.approx(w(0.7))

    def test_cauchy(self):
        w = cauchy(0.0, 2.0)
        assert w(0.0) == pytest.approx(1.0 / (2.0 * math.pi))
        assert w(2.0) == pytest.approx(w(-2.0))
        assert w(2.0) == pytest.approx(w(0.0) / 2)

    @pytest.mark.edge_case
    def test_non_positive_scale(self):
        with pytest.raises(ValueError):
            normal(0.0, 0.0)
        with pytest.raises(ValueError):
            cauchy(0.0, -1.0)

    def test_multivariate_normal_matches_quadratic_form(self):
        mean = np.array([0.5, 0.5])
        cov = np.array([[0.01, 0.006], [0.006, 0.02]])
        w = multivariate_normal(mean, cov)
        x = np.array([0.55, 0.4])
        diff = x - mean
        expected = math.exp(-0.5 * diff @ np.linalg.inv(cov) @ diff)
        assert w(x) == pytest.approx(expected, rel=1e-10)
        assert w(mean) == pytest.approx(1.0)

    @pytest.mark.edge_case
    def test_multivariate_normal_shape_mismatch(self):
        with pytest.raises(ValueError, match="does not match"):
            multivariate_normal([0.0, 0.0], np.eye(3))

    def test_tabulated(self):
        w = tabulated({0: 1.0, 1: 3.0})
        assert w(1) == 3.0
        assert w(2) == 0.0
        assert tabulated({}, default=0.5)(7) == 0.5


class TestConditional:

    def test_replaces_one_coordinate(self):
        position = np.array([1, 2, 3])
        cond = Conditional(lambda x: float(x.sum()), position, 1)
        assert cond(10) == 14.0
        assert cond(0) == 4.0

    def test_does_not_mutate_position(self):
        position = np.array([1, 2, 3])
        Conditional(lambda x: float(x.sum()), position, 0)(9)
        np.testing.assert_array_equal(position, [1, 2, 3])

    def test_multi_dimensional_index(self):
        position = np.zeros((2, 2))
        seen = []
        cond = Conditional(lambda x: seen.append(x.copy()) or 1.0, position, 2)
        cond(5.0)
        assert seen[0][1, 0] == 5.0
