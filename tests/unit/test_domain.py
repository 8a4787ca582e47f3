"""
Unit tests for sampling domains.
"""

import numpy as np
import pytest

from lazysample import FiniteDomain, Grid, IntegerRange, Modular, ProductDomain, UnitInterval


class TestIntegerRange:

    def test_traverse_order(self):
        assert list(IntegerRange(-2, 3).traverse()) == [-2, -1, 0, 1, 2]

    def test_from_dtype(self, byte_range):
        assert len(byte_range) == 256
        values = list(byte_range.traverse())
        assert values[0] == 0 and values[-1] == 255

    def test_from_signed_dtype(self):
        domain = IntegerRange.from_dtype(np.int8)
        assert (domain.low, domain.high) == (-128, 128)

    def test_random_in_range(self, rng, byte_range):
        for _ in range(200):
            assert byte_range.contains(byte_range.random(rng))

    def test_contains(self):
        domain = IntegerRange(0, 10)
        assert domain.contains(0)
        assert domain.contains(np.int64(9))
        assert not domain.contains(10)
        assert not domain.contains(2.5)
        assert not domain.contains(float("nan"))
        assert not domain.contains("a")

    @pytest.mark.edge_case
    def test_empty_range_rejected(self):
        with pytest.raises(ValueError, match="Empty integer range"):
            IntegerRange(3, 3)


class TestModular:

    def test_residues(self, modular_4):
        assert list(modular_4.traverse()) == [0, 1, 2, 3]
        assert isinstance(modular_4, FiniteDomain)

    def test_project_wraps(self, modular_4):
        assert modular_4.project(5) == 1
        assert modular_4.project(-1) == 3
        np.testing.assert_array_equal(modular_4.project(np.array([4, -2, 7])), [0, 2, 3])


class TestGrid:

    def test_traverse(self):
        assert list(Grid(4).traverse()) == [0.0, 0.25, 0.5, 0.75]

    def test_random_on_grid(self, rng, grid_256):
        for _ in range(100):
            x = grid_256.random(rng)
            assert (x * 256) % 1 == 0
            assert grid_256.contains(x)

    def test_project_snaps(self):
        grid = Grid(4)
        assert grid.project(0.3) == 0.25
        assert grid.project(1.7) == 0.75
        assert grid.project(-0.2) == 0.0


class TestUnitInterval:

    def test_not_finite(self, unit_interval):
        assert not unit_interval.is_finite
        assert not isinstance(unit_interval, FiniteDomain)

    def test_random(self, rng, unit_interval):
        values = [unit_interval.random(rng) for _ in range(100)]
        assert all(0.0 <= v < 1.0 for v in values)


class TestProductDomain:

    def test_shape_and_dimension(self, modular_4):
        domain = ProductDomain(modular_4, (2, 3))
        assert domain.shape == (2, 3)
        assert domain.dimension == 6

    def test_int_shape(self, modular_4):
        assert ProductDomain(modular_4, 5).shape == (5,)

    def test_random(self, rng, modular_4):
        domain = ProductDomain(modular_4, (2, 2))
        value = domain.random(rng)
        assert value.shape == (2, 2)
        assert domain.contains(value)

    def test_contains_checks_shape(self, modular_4):
        domain = ProductDomain(modular_4, 3)
        assert domain.contains([0, 1, 2])
        assert not domain.contains([0, 1])
        assert not domain.contains([0, 1, 4])

    def test_replace_copies(self, modular_4):
        domain = ProductDomain(modular_4, (2, 2))
        value = np.zeros((2, 2), dtype=int)
        updated = domain.replace(value, 3, 2)
        assert updated[1, 1] == 2
        assert value[1, 1] == 0

    def test_index_c_order(self, modular_4):
        domain = ProductDomain(modular_4, (2, 3))
        assert tuple(int(i) for i in domain.index(4)) == (1, 1)

    @pytest.mark.edge_case
    def test_nested_product_rejected(self, modular_4):
        with pytest.raises(TypeError):
            ProductDomain(ProductDomain(modular_4, 2), 2)
