"""Sampling domains: scalar value ranges and fixed-shape composites."""

from abc import ABC, abstractmethod
import math
import numpy as np
from typing import Any, Iterator, Tuple, Union


class Domain(ABC):
    """
    A measurable space that samplers draw values from.

    Subclasses must be able to draw a uniformly distributed value and
    test membership. Values are plain Python scalars or numpy arrays.
    """

    dtype = object

    @abstractmethod
    def random(self, rng: np.random.Generator) -> Any:
        """Draw a uniformly distributed value from the domain."""
        pass

    @abstractmethod
    def contains(self, value: Any) -> bool:
        """Check whether value belongs to the domain."""
        pass

    def project(self, value: Any) -> Any:
        """Map value to its canonical representative in the domain."""
        return value

    @property
    def is_finite(self) -> bool:
        return False


class FiniteDomain(Domain):
    """
    A domain whose values can be enumerated in a fixed order.

    ``traverse()`` must yield every value exactly once, in the same order
    on every call. Inverse-CDF sampling relies on this ordering.
    """

    @abstractmethod
    def traverse(self) -> Iterator[Any]:
        """Enumerate all values of the domain."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @property
    def is_finite(self) -> bool:
        return True


class IntegerRange(FiniteDomain):
    """
    Integers in the half-open interval [low, high).

    Attributes:
        low: Smallest value in the range
        high: One past the largest value
    """

    dtype = np.int64

    def __init__(self, low: int, high: int):
        if high <= low:
            raise ValueError(f"Empty integer range [{low}, {high})")
        self.low = int(low)
        self.high = int(high)

    @classmethod
    def from_dtype(cls, dtype) -> "IntegerRange":
        """
        Build the full range of a numpy integer type.

        Args:
            dtype: Integer dtype such as ``np.uint8`` or ``np.int16``

        Returns:
            Range covering every representable value
        """
        info = np.iinfo(dtype)
        return cls(int(info.min), int(info.max) + 1)

    def random(self, rng: np.random.Generator) -> int:
        return int(rng.integers(self.low, self.high))

    def contains(self, value: Any) -> bool:
        try:
            return int(value) == value and self.low <= value < self.high
        except (TypeError, ValueError, OverflowError):
            return False

    def traverse(self) -> Iterator[int]:
        return iter(range(self.low, self.high))

    def __len__(self) -> int:
        return self.high - self.low

    def __eq__(self, other) -> bool:
        return (type(self) is type(other)
                and (self.low, self.high) == (other.low, other.high))

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.low, self.high))

    def __repr__(self) -> str:
        return f"IntegerRange({self.low}, {self.high})"


class Modular(IntegerRange):
    """
    Residues modulo n, represented by the integers 0..n-1.

    Out-of-range integers are wrapped by ``project``, so arithmetic
    perturbations of a residue land back in the domain.
    """

    def __init__(self, n: int):
        super().__init__(0, n)
        self.n = int(n)

    def project(self, value: Any) -> Any:
        if isinstance(value, np.ndarray):
            return np.mod(value, self.n)
        return int(value) % self.n

    def __repr__(self) -> str:
        return f"Modular({self.n})"


class Grid(FiniteDomain):
    """
    Evenly spaced points k/n for k = 0..n-1 on the unit interval.

    Attributes:
        n: Number of grid points (resolution)
    """

    dtype = np.float64

    def __init__(self, n: int):
        if n <= 0:
            raise ValueError(f"Grid resolution must be positive, got {n}")
        self.n = int(n)

    def random(self, rng: np.random.Generator) -> float:
        return math.floor(rng.random() * self.n) / self.n

    def contains(self, value: Any) -> bool:
        try:
            scaled = float(value) * self.n
        except (TypeError, ValueError):
            return False
        return 0 <= scaled < self.n and math.isclose(scaled, round(scaled), abs_tol=1e-9)

    def project(self, value: Any) -> Any:
        snapped = np.clip(np.floor(np.asarray(value, dtype=float) * self.n), 0, self.n - 1) / self.n
        if isinstance(value, np.ndarray):
            return snapped
        return float(snapped)

    def traverse(self) -> Iterator[float]:
        return (k / self.n for k in range(self.n))

    def __len__(self) -> int:
        return self.n

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.n == other.n

    def __hash__(self) -> int:
        return hash(("Grid", self.n))

    def __repr__(self) -> str:
        return f"Grid({self.n})"


class UnitInterval(Domain):
    """The continuous interval [0, 1). Not enumerable."""

    dtype = np.float64

    def random(self, rng: np.random.Generator) -> float:
        return float(rng.random())

    def contains(self, value: Any) -> bool:
        try:
            return 0.0 <= float(value) < 1.0
        except (TypeError, ValueError):
            return False

    def __eq__(self, other) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash("UnitInterval")

    def __repr__(self) -> str:
        return "UnitInterval()"


class ProductDomain(Domain):
    """
    Fixed-shape arrays whose entries all come from one scalar domain.

    Coordinates are addressed by a flat index in C order, so a Gibbs
    cursor can cycle through ``range(dimension)`` regardless of shape.

    Attributes:
        base: Scalar domain of every coordinate
        shape: Array shape of the composite values
        dimension: Total number of coordinates
    """

    def __init__(self, base: Domain, shape: Union[int, Tuple[int, ...]]):
        if isinstance(base, ProductDomain):
            raise TypeError("ProductDomain base must be a scalar domain")
        self.base = base
        self.shape = (int(shape),) if np.isscalar(shape) else tuple(int(s) for s in shape)
        self.dimension = int(np.prod(self.shape, dtype=int))
        self.dtype = base.dtype

    def random(self, rng: np.random.Generator) -> np.ndarray:
        values = [self.base.random(rng) for _ in range(self.dimension)]
        return np.array(values, dtype=self.dtype).reshape(self.shape)

    def contains(self, value: Any) -> bool:
        value = np.asarray(value)
        if value.shape != self.shape:
            return False
        return all(self.base.contains(x) for x in value.flat)

    def project(self, value: Any) -> np.ndarray:
        return np.asarray(self.base.project(np.asarray(value)))

    def index(self, i: int) -> Tuple[int, ...]:
        """Convert a flat coordinate index to a multi-index."""
        return np.unravel_index(i, self.shape)

    def replace(self, value: np.ndarray, i: int, x: Any) -> np.ndarray:
        """
        Copy value with coordinate i set to x.

        Args:
            value: Composite value of shape ``self.shape``
            i: Flat coordinate index
            x: New scalar for that coordinate

        Returns:
            New array; the input is left untouched
        """
        updated = np.array(value, copy=True)
        updated[self.index(i)] = x
        return updated

    def __repr__(self) -> str:
        return f"ProductDomain({self.base!r}, {self.shape})"
