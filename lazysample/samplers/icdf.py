"""
Inverse transform (ICDF) sampling over finite domains.

ALGORITHM:
    1. Enumerate the domain in its fixed order and evaluate the weights
    2. Build the cumulative weight table C with total W = C[-1]
    3. Per draw, sample u uniformly from [0, W)
    4. Binary search for the smallest index i with C[i] > u

Values with zero weight never satisfy step 4 strictly, so they are never
returned. Draws are independent; burn and pick are accepted for API
symmetry with the Markov chain samplers.
"""

import logging
from typing import Any, Iterator, List

import numpy as np

from ..core.distribution import Distribution, evaluate
from ..core.domain import Domain, FiniteDomain
from ..exceptions import DegenerateDistributionError, UnsupportedDomainError
from .base import SamplingStats, Seed, UnivariateSampler

logger = logging.getLogger(__name__)


class ICDFSampler(UnivariateSampler):
    """
    Inverse-CDF sampler for finite, enumerable scalar domains.

    Attributes:
        domain: Finite domain to sample from
        max_table_size: Largest domain that will be tabulated
    """

    def __init__(self, domain: Domain, seed: Seed = None, max_table_size: int = 10_000_000):
        """
        Initialize an unbound ICDF sampler.

        Args:
            domain: Scalar domain; must be a FiniteDomain when bound
            seed: Random seed or generator
            max_table_size: Maximum cumulative table length
        """
        super().__init__(domain, seed)
        self.max_table_size = max_table_size

    def _check_domain(self) -> None:
        if not isinstance(self.domain, FiniteDomain):
            raise UnsupportedDomainError(
                f"ICDF sampling requires a finite, enumerable domain, got {self.domain!r}")
        if len(self.domain) > self.max_table_size:
            raise UnsupportedDomainError(
                f"Domain size {len(self.domain)} exceeds max_table_size {self.max_table_size}")

    def build_table(self, distribution: Distribution):
        """
        Tabulate the cumulative weights of a distribution.

        Args:
            distribution: Weight function over the domain

        Returns:
            Tuple of (values, cumulative_weights)

        Raises:
            UnsupportedDomainError: If the domain cannot be enumerated
            DegenerateDistributionError: If the total weight is zero or overflows
        """
        self._check_domain()

        values: List[Any] = list(self.domain.traverse())
        weights = np.fromiter((evaluate(distribution, x) for x in values),
                              dtype=np.float64, count=len(values))
        cdf = np.cumsum(weights)

        total = cdf[-1]
        if not np.isfinite(total):
            raise DegenerateDistributionError(f"Total weight overflow over {self.domain!r}")
        if total <= 0.0:
            raise DegenerateDistributionError(f"Distribution is zero everywhere on {self.domain!r}")

        return values, cdf

    def _steps(self, distribution: Distribution, rng: np.random.Generator,
               stats: SamplingStats) -> Iterator[Any]:
        values, cdf = self.build_table(distribution)
        logger.info(f"Bound ICDFSampler over {self.domain!r} with table size {len(values)}")
        return self._draws(values, cdf, rng, stats)

    @staticmethod
    def _draws(values: List[Any], cdf: np.ndarray, rng: np.random.Generator,
               stats: SamplingStats) -> Iterator[Any]:
        total = cdf[-1]
        # Rounding in rng.uniform can return exactly `total`; fall back to the last positive-weight value
        last = int(np.searchsorted(cdf, total, side="left"))
        while True:
            u = rng.uniform(0.0, total)
            pos = min(int(np.searchsorted(cdf, u, side="right")), last)
            stats.steps += 1
            stats.accepted += 1
            yield values[pos]

    def draw(self, distribution: Distribution, rng: np.random.Generator) -> Any:
        """Draw a single value without creating a chain."""
        values, cdf = self.build_table(distribution)
        return next(self._draws(values, cdf, rng, SamplingStats()))
