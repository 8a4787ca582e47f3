"""
Slice sampling over bounded scalar domains.

ALGORITHM:
    1. Draw an auxiliary height y uniformly from [0, w(x)]
    2. Draw candidates uniformly from the domain until w(x') >= y
    3. Move to x' and emit it

The candidate search is a rejection loop over the whole domain, which is
exact for bounded domains but slow for sharply peaked weights.
"""

import logging
from typing import Any, Iterator

import numpy as np

from ..core.distribution import Distribution, evaluate
from ..core.domain import Domain
from ..exceptions import DegenerateDistributionError
from .base import SamplingStats, Seed, UnivariateSampler

logger = logging.getLogger(__name__)


class SliceSampler(UnivariateSampler):
    """
    Univariate slice sampler.

    Works on any domain that can draw uniform values, including the
    continuous ``UnitInterval``. Consecutive samples are correlated, so
    burn-in is meaningful here.

    Attributes:
        domain: Scalar domain to sample from
        max_tries: Consecutive rejected candidates tolerated before giving up
    """

    def __init__(self, domain: Domain, seed: Seed = None, max_tries: int = 100_000):
        super().__init__(domain, seed)
        if max_tries < 1:
            raise ValueError(f"max_tries must be positive, got {max_tries}")
        self.max_tries = max_tries

    def _steps(self, distribution: Distribution, rng: np.random.Generator,
               stats: SamplingStats) -> Iterator[Any]:
        logger.debug(f"Bound SliceSampler over {self.domain!r}")
        return self._draws(distribution, rng, stats)

    def _search(self, distribution: Distribution, rng: np.random.Generator, height: float):
        """Find a uniform domain value whose weight reaches height."""
        for tries in range(1, self.max_tries + 1):
            candidate = self.domain.random(rng)
            weight = evaluate(distribution, candidate)
            if weight > 0.0 and weight >= height:
                if tries > self.max_tries // 10:
                    logger.warning(f"Slice search needed {tries} candidates at height {height:.3g}")
                return candidate, weight
        raise DegenerateDistributionError(
            f"No candidate with weight >= {height:.3g} found in {self.max_tries} tries over {self.domain!r}")

    def _draws(self, distribution: Distribution, rng: np.random.Generator,
               stats: SamplingStats) -> Iterator[Any]:
        x, weight = self._search(distribution, rng, 0.0)
        while True:
            height = rng.uniform(0.0, weight)
            x_new, weight_new = self._search(distribution, rng, height)
            stats.steps += 1
            if x_new != x:
                stats.accepted += 1
            x, weight = x_new, weight_new
            yield x
