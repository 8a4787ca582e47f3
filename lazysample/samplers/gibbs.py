"""
Gibbs sampling built from a univariate sampler.

ALGORITHM:
    1. Let i be the coordinate under the cursor
    2. Build the conditional x ↦ w(position with coordinate i set to x)
    3. Draw coordinate i from the univariate sampler bound to it
    4. Advance the cursor to (i + 1) mod dim and emit the full position

One draw updates exactly one coordinate; a sweep over all coordinates
takes ``dim`` draws. ``burn(k)`` counts draws, not sweeps: to discard K
sweeps use ``burn_sweeps(K)``, which is ``burn(K * dim)``.
"""

import logging
from typing import Iterator, Optional, Tuple, Union

import numpy as np

from ..core.distribution import Conditional, Distribution
from ..core.domain import ProductDomain
from ..core.sequence import check_burn
from ..exceptions import InvalidConfigurationError, UnsupportedDomainError
from .base import Sampler, SamplingStats, Seed, UnivariateSampler

logger = logging.getLogger(__name__)


class GibbsSampler(Sampler):
    """
    Coordinate-wise Gibbs sampler over a fixed-shape composite domain.

    Each conditional draw binds the inner sampler afresh. A Markov inner
    sampler such as ``SliceSampler`` applies its own burn/pick on every
    draw, so ``SliceSampler(d).burn(3)`` runs 3 extra slice steps per
    coordinate update. ``ICDFSampler`` draws are independent and ignore
    its burn/pick here.

    An ``initial`` position is projected into the domain (wrapping
    ``Modular`` coordinates) and rejected if it still falls outside.

    Attributes:
        univariate: Sampler used for each one-coordinate conditional
        domain: Product of the univariate sampler's domain over ``shape``
        initial: Starting position, or None to draw one uniformly per chain
    """

    def __init__(self, univariate: UnivariateSampler, shape: Union[int, Tuple[int, ...]],
                 initial: Optional[np.ndarray] = None, seed: Seed = None):
        """
        Initialize an unbound Gibbs sampler.

        Args:
            univariate: Univariate sampler (ICDFSampler, SliceSampler, ...)
            shape: Shape of the composite values; must have at least one coordinate
            initial: Starting position with the given shape
            seed: Random seed or generator
        """
        super().__init__(seed)
        if not isinstance(univariate, UnivariateSampler):
            raise UnsupportedDomainError(
                f"Gibbs sampling needs a univariate sampler, got {type(univariate).__name__}")

        dims = (shape,) if np.isscalar(shape) else tuple(shape)
        if any(int(d) != d or d < 0 for d in dims):
            raise InvalidConfigurationError(f"Invalid Gibbs shape {shape}")
        if int(np.prod(dims, dtype=int)) == 0:
            raise InvalidConfigurationError(f"Gibbs dimension must be positive, got shape {shape}")

        self.univariate = univariate
        self.domain = ProductDomain(univariate.domain, dims)

        if initial is None:
            self.initial = None
        else:
            start = np.asarray(initial)
            if start.shape != self.domain.shape:
                raise InvalidConfigurationError(
                    f"Initial shape {start.shape} does not match {self.domain.shape}")
            start = self.domain.project(start)
            if not self.domain.contains(start):
                raise InvalidConfigurationError(f"Initial state {start} is outside {self.domain!r}")
            self.initial = np.array(start, dtype=self.domain.dtype)

    @property
    def dimension(self) -> int:
        return self.domain.dimension

    def burn_sweeps(self, k: int) -> "GibbsSampler":
        """Discard k full sweeps, i.e. ``k * dimension`` draws."""
        return self.burn(check_burn(k) * self.dimension)

    def _steps(self, distribution: Distribution, rng: np.random.Generator,
               stats: SamplingStats) -> Iterator[np.ndarray]:
        if self.initial is None:
            position = self.domain.random(rng)
        else:
            position = self.initial.copy()

        logger.info(f"Bound GibbsSampler over {self.domain!r} using {self.univariate.__class__.__name__}")
        return self._draws(distribution, position, rng, stats)

    def _draws(self, distribution: Distribution, position: np.ndarray,
               rng: np.random.Generator, stats: SamplingStats) -> Iterator[np.ndarray]:
        stats.extra_stats["sweeps"] = 0
        cursor = 0
        while True:
            index = self.domain.index(cursor)
            conditional = Conditional(distribution, position, cursor)
            value = self.univariate.draw(conditional, rng)

            stats.steps += 1
            if value != position[index]:
                stats.accepted += 1
            position[index] = value

            cursor = (cursor + 1) % self.dimension
            if cursor == 0:
                stats.extra_stats["sweeps"] += 1
                logger.debug(f"Gibbs sweep {stats.extra_stats['sweeps']} complete")

            yield position.copy()

    def __repr__(self) -> str:
        return (f"GibbsSampler({self.univariate!r}, shape={self.domain.shape}, "
                f"burn={self.config.burn}, pick={self.config.pick})")
