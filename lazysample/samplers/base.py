"""
Base classes shared by all samplers.

A sampler is an immutable description of *how* to sample: the algorithm,
its parameters, a seed and the burn/pick configuration. Calling
``sample(distribution)`` binds a distribution and returns a ``Chain``,
the live, infinite iterator that owns all mutable state.

    chain = ICDFSampler(Modular(4), seed=0).burn(5).pick(2).sample(weights)
    next(chain)
    chain.take(1000)

A chain is not safe for concurrent pulls, but separate chains (even from
the same sampler) share nothing unless the sampler was built around a
shared ``numpy.random.Generator``.
"""

from abc import ABC, abstractmethod
import copy
from dataclasses import dataclass, field, replace
import logging
import time
from typing import Any, Dict, Iterator, Optional, Tuple, Union

import numpy as np
from tqdm import tqdm

from ..core.distribution import Distribution
from ..core.domain import Domain
from ..core.sequence import Burned, Picked, check_burn, check_pick

logger = logging.getLogger(__name__)

Seed = Union[None, int, np.random.SeedSequence, np.random.Generator]


@dataclass(frozen=True)
class SamplerConfig:
    """
    Burn-in and thinning settings.

    Burn is counted in raw draws and always runs before pick starts
    counting, whatever order the settings were given in.
    """
    burn: int = 0
    pick: int = 1

    def __post_init__(self):
        check_burn(self.burn)
        check_pick(self.pick)

    def with_burn(self, k: int) -> "SamplerConfig":
        return replace(self, burn=check_burn(k))

    def with_pick(self, n: int) -> "SamplerConfig":
        return replace(self, pick=check_pick(n))


@dataclass
class SamplingStats:
    """Statistics collected by a chain."""
    steps: int = 0
    accepted: int = 0
    samples_generated: int = 0
    time_elapsed: float = 0.0
    extra_stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def acceptance_rate(self) -> float:
        """Fraction of steps that moved the chain."""
        if self.steps == 0:
            return 0.0
        return self.accepted / self.steps


class Chain:
    """
    Live, infinite sequence of samples from a bound sampler.

    Raw algorithm steps are wrapped as ``Picked(Burned(steps, burn), pick)``.
    The chain never raises StopIteration; stop pulling to abandon it.

    Attributes:
        config: Burn/pick settings in effect
        stats: Step, acceptance and timing counters
    """

    def __init__(self, steps: Iterator[Any], config: SamplerConfig,
                 stats: SamplingStats, name: str = "chain", warn_low_acceptance: bool = False):
        self.config = config
        self.stats = stats
        self.name = name
        self.warn_low_acceptance = warn_low_acceptance
        self._samples = Picked(Burned(steps, config.burn), config.pick)
        self._burned = config.burn == 0

    def __iter__(self) -> "Chain":
        return self

    def __next__(self) -> Any:
        start_time = time.perf_counter()
        if not self._burned:
            logger.debug(f"{self.name}: running burn-in for {self.config.burn} draws")
        value = next(self._samples)
        if not self._burned:
            self._burned = True
            logger.debug(f"{self.name}: burn-in finished after {self.stats.steps} steps")
        self.stats.samples_generated += 1
        self.stats.time_elapsed += time.perf_counter() - start_time
        return value

    def take(self, num_samples: int, progress: bool = False) -> np.ndarray:
        """
        Pull several samples at once.

        Args:
            num_samples: Number of samples to pull
            progress: Show a tqdm progress bar

        Returns:
            Array of shape (num_samples,) for scalar domains or
            (num_samples, *shape) for composite ones
        """
        if num_samples < 0:
            raise ValueError(f"num_samples must be non-negative, got {num_samples}")
        samples = [next(self) for _ in tqdm(range(num_samples), desc=self.name, disable=not progress)]

        if self.warn_low_acceptance and self.stats.steps >= 100 and self.stats.acceptance_rate < 0.01:
            logger.warning(f"{self.name}: acceptance rate {self.stats.acceptance_rate:.2%} "
                           f"after {self.stats.steps} steps; proposal may be badly scaled")
        return np.array(samples)

    def __repr__(self) -> str:
        return (f"Chain({self.name}, burn={self.config.burn}, pick={self.config.pick}, "
                f"samples={self.stats.samples_generated})")


class Sampler(ABC):
    """
    Abstract base class for samplers.

    Subclasses implement ``_steps``, which performs any bind-time work
    eagerly (so configuration and domain errors surface at ``sample``)
    and returns an infinite iterator of raw draws.
    """

    warn_low_acceptance = False

    def __init__(self, seed: Seed = None):
        """
        Args:
            seed: Seed for ``numpy.random.default_rng``. An int gives the
                same chain on every ``sample`` call; a Generator is shared.
        """
        self.seed = seed
        self.config = SamplerConfig()

    def burn(self, k: int) -> "Sampler":
        """Return a copy that discards the first k draws. Replaces any earlier burn."""
        return self._with_config(self.config.with_burn(k))

    def pick(self, n: int) -> "Sampler":
        """Return a copy that keeps every nth draw. Replaces any earlier pick."""
        return self._with_config(self.config.with_pick(n))

    def _with_config(self, config: SamplerConfig) -> "Sampler":
        clone = copy.copy(self)
        clone.config = config
        return clone

    def sample(self, distribution: Distribution) -> Chain:
        """
        Bind a distribution and start a chain.

        Args:
            distribution: Unnormalized weight function over the domain

        Returns:
            Infinite iterator of samples
        """
        return self.bind(distribution, np.random.default_rng(self.seed))

    def bind(self, distribution: Distribution, rng: np.random.Generator) -> Chain:
        """Bind a distribution using an explicit random generator."""
        if not callable(distribution):
            raise TypeError(f"distribution must be callable, got {type(distribution).__name__}")
        stats = SamplingStats()
        steps = self._steps(distribution, rng, stats)
        return Chain(steps, self.config, stats, name=self.__class__.__name__,
                     warn_low_acceptance=self.warn_low_acceptance)

    @abstractmethod
    def _steps(self, distribution: Distribution, rng: np.random.Generator,
               stats: SamplingStats) -> Iterator[Any]:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(burn={self.config.burn}, pick={self.config.pick})"


class UnivariateSampler(Sampler):
    """
    Sampler over a scalar domain.

    Univariate samplers can be lifted to fixed-shape composite domains
    with ``gibbs``.

    Attributes:
        domain: Scalar domain values are drawn from
    """

    def __init__(self, domain: Domain, seed: Seed = None):
        super().__init__(seed)
        self.domain = domain

    def draw(self, distribution: Distribution, rng: np.random.Generator) -> Any:
        """Bind a distribution and return the first sample of the new chain."""
        return next(self.bind(distribution, rng))

    def gibbs(self, shape: Union[int, Tuple[int, ...]], initial: Optional[np.ndarray] = None,
              seed: Seed = None) -> "GibbsSampler":
        """
        Build a Gibbs sampler that updates one coordinate at a time with this sampler.

        Args:
            shape: Shape of the composite values
            initial: Starting position (default: uniform draw per coordinate)
            seed: Seed for the Gibbs chain (default: this sampler's seed)
        """
        from .gibbs import GibbsSampler
        return GibbsSampler(self, shape, initial=initial, seed=self.seed if seed is None else seed)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}({self.domain!r}, "
                f"burn={self.config.burn}, pick={self.config.pick})")
