"""
Metropolis-Hastings sampling over fixed-dimension composite domains.

Each step proposes a candidate x' from the kernel centered at the current
state x and accepts it with probability

    α = min(1, w(x') q(x | x') / (w(x) q(x' | x)))

The current state is emitted after every step, accepted or not, so
consecutive samples are correlated and burn-in matters.
"""

import logging
import math
from typing import Iterator, Optional

import numpy as np

from ..core.distribution import Distribution, evaluate
from ..core.domain import Domain
from ..exceptions import DegenerateDistributionError, InvalidConfigurationError
from .base import Sampler, SamplingStats, Seed
from .proposals import GaussianProposal, Proposal, hastings_log_ratio

logger = logging.getLogger(__name__)


def acceptance_probability(current_weight: float, candidate_weight: float,
                           log_correction: float = 0.0) -> float:
    """
    Metropolis-Hastings acceptance probability.

    Args:
        current_weight: w(x) at the current state
        candidate_weight: w(x') at the proposed state
        log_correction: log q(x | x') - log q(x' | x); zero for symmetric kernels

    Returns:
        Probability in [0, 1]. A zero-weight current state accepts any
        positive-weight candidate; two zero weights are always rejected.
    """
    if candidate_weight <= 0.0:
        return 0.0
    if current_weight <= 0.0:
        return 1.0
    log_ratio = math.log(candidate_weight) - math.log(current_weight) + log_correction
    return math.exp(min(log_ratio, 0.0))


class MetropolisSampler(Sampler):
    """
    Metropolis-Hastings sampler.

    Attributes:
        initial: Starting position of every chain
        proposal: Proposal kernel (default: GaussianProposal(scale=1.0))
        domain: Optional domain; candidates are projected into it and
            those outside it get weight zero
        patience: Consecutive zero-weight steps before the chain is
            declared degenerate
    """

    warn_low_acceptance = True

    def __init__(self, initial, proposal: Optional[Proposal] = None,
                 domain: Optional[Domain] = None, seed: Seed = None,
                 patience: int = 10_000):
        """
        Initialize an unbound Metropolis-Hastings sampler.

        Args:
            initial: Initial composite value; its shape is fixed for the chain
            proposal: Callable (current, rng) -> candidate
            domain: Domain constraining the states
            seed: Random seed or generator
            patience: Zero-weight steps tolerated in a row
        """
        super().__init__(seed)
        self.initial = np.array(initial, copy=True)
        if self.initial.size == 0:
            raise InvalidConfigurationError("Initial state must have at least one coordinate")
        if domain is not None and not domain.contains(domain.project(self.initial)):
            raise InvalidConfigurationError(f"Initial state {self.initial} is outside {domain!r}")
        if patience < 1:
            raise InvalidConfigurationError(f"patience must be positive, got {patience}")

        self.proposal = proposal if proposal is not None else GaussianProposal(scale=1.0)
        self.domain = domain
        self.patience = patience

    @property
    def dimension(self) -> int:
        return int(self.initial.size)

    def _weight(self, distribution: Distribution, x: np.ndarray) -> float:
        if self.domain is not None and not self.domain.contains(x):
            return 0.0
        return evaluate(distribution, x)

    def _steps(self, distribution: Distribution, rng: np.random.Generator,
               stats: SamplingStats) -> Iterator[np.ndarray]:
        position = self.initial.copy()
        if self.domain is not None:
            position = self.domain.project(position)
        weight = self._weight(distribution, position)
        if weight == 0.0:
            logger.warning("Initial state has zero weight; chain will move to the first positive proposal")

        logger.info(f"Bound MetropolisSampler (dimension={self.dimension}, proposal={self.proposal!r})")
        return self._draws(distribution, position, weight, rng, stats)

    def _draws(self, distribution: Distribution, position: np.ndarray, weight: float,
               rng: np.random.Generator, stats: SamplingStats) -> Iterator[np.ndarray]:
        stuck = 0
        while True:
            candidate = self.proposal(position, rng)
            if self.domain is not None:
                candidate = self.domain.project(candidate)
            candidate_weight = self._weight(distribution, candidate)

            log_correction = hastings_log_ratio(self.proposal, position, candidate)
            alpha = acceptance_probability(weight, candidate_weight, log_correction)

            stats.steps += 1
            if rng.random() < alpha:
                position, weight = candidate, candidate_weight
                stats.accepted += 1

            if weight == 0.0:
                stuck += 1
                if stuck >= self.patience:
                    raise DegenerateDistributionError(
                        f"Chain stayed at zero weight for {stuck} steps; "
                        f"no positive-weight state was proposed")
            else:
                stuck = 0

            yield np.array(position, copy=True)

    def __repr__(self) -> str:
        return (f"MetropolisSampler(dimension={self.dimension}, proposal={self.proposal!r}, "
                f"burn={self.config.burn}, pick={self.config.pick})")
