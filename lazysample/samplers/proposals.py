"""
Proposal kernels for Metropolis-Hastings sampling.

A proposal is a callable ``proposal(current, rng) -> candidate``. Kernels
that are not symmetric also provide ``log_density(to, frm)``, the log
proposal density of moving from ``frm`` to ``to``, which the sampler uses
for the Hastings correction q(x | x') / q(x' | x).
"""

from typing import Any, Optional, Protocol, runtime_checkable

import numpy as np
from scipy import linalg
from scipy.stats.distributions import rv_frozen


@runtime_checkable
class Proposal(Protocol):
    """Callable generating a candidate state from the current one."""

    def __call__(self, current: np.ndarray, rng: np.random.Generator) -> np.ndarray: ...


class GaussianProposal:
    """
    Random-walk Gaussian proposal x' = x + L z, z ~ N(0, I).

    L is the lower Cholesky factor of the proposal covariance. The kernel
    is symmetric, so no Hastings correction is needed.

    Attributes:
        scale: Isotropic standard deviation (used when cov is None)
        cov: Full proposal covariance matrix, or None
    """

    symmetric = True

    def __init__(self, scale: float = 1.0, cov: Optional[np.ndarray] = None):
        """
        Args:
            scale: Standard deviation of each coordinate's step
            cov: Covariance matrix for correlated steps (overrides scale)
        """
        if cov is None and scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        self.scale = scale
        self.cov = None if cov is None else np.asarray(cov, dtype=np.float64)
        self._factor = None if self.cov is None else linalg.cholesky(self.cov, lower=True)

    def __call__(self, current: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        current = np.asarray(current, dtype=np.float64)
        z = rng.standard_normal(current.size)
        if self._factor is None:
            step = self.scale * z
        else:
            if self._factor.shape[0] != current.size:
                raise ValueError(f"Proposal covariance of size {self._factor.shape[0]} "
                                 f"does not match state of size {current.size}")
            step = self._factor @ z
        return current + step.reshape(current.shape)

    def __repr__(self) -> str:
        if self.cov is None:
            return f"GaussianProposal(scale={self.scale})"
        return f"GaussianProposal(cov={self.cov.tolist()})"


class RandomWalkProposal:
    """
    Integer random walk: each coordinate moves by a uniform step in [-step, step].

    Suitable for integer and modular domains. Symmetric.
    """

    symmetric = True

    def __init__(self, step: int = 1):
        if step < 1:
            raise ValueError(f"step must be a positive integer, got {step}")
        self.step = int(step)

    def __call__(self, current: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        current = np.asarray(current)
        return current + rng.integers(-self.step, self.step + 1, size=current.shape)

    def __repr__(self) -> str:
        return f"RandomWalkProposal(step={self.step})"


class IndependentProposal:
    """
    Independent proposal drawing candidates from a fixed distribution.

    Wraps a frozen ``scipy.stats`` distribution (``rvs`` and ``logpdf`` or
    ``logpmf``). Univariate distributions are drawn independently for each
    coordinate; multivariate ones must match the state size. The candidate
    ignores the current state, so the kernel is asymmetric and the sampler
    applies the Hastings correction.
    """

    symmetric = False

    def __init__(self, frozen):
        self.frozen = frozen
        self.univariate = isinstance(frozen, rv_frozen)
        self._logdensity = getattr(frozen, "logpdf", None) or getattr(frozen, "logpmf")

    def __call__(self, current: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        current = np.asarray(current)
        if self.univariate:
            candidate = self.frozen.rvs(size=current.size, random_state=rng)
        else:
            candidate = self.frozen.rvs(random_state=rng)
        candidate = np.asarray(candidate)
        return candidate.astype(np.result_type(current.dtype, candidate.dtype)).reshape(current.shape)

    def log_density(self, to: np.ndarray, frm: np.ndarray) -> float:
        return float(np.sum(self._logdensity(np.asarray(to).ravel())))

    def __repr__(self) -> str:
        return f"IndependentProposal({type(self.frozen).__name__})"


class IdentityProposal:
    """Always proposes the current state. The chain never moves."""

    symmetric = True

    def __call__(self, current: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        return np.array(current, copy=True)

    def __repr__(self) -> str:
        return "IdentityProposal()"


def hastings_log_ratio(proposal: Any, current: np.ndarray, candidate: np.ndarray) -> float:
    """
    Log of q(current | candidate) / q(candidate | current).

    Zero for symmetric kernels and for kernels without ``log_density``.
    """
    log_density = getattr(proposal, "log_density", None)
    if getattr(proposal, "symmetric", False) or log_density is None:
        return 0.0
    return log_density(current, candidate) - log_density(candidate, current)
