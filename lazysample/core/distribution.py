"""
Unnormalized distributions over sampling domains.

A distribution is any callable taking one domain value and returning a
non-negative weight. Weights need not sum or integrate to one:

    p(x) ∝ w(x)

This module provides the protocol, a validating evaluator, a handful of
ready-made weight functions and the conditional view used by Gibbs
sampling.
"""

import math
import numpy as np
from scipy import linalg
from typing import Any, Callable, Mapping, Protocol, Union, runtime_checkable

from ..exceptions import InvalidWeightError


@runtime_checkable
class Distribution(Protocol):
    """Callable mapping a domain value to a weight >= 0."""

    def __call__(self, value: Any) -> float: ...


def evaluate(distribution: Distribution, value: Any) -> float:
    """
    Evaluate a distribution and validate the returned weight.

    Args:
        distribution: Weight function
        value: Domain value to evaluate at

    Returns:
        Weight as a Python float

    Raises:
        InvalidWeightError: If the weight is negative, NaN or infinite
    """
    weight = float(distribution(value))
    if not math.isfinite(weight) or weight < 0.0:
        raise InvalidWeightError(f"Weight must be finite and non-negative, got {weight} at {value!r}")
    return weight


def uniform() -> Callable[[Any], float]:
    """Constant weight 1 everywhere."""
    def weight(x):
        return 1.0
    return weight


def normal(mu: float, sigma: float) -> Callable[[Any], float]:
    """
    Unnormalized Gaussian weight exp(-(x-mu)²/(2σ²)).

    Args:
        mu: Center
        sigma: Standard deviation
    """
    if sigma <= 0:
        raise ValueError(f"sigma must be positive, got {sigma}")
    two_sigma_sq = 2.0 * sigma ** 2

    def weight(x):
        return math.exp(-(float(x) - mu) ** 2 / two_sigma_sq)
    return weight


def cauchy(t: float, s: float) -> Callable[[Any], float]:
    """
    Cauchy density 1 / (π s (1 + ((x-t)/s)²)).

    Args:
        t: Location
        s: Scale
    """
    if s <= 0:
        raise ValueError(f"scale must be positive, got {s}")

    def weight(x):
        z = (float(x) - t) / s
        return 1.0 / (math.pi * s * (1.0 + z * z))
    return weight


def multivariate_normal(mean, cov) -> Callable[[np.ndarray], float]:
    """
    Unnormalized multivariate Gaussian weight exp(-½ (x-μ)ᵀ Σ⁻¹ (x-μ)).

    The covariance is Cholesky-factored once; each evaluation is a
    triangular solve.

    Args:
        mean: Mean vector μ of length d
        cov: Positive definite covariance matrix Σ of shape (d, d)

    Returns:
        Weight function over arrays with d entries (any shape)
    """
    mean = np.asarray(mean, dtype=np.float64).ravel()
    cov = np.asarray(cov, dtype=np.float64)
    if cov.shape != (mean.size, mean.size):
        raise ValueError(f"Covariance shape {cov.shape} does not match mean of length {mean.size}")
    factor = linalg.cho_factor(cov)

    def weight(x):
        diff = np.asarray(x, dtype=np.float64).ravel() - mean
        return float(np.exp(-0.5 * diff @ linalg.cho_solve(factor, diff)))
    return weight


def tabulated(table: Mapping[Any, float], default: float = 0.0) -> Callable[[Any], float]:
    """
    Distribution backed by a precomputed table of weights.

    Args:
        table: Mapping from domain value to weight
        default: Weight of values missing from the table
    """
    table = dict(table)

    def weight(x):
        return table.get(x, default)
    return weight


class Conditional:
    """
    One-coordinate view of a composite distribution.

    Evaluating ``Conditional(d, position, i)(x)`` returns d evaluated at
    ``position`` with flat coordinate ``i`` replaced by ``x``; all other
    coordinates stay fixed. The position is copied once at construction
    and reused as scratch space for every evaluation.

    Attributes:
        distribution: Composite weight function
        index: Flat coordinate index that varies
    """

    def __init__(self, distribution: Distribution, position: np.ndarray, index: Union[int, tuple]):
        self.distribution = distribution
        self.index = index
        self._scratch = np.array(position, copy=True)
        self._multi_index = np.unravel_index(index, self._scratch.shape)

    def __call__(self, x: Any) -> float:
        self._scratch[self._multi_index] = x
        return self.distribution(self._scratch)

    def __repr__(self) -> str:
        return f"Conditional(index={self.index})"
