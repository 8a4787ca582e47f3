"""
lazysample

Lazy, unbounded samplers for unnormalized distributions: inverse-CDF and
slice sampling over scalar domains, Metropolis-Hastings and Gibbs sampling
over fixed-shape composite domains.
"""

__version__ = "0.1.0"

from . import core
from . import samplers
from .core import *
from .samplers import *
from .exceptions import (
    SamplingError,
    DegenerateDistributionError,
    UnsupportedDomainError,
    InvalidConfigurationError,
    InvalidWeightError,
)

__all__ = [
    "core",
    "samplers",
    *core.__all__,
    *samplers.__all__,
    "SamplingError",
    "DegenerateDistributionError",
    "UnsupportedDomainError",
    "InvalidConfigurationError",
    "InvalidWeightError",
]
