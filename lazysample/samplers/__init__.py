"""Samplers drawing lazily from unnormalized distributions."""

from .base import Chain, Sampler, SamplerConfig, SamplingStats, UnivariateSampler
from .icdf import ICDFSampler
from .slice import SliceSampler
from .metropolis import MetropolisSampler, acceptance_probability
from .gibbs import GibbsSampler
from .proposals import GaussianProposal, RandomWalkProposal, IndependentProposal, IdentityProposal

__all__ = [
    "Chain", "Sampler", "SamplerConfig", "SamplingStats", "UnivariateSampler",
    "ICDFSampler", "SliceSampler", "MetropolisSampler", "GibbsSampler",
    "acceptance_probability",
    "GaussianProposal", "RandomWalkProposal", "IndependentProposal", "IdentityProposal",
]
