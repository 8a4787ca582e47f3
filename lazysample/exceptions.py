"""Exceptions raised by lazysample samplers."""


class SamplingError(Exception):
    """Base class for all sampling errors."""

    pass


class DegenerateDistributionError(SamplingError):
    """
    Raised when a distribution has no usable probability mass.

    This happens when the total weight over an enumerable domain is zero
    (or overflows), or when a Markov chain cannot leave a zero-weight
    region.
    """

    def __init__(self, msg="Distribution has zero total weight"):
        super().__init__(msg)


class UnsupportedDomainError(SamplingError, TypeError):
    """Raised when a sampler is bound to a domain it cannot traverse."""

    def __init__(self, msg="Domain is not finitely enumerable"):
        super().__init__(msg)


class InvalidConfigurationError(SamplingError, ValueError):
    """Raised for invalid sampler settings such as ``pick(0)``."""

    def __init__(self, msg="Invalid sampler configuration"):
        super().__init__(msg)


class InvalidWeightError(SamplingError, ValueError):
    """Raised when a distribution returns a negative or NaN weight."""

    def __init__(self, msg="Distribution returned an invalid weight"):
        super().__init__(msg)
