"""Domains, distributions and sequence combinators."""

from .domain import Domain, FiniteDomain, IntegerRange, Modular, Grid, UnitInterval, ProductDomain
from .distribution import Distribution, Conditional, evaluate, uniform, normal, cauchy, multivariate_normal, tabulated
from .sequence import Burned, Picked, burn, pick

__all__ = [
    "Domain", "FiniteDomain", "IntegerRange", "Modular", "Grid", "UnitInterval", "ProductDomain",
    "Distribution", "Conditional", "evaluate",
    "uniform", "normal", "cauchy", "multivariate_normal", "tabulated",
    "Burned", "Picked", "burn", "pick",
]
