"""
Distributions consumed by the exact tests.

Public API:
    Hypergeometric(population, successes, draws) - validated pmf/cdf/sf
"""

from exactstats.distributions._hypergeometric import Hypergeometric

__all__ = [
    "Hypergeometric",
]
