"""
exactstats: exact combinatorics and Fisher's exact test for Python.

Numerically stable factorial-family functions usable across the whole
float64 range, and Fisher's exact test for 2x2 contingency tables with
one- and two-sided p-values.

Submodules:
    combinatorics: factorial, ln_factorial, binomial, multinomial
    distributions: validated hypergeometric distribution
    hypothesis: Fisher's exact test
"""

__version__ = "0.1.0"

from exactstats import combinatorics
from exactstats import distributions
from exactstats import hypothesis

__all__ = [
    "__version__",
    "combinatorics",
    "distributions",
    "hypothesis",
]
