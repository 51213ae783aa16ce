"""
Combinatorics module.

Factorials, log-factorials, binomial and multinomial coefficients in
double precision, usable up to the limits of the float64 range.

Public API:
    factorial(x)               - x!, +inf above 170!
    ln_factorial(x)            - ln(x!), log-gamma fallback above 170
    binomial(n, k)             - n choose k, 0 when k > n
    ln_binomial(n, k)          - ln(n choose k), -inf when k > n
    multinomial(n, ni)         - n choose n1, n2, ...; raises on bad sizes
    checked_multinomial(n, ni) - same, returns None on bad sizes
"""

from exactstats.combinatorics._factorial import (
    MAX_FACTORIAL,
    FACTORIAL_CACHE,
    factorial,
    ln_factorial,
    binomial,
    ln_binomial,
    multinomial,
    checked_multinomial,
)

__all__ = [
    "MAX_FACTORIAL",
    "FACTORIAL_CACHE",
    "factorial",
    "ln_factorial",
    "binomial",
    "ln_binomial",
    "multinomial",
    "checked_multinomial",
]
