"""
Factorial-family combinatorics.

Factorials 0! through 170! are exact products held in a read-only cache;
every factorial above 170! overflows a float64. Log-factorials switch to
scipy's log-gamma once the cache runs out, so they stay finite far past
the point where the factorial itself is infinite.

Binomial and multinomial coefficients are computed in log space and
exponentiated once, then rounded with floor(0.5 + x).
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np
from scipy.special import gammaln

from exactstats.core.exceptions import ValidationError
from exactstats.core.validation import check_count


# Largest x with x! representable as a float64
MAX_FACTORIAL = 170


def _build_factorial_cache() -> np.ndarray:
    """Build the read-only cache of 0!..170! by repeated multiplication."""
    values = [1.0] * (MAX_FACTORIAL + 1)
    for i in range(1, MAX_FACTORIAL + 1):
        values[i] = values[i - 1] * i
    cache = np.array(values, dtype=np.float64)
    cache.setflags(write=False)
    return cache


FACTORIAL_CACHE = _build_factorial_cache()


def _round_exp(log_value: float) -> float:
    """Exponentiate and round half up; +inf on overflow."""
    with np.errstate(over='ignore'):
        return float(np.floor(0.5 + np.exp(log_value)))


def factorial(x: int) -> float:
    """
    Compute x! for a non-negative integer x.

    Returns
    -------
    float
        The exact double-precision factorial for x <= 170, and +inf for
        any larger x (the true value exceeds the float64 range).
    """
    x = check_count(x, "x")
    if x > MAX_FACTORIAL:
        return math.inf
    return float(FACTORIAL_CACHE[x])


def ln_factorial(x: int) -> float:
    """
    Compute ln(x!) for a non-negative integer x.

    Uses the cached factorial for x <= 170 and ``gammaln(x + 1)`` above
    that, so the result stays finite for any x.
    """
    x = check_count(x, "x")
    if x > MAX_FACTORIAL:
        return float(gammaln(x + 1.0))
    return math.log(FACTORIAL_CACHE[x])


def binomial(n: int, k: int) -> float:
    """
    Binomial coefficient "n choose k".

    Returns 0.0 when k > n. The value is always integral (or +inf when
    the coefficient overflows a float64).
    """
    n = check_count(n, "n")
    k = check_count(k, "k")
    if k > n:
        return 0.0
    return _round_exp(ln_factorial(n) - ln_factorial(k) - ln_factorial(n - k))


def ln_binomial(n: int, k: int) -> float:
    """
    Natural log of the binomial coefficient "n choose k".

    Returns -inf when k > n.
    """
    n = check_count(n, "n")
    k = check_count(k, "k")
    if k > n:
        return -math.inf
    return ln_factorial(n) - ln_factorial(k) - ln_factorial(n - k)


def checked_multinomial(n: int, ni: Iterable[int]) -> float | None:
    """
    Multinomial coefficient "n choose n1, n2, n3, ...".

    Parameters
    ----------
    n : int
        Total number of items.
    ni : iterable of int
        Group sizes.

    Returns
    -------
    float or None
        The coefficient, or None if the group sizes do not sum to n.
    """
    n = check_count(n, "n")
    total = 0
    log_value = ln_factorial(n)
    for i, x in enumerate(ni):
        x = check_count(x, f"ni[{i}]")
        total += x
        log_value -= ln_factorial(x)

    if total != n:
        return None
    return _round_exp(log_value)


def multinomial(n: int, ni: Iterable[int]) -> float:
    """
    Multinomial coefficient "n choose n1, n2, n3, ...".

    Raises
    ------
    ValidationError
        If the group sizes do not sum to n. Use checked_multinomial()
        to get None instead.
    """
    ni = list(ni)
    result = checked_multinomial(n, ni)
    if result is None:
        raise ValidationError(
            f"ni: group sizes must sum to n={n}, got sum={sum(ni)}"
        )
    return result
