"""
Fisher's exact test for 2x2 contingency tables.

The table [a, b, c, d] is read in row-major order:

    a b
    c d

Under independence with fixed margins, `a` follows a hypergeometric
distribution with population a+b+c+d, successes a+b (first row) and
draws a+c (first column). One-sided p-values are tail masses of that
distribution. The two-sided p-value adds the mass of every outcome on the
opposite tail that is no more likely than the observed one; the boundary
of that region is located by tail_boundary_search().
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from numpy.typing import ArrayLike

from exactstats.core.exceptions import FishersExactTestError, HypergeometricError
from exactstats.core.validation import check_table
from exactstats.distributions import Hypergeometric
from exactstats.hypothesis._common import Alternative, HTestParams

if TYPE_CHECKING:
    from exactstats.hypothesis.design import HypothesisDesign


# Relative tolerance band for "equally extreme" pmf values. Empirical
# constant shared with scipy's historical fisher_exact.
EPSILON = 1.0 - 1e-4

DEGENERATE_WARNING = (
    "table has an empty row or column; p-value is 1 and the odds ratio "
    "is undefined"
)


def is_degenerate(table: tuple[int, int, int, int]) -> bool:
    """True if any row or column of the table sums to zero."""
    a, b, c, d = table
    return a + b == 0 or c + d == 0 or a + c == 0 or b + d == 0


def _hypergeometric(population: int, successes: int, draws: int) -> Hypergeometric:
    try:
        return Hypergeometric(population, successes, draws)
    except HypergeometricError as e:
        raise FishersExactTestError(e) from e


def tail_boundary_search(
    dist: Hypergeometric,
    mode: int,
    p_exact: float,
    *,
    upper: bool,
    epsilon: float = EPSILON,
) -> int:
    """
    Locate where the pmf crosses `p_exact` on one side of the mode.

    Bisects [mode, draws] (upper=True) or [0, mode] (upper=False), relying
    on the pmf decreasing monotonically away from the mode, then nudges the
    guess one step at a time until pmf(guess) sits inside the band
    [p_exact * epsilon, p_exact / epsilon].

    Parameters
    ----------
    dist : Hypergeometric
        Null distribution of the top-left cell.
    mode : int
        Mode of `dist`.
    p_exact : float
        pmf of the observed count.
    upper : bool
        Search the upper tail if True, the lower tail otherwise.
    epsilon : float
        Multiplicative tolerance, slightly below 1.

    Returns
    -------
    int
        First count (moving away from the mode) whose pmf is not larger
        than p_exact, up to the tolerance band.
    """
    if upper:
        min_val, max_val = mode, dist.draws
    else:
        min_val, max_val = 0, mode

    guess = None
    while max_val - min_val > 1:
        if max_val == min_val + 1 and guess == min_val:
            guess = max_val
        else:
            guess = (max_val + min_val) // 2

        neighbour = guess - 1 if upper else guess + 1
        p_guess = dist.pmf(guess)
        if p_guess <= p_exact < dist.pmf(neighbour):
            break
        # the pmf falls above the mode and rises below it
        if (p_guess < p_exact) == upper:
            max_val = guess
        else:
            min_val = guess

    if guess is None:
        guess = min_val

    if upper:
        while guess > 0 and dist.pmf(guess) < p_exact * epsilon:
            guess -= 1
        while dist.pmf(guess) > p_exact / epsilon:
            guess += 1
    else:
        while dist.pmf(guess) < p_exact * epsilon:
            guess += 1
        while guess > 0 and dist.pmf(guess) > p_exact / epsilon:
            guess -= 1
    return guess


def _two_sided(dist: Hypergeometric, observed: int) -> float:
    n = dist.draws
    p_exact = dist.pmf(observed)
    mode = dist.mode
    p_mode = dist.pmf(mode)

    if abs(p_exact - p_mode) / max(p_exact, p_mode) <= 1.0 - EPSILON:
        return 1.0

    if observed < mode:
        p_lower = dist.cdf(observed)
        if dist.pmf(n) > p_exact / EPSILON:
            return p_lower
        guess = tail_boundary_search(dist, mode, p_exact, upper=True)
        return p_lower + dist.sf(guess - 1)

    p_upper = dist.sf(observed - 1)
    if dist.pmf(0) > p_exact / EPSILON:
        return p_upper
    guess = tail_boundary_search(dist, mode, p_exact, upper=False)
    return p_upper + dist.cdf(guess)


def fishers_exact(
    table: ArrayLike,
    alternative: Alternative | str = Alternative.TWO_SIDED,
) -> float:
    """
    p-value of Fisher's exact test on a 2x2 table.

    Parameters
    ----------
    table : array-like
        [a, b, c, d] in row-major order, or [[a, b], [c, d]].
    alternative : Alternative or str
        "less", "greater" or "two.sided".

    Returns
    -------
    float
        p-value in [0, 1]. Exactly 1.0 for degenerate tables.

    Raises
    ------
    ValidationError
        If the table is malformed or the alternative is unknown.
    FishersExactTestError
        If the table margins do not define a hypergeometric distribution.
    """
    table = check_table(table, "table")
    alternative = Alternative.coerce(alternative)

    if is_degenerate(table):
        return 1.0

    a, b, c, d = table
    n1 = a + b
    n2 = c + d
    n = a + c

    if alternative is Alternative.LESS:
        dist = _hypergeometric(n1 + n2, n1, n)
        p_value = dist.cdf(a)
    elif alternative is Alternative.GREATER:
        dist = _hypergeometric(n1 + n2, n1, b + d)
        p_value = dist.cdf(b)
    else:
        dist = _hypergeometric(n1 + n2, n1, n)
        p_value = _two_sided(dist, a)

    return min(p_value, 1.0)


def odds_ratio(table: tuple[int, int, int, int]) -> float:
    """Sample odds ratio (a*d)/(b*c); +inf if b or c is zero."""
    a, b, c, d = table
    if b > 0 and c > 0:
        return (a * d) / (b * c)
    return math.inf


def fishers_exact_with_odds_ratio(
    table: ArrayLike,
    alternative: Alternative | str = Alternative.TWO_SIDED,
) -> tuple[float, float]:
    """
    Odds ratio and p-value of Fisher's exact test on a 2x2 table.

    Returns
    -------
    (odds_ratio, p_value)
        (nan, 1.0) for degenerate tables.
    """
    table = check_table(table, "table")
    alternative = Alternative.coerce(alternative)

    if is_degenerate(table):
        return math.nan, 1.0

    return odds_ratio(table), fishers_exact(table, alternative)


def fisher_exact(design: HypothesisDesign) -> tuple[HTestParams, list[str]]:
    """Fisher's exact test as an htest payload, for the CPU backend."""
    table = design.table
    alternative = design.alternative
    warnings_list: list[str] = []

    or_value, p_value = fishers_exact_with_odds_ratio(table, alternative)
    if is_degenerate(table):
        warnings_list.append(DEGENERATE_WARNING)

    a, b, c, d = table
    return HTestParams(
        p_value=p_value,
        estimate={"odds ratio": or_value},
        null_value={"odds ratio": 1.0},
        alternative=alternative.value,
        method="Fisher's Exact Test for Count Data",
        data_name=design.data_name,
        extras={
            "table": table,
            "row_sums": (a + b, c + d),
            "col_sums": (a + c, b + d),
        },
    ), warnings_list
