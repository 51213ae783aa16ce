"""
Solver dispatch for hypothesis tests.

Provides fisher_exact_test(), the htest-style entry point. The plain
functions fishers_exact() and fishers_exact_with_odds_ratio() are
re-exported for callers that only need the numbers.
"""

from __future__ import annotations

from numpy.typing import ArrayLike

from exactstats.core.exceptions import ValidationError
from exactstats.hypothesis._common import Alternative
from exactstats.hypothesis.design import HypothesisDesign
from exactstats.hypothesis.solution import HTestSolution
from exactstats.hypothesis.backends.cpu import CPUHypothesisBackend
from exactstats.hypothesis.backends._fisher_exact import (  # re-export
    fishers_exact,
    fishers_exact_with_odds_ratio,
)


def _get_backend(backend: str = 'cpu'):
    """
    Select backend for hypothesis tests.

    Exact tests on 2x2 tables are scalar work; CPU is the only backend.
    """
    if backend in ('cpu', 'auto'):
        return CPUHypothesisBackend()
    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'cpu'."
    )


def fisher_exact_test(
    x: ArrayLike | HypothesisDesign,
    y: ArrayLike | None = None,
    *,
    alternative: Alternative | str = Alternative.TWO_SIDED,
    backend: str = 'cpu',
) -> HTestSolution:
    """
    Fisher's Exact Test for Count Data on a 2x2 table.

    Parameters
    ----------
    x : array-like or HypothesisDesign
        A 2x2 contingency table [[a, b], [c, d]], its row-major flat form
        [a, b, c, d], or a factor vector to cross-tabulate with y.
    y : array-like or None
        Second factor vector. x and y must each have two levels.
    alternative : Alternative or str
        "two.sided" (default), "less", or "greater".
    backend : str
        'cpu' (default).

    Returns
    -------
    HTestSolution
        Test result with p_value and estimate {"odds ratio": ...}.
        Degenerate tables (an empty row or column) give p_value 1.0, a
        NaN odds ratio and a warning.

    Raises
    ------
    ValidationError
        If the table or alternative is invalid.
    FishersExactTestError
        If the table margins do not define a hypergeometric distribution.
    """
    if isinstance(x, HypothesisDesign):
        design = x
    else:
        design = HypothesisDesign.for_fisher_exact(x, y, alternative=alternative)

    be = _get_backend(backend)
    result = be.solve(design)
    return HTestSolution(_result=result, _design=design)


__all__ = [
    "fisher_exact_test",
    "fishers_exact",
    "fishers_exact_with_odds_ratio",
]
