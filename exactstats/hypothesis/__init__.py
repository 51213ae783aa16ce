"""
Hypothesis testing module.

Fisher's exact test for 2x2 contingency tables, validated against
scipy.stats.fisher_exact to rtol=1e-10.

Public API:
    fishers_exact(table, alternative)                 - p-value
    fishers_exact_with_odds_ratio(table, alternative) - (odds ratio, p-value)
    fisher_exact_test(x, y)                           - htest-style result
    tail_boundary_search(dist, mode, p_exact, upper)  - two-sided boundary
"""

from exactstats.hypothesis.solvers import (
    fisher_exact_test,
    fishers_exact,
    fishers_exact_with_odds_ratio,
)
from exactstats.hypothesis.backends._fisher_exact import (
    EPSILON,
    tail_boundary_search,
)
from exactstats.hypothesis.design import HypothesisDesign
from exactstats.hypothesis._common import Alternative, HTestParams
from exactstats.hypothesis.solution import HTestSolution

__all__ = [
    "fisher_exact_test",
    "fishers_exact",
    "fishers_exact_with_odds_ratio",
    "tail_boundary_search",
    "EPSILON",
    "Alternative",
    "HypothesisDesign",
    "HTestParams",
    "HTestSolution",
]
