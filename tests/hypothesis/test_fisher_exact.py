"""
Tests for Fisher's exact test on 2x2 tables.

Reference p-values are from scipy.stats.fisher_exact (see conftest.py).
"""

import math
from fractions import Fraction
from math import comb

import numpy as np
import pytest

from exactstats.core.exceptions import (
    DimensionError,
    FishersExactTestError,
    HypergeometricError,
    ValidationError,
)
from exactstats.distributions import Hypergeometric
from exactstats.hypothesis import (
    EPSILON,
    Alternative,
    fishers_exact,
    fishers_exact_with_odds_ratio,
    tail_boundary_search,
)
from exactstats.hypothesis.backends import _fisher_exact


ALTERNATIVES = [Alternative.LESS, Alternative.GREATER, Alternative.TWO_SIDED]


def _exact_two_sided(table):
    """Two-sided p-value by brute-force enumeration with exact rationals."""
    a, b, c, d = table
    n1, n2, n = a + b, c + d, a + c
    total = comb(n1 + n2, n)
    lo, hi = max(0, n - n2), min(n, n1)
    probs = {k: Fraction(comb(n1, k) * comb(n2, n - k), total) for k in range(lo, hi + 1)}
    p_obs = probs[a]
    # same relative tolerance as the engine
    return float(sum(p for p in probs.values() if p <= p_obs * Fraction(10001, 10000)))


# ═══════════════════════════════════════════════════════════════════════
# p-values
# ═══════════════════════════════════════════════════════════════════════


class TestFishersExact:

    def test_reference_example(self):
        table = [3, 5, 4, 50]
        assert fishers_exact(table, Alternative.LESS) == pytest.approx(
            0.9963034765672599, rel=1e-10
        )
        assert fishers_exact(table, Alternative.GREATER) == pytest.approx(
            0.03970749246529277, rel=1e-10
        )
        assert fishers_exact(table, Alternative.TWO_SIDED) == pytest.approx(
            0.03970749246529276, rel=1e-10
        )

    def test_scipy_reference_tables(self, scipy_reference_tables, approx_pvalue):
        for table, less, greater, two_sided in scipy_reference_tables:
            for alternative, expected in zip(ALTERNATIVES, (less, greater, two_sided)):
                p_value = fishers_exact(table, alternative)
                assert p_value == approx_pvalue(expected), (table, alternative)

    def test_default_is_two_sided(self):
        table = [3, 5, 4, 50]
        assert fishers_exact(table) == fishers_exact(table, Alternative.TWO_SIDED)

    @pytest.mark.parametrize("name", ["less", "greater", "two.sided", "two-sided"])
    def test_string_alternatives(self, name):
        table = [9, 22, 44, 38]
        expected = fishers_exact(table, Alternative.coerce(name))
        assert fishers_exact(table, name) == expected

    def test_unknown_alternative(self):
        with pytest.raises(ValidationError, match="alternative"):
            fishers_exact([3, 5, 4, 50], "both")

    def test_two_by_two_input(self):
        flat = fishers_exact([3, 5, 4, 50], Alternative.TWO_SIDED)
        nested = fishers_exact(np.array([[3, 5], [4, 50]]), Alternative.TWO_SIDED)
        assert flat == nested

    def test_two_sided_matches_enumeration(self):
        for table in ([1, 5, 3, 2], [10, 8, 5, 12], [3, 1, 1, 3], [0, 8, 5, 12], [6, 2, 1, 4]):
            assert fishers_exact(table, Alternative.TWO_SIDED) == pytest.approx(
                _exact_two_sided(table), rel=1e-10
            )

    def test_known_small_tables(self):
        # values agree with R fisher.test() and scipy
        assert fishers_exact([1, 5, 3, 2], "two.sided") == pytest.approx(
            0.24242424242424254, rel=1e-10
        )
        assert fishers_exact([1, 5, 3, 2], "less") == pytest.approx(
            0.1969696969696971, rel=1e-10
        )
        assert fishers_exact([6, 2, 1, 4], "two.sided") == pytest.approx(
            0.10256410256410257, rel=1e-10
        )
        assert fishers_exact([6, 2, 1, 4], "less") == pytest.approx(
            0.9953379953379957, rel=1e-10
        )

    def test_lady_tasting_tea(self):
        assert fishers_exact([3, 1, 1, 3], "two.sided") == pytest.approx(
            0.4857142857142856, rel=1e-10
        )

    def test_typical_table_is_one(self):
        # observed count equals the mode
        assert fishers_exact([5, 5, 5, 5], Alternative.TWO_SIDED) == 1.0
        assert fishers_exact([10, 10, 10, 10], Alternative.TWO_SIDED) == 1.0

    def test_bounded_by_one(self, scipy_reference_tables):
        for table, *_ in scipy_reference_tables:
            for alternative in ALTERNATIVES:
                p_value = fishers_exact(table, alternative)
                assert 0.0 <= p_value <= 1.0


class TestDegenerateTables:
    """A zero row or zero column gives p = 1 for every alternative."""

    @pytest.mark.parametrize("table", [
        [0, 0, 1, 2],
        [1, 2, 0, 0],
        [1, 0, 2, 0],
        [0, 1, 0, 2],
        [0, 0, 0, 0],
        [0, 0, 0, 7],
    ])
    @pytest.mark.parametrize("alternative", ALTERNATIVES)
    def test_p_value_is_one(self, table, alternative):
        assert fishers_exact(table, alternative) == 1.0

    @pytest.mark.parametrize("alternative", ALTERNATIVES)
    def test_odds_ratio_is_nan(self, alternative):
        odds_ratio, p_value = fishers_exact_with_odds_ratio([0, 1, 0, 2], alternative)
        assert math.isnan(odds_ratio)
        assert p_value == 1.0

    def test_no_distribution_built(self, monkeypatch):
        def _fail(*args):
            raise AssertionError("distribution should not be constructed")

        monkeypatch.setattr(_fisher_exact, "Hypergeometric", _fail)
        assert fishers_exact([0, 5, 0, 9], Alternative.TWO_SIDED) == 1.0


# ═══════════════════════════════════════════════════════════════════════
# Odds ratio
# ═══════════════════════════════════════════════════════════════════════


class TestOddsRatio:

    def test_reference_example(self):
        odds_ratio, p_value = fishers_exact_with_odds_ratio([3, 5, 4, 50], Alternative.LESS)
        assert odds_ratio == pytest.approx(7.5, abs=1e-15)
        assert p_value == pytest.approx(0.9963034765672599, rel=1e-10)

    def test_p_value_matches_fishers_exact(self, scipy_reference_tables):
        for table, *_ in scipy_reference_tables:
            for alternative in ALTERNATIVES:
                _, p_value = fishers_exact_with_odds_ratio(table, alternative)
                assert p_value == fishers_exact(table, alternative)

    @pytest.mark.parametrize("table", [[3, 0, 4, 50], [3, 5, 0, 50], [3, 0, 0, 50]])
    def test_zero_off_diagonal_is_infinite(self, table):
        odds_ratio, _ = fishers_exact_with_odds_ratio(table, Alternative.TWO_SIDED)
        assert odds_ratio == math.inf

    def test_zero_diagonal_is_zero(self):
        odds_ratio, _ = fishers_exact_with_odds_ratio([0, 8, 5, 12], Alternative.TWO_SIDED)
        assert odds_ratio == 0.0

    def test_large_counts_do_not_overflow(self):
        big = 2**40
        odds_ratio = _fisher_exact.odds_ratio((big, 1, 1, big))
        assert odds_ratio == float(big * big)


# ═══════════════════════════════════════════════════════════════════════
# Input validation and error wrapping
# ═══════════════════════════════════════════════════════════════════════


class TestValidation:

    @pytest.mark.parametrize("table", [[1, 2, 3], [1, 2, 3, 4, 5], [[1, 2, 3], [4, 5, 6]]])
    def test_wrong_shape(self, table):
        with pytest.raises(DimensionError):
            fishers_exact(table, Alternative.LESS)

    def test_negative_entry(self):
        with pytest.raises(ValidationError, match="non-negative"):
            fishers_exact([1, -2, 3, 4], Alternative.LESS)

    def test_non_integral_entry(self):
        with pytest.raises(ValidationError, match="integers"):
            fishers_exact([1.5, 2, 3, 4], Alternative.LESS)

    def test_non_finite_entry(self):
        with pytest.raises(ValidationError, match="non-finite"):
            fishers_exact([np.nan, 2, 3, 4], Alternative.LESS)

    def test_integral_floats_accepted(self):
        assert fishers_exact([3.0, 5.0, 4.0, 50.0], Alternative.LESS) == fishers_exact(
            [3, 5, 4, 50], Alternative.LESS
        )

    def test_oracle_error_is_wrapped(self, monkeypatch):
        def _invalid(population, successes, draws):
            raise HypergeometricError(
                "draws exceed population",
                reason="draws_exceed_population",
                population=population, successes=successes, draws=draws,
            )

        monkeypatch.setattr(_fisher_exact, "Hypergeometric", _invalid)
        with pytest.raises(FishersExactTestError) as exc_info:
            fishers_exact([3, 5, 4, 50], Alternative.LESS)

        err = exc_info.value
        assert isinstance(err.cause, HypergeometricError)
        assert err.cause.reason == "draws_exceed_population"
        assert err.__cause__ is err.cause
        assert "row-major" in str(err)


# ═══════════════════════════════════════════════════════════════════════
# Boundary search
# ═══════════════════════════════════════════════════════════════════════


def _linear_scan_upper(dist, mode, p_exact):
    """First count above the mode whose pmf is inside the tolerance band."""
    k = mode
    while dist.pmf(k) > p_exact / EPSILON:
        k += 1
    return k


def _linear_scan_lower(dist, mode, p_exact):
    """First count below the mode whose pmf is inside the tolerance band."""
    k = mode
    while k > 0 and dist.pmf(k) > p_exact / EPSILON:
        k -= 1
    return k


def _null_distribution(table):
    a, b, c, d = table
    return Hypergeometric(a + b + c + d, a + b, a + c)


class TestTailBoundarySearch:

    def test_likely_opposite_tail_skips_search(self, monkeypatch):
        # [3, 5, 4, 50]: pmf(0) exceeds pmf(3), so the two-sided p-value is
        # the upper tail alone
        def _fail(*args, **kwargs):
            raise AssertionError("boundary search should not run")

        monkeypatch.setattr(_fisher_exact, "tail_boundary_search", _fail)
        dist = _null_distribution([3, 5, 4, 50])
        assert dist.pmf(0) > dist.pmf(3) / EPSILON
        assert fishers_exact([3, 5, 4, 50], Alternative.TWO_SIDED) == dist.sf(2)

    @pytest.mark.parametrize("table", [[9, 22, 44, 38], [111, 195, 189, 69], [18, 147, 123, 58]])
    def test_upper_search_matches_linear_scan(self, table):
        dist = _null_distribution(table)
        mode = dist.mode
        assert table[0] < mode
        p_exact = dist.pmf(table[0])
        guess = tail_boundary_search(dist, mode, p_exact, upper=True)
        assert guess == _linear_scan_upper(dist, mode, p_exact)
        assert dist.pmf(guess) <= p_exact / EPSILON
        assert dist.pmf(guess - 1) > p_exact * EPSILON

    @pytest.mark.parametrize("table", [[186, 177, 111, 154], [124, 117, 119, 175], [127, 38, 112, 43]])
    def test_lower_search_matches_linear_scan(self, table):
        dist = _null_distribution(table)
        mode = dist.mode
        assert table[0] >= mode
        p_exact = dist.pmf(table[0])
        guess = tail_boundary_search(dist, mode, p_exact, upper=False)
        assert guess == _linear_scan_lower(dist, mode, p_exact)
        assert dist.pmf(guess) <= p_exact / EPSILON
        assert dist.pmf(guess + 1) > p_exact * EPSILON

    @pytest.mark.parametrize("upper, table", [
        (False, [40000, 35000, 35000, 40000]),
        (True, [35000, 40000, 40000, 35000]),
    ])
    def test_search_is_logarithmic(self, monkeypatch, upper, table):
        dist = _null_distribution(table)
        mode = dist.mode
        p_exact = dist.pmf(table[0])

        calls = []
        pmf = dist.pmf

        def counting_pmf(k):
            calls.append(k)
            return pmf(k)

        monkeypatch.setattr(dist, "pmf", counting_pmf)
        guess = tail_boundary_search(dist, mode, p_exact, upper=upper)

        # two pmf calls per bisection step plus a short settle
        assert len(calls) < 4 * math.log2(mode) + 10
        assert dist.pmf(guess) <= p_exact / EPSILON
        inward = guess - 1 if upper else guess + 1
        assert dist.pmf(inward) > p_exact * EPSILON

    def test_two_sided_uses_boundary(self):
        table = [9, 22, 44, 38]
        dist = _null_distribution(table)
        p_exact = dist.pmf(9)
        guess = tail_boundary_search(dist, dist.mode, p_exact, upper=True)
        expected = dist.cdf(9) + dist.sf(guess - 1)
        assert fishers_exact(table, Alternative.TWO_SIDED) == pytest.approx(expected, rel=1e-15)

    def test_narrow_interval_starts_from_min(self):
        # [mode, draws] spans a single step: no bisection happens
        dist = Hypergeometric(4, 2, 2)
        mode = dist.mode
        assert dist.draws - mode <= 1
        guess = tail_boundary_search(dist, mode, dist.pmf(0), upper=True)
        assert guess == 2
