"""
Hypergeometric distribution with validated parameters.

scipy.stats.hypergeom returns nan for inconsistent parameters instead of
failing. This wrapper validates the configuration up front and raises a
HypergeometricError, then delegates pmf/cdf/sf to the frozen scipy
distribution.
"""

from __future__ import annotations

from scipy import stats as sp_stats

from exactstats.core.exceptions import HypergeometricError
from exactstats.core.validation import check_count


class Hypergeometric:
    """
    Number of successes in `draws` draws without replacement from a
    population of size `population` containing `successes` successes.

    Parameters
    ----------
    population : int
        Population size.
    successes : int
        Number of successes in the population.
    draws : int
        Number of draws.

    Raises
    ------
    HypergeometricError
        If successes or draws exceed the population.
    """

    def __init__(self, population: int, successes: int, draws: int):
        population = check_count(population, "population")
        successes = check_count(successes, "successes")
        draws = check_count(draws, "draws")

        if successes > population:
            raise HypergeometricError(
                f"successes ({successes}) exceed population ({population})",
                reason="successes_exceed_population",
                population=population, successes=successes, draws=draws,
            )
        if draws > population:
            raise HypergeometricError(
                f"draws ({draws}) exceed population ({population})",
                reason="draws_exceed_population",
                population=population, successes=successes, draws=draws,
            )

        self._population = population
        self._successes = successes
        self._draws = draws
        # scipy parameter names: M population, n successes, N draws
        self._dist = sp_stats.hypergeom(population, successes, draws)

    @property
    def population(self) -> int:
        return self._population

    @property
    def successes(self) -> int:
        return self._successes

    @property
    def draws(self) -> int:
        return self._draws

    @property
    def min(self) -> int:
        """Smallest value in the support."""
        return max(0, self._draws + self._successes - self._population)

    @property
    def max(self) -> int:
        """Largest value in the support."""
        return min(self._successes, self._draws)

    @property
    def mode(self) -> int:
        """Most probable number of successes."""
        return ((self._draws + 1) * (self._successes + 1)) // (self._population + 2)

    def pmf(self, k: int) -> float:
        """P(X == k); 0.0 outside the support."""
        return float(self._dist.pmf(k))

    def cdf(self, k: int) -> float:
        """P(X <= k)."""
        return float(self._dist.cdf(k))

    def sf(self, k: int) -> float:
        """P(X > k), computed directly rather than as 1 - cdf(k)."""
        return float(self._dist.sf(k))

    def __repr__(self) -> str:
        return (
            f"Hypergeometric(population={self._population}, "
            f"successes={self._successes}, draws={self._draws})"
        )
