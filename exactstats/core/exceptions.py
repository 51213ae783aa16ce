"""
Exception hierarchy for exactstats.

All exceptions inherit from ExactStatsError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class ExactStatsError(Exception):
    """Base exception for all exactstats errors."""
    pass


class ValidationError(ExactStatsError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect.

    Raised when a contingency table does not have the 2x2 (or flat
    length-4) shape the exact test expects.
    """
    pass


class HypergeometricError(ValidationError):
    """
    Parameters do not describe a valid hypergeometric distribution.

    Attributes:
        reason: Machine-readable cause, either
            'successes_exceed_population' or 'draws_exceed_population'
        population: Population size that was requested
        successes: Number of successes in the population
        draws: Number of draws
    """

    def __init__(
        self,
        message: str,
        reason: str,
        population: int | None = None,
        successes: int | None = None,
        draws: int | None = None,
    ):
        super().__init__(message)
        self.reason = reason
        self.population = population
        self.successes = successes
        self.draws = draws


class FishersExactTestError(ExactStatsError):
    """
    A contingency table could not be turned into a hypergeometric
    distribution.

    Wraps the HypergeometricError raised while constructing the
    distribution from the table margins.

    Attributes:
        cause: The underlying HypergeometricError
    """

    def __init__(self, cause: HypergeometricError):
        super().__init__(
            "Cannot create a Hypergeometric distribution from the data in "
            "the contingency table. Is it in row-major order? "
            f"Inner error: '{cause}'"
        )
        self.cause = cause
