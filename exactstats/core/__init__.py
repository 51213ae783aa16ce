"""
Core infrastructure for exactstats.

This module provides shared abstractions and utilities used by the
domain-specific submodules (combinatorics, distributions, hypothesis).

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and tolerance tiers
"""

from exactstats.core.result import Result
from exactstats.core.exceptions import (
    ExactStatsError,
    ValidationError,
    DimensionError,
    HypergeometricError,
    FishersExactTestError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "ExactStatsError",
    "ValidationError",
    "DimensionError",
    "HypergeometricError",
    "FishersExactTestError",
]
