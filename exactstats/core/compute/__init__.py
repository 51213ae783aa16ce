"""
Shared compute infrastructure for exactstats.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers for comparing against reference values
"""

from exactstats.core.compute.timing import Timer
from exactstats.core.compute.tolerances import ToleranceTier, select_tolerance

__all__ = [
    # Timing
    "Timer",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
]
