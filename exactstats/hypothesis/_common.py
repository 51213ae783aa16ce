"""
Common types for hypothesis testing.

Defines HTestParams (maps to R's htest class) and the Alternative enum.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from exactstats.core.exceptions import ValidationError


class Alternative(str, Enum):
    """Which tail(s) of the null distribution count as extreme."""
    LESS = "less"
    GREATER = "greater"
    TWO_SIDED = "two.sided"

    @classmethod
    def coerce(cls, value: Alternative | str) -> Alternative:
        """Accept a member or its string value ("two-sided" is also allowed)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.replace("-", ".")
            for member in cls:
                if member.value == key:
                    return member
        raise ValidationError(
            f"alternative must be one of {VALID_ALTERNATIVES}, got {value!r}"
        )


VALID_ALTERNATIVES = tuple(a.value for a in Alternative)


@dataclass(frozen=True)
class HTestParams:
    """
    Parameter payload for hypothesis tests.

    Maps to R's htest structure, restricted to the fields an exact test
    on a contingency table produces.

    Attributes
    ----------
    p_value : float
        p-value of the test.
    estimate : dict or None
        Point estimate(s), e.g. {"odds ratio": 7.5}.
    null_value : dict or None
        Hypothesized value under H0, e.g. {"odds ratio": 1.0}.
    alternative : str
        "two.sided", "less", or "greater".
    method : str
        Human-readable method name.
    data_name : str
        Description of the data.
    extras : dict or None
        Test-specific additional outputs (the flattened table and its
        margins for Fisher's test).
    """
    p_value: float
    estimate: dict[str, float] | None
    null_value: dict[str, float] | None
    alternative: str
    method: str
    data_name: str
    extras: dict[str, Any] | None = None
