"""
Tolerance tiers for numerical validation.

Defines precision expectations when comparing exactstats output against
reference values (scipy, R):
- Exact: bit-for-bit reproduction (factorial cache, log-factorial)
- CPU FP64: machine precision match with the reference implementation
- Tail: relaxed absolute floor for p-values near the double-precision
  noise level, where the reference itself is only good to ~1e-16

Used by the test suite.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='Bitwise equality',
)

# A handful of ulps, for values routed through a log-gamma implementation
LOG_GAMMA = ToleranceTier(
    rtol=1e-15,
    atol=0.0,
    name='log_gamma',
    description='Log-gamma fallback, matches reference to a few ulps',
)

CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=0.0,
    name='cpu_fp64',
    description='CPU double precision, matches reference',
)

# p-values whose magnitude is at or below double-precision rounding of 1.0
CPU_FP64_TAIL = ToleranceTier(
    rtol=1e-10,
    atol=1e-15,
    name='cpu_fp64_tail',
    description='CPU double precision, absolute floor for extreme tails',
)


def select_tolerance(value: float) -> ToleranceTier:
    """Select the tolerance tier for comparing a p-value of this magnitude."""
    if abs(value) < 1e-12:
        return CPU_FP64_TAIL
    return CPU_FP64
