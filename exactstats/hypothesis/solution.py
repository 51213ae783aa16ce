"""
Hypothesis test solution types.

HTestSolution wraps Result[HTestParams] and provides R's print.htest format.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import math

from exactstats.core.result import Result
from exactstats.hypothesis._common import HTestParams

if TYPE_CHECKING:
    from exactstats.hypothesis.design import HypothesisDesign


@dataclass
class HTestSolution:
    """
    User-facing hypothesis test results.

    Wraps Result[HTestParams] and provides R's print.htest output format
    via summary(). All standard htest fields are available as properties.
    """
    _result: Result[HTestParams]
    _design: 'HypothesisDesign | None'

    # --- Standard htest fields ---

    @property
    def p_value(self) -> float:
        """p-value of the test."""
        return self._result.params.p_value

    @property
    def estimate(self) -> dict[str, float] | None:
        """Point estimate(s)."""
        return self._result.params.estimate

    @property
    def null_value(self) -> dict[str, float] | None:
        """Hypothesized value under H0."""
        return self._result.params.null_value

    @property
    def alternative(self) -> str:
        """Alternative hypothesis direction."""
        return self._result.params.alternative

    @property
    def method(self) -> str:
        """Human-readable method name."""
        return self._result.params.method

    @property
    def data_name(self) -> str:
        """Description of the data."""
        return self._result.params.data_name

    # --- Test-specific extras ---

    @property
    def extras(self) -> dict[str, Any] | None:
        """Test-specific additional outputs."""
        return self._result.params.extras

    @property
    def odds_ratio(self) -> float | None:
        """For fisher_exact_test: sample odds ratio (a*d)/(b*c)."""
        e = self._result.params.estimate
        return e.get('odds ratio') if e else None

    @property
    def table(self) -> tuple[int, int, int, int] | None:
        """The tested table, flattened in row-major order."""
        e = self._result.params.extras
        return e.get('table') if e else None

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Formatting ---

    def summary(self) -> str:
        """
        Format as R's print.htest output.

        Produces output like:
            Fisher's Exact Test for Count Data

        data:  x
        p-value = 0.0397
        alternative hypothesis: true odds ratio is not equal to 1
        sample estimates:
            odds ratio
                   7.5
        """
        p = self._result.params
        lines = []

        lines.append(f"\t{p.method}")
        lines.append("")
        lines.append(f"data:  {p.data_name}")
        lines.append(f"p-value = {_format_pvalue(p.p_value)}")

        if p.null_value:
            nv_name = next(iter(p.null_value.keys()))
            nv_val = next(iter(p.null_value.values()))
            if p.alternative == "two.sided":
                relation = "is not equal to"
            elif p.alternative == "less":
                relation = "is less than"
            else:
                relation = "is greater than"
            lines.append(
                f"alternative hypothesis: true {nv_name} {relation} {nv_val:g}"
            )

        if p.estimate is not None:
            lines.append("sample estimates:")
            names = list(p.estimate.keys())
            vals = list(p.estimate.values())
            lines.append(" ".join(f"{n:>14s}" for n in names))
            lines.append(" ".join(f"{_format_number(v):>14s}" for v in vals))

        for w in self._result.warnings:
            lines.append(f"Warning: {w}")

        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"HTestSolution(method={p.method!r}, "
            f"p_value={p.p_value:.4g})"
        )


def _format_pvalue(p: float) -> str:
    """Format p-value like R does."""
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"


def _format_number(x: float) -> str:
    """Format a number, handling infinity and NaN."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "-Inf" if x < 0 else "Inf"
    return f"{x:.7g}"
