"""
HypothesisDesign: validated inputs for hypothesis tests.

Uses factory classmethods per test type. The `test_type` field identifies
which test the design is for. Immutable after construction.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

from exactstats.core.exceptions import ValidationError, DimensionError
from exactstats.core.validation import check_table
from exactstats.hypothesis._common import Alternative


def _cross_tabulate(x: ArrayLike, y: ArrayLike) -> np.ndarray:
    """Build a 2x2 count table from two factor vectors with two levels each."""
    x_1d = np.asarray(x).ravel()
    y_1d = np.asarray(y).ravel()
    if len(x_1d) != len(y_1d):
        raise ValidationError(
            f"x and y must have the same length, "
            f"got {len(x_1d)} and {len(y_1d)}"
        )
    x_cats = np.unique(x_1d)
    y_cats = np.unique(y_1d)
    if len(x_cats) != 2 or len(y_cats) != 2:
        raise DimensionError(
            f"x and y must each have exactly 2 levels, "
            f"got {len(x_cats)} and {len(y_cats)}"
        )
    table = np.zeros((2, 2), dtype=np.int64)
    for i, xc in enumerate(x_cats):
        for j, yc in enumerate(y_cats):
            table[i, j] = np.sum((x_1d == xc) & (y_1d == yc))
    return table


@dataclass(frozen=True)
class HypothesisDesign:
    """
    Design for hypothesis tests on 2x2 contingency tables.

    Do not construct directly; use factory classmethods.
    """
    test_type: str
    _table: tuple[int, int, int, int]
    _alternative: Alternative = Alternative.TWO_SIDED
    _data_name: str = ""

    @property
    def table(self) -> tuple[int, int, int, int]:
        """Table entries (a, b, c, d) in row-major order."""
        return self._table

    @property
    def alternative(self) -> Alternative:
        return self._alternative

    @property
    def data_name(self) -> str:
        return self._data_name

    @classmethod
    def for_fisher_exact(
        cls,
        x: ArrayLike,
        y: ArrayLike | None = None,
        *,
        alternative: Alternative | str = Alternative.TWO_SIDED,
    ) -> HypothesisDesign:
        """
        Build design for fisher_exact_test().

        Parameters
        ----------
        x : array-like
            A 2x2 contingency table, the flat row-major form [a, b, c, d],
            or (with y) a factor vector.
        y : array-like or None
            If given, second factor vector; the table is cross-tabulated
            from x and y, each of which must have exactly two levels.
        alternative : Alternative or str
            "two.sided", "less", or "greater".
        """
        alternative = Alternative.coerce(alternative)

        if y is not None:
            table = check_table(_cross_tabulate(x, y), "table")
            data_name = "x and y"
        else:
            table = check_table(x, "x")
            data_name = "x"

        return cls(
            test_type="fisher_exact",
            _table=table,
            _alternative=alternative,
            _data_name=data_name,
        )
