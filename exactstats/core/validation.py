"""
Input validation utilities for exactstats.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (integral floats in tables are the one exception)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import operator

import numpy as np
from numpy.typing import ArrayLike

from exactstats.core.exceptions import ValidationError, DimensionError


def check_count(value: object, name: str) -> int:
    """
    Validate a non-negative integer count.

    Accepts Python ints and numpy integer scalars. Booleans are rejected
    even though they are ints, since passing one is almost always a bug.

    Args:
        value: Input to validate
        name: Parameter name for error messages

    Returns:
        The value as a Python int

    Raises:
        ValidationError: If value is not an integer or is negative
    """
    if isinstance(value, (bool, np.bool_)):
        raise ValidationError(f"{name}: expected a non-negative integer, got {value!r}")
    try:
        count = operator.index(value)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected a non-negative integer, got {type(value).__name__}"
        ) from e
    if count < 0:
        raise ValidationError(f"{name}: must be non-negative, got {count}")
    return count


def check_table(table: ArrayLike, name: str) -> tuple[int, int, int, int]:
    """
    Validate a 2x2 contingency table and flatten it in row-major order.

    Accepts either a flat length-4 sequence ``[a, b, c, d]`` or a 2x2
    array-like ``[[a, b], [c, d]]``.

    Args:
        table: Input to validate
        name: Parameter name for error messages

    Returns:
        Tuple ``(a, b, c, d)`` of Python ints

    Raises:
        DimensionError: If the table is not length 4 or 2x2
        ValidationError: If entries are non-numeric, non-finite,
            non-integral or negative
    """
    try:
        arr = np.asarray(table)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if arr.shape not in ((4,), (2, 2)):
        raise DimensionError(
            f"{name}: expected a 2x2 table or 4 entries, got shape {arr.shape}"
        )

    flat = arr.ravel()

    # Python ints beyond int64 land in an object array
    if flat.dtype == object:
        a, b, c, d = (check_count(v, f"{name}[{i}]") for i, v in enumerate(flat))
        return a, b, c, d

    if not np.issubdtype(flat.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {flat.dtype}, expected integer counts"
        )

    if np.issubdtype(flat.dtype, np.floating):
        if not np.all(np.isfinite(flat)):
            raise ValidationError(f"{name}: contains non-finite values")
        if not np.all(flat == np.floor(flat)):
            raise ValidationError(
                f"{name}: entries must be integers, got {flat.tolist()}"
            )
    elif not np.issubdtype(flat.dtype, np.integer):
        raise ValidationError(
            f"{name}: unsupported dtype {flat.dtype}, expected integer counts"
        )

    if np.any(flat < 0):
        raise ValidationError(
            f"{name}: all entries must be non-negative, got {flat.tolist()}"
        )

    a, b, c, d = (int(v) for v in flat.tolist())
    return a, b, c, d
