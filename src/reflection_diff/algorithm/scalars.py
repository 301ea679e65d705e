"""Scalar and leniency policies: numbers, dates, defaults, enums, value types.

- Numbers of any Python type are converted to ``numpy.float64`` and compared
  bit for bit, except that every NaN equals every NaN.  ``+inf`` and ``-inf``
  equal only themselves; ``0.0`` and ``-0.0`` differ.  Values that cannot be
  represented as a float64 (huge ints, signalling NaNs) are compared with ``==``.
- Dates compare on their value (strict) or on presence only (LENIENT_DATES).
- With IGNORE_DEFAULTS, a left-hand default value matches anything.
- Enum members and immutable value types compare with ``==`` after an exact
  runtime-type check.
"""

from __future__ import annotations

import decimal
import numbers
from typing import Any

import numpy as np

from reflection_diff.algorithm.context import ComparisonContext
from reflection_diff.result import NO_DIFFERENCE, ComparisonOutcome
from reflection_diff.tree.nodes import ValueKind

__all__ = [
    "compare_dates",
    "compare_scalars",
    "is_default",
    "numbers_equal",
    "type_mismatch",
]

_NUL = "\x00"


def _type_name(value: Any) -> str:
    cls = type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def is_default(value: Any) -> bool:
    """Return True for the default value of a type: None, False, zero, NUL."""
    if value is None:
        return True
    if isinstance(value, (bool, np.bool_)):
        return not value
    if isinstance(value, (numbers.Real, decimal.Decimal)):
        return bool(value == 0)
    return isinstance(value, str) and value == _NUL


def _as_float64(value: Any) -> np.float64 | None:
    try:
        return np.float64(value)
    except (OverflowError, ValueError, TypeError):
        return None


def numbers_equal(left: Any, right: Any) -> bool:
    """Compare two numbers through their float64 representation.

    Args:
        left:  Any real number or Decimal.
        right: Any real number or Decimal.

    Returns:
        True when both have the same float64 bit pattern or are both NaN.
    """
    left_float = _as_float64(left)
    right_float = _as_float64(right)
    if left_float is None or right_float is None:
        return bool(left == right)
    if np.isnan(left_float) and np.isnan(right_float):
        return True
    return left_float.tobytes() == right_float.tobytes()


def type_mismatch(left: Any, right: Any, ctx: ComparisonContext) -> ComparisonOutcome:
    """Difference for two operands of different concrete types."""
    return ctx.difference(
        f"Different class types. Left: {_type_name(left)}, "
        f"right: {_type_name(right)}.",
        left,
        right,
    )


def compare_dates(left: Any, right: Any, ctx: ComparisonContext) -> ComparisonOutcome:
    """Compare two values that are each either None or date-like.

    Strict mode: None equals only None, dates must be equal.  With
    IGNORE_DEFAULTS a left-hand None matches any date.
    Lenient mode: only presence is compared.
    """
    if ctx.config.lenient_dates:
        if (left is None) != (right is None):
            return ctx.difference(
                "Lenient dates, but not both instantiated or both null.", left, right
            )
        return NO_DIFFERENCE

    if left is None and ctx.config.ignore_defaults:
        return NO_DIFFERENCE
    if left is None:
        return ctx.difference("Left value null.", left, right)
    if right is None:
        return ctx.difference("Right value null.", left, right)
    if bool(left == right):
        return NO_DIFFERENCE
    return ctx.difference("Different date values.", left, right)


def compare_scalars(
    left: Any,
    right: Any,
    kind: ValueKind,
    ctx: ComparisonContext,
) -> ComparisonOutcome:
    """Compare two leaves of the same kind (NUMBER, ENUM, or VALUE)."""
    if kind == ValueKind.NUMBER:
        if numbers_equal(left, right):
            return NO_DIFFERENCE
        return ctx.difference("Different numeric values.", left, right)

    if type(left) is not type(right):
        return type_mismatch(left, right, ctx)

    if left is right or bool(left == right):
        return NO_DIFFERENCE
    if kind == ValueKind.ENUM:
        return ctx.difference("Different enum values.", left, right)
    return ctx.difference("Different object values.", left, right)
