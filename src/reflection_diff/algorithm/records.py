"""Record comparator: attribute-by-attribute comparison of composite objects.

Both operands are of the same concrete type (the orchestrator reports a type
mismatch before getting here).  Attributes come from a ``RecordIntrospector``
in its traversal order; attributes only one side carries (dynamic instance
attributes, unset slots) are compared against ``MISSING``.

Records whose type exposes no attribute storage at all (builtin and extension
types, when the introspector offers ``is_opaque``) are compared with ``==``.
"""

from __future__ import annotations

from typing import Any

from reflection_diff.algorithm.context import ComparisonContext
from reflection_diff.protocols import MISSING, RecordIntrospector
from reflection_diff.result import (
    NO_DIFFERENCE,
    ComparisonOutcome,
    Difference,
    NoDifference,
    RecordDifference,
)
from reflection_diff.tree.nodes import PathSegment

__all__ = ["compare_records"]


def compare_records(
    left: Any,
    right: Any,
    ctx: ComparisonContext,
    introspector: RecordIntrospector,
) -> ComparisonOutcome:
    """Compare two records of the same type field by field.

    Args:
        left:         Left record.
        right:        Right record, same concrete type as ``left``.
        ctx:          Context of the running comparison.
        introspector: Source of the ``(name, value)`` pairs of each record.

    Returns:
        NO_DIFFERENCE, the first field difference, or (when collecting all
        differences) a ``RecordDifference`` over the top-level pair.

    Raises:
        IntrospectionError: When an attribute of either record cannot be read.
    """
    is_opaque = getattr(introspector, "is_opaque", None)
    if is_opaque is not None and is_opaque(left):
        if bool(left == right):
            return NO_DIFFERENCE
        return ctx.difference("Different object values.", left, right)

    right_values = dict(introspector.fields(right))
    pairs: list[tuple[str, Any, Any]] = [
        (name, left_value, right_values.pop(name, MISSING))
        for name, left_value in introspector.fields(left)
    ]
    pairs.extend((name, MISSING, value) for name, value in right_values.items())

    field_differences: list[tuple[str, Difference]] = []
    for name, left_value, right_value in pairs:
        child = _compare_field(name, left_value, right_value, ctx)
        if isinstance(child, NoDifference):
            continue
        if not ctx.collect_all:
            return child
        field_differences.append((name, child))

    return ctx.collapse(
        RecordDifference,
        "Different field values.",
        left,
        right,
        field_differences=tuple(field_differences),
    )


def _compare_field(
    name: str,
    left_value: Any,
    right_value: Any,
    ctx: ComparisonContext,
) -> ComparisonOutcome:
    segment = PathSegment.field(name)
    if left_value is MISSING and right_value is MISSING:
        return NO_DIFFERENCE
    if left_value is MISSING:
        if ctx.config.ignore_defaults:
            return NO_DIFFERENCE
        return ctx.difference_at(
            segment, "Left attribute not set.", left_value, right_value
        )
    if right_value is MISSING:
        return ctx.difference_at(
            segment, "Right attribute not set.", left_value, right_value
        )
    return ctx.compare(left_value, right_value, segment)
