"""Map comparator: key-by-key comparison of mappings.

Keys are matched strictly: a right-hand entry is found by exact key equality
*and* exact key type, so ``1``, ``1.0`` and ``True`` never stand in for one
another, and no leniency mode ever applies to keys.  Values are compared
recursively under the active modes.  Each right-hand entry can be consumed
once.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from reflection_diff.algorithm.context import ComparisonContext
from reflection_diff.protocols import MISSING
from reflection_diff.result import (
    ComparisonOutcome,
    Difference,
    MapDifference,
    NoDifference,
)
from reflection_diff.tree.nodes import PathSegment

__all__ = ["compare_maps"]


def compare_maps(
    left: Mapping[Any, Any],
    right: Mapping[Any, Any],
    ctx: ComparisonContext,
) -> ComparisonOutcome:
    """Compare two mappings.

    Args:
        left:  Left mapping.
        right: Right mapping.
        ctx:   Context of the running comparison.

    Returns:
        NO_DIFFERENCE, the first key difference, or (when collecting all
        differences) a ``MapDifference`` over the top-level pair.
    """
    if len(left) != len(right):
        return ctx.difference(
            f"Different map sizes. Left size: {len(left)}, "
            f"right size: {len(right)}.",
            left,
            right,
            MapDifference,
        )

    # Right entries indexed by (type, key); popped once matched.
    unmatched_right: dict[tuple[type, Any], Any] = {
        (type(key), key): value for key, value in right.items()
    }

    key_differences: list[tuple[Any, Difference]] = []
    for key, left_value in left.items():
        segment = PathSegment.key(key)
        right_value = unmatched_right.pop((type(key), key), MISSING)
        if right_value is MISSING:
            child: ComparisonOutcome = ctx.difference_at(
                segment, "Left key not found in right map.", left_value, MISSING
            )
        else:
            child = ctx.compare(left_value, right_value, segment)

        if isinstance(child, NoDifference):
            continue
        if not ctx.collect_all:
            return child
        key_differences.append((key, child))

    return ctx.collapse(
        MapDifference,
        "Different map values.",
        left,
        right,
        key_differences=tuple(key_differences),
    )
