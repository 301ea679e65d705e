"""Sequence comparator: ordered and unordered element-wise comparison.

Both modes first compare lengths; sequences of different length produce a
single size-mismatch ``SequenceDifference`` and no element is compared.

- Ordered (default): elements are zipped by position.
- Unordered (LENIENT_ORDER, and always for sets): every left element, in
  order, consumes the first remaining right element it equals.  This greedy
  first-fit can miss a valid pairing that a global matching would find, e.g.
  when a lenient left element (IGNORE_DEFAULTS) grabs the right element a later
  left element needed.  That is an accepted limitation.

The actual type of the sequence does not matter: a list can be compared with a
tuple, a deque or a numpy array (iterated over its first axis).
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from reflection_diff.algorithm.context import ComparisonContext
from reflection_diff.algorithm.matcher import best_pairs, mismatch_score
from reflection_diff.result import (
    NO_DIFFERENCE,
    ComparisonOutcome,
    Difference,
    NoDifference,
    SequenceDifference,
)
from reflection_diff.tree.nodes import PathSegment

__all__ = ["compare_sequences"]

logger = logging.getLogger(__name__)


def compare_sequences(
    left: Any,
    right: Any,
    ctx: ComparisonContext,
    *,
    ordered: bool,
) -> ComparisonOutcome:
    """Compare two sequences (or sets) element by element.

    Args:
        left:    Left collection (any iterable classified SEQUENCE or SET).
        right:   Right collection.
        ctx:     Context of the running comparison.
        ordered: Compare by position when True, by greedy matching otherwise.

    Returns:
        NO_DIFFERENCE, the first element difference, or (when collecting all
        differences) a ``SequenceDifference`` over the top-level pair.
    """
    left_items = list(left)
    right_items = list(right)

    if len(left_items) != len(right_items):
        return ctx.difference(
            f"Different collection sizes. Left size: {len(left_items)}, "
            f"right size: {len(right_items)}.",
            left,
            right,
            SequenceDifference,
        )

    if ordered:
        return _compare_ordered(left, right, left_items, right_items, ctx)
    return _compare_unordered(left, right, left_items, right_items, ctx)


def _compare_ordered(
    left: Any,
    right: Any,
    left_items: list[Any],
    right_items: list[Any],
    ctx: ComparisonContext,
) -> ComparisonOutcome:
    element_differences: list[tuple[int, Difference]] = []
    for index, (left_item, right_item) in enumerate(
        zip(left_items, right_items, strict=True)
    ):
        child = ctx.compare(left_item, right_item, PathSegment.index(index))
        if isinstance(child, NoDifference):
            continue
        if not ctx.collect_all:
            return child
        element_differences.append((index, child))

    return ctx.collapse(
        SequenceDifference,
        "Different elements.",
        left,
        right,
        element_differences=tuple(element_differences),
    )


def _compare_unordered(
    left: Any,
    right: Any,
    left_items: list[Any],
    right_items: list[Any],
    ctx: ComparisonContext,
) -> ComparisonOutcome:
    # Working copy of the right side; each entry can be consumed once.
    remaining: list[tuple[int, Any]] = list(enumerate(right_items))
    unmatched: list[tuple[int, Any]] = []
    element_differences: list[tuple[int, Difference]] = []

    for index, left_item in enumerate(left_items):
        segment = PathSegment.index(index)
        for position, (_right_index, right_item) in enumerate(remaining):
            if not ctx.trial(left_item, right_item, segment):
                del remaining[position]
                break
        else:
            logger.debug(
                "No match for element %d at %s in right collection",
                index,
                ctx.path.render(),
            )
            miss = ctx.difference_at(
                segment,
                "Left value not found in right collection.",
                left_item,
                right,
            )
            if not ctx.collect_all:
                return miss
            unmatched.append((index, left_item))
            element_differences.append((index, miss))

    if not element_differences:
        return NO_DIFFERENCE

    return ctx.difference(
        "Different elements. Left values not found in right collection.",
        left,
        right,
        SequenceDifference,
        element_differences=tuple(element_differences),
        best_matches=_best_matches(unmatched, remaining, ctx),
    )


def _best_matches(
    unmatched: list[tuple[int, Any]],
    remaining: list[tuple[int, Any]],
    ctx: ComparisonContext,
) -> tuple[tuple[int, int, Difference], ...]:
    """Pair unmatched left elements with the closest leftover right elements."""
    if not unmatched or not remaining:
        return ()

    outcomes: dict[tuple[int, int], ComparisonOutcome] = {}
    cost = np.empty((len(unmatched), len(remaining)), dtype=float)
    for row, (left_index, left_item) in enumerate(unmatched):
        for column, (_right_index, right_item) in enumerate(remaining):
            outcome = ctx.fork(collect_all=True).compare(
                left_item, right_item, PathSegment.index(left_index)
            )
            outcomes[row, column] = outcome
            cost[row, column] = mismatch_score(outcome)

    matches: list[tuple[int, int, Difference]] = []
    for row, column in best_pairs(cost):
        outcome = outcomes[row, column]
        if isinstance(outcome, Difference):
            matches.append((unmatched[row][0], remaining[column][0], outcome))
    return tuple(matches)
