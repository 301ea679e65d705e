"""Best-match pairing for elements left over by unordered comparison.

When a lenient-order comparison collects every difference, left elements that
found no equal right element are paired with the remaining right elements so
the report can show *how* each one differs from its closest candidate.

Each candidate pair is scored with ``mismatch_score`` (number of leaf
differences, a class-type mismatch weighing more than a value mismatch) and the
cheapest overall pairing is found with scipy's ``linear_sum_assignment``.
"""

from __future__ import annotations

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

from reflection_diff.result import ComparisonOutcome, iter_leaves

__all__ = ["TYPE_MISMATCH_WEIGHT", "best_pairs", "mismatch_score"]

TYPE_MISMATCH_WEIGHT = 5


def mismatch_score(outcome: ComparisonOutcome) -> int:
    """Score how far apart two elements are; 0 means equal.

    Args:
        outcome: Result of comparing the two elements with every difference
            collected.

    Returns:
        Sum over the leaf differences: ``TYPE_MISMATCH_WEIGHT`` for a leaf
        whose operands are both set but of different types, 1 otherwise.
    """
    score = 0
    for leaf in iter_leaves(outcome):
        if (
            leaf.left is not None
            and leaf.right is not None
            and type(leaf.left) is not type(leaf.right)
        ):
            score += TYPE_MISMATCH_WEIGHT
        else:
            score += 1
    return score


def best_pairs(cost_matrix: np.ndarray) -> list[tuple[int, int]]:
    """Return the minimum-cost pairing of rows to columns.

    Args:
        cost_matrix: 2-D matrix of shape ``(m, n)`` with finite costs.

    Returns:
        ``(row, column)`` pairs sorted by row.  ``min(m, n)`` pairs are
        returned; an empty matrix yields an empty list.
    """
    cost = np.asarray(cost_matrix, dtype=float)
    if cost.size == 0:
        return []
    row_ind, col_ind = linear_sum_assignment(cost)
    return sorted(zip(row_ind.tolist(), col_ind.tolist(), strict=True))
