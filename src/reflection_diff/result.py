"""Difference model returned by reflection comparisons.

``NoDifference`` is the falsy outcome of a successful comparison.  Every other
outcome is a ``Difference`` carrying the route to the divergent pair, both
operands, and a message classifying the divergence.  Composite variants nest
the differences found beneath them:

- ``SequenceDifference``: per index (and best matches for unordered input)
- ``MapDifference``:      per key
- ``RecordDifference``:   per field

Composite differences assembled from child results are never empty; the
comparators collapse an empty one into ``NO_DIFFERENCE`` before returning it.
The only childless composites are size mismatches, which are terminal.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from reflection_diff.tree.nodes import PathSegment
from reflection_diff.tree.path import render_segments

__all__ = [
    "NO_DIFFERENCE",
    "ComparisonOutcome",
    "Difference",
    "MapDifference",
    "NoDifference",
    "RecordDifference",
    "SequenceDifference",
    "ValueDifference",
    "iter_leaves",
]


@dataclass(frozen=True, slots=True)
class NoDifference:
    """Both values are equal under the active leniency modes."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_DIFFERENCE"


NO_DIFFERENCE = NoDifference()


@dataclass(frozen=True, slots=True, eq=False)
class Difference:
    """A located divergence between two values.

    Attributes:
        message: Human readable classification, e.g. "Left value null.".
        left:    Left operand at the point of divergence.
        right:   Right operand at the point of divergence.
        path:    Route from the top-level pair to this pair.  Empty for the
                 top-level pair itself.
    """

    message: str
    left: Any
    right: Any
    path: tuple[PathSegment, ...] = ()

    def __bool__(self) -> bool:
        return True

    @property
    def rendered_path(self) -> str:
        """The path rendered as ``a.b[0].c`` (``<top-level>`` when empty)."""
        return render_segments(self.path)

    def children(self) -> Iterator[tuple[PathSegment, Difference]]:
        """Yield ``(segment, child)`` pairs; leaves have none."""
        return iter(())

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"path={self.rendered_path!r})"
        )


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class ValueDifference(Difference):
    """Leaf mismatch: null vs non-null, type mismatch, or unequal values."""


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class SequenceDifference(Difference):
    """Differences between two sequences.

    Attributes:
        element_differences: ``(index, difference)`` in ascending left index
            order.  For unordered comparison an entry marks a left element that
            found no equal right element.
        best_matches: ``(left_index, right_index, difference)`` pairing each
            unmatched left element with its closest unmatched right element.
            Only populated when collecting all differences in lenient order.
    """

    element_differences: tuple[tuple[int, Difference], ...] = ()
    best_matches: tuple[tuple[int, int, Difference], ...] = ()

    def children(self) -> Iterator[tuple[PathSegment, Difference]]:
        for index, child in self.element_differences:
            yield PathSegment.index(index), child


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class MapDifference(Difference):
    """Differences between two mappings, keyed by the left-hand key."""

    key_differences: tuple[tuple[Any, Difference], ...] = ()

    def children(self) -> Iterator[tuple[PathSegment, Difference]]:
        for key, child in self.key_differences:
            yield PathSegment.key(key), child


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class RecordDifference(Difference):
    """Differences between two records, in field traversal order."""

    field_differences: tuple[tuple[str, Difference], ...] = ()

    def children(self) -> Iterator[tuple[PathSegment, Difference]]:
        for name, child in self.field_differences:
            yield PathSegment.field(name), child


ComparisonOutcome = Difference | NoDifference


def iter_leaves(outcome: ComparisonOutcome) -> Iterator[Difference]:
    """Yield every childless Difference of a difference tree, depth first."""
    if isinstance(outcome, NoDifference):
        return
    has_children = False
    for _segment, child in outcome.children():
        has_children = True
        yield from iter_leaves(child)
    if not has_children:
        yield outcome
