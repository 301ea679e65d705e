"""ComparisonContext: call-scoped state threaded through every recursive step.

A context is created at the start of one top-level ``compare()`` call and
discarded at its end.  It owns the PathTracker and CycleGuard of that call and
the hook used to recurse back into the orchestrator, so comparators never
touch global or thread-local state.

Trial comparisons (lenient-order matching, best-match scoring) run in a
``fork()``: a copy of the path and guard, so nothing a trial registers leaks
into the main traversal.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from reflection_diff.algorithm.config import ComparatorConfig
from reflection_diff.result import (
    NO_DIFFERENCE,
    ComparisonOutcome,
    Difference,
    ValueDifference,
)
from reflection_diff.tree.guard import CycleGuard
from reflection_diff.tree.nodes import PathSegment
from reflection_diff.tree.path import PathTracker

__all__ = ["ComparisonContext", "PairComparer"]

PairComparer = Callable[[Any, Any, "ComparisonContext"], ComparisonOutcome]


@dataclass(slots=True)
class ComparisonContext:
    """Mutable state of one top-level comparison.

    Attributes:
        config:      The comparator's immutable configuration.
        recurse:     Orchestrator entry point for one pair of values.
        collect_all: Accumulate every difference instead of stopping at the
                     first one.  Defaults to ``config.collect_all``.
        path:        Route from the top-level pair to the current pair.
        guard:       Pairs already entered during this call.
    """

    config: ComparatorConfig
    recurse: PairComparer
    collect_all: bool | None = None
    path: PathTracker = field(default_factory=PathTracker)
    guard: CycleGuard = field(default_factory=CycleGuard)

    def __post_init__(self) -> None:
        if self.collect_all is None:
            self.collect_all = self.config.collect_all

    @property
    def depth(self) -> int:
        return len(self.path)

    # ------------------------------------------------------------------
    # Recursion
    # ------------------------------------------------------------------

    def compare(
        self, left: Any, right: Any, segment: PathSegment
    ) -> ComparisonOutcome:
        """Compare a child pair reached through ``segment``."""
        with self.path.descend(segment):
            return self.recurse(left, right, self)

    def fork(self, *, collect_all: bool = False) -> ComparisonContext:
        """Return an independent context positioned at the current path."""
        return ComparisonContext(
            config=self.config,
            recurse=self.recurse,
            collect_all=collect_all,
            path=self.path.copy(),
            guard=self.guard.fork(),
        )

    def trial(
        self, left: Any, right: Any, segment: PathSegment
    ) -> ComparisonOutcome:
        """Compare a child pair in a throwaway first-difference fork."""
        forked = self.fork()
        with forked.path.descend(segment):
            return forked.recurse(left, right, forked)

    # ------------------------------------------------------------------
    # Difference construction
    # ------------------------------------------------------------------

    def difference(
        self,
        message: str,
        left: Any,
        right: Any,
        kind: type[Difference] = ValueDifference,
        **children: Any,
    ) -> Difference:
        """Create a Difference located at the current path."""
        return kind(message, left, right, self.path.snapshot(), **children)

    def difference_at(
        self,
        segment: PathSegment,
        message: str,
        left: Any,
        right: Any,
    ) -> Difference:
        """Create a ValueDifference located one segment below the current path."""
        with self.path.descend(segment):
            return self.difference(message, left, right)

    def collapse(
        self,
        kind: type[Difference],
        message: str,
        left: Any,
        right: Any,
        **children: tuple[Any, ...],
    ) -> ComparisonOutcome:
        """Build a composite Difference, or NO_DIFFERENCE when it has no children."""
        if not any(children.values()):
            return NO_DIFFERENCE
        return self.difference(message, left, right, kind, **children)
