"""ReflectionComparator: orchestrator that wires classification, leniency
policies, and the structural comparators into one recursive comparison.

Every top-level ``compare()`` call creates a fresh ``ComparisonContext`` that
owns the PathTracker and CycleGuard of that call; nothing mutable survives
between calls, so one comparator (whose config and layout cache are the only
shared state) can be reused across calls and threads.

Per pair of values, in order:

1. The same object on both sides is never a difference.
2. A pair of null-or-date values goes through date handling.
3. With IGNORE_DEFAULTS, a left-hand default value matches anything.
4. A null on exactly one side is a difference.
5. The depth budget is checked.
6. Both values are classified; different kinds are a class-type mismatch.
7. Structural pairs register with the cycle guard; a pair already visited
   during this call is pruned as no difference.
8. The kind selects the comparator.

Before descending, ``compare()`` makes sure the interpreter recursion limit
leaves room for ``max_depth`` levels, so an over-deep input always ends in
``RecursionBudgetExceeded`` rather than ``RecursionError``.
"""

from __future__ import annotations

import logging
import sys
import threading
from types import FrameType
from typing import Any

from reflection_diff.algorithm.config import ComparatorConfig
from reflection_diff.algorithm.context import ComparisonContext
from reflection_diff.algorithm.maps import compare_maps
from reflection_diff.algorithm.records import compare_records
from reflection_diff.algorithm.scalars import (
    compare_dates,
    compare_scalars,
    is_default,
    type_mismatch,
)
from reflection_diff.algorithm.sequences import compare_sequences
from reflection_diff.errors import RecursionBudgetExceeded
from reflection_diff.introspectors import AttributeIntrospector
from reflection_diff.protocols import RecordIntrospector
from reflection_diff.result import NO_DIFFERENCE, ComparisonOutcome, iter_leaves
from reflection_diff.tree.classifier import ValueClassifier, is_date, unwrap
from reflection_diff.tree.nodes import ValueKind

__all__ = ["ReflectionComparator"]

logger = logging.getLogger(__name__)

# Kinds whose operands must share the exact same runtime type.
_EXACT_TYPE_KINDS = frozenset({ValueKind.RECORD, ValueKind.VALUE, ValueKind.ENUM})


# Upper bound of interpreter frames spent per nesting level (best-match
# scoring inside an unordered collection is the deepest route).
_FRAMES_PER_LEVEL = 6
_FRAME_HEADROOM = 64

_recursion_limit_lock = threading.Lock()


def _is_null_or_date(value: Any) -> bool:
    return value is None or is_date(value)


def _stack_depth() -> int:
    depth = 0
    frame: FrameType | None = sys._getframe()
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


def _reserve_stack(max_depth: int) -> None:
    """Raise the interpreter recursion limit so ``max_depth`` levels fit.

    The limit is process wide, so it is only ever raised, never lowered.
    """
    required = (
        _stack_depth() + (max_depth + 1) * _FRAMES_PER_LEVEL + _FRAME_HEADROOM
    )
    with _recursion_limit_lock:
        if sys.getrecursionlimit() < required:
            logger.debug(
                "Raising recursion limit to %d for max_depth %d", required, max_depth
            )
            sys.setrecursionlimit(required)


class ReflectionComparator:
    """Structural comparison of arbitrary Python values.

    Example::

        from reflection_diff import ComparatorConfig, ReflectionComparator

        cmp = ReflectionComparator(ComparatorConfig(modes={"lenient_order"}))
        cmp.is_equal([1, 2, 3], [3, 1, 2])                       # True
        diff = cmp.compare({"tags": ["a"]}, {"tags": ["b"]})
        diff.rendered_path                                       # "tags[0]"
    """

    def __init__(
        self,
        config: ComparatorConfig | None = None,
        introspector: RecordIntrospector | None = None,
        max_cache_size: int = 256,
    ) -> None:
        """Initialise the comparator.

        Args:
            config:       Leniency modes and traversal limits.  Defaults to
                ``ComparatorConfig()`` (strict, first difference only).
            introspector: Source of record attributes.  Defaults to an
                ``AttributeIntrospector`` with its own layout cache.
            max_cache_size: Number of per-type attribute layouts the default
                introspector keeps.  Ignored when ``introspector`` is given.
        """
        self._config = config if config is not None else ComparatorConfig()
        self._introspector: RecordIntrospector = (
            introspector
            if introspector is not None
            else AttributeIntrospector(max_cache_size=max_cache_size)
        )
        self._classifier = ValueClassifier(value_types=self._config.value_types)

    @property
    def config(self) -> ComparatorConfig:
        return self._config

    @property
    def introspector(self) -> RecordIntrospector:
        return self._introspector

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare(
        self,
        left: Any,
        right: Any,
        *,
        collect_all: bool | None = None,
    ) -> ComparisonOutcome:
        """Compare two values.

        Args:
            left:        Left (expected) value.
            right:       Right (actual) value.
            collect_all: Override ``config.collect_all`` for this call.

        Returns:
            ``NO_DIFFERENCE`` when the values are equal under the active
            modes.  Otherwise the first located difference or, when collecting
            every difference, the difference tree rooted at the top-level pair.

        Raises:
            IntrospectionError:      An attribute of a record could not be read.
            RecursionBudgetExceeded: The values nest deeper than
                ``config.max_depth``.
        """
        _reserve_stack(self._config.max_depth)
        ctx = ComparisonContext(
            config=self._config,
            recurse=self._compare_pair,
            collect_all=collect_all,
        )
        outcome = self._compare_pair(left, right, ctx)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Compared %s with %s: %d difference(s), %d pair(s) visited",
                type(left).__name__,
                type(right).__name__,
                sum(1 for _ in iter_leaves(outcome)),
                len(ctx.guard),
            )
        return outcome

    def is_equal(self, left: Any, right: Any) -> bool:
        """Return True when ``compare(left, right)`` finds no difference."""
        return not self.compare(left, right, collect_all=False)

    # ------------------------------------------------------------------
    # Recursion
    # ------------------------------------------------------------------

    def _compare_pair(
        self, left: Any, right: Any, ctx: ComparisonContext
    ) -> ComparisonOutcome:
        left = unwrap(left)
        right = unwrap(right)

        if left is right:
            return NO_DIFFERENCE

        if _is_null_or_date(left) and _is_null_or_date(right):
            return compare_dates(left, right, ctx)

        if self._config.ignore_defaults and is_default(left):
            return NO_DIFFERENCE

        if left is None:
            return ctx.difference("Left value null.", left, right)
        if right is None:
            return ctx.difference("Right value null.", left, right)

        if ctx.depth > self._config.max_depth:
            raise RecursionBudgetExceeded(self._config.max_depth, ctx.path.render())

        kind = self._classifier.classify(left)
        if kind != self._classifier.classify(right):
            return type_mismatch(left, right, ctx)
        if kind in _EXACT_TYPE_KINDS and type(left) is not type(right):
            return type_mismatch(left, right, ctx)

        if kind.is_structural and not ctx.guard.enter(left, right):
            logger.debug("Pruned already visited pair at %s", ctx.path.render())
            return NO_DIFFERENCE

        match kind:
            case ValueKind.SEQUENCE:
                return compare_sequences(
                    left, right, ctx, ordered=not self._config.lenient_order
                )
            case ValueKind.SET:
                return compare_sequences(left, right, ctx, ordered=False)
            case ValueKind.MAP:
                return compare_maps(left, right, ctx)
            case ValueKind.RECORD:
                return compare_records(left, right, ctx, self._introspector)
            case ValueKind.NUMBER | ValueKind.ENUM | ValueKind.VALUE:
                return compare_scalars(left, right, kind, ctx)
            case ValueKind.DATE:
                return compare_dates(left, right, ctx)
            case ValueKind.NULL:
                return NO_DIFFERENCE
