"""Tests for ReflectionComparator, the orchestrator of reflection comparison.

Covers:
- Reflexivity and null symmetry
- Type-mismatch precedence over structural comparison
- Cycle termination (self-referential and mutually referential graphs)
- The depth budget
- Collect-all versus first-difference mode
- Custom introspectors and reuse across calls and threads
"""

from __future__ import annotations

import copy
import datetime
import enum
import logging
import sys
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any

import numpy as np
import pytest

from reflection_diff.algorithm.config import ComparatorConfig, ComparatorMode
from reflection_diff.comparator import ReflectionComparator
from reflection_diff.errors import RecursionBudgetExceeded
from reflection_diff.introspectors import AttributeIntrospector
from reflection_diff.protocols import RecordIntrospector
from reflection_diff.result import (
    NO_DIFFERENCE,
    RecordDifference,
    SequenceDifference,
    ValueDifference,
    iter_leaves,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class Status(enum.Enum):
    ACTIVE = "active"


@dataclass
class Item:
    id: int
    tags: list[str] = field(default_factory=list)


@dataclass(eq=False)
class Link:
    name: str
    child: Link | None = None


def _sample_values() -> list[Any]:
    return [
        0,
        1.5,
        float("nan"),
        Decimal("2.50"),
        np.float32(3.25),
        True,
        "text",
        b"raw",
        Status.ACTIVE,
        datetime.datetime(2024, 1, 1, 12, 0),
        [1, [2, 3]],
        (1, "a"),
        {1, 2, 3},
        {"a": {"b": [1, 2]}},
        Item(1, ["x", "y"]),
        np.array([[1.0, 2.0], [3.0, 4.0]]),
    ]


# ---------------------------------------------------------------------------
# Reflexivity and nulls
# ---------------------------------------------------------------------------


class TestReflexivity:
    @pytest.mark.parametrize("value", _sample_values())
    def test_value_equals_itself(self, value: Any) -> None:
        assert ReflectionComparator().compare(value, value) is NO_DIFFERENCE

    @pytest.mark.parametrize("value", _sample_values())
    def test_value_equals_deep_copy(self, value: Any) -> None:
        assert ReflectionComparator().is_equal(value, copy.deepcopy(value))


class TestNullSymmetry:
    def test_null_null(self) -> None:
        assert ReflectionComparator().compare(None, None) is NO_DIFFERENCE

    @pytest.mark.parametrize("value", [0, "", [], Item(1), {"a": None}])
    def test_null_against_value(self, value: Any) -> None:
        cmp = ReflectionComparator()
        left = cmp.compare(None, value)
        right = cmp.compare(value, None)
        assert isinstance(left, ValueDifference)
        assert isinstance(right, ValueDifference)
        assert left.message == "Left value null."
        assert right.message == "Right value null."

    def test_nested_null_located(self) -> None:
        diff = ReflectionComparator().compare({"a": [None]}, {"a": [1]})
        assert diff.rendered_path == "a[0]"
        assert diff.message == "Left value null."


# ---------------------------------------------------------------------------
# Type mismatches
# ---------------------------------------------------------------------------


class TestTypeMismatch:
    def test_record_types_never_partially_compared(self) -> None:
        @dataclass
        class Other:
            id: int
            tags: list[str] = field(default_factory=list)

        cmp = ReflectionComparator(ComparatorConfig(collect_all=True))
        diff = cmp.compare(Item(1), Other(1))
        assert type(diff) is ValueDifference
        assert "Item" in diff.message
        assert "Other" in diff.message

    def test_kind_mismatch(self) -> None:
        diff = ReflectionComparator().compare([1], {"a": 1})
        assert diff.message == "Different class types. Left: list, right: dict."

    def test_numbers_of_different_types_are_not_a_mismatch(self) -> None:
        assert ReflectionComparator().is_equal(1, Decimal(1))


# ---------------------------------------------------------------------------
# Cycles
# ---------------------------------------------------------------------------


class TestCycles:
    def test_self_referential_records_terminate(self) -> None:
        left = Link("r")
        left.child = left
        right = Link("r")
        right.child = right
        assert ReflectionComparator().compare(left, right) is NO_DIFFERENCE

    def test_mutually_referential_records(self) -> None:
        a, b = Link("a"), Link("b")
        a.child, b.child = b, a
        c, d = Link("a"), Link("b")
        c.child, d.child = d, c
        assert ReflectionComparator().is_equal(a, c)

    def test_difference_before_cycle_still_found(self) -> None:
        left = Link("r")
        left.child = left
        right = Link("s")
        right.child = right
        diff = ReflectionComparator().compare(left, right)
        assert diff.rendered_path == "name"

    def test_self_containing_lists(self) -> None:
        left: list[Any] = [1]
        left.append(left)
        right: list[Any] = [1]
        right.append(right)
        assert ReflectionComparator().is_equal(left, right)

    def test_aliased_left_against_distinct_rights(self) -> None:
        shared = Item(1)
        diff = ReflectionComparator().compare([shared, shared], [Item(1), Item(2)])
        assert diff.rendered_path == "[1].id"

    def test_cycles_in_lenient_order(self) -> None:
        left: list[Any] = [1]
        left.append(left)
        right: list[Any] = []
        right.append(right)
        right.append(1)
        cmp = ReflectionComparator(
            ComparatorConfig(modes=frozenset({ComparatorMode.LENIENT_ORDER}))
        )
        assert cmp.is_equal(left, right)
        assert not cmp.is_equal(left, [right, 2])

    def test_finished_sibling_pair_is_pruned(self) -> None:
        x, y = Item(1), Item(2)
        cmp = ReflectionComparator(ComparatorConfig(collect_all=True))
        diff = cmp.compare([x, x], [y, y])
        assert [leaf.rendered_path for leaf in iter_leaves(diff)] == ["[0].id"]


# ---------------------------------------------------------------------------
# Depth budget
# ---------------------------------------------------------------------------


def _nested(depth: int) -> list[Any]:
    value: list[Any] = []
    for _ in range(depth):
        value = [value]
    return value


def _nested_sets(depth: int) -> frozenset[Any]:
    value: frozenset[Any] = frozenset({0})
    for _ in range(depth):
        value = frozenset({value})
    return value


def _wrapped(leaf: Any, depth: int) -> list[Any]:
    value: list[Any] = [leaf]
    for _ in range(depth - 1):
        value = [value]
    return value


_LENIENT = ComparatorConfig(modes=frozenset({ComparatorMode.LENIENT_ORDER}))


class TestDepthBudget:
    def test_within_budget(self) -> None:
        cmp = ReflectionComparator(ComparatorConfig(max_depth=10))
        assert cmp.is_equal(_nested(10), _nested(10))

    def test_budget_exceeded(self) -> None:
        cmp = ReflectionComparator(ComparatorConfig(max_depth=10))
        with pytest.raises(
            RecursionBudgetExceeded, match=r"Maximum comparison depth 10"
        ):
            cmp.compare(_nested(20), _nested(20))

    def test_error_names_the_path(self) -> None:
        cmp = ReflectionComparator(ComparatorConfig(max_depth=2))
        with pytest.raises(RecursionBudgetExceeded) as exc_info:
            cmp.compare(_nested(5), _nested(5))
        assert exc_info.value.path == "[0][0][0]"
        assert exc_info.value.max_depth == 2

    def test_lenient_order_at_default_budget(self) -> None:
        cmp = ReflectionComparator(_LENIENT)
        assert cmp.is_equal(_nested(200), _nested(200))

    def test_lenient_order_past_default_budget(self) -> None:
        cmp = ReflectionComparator(_LENIENT)
        with pytest.raises(
            RecursionBudgetExceeded, match=r"Maximum comparison depth 200"
        ):
            cmp.compare(_nested(201), _nested(201))

    def test_sets_at_default_budget(self) -> None:
        assert ReflectionComparator().is_equal(_nested_sets(200), _nested_sets(200))

    def test_sets_past_default_budget(self) -> None:
        with pytest.raises(RecursionBudgetExceeded):
            ReflectionComparator().compare(_nested_sets(201), _nested_sets(201))

    def test_best_matches_at_default_budget(self) -> None:
        config = replace(_LENIENT, collect_all=True)
        diff = ReflectionComparator(config).compare(
            _wrapped(1, 200), _wrapped(2, 200)
        )
        assert isinstance(diff, SequenceDifference)
        assert diff.best_matches

    def test_far_past_budget_is_not_a_recursion_error(self) -> None:
        cmp = ReflectionComparator(_LENIENT)
        with pytest.raises(RecursionBudgetExceeded):
            cmp.compare(_nested(2000), _nested(2000))

    def test_recursion_limit_never_lowered(self) -> None:
        before = sys.getrecursionlimit()
        ReflectionComparator(ComparatorConfig(max_depth=1)).compare([1], [1])
        assert sys.getrecursionlimit() >= before


# ---------------------------------------------------------------------------
# Modes of reporting
# ---------------------------------------------------------------------------


class TestCollectAll:
    def test_first_difference_is_the_leaf(self) -> None:
        diff = ReflectionComparator().compare(Item(1, ["a", "b"]), Item(2, ["a", "c"]))
        assert isinstance(diff, ValueDifference)
        assert diff.rendered_path == "id"

    def test_collect_all_returns_tree_rooted_at_top(self) -> None:
        cmp = ReflectionComparator(ComparatorConfig(collect_all=True))
        diff = cmp.compare(Item(1, ["a", "b"]), Item(2, ["a", "c"]))
        assert isinstance(diff, RecordDifference)
        assert diff.rendered_path == "<top-level>"
        tags = dict(diff.field_differences)["tags"]
        assert isinstance(tags, SequenceDifference)
        assert [leaf.rendered_path for leaf in iter_leaves(diff)] == ["id", "tags[1]"]

    def test_per_call_override(self) -> None:
        cmp = ReflectionComparator()
        diff = cmp.compare(Item(1), Item(2), collect_all=True)
        assert isinstance(diff, RecordDifference)

    def test_is_equal_ignores_collect_all(self) -> None:
        cmp = ReflectionComparator(ComparatorConfig(collect_all=True))
        assert cmp.is_equal(Item(1), Item(1))
        assert not cmp.is_equal(Item(1), Item(2))


# ---------------------------------------------------------------------------
# End-to-end scenario
# ---------------------------------------------------------------------------


class TestEndToEnd:
    left = Item(1, ["a", "b"])
    right = Item(1, ["b", "a"])

    def test_strict_order_fails_at_first_tag(self) -> None:
        cmp = ReflectionComparator()
        assert not cmp.is_equal(self.left, self.right)
        assert cmp.compare(self.left, self.right).rendered_path == "tags[0]"

    def test_lenient_order_passes(self) -> None:
        config = ComparatorConfig(modes=frozenset({ComparatorMode.LENIENT_ORDER}))
        assert ReflectionComparator(config).is_equal(self.left, self.right)


# ---------------------------------------------------------------------------
# Introspector and reuse
# ---------------------------------------------------------------------------


class PublicOnly:
    def fields(self, record: Any) -> Iterator[tuple[str, Any]]:
        for name, value in vars(record).items():
            if not name.startswith("_"):
                yield name, value


class Cached:
    def __init__(self, value: int, cache: int) -> None:
        self.value = value
        self._cache = cache


class TestIntrospectorSeam:
    def test_custom_introspector_conforms(self) -> None:
        assert isinstance(PublicOnly(), RecordIntrospector)

    def test_custom_introspector_used(self) -> None:
        assert not ReflectionComparator().is_equal(Cached(1, 10), Cached(1, 20))
        cmp = ReflectionComparator(introspector=PublicOnly())
        assert cmp.is_equal(Cached(1, 10), Cached(1, 20))

    def test_default_introspector(self) -> None:
        cmp = ReflectionComparator(max_cache_size=8)
        assert isinstance(cmp.introspector, AttributeIntrospector)
        assert cmp.introspector.layouts.max_size == 8


class TestReuse:
    def test_repeated_calls_identical(self) -> None:
        cmp = ReflectionComparator()
        first = cmp.compare(Item(1, ["a"]), Item(1, ["b"]))
        second = cmp.compare(Item(1, ["a"]), Item(1, ["b"]))
        assert (first.message, first.rendered_path) == (
            second.message,
            second.rendered_path,
        )

    def test_shared_across_threads(self) -> None:
        cmp = ReflectionComparator(
            ComparatorConfig(modes=frozenset({ComparatorMode.LENIENT_ORDER}))
        )

        def check(n: int) -> bool:
            items = [Item(i, [str(i)]) for i in range(n)]
            return cmp.is_equal(items, list(reversed(items)))

        with ThreadPoolExecutor(max_workers=4) as pool:
            assert all(pool.map(check, range(1, 30)))

    def test_debug_summary_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="reflection_diff.comparator"):
            ReflectionComparator().compare([1], [2])
        assert "1 difference(s)" in caplog.text
