"""Reflection diff - structural comparison of arbitrary Python values."""

from __future__ import annotations

from reflection_diff.algorithm.config import ComparatorConfig, ComparatorMode
from reflection_diff.api import compare, is_equal, render_path
from reflection_diff.assertions import (
    assert_lenient_equals,
    assert_property_lenient_equals,
    assert_property_lenient_equals_each,
    assert_property_reflection_equals,
    assert_property_reflection_equals_each,
    assert_reflection_equals,
)
from reflection_diff.comparator import ReflectionComparator
from reflection_diff.errors import (
    IntrospectionError,
    RecursionBudgetExceeded,
    ReflectionDiffError,
)
from reflection_diff.protocols import MISSING, RecordIntrospector
from reflection_diff.result import (
    NO_DIFFERENCE,
    Difference,
    MapDifference,
    NoDifference,
    RecordDifference,
    SequenceDifference,
    ValueDifference,
)

__version__: str = "0.1.0"
__all__: list[str] = [
    "MISSING",
    "NO_DIFFERENCE",
    "ComparatorConfig",
    "ComparatorMode",
    "Difference",
    "IntrospectionError",
    "MapDifference",
    "NoDifference",
    "RecordDifference",
    "RecordIntrospector",
    "RecursionBudgetExceeded",
    "ReflectionComparator",
    "ReflectionDiffError",
    "SequenceDifference",
    "ValueDifference",
    "assert_lenient_equals",
    "assert_property_lenient_equals",
    "assert_property_lenient_equals_each",
    "assert_property_reflection_equals",
    "assert_property_reflection_equals_each",
    "assert_reflection_equals",
    "compare",
    "is_equal",
    "render_path",
]
