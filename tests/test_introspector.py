"""Tests for AttributeIntrospector and build_layout."""

from __future__ import annotations

import dataclasses
import functools
import re
import threading
from typing import Any, ClassVar

import pytest

from reflection_diff.errors import IntrospectionError
from reflection_diff.introspectors import AttributeIntrospector
from reflection_diff.introspectors.attributes import build_layout
from reflection_diff.protocols import MISSING, RecordIntrospector

# ---------------------------------------------------------------------------
# Record shapes
# ---------------------------------------------------------------------------


class Base:
    base_field: int
    registry: ClassVar[dict[str, Any]] = {}

    def __init__(self) -> None:
        self.base_field = 1


class Derived(Base):
    own_field: str

    def __init__(self) -> None:
        super().__init__()
        self.own_field = "x"
        self.dynamic = [1]


class WithTransient:
    __transient__ = ("cache",)

    def __init__(self) -> None:
        self.value = 1
        self.cache = {"hits": 3}


class InheritsTransient(WithTransient):
    pass


@dataclasses.dataclass
class WithHiddenField:
    name: str
    scratch: int = dataclasses.field(default=0, compare=False)


class WithCachedProperty:
    def __init__(self, value: int) -> None:
        self.value = value

    @functools.cached_property
    def doubled(self) -> int:
        return self.value * 2


class Private:
    __slots__ = ("__secret", "visible")

    def __init__(self) -> None:
        self.__secret = 1
        self.visible = 2


class Failing:
    __slots__ = ("value",)

    def __getattribute__(self, name: str) -> Any:
        if name == "value":
            raise ValueError("corrupt")
        return object.__getattribute__(self, name)


@pytest.fixture
def introspector() -> AttributeIntrospector:
    return AttributeIntrospector()


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


class TestBuildLayout:
    def test_own_fields_before_inherited(self) -> None:
        assert build_layout(Derived).declared == ("own_field", "base_field")

    def test_classvar_excluded(self) -> None:
        layout = build_layout(Derived)
        assert "registry" not in layout.declared
        assert "registry" in layout.excluded

    def test_transient_collected_through_mro(self) -> None:
        assert "cache" in build_layout(InheritsTransient).excluded

    def test_dataclass_compare_false_excluded(self) -> None:
        assert "scratch" in build_layout(WithHiddenField).excluded

    def test_cached_property_excluded(self) -> None:
        assert "doubled" in build_layout(WithCachedProperty).excluded

    def test_private_slots_are_mangled(self) -> None:
        assert build_layout(Private).declared == ("_Private__secret", "visible")


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


class TestFields:
    def test_conforms_to_protocol(self, introspector: AttributeIntrospector) -> None:
        assert isinstance(introspector, RecordIntrospector)

    def test_declared_then_dynamic(self, introspector: AttributeIntrospector) -> None:
        assert list(introspector.fields(Derived())) == [
            ("own_field", "x"),
            ("base_field", 1),
            ("dynamic", [1]),
        ]

    def test_transient_values_skipped(
        self, introspector: AttributeIntrospector
    ) -> None:
        assert dict(introspector.fields(InheritsTransient())) == {"value": 1}

    def test_compare_false_skipped(self, introspector: AttributeIntrospector) -> None:
        assert dict(introspector.fields(WithHiddenField("a", 5))) == {"name": "a"}

    def test_cached_property_value_skipped(
        self, introspector: AttributeIntrospector
    ) -> None:
        record = WithCachedProperty(2)
        assert record.doubled == 4
        assert dict(introspector.fields(record)) == {"value": 2}

    def test_unset_declared_attribute_is_missing(
        self, introspector: AttributeIntrospector
    ) -> None:
        record = Derived.__new__(Derived)
        assert dict(introspector.fields(record)) == {
            "own_field": MISSING,
            "base_field": MISSING,
        }

    def test_read_failure_raises(self, introspector: AttributeIntrospector) -> None:
        with pytest.raises(
            IntrospectionError, match=r"Unable to read attribute 'value'"
        ):
            list(introspector.fields(Failing()))

    def test_attrs_eq_false_skipped(self, introspector: AttributeIntrospector) -> None:
        attrs = pytest.importorskip("attrs")

        @attrs.define
        class Token:
            value: str
            counter: int = attrs.field(default=0, eq=False)

        assert dict(introspector.fields(Token("a", 3))) == {"value": "a"}


class TestOpaque:
    def test_builtin_instances_are_opaque(
        self, introspector: AttributeIntrospector
    ) -> None:
        assert introspector.is_opaque(re.compile("a"))
        assert introspector.is_opaque(threading.Lock())

    def test_bare_object_is_not(self, introspector: AttributeIntrospector) -> None:
        assert not introspector.is_opaque(object())

    def test_empty_slots_are_not(self, introspector: AttributeIntrospector) -> None:
        class Empty:
            __slots__ = ()

        assert not introspector.is_opaque(Empty())

    def test_plain_instances_are_not(self, introspector: AttributeIntrospector) -> None:
        assert not introspector.is_opaque(WithTransient())

    def test_slotted_instances_are_not(
        self, introspector: AttributeIntrospector
    ) -> None:
        assert not introspector.is_opaque(Private())


class TestLayoutCaching:
    def test_layout_cached_per_type(self) -> None:
        introspector = AttributeIntrospector(max_cache_size=2)
        first = introspector.layout(Derived)
        assert introspector.layout(Derived) is first
        assert introspector.layouts.curr_size == 1
