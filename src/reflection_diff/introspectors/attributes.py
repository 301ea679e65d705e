"""AttributeIntrospector: reads the comparable attributes of plain Python records.

Works for ordinary classes, ``__slots__`` classes, dataclasses, and attrs
classes without importing attrs (its metadata is read from ``__attrs_attrs__``).

Traversal order is deterministic: the runtime type's own declared attributes
first, then those of each base class in MRO order, then any remaining instance
``__dict__`` entries in insertion order.

Attributes never compared:
- ``ClassVar`` and ``InitVar`` annotations, and plain class attributes
- dunder names
- dataclass fields declared with ``compare=False``
- attrs fields declared with ``eq=False``
- names listed in a ``__transient__`` iterable on any class of the MRO
- values cached in the instance by ``functools.cached_property``
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import typing
from collections.abc import Iterable, Iterator
from typing import Any

from reflection_diff.cache import FieldLayout, LayoutCache
from reflection_diff.errors import IntrospectionError
from reflection_diff.protocols import MISSING

__all__ = ["AttributeIntrospector", "build_layout"]

_STRING_PSEUDO_FIELDS = ("ClassVar", "InitVar")


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _mangle(owner: type, name: str) -> str:
    """Apply private name mangling the way the compiler does for ``__name``."""
    if name.startswith("__") and not name.endswith("__"):
        return f"_{owner.__name__.lstrip('_')}{name}"
    return name


def _slot_names(owner: type) -> list[str]:
    slots = owner.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return [
        _mangle(owner, name)
        for name in slots
        if name not in ("__dict__", "__weakref__")
    ]


def _is_pseudo_field(annotation: Any) -> bool:
    """True for ClassVar / InitVar annotations, evaluated or not."""
    if isinstance(annotation, str):
        head = annotation.split("[", 1)[0].rsplit(".", 1)[-1].strip()
        return head in _STRING_PSEUDO_FIELDS
    if annotation is typing.ClassVar or annotation is dataclasses.InitVar:
        return True
    if typing.get_origin(annotation) is typing.ClassVar:
        return True
    return isinstance(annotation, dataclasses.InitVar)


def _declared_names(owner: type, excluded: set[str]) -> list[str]:
    names = _slot_names(owner)
    for name, annotation in inspect.get_annotations(owner).items():
        if _is_pseudo_field(annotation):
            excluded.add(name)
        else:
            names.append(name)
    return names


def _excluded_names(owner: type) -> Iterable[str]:
    transient = owner.__dict__.get("__transient__", ())
    if isinstance(transient, str):
        transient = (transient,)
    yield from transient

    if "__dataclass_fields__" in owner.__dict__:
        for item in dataclasses.fields(owner):
            if not item.compare:
                yield item.name

    for attribute in owner.__dict__.get("__attrs_attrs__", ()):
        if not getattr(attribute, "eq", True):
            yield attribute.name

    for name, member in owner.__dict__.items():
        if isinstance(member, functools.cached_property):
            yield member.attrname or name


def build_layout(cls: type) -> FieldLayout:
    """Compute the FieldLayout of ``cls`` by walking its MRO, own class first."""
    declared: list[str] = []
    excluded: set[str] = set()
    for owner in cls.__mro__:
        if owner is object:
            continue
        excluded.update(_excluded_names(owner))
        for name in _declared_names(owner, excluded):
            if name not in declared:
                declared.append(name)
    return FieldLayout(
        declared=tuple(name for name in declared if not _is_dunder(name)),
        excluded=frozenset(excluded),
    )


class AttributeIntrospector:
    """Default RecordIntrospector backed by attribute access.

    Satisfies the ``RecordIntrospector`` Protocol structurally.  Per-type
    layouts are cached in a ``LayoutCache`` owned by this instance.

    Args:
        max_cache_size: Maximum number of type layouts kept in memory.

    Example::

        introspector = AttributeIntrospector()
        list(introspector.fields(Point(1, 2)))   # [("x", 1), ("y", 2)]
    """

    def __init__(self, max_cache_size: int = 256) -> None:
        self._layouts = LayoutCache(max_size=max_cache_size)

    @property
    def layouts(self) -> LayoutCache:
        return self._layouts

    def layout(self, cls: type) -> FieldLayout:
        return self._layouts.get(cls, build_layout)

    def is_opaque(self, record: Any) -> bool:
        """True when ``record`` is an instance of a builtin or extension type.

        Such types (compiled regex patterns, locks, ...) declare neither
        ``__dict__`` nor ``__slots__`` anywhere below ``object``; they are
        compared with ``==`` instead of attribute by attribute.  A Python
        class with ``__slots__ = ()`` and a bare ``object()`` are zero-field
        records.
        """
        cls = type(record)
        if cls is object:
            return False
        return not any(
            "__slots__" in vars(owner) or "__dict__" in vars(owner)
            for owner in cls.__mro__
            if owner is not object
        )

    def fields(self, record: Any) -> Iterator[tuple[str, Any]]:
        """Yield ``(name, value)`` for every comparable attribute of ``record``.

        Unset declared attributes yield ``MISSING``.

        Raises:
            IntrospectionError: When reading an attribute fails for any reason
                other than the attribute being unset.
        """
        cls = type(record)
        layout = self.layout(cls)
        seen: set[str] = set()

        for name in layout.declared:
            if name in layout.excluded:
                continue
            seen.add(name)
            yield name, self._read(record, cls, name)

        instance_dict = getattr(record, "__dict__", None)
        if not isinstance(instance_dict, dict):
            return
        for name, value in list(instance_dict.items()):
            if name in seen or name in layout.excluded or _is_dunder(name):
                continue
            yield name, value

    @staticmethod
    def _read(record: Any, cls: type, name: str) -> Any:
        try:
            return getattr(record, name)
        except AttributeError:
            return MISSING
        except Exception as exc:
            raise IntrospectionError(cls, name, repr(exc)) from exc
