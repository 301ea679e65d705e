"""RecordIntrospector Protocol for the reflection-diff introspection extension point.

Defines the structural interface every record introspector must satisfy.
Users can plug in custom introspectors without inheriting from any base class:
any class with a conformant ``fields`` method passes ``isinstance`` checks.

Example::

    from reflection_diff.protocols import RecordIntrospector

    class PublicOnly:
        def fields(self, record):
            for name, value in vars(record).items():
                if not name.startswith("_"):
                    yield name, value

    assert isinstance(PublicOnly(), RecordIntrospector)  # structural conformance
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

__all__ = ["MISSING", "RecordIntrospector"]


class _Missing:
    """Sentinel for a declared attribute that is not set on an instance."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<missing>"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@runtime_checkable
class RecordIntrospector(Protocol):
    """Structural protocol for record introspectors.

    Any class implementing ``fields(self, record) -> Iterator[tuple[str, Any]]``
    satisfies this protocol at runtime.

    The ``fields`` method must:
    - Yield ``(name, value)`` for every attribute that takes part in the
      comparison, in a deterministic order.
    - Yield ``MISSING`` as the value of a declared attribute that is unset.
    - Raise ``IntrospectionError`` when an attribute cannot be read.
    """

    def fields(self, record: Any) -> Iterator[tuple[str, Any]]: ...
