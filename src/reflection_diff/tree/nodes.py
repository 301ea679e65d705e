"""ValueKind and PathSegment: the vocabulary of a reflection comparison.

ValueKind is the closed set of shapes every runtime value is classified into
before comparison.  PathSegment is one step (field, index, or key) on the route
from the top-level pair to the pair currently being compared.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any


class ValueKind(StrEnum):
    """Enumeration of the value shapes the comparator distinguishes.

    StrEnum values are the lowercased member names:
    - NULL     -> "null"     : None
    - DATE     -> "date"     : dates, datetimes, times, numpy.datetime64
    - NUMBER   -> "number"   : real numbers and Decimals (never bool)
    - ENUM     -> "enum"     : enum.Enum members
    - VALUE    -> "value"    : immutable leaves compared with ==
    - SEQUENCE -> "sequence" : ordered collections
    - SET      -> "set"      : unordered collections
    - MAP      -> "map"      : mappings
    - RECORD   -> "record"   : anything else, compared attribute by attribute
    """

    NULL = auto()
    DATE = auto()
    NUMBER = auto()
    ENUM = auto()
    VALUE = auto()
    SEQUENCE = auto()
    SET = auto()
    MAP = auto()
    RECORD = auto()

    @property
    def is_structural(self) -> bool:
        """True for kinds the comparator descends into."""
        return self in _STRUCTURAL


_STRUCTURAL = frozenset(
    {ValueKind.SEQUENCE, ValueKind.SET, ValueKind.MAP, ValueKind.RECORD}
)


class SegmentKind(StrEnum):
    """How a PathSegment was reached: record field, sequence index, or map key."""

    FIELD = auto()
    INDEX = auto()
    KEY = auto()


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One step on the route to a compared pair.

    Attributes:
        kind:  Which kind of step this is (see SegmentKind).
        value: Attribute name for FIELD, integer position for INDEX, the
               original key object for KEY.
    """

    kind: SegmentKind
    value: Any

    @classmethod
    def field(cls, name: str) -> PathSegment:
        return cls(SegmentKind.FIELD, name)

    @classmethod
    def index(cls, position: int) -> PathSegment:
        return cls(SegmentKind.INDEX, position)

    @classmethod
    def key(cls, key: Any) -> PathSegment:
        return cls(SegmentKind.KEY, key)

    def __str__(self) -> str:
        if self.kind == SegmentKind.INDEX:
            return f"[{self.value}]"
        return str(self.value)
