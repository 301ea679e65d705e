"""ValueClassifier: maps any runtime value onto exactly one ValueKind.

The dispatch order is significant:
- None first, then dates (datetime is a subclass of date, both are DATE).
- bool MUST be checked before numbers: bool subclasses int in Python, and a
  boolean is a VALUE compared with ``==``, never a NUMBER.
- Enum members before numbers and text: IntEnum and StrEnum members are ints
  and strs too, but are compared as constants.
- Text and bytes before sequences: str and bytes are Sequences but are leaves.
- Mappings before sets and sequences.

Anything that falls through every check is a RECORD.
"""

from __future__ import annotations

import array
import datetime
import decimal
import enum
import numbers
import pathlib
import types
import uuid
from collections import deque
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from typing import Any

import numpy as np

from reflection_diff.tree.nodes import ValueKind

__all__ = ["ValueClassifier", "is_date", "unwrap"]

_DATE_TYPES: tuple[type, ...] = (datetime.date, datetime.time, np.datetime64)

_BOOL_TYPES: tuple[type, ...] = (bool, np.bool_)

# Immutable library types compared with == rather than attribute by attribute.
_VALUE_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    memoryview,
    complex,
    np.complexfloating,
    np.str_,
    np.bytes_,
    uuid.UUID,
    pathlib.PurePath,
    datetime.timedelta,
    datetime.tzinfo,
    range,
    slice,
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
)

_SEQUENCE_TYPES: tuple[type, ...] = (list, tuple, deque, array.array, np.ndarray)


def is_date(value: Any) -> bool:
    """Return True for date-like values (date, datetime, time, datetime64)."""
    return isinstance(value, _DATE_TYPES)


def unwrap(value: Any) -> Any:
    """Replace a zero-dimensional numpy array by the scalar it holds."""
    if isinstance(value, np.ndarray) and value.ndim == 0:
        return value[()]
    return value


@dataclass(frozen=True)
class ValueClassifier:
    """Classifies runtime values into ValueKinds.

    Attributes:
        value_types: Extra types treated as VALUE leaves (checked after the
            built-in leaf types, before any container check).

    Example::

        classifier = ValueClassifier()
        classifier.classify([1, 2])          # ValueKind.SEQUENCE
        classifier.classify(True)            # ValueKind.VALUE
        classifier.classify(Decimal("1.5"))  # ValueKind.NUMBER
    """

    value_types: tuple[type, ...] = ()

    def classify(self, value: Any) -> ValueKind:
        """Return the ValueKind of ``value``.

        Args:
            value: Any Python object.

        Returns:
            Exactly one ValueKind.
        """
        if value is None:
            return ValueKind.NULL

        if isinstance(value, _DATE_TYPES):
            return ValueKind.DATE

        # CRITICAL: bool MUST be checked before numbers
        if isinstance(value, _BOOL_TYPES):
            return ValueKind.VALUE

        if isinstance(value, enum.Enum):
            return ValueKind.ENUM

        if isinstance(value, (numbers.Real, decimal.Decimal)):
            return ValueKind.NUMBER

        if isinstance(value, _VALUE_TYPES):
            return ValueKind.VALUE

        if self.value_types and isinstance(value, self.value_types):
            return ValueKind.VALUE

        if isinstance(value, Mapping):
            return ValueKind.MAP

        if isinstance(value, Set):
            return ValueKind.SET

        if isinstance(value, (_SEQUENCE_TYPES, Sequence)):
            return ValueKind.SEQUENCE

        return ValueKind.RECORD
