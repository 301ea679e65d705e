"""ComparatorConfig and ComparatorMode for reflection comparison.

ComparatorConfig is a frozen (immutable) dataclass holding the leniency modes
and traversal limits.  ComparatorMode names the three ways the default strict
comparison can be relaxed: ignoring left-hand defaults, comparing dates on
presence only, and ignoring the order of collections.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum, auto

__all__ = ["ComparatorConfig", "ComparatorMode"]


class ComparatorMode(StrEnum):
    """Leniency modes for reflection comparison.

    - IGNORE_DEFAULTS: a left value equal to its type's default (None, False,
      zero, NUL character) matches any right value.
    - LENIENT_DATES:   two dates match when both are set or both are None.
    - LENIENT_ORDER:   sequences match when they hold the same elements in
      any order.
    """

    IGNORE_DEFAULTS = auto()
    LENIENT_DATES = auto()
    LENIENT_ORDER = auto()


def _coerce_modes(modes: Iterable[ComparatorMode | str]) -> frozenset[ComparatorMode]:
    if isinstance(modes, str):
        modes = (modes,)
    coerced: set[ComparatorMode] = set()
    for mode in modes:
        try:
            coerced.add(ComparatorMode(mode))
        except ValueError:
            valid = ", ".join(m.value for m in ComparatorMode)
            msg = f"Unknown comparator mode {mode!r}; expected one of: {valid}"
            raise ValueError(msg) from None
    return frozenset(coerced)


@dataclass(frozen=True, slots=True)
class ComparatorConfig:
    """Immutable configuration for ``ReflectionComparator``.

    Attributes:
        modes: Active leniency modes.  Accepts ``ComparatorMode`` members or
            their string values (``"lenient_order"``); normalised to a
            ``frozenset[ComparatorMode]``.
        collect_all: When True, every difference is accumulated into a tree
            rooted at the top-level pair.  When False (default) the first
            located difference is returned.
        max_depth: Maximum nesting depth the comparison may descend before
            ``RecursionBudgetExceeded`` is raised.  Must be >= 1.
        value_types: Extra types compared with ``==`` as leaves instead of
            field by field.
    """

    modes: frozenset[ComparatorMode] = field(default_factory=frozenset)
    collect_all: bool = False
    max_depth: int = 200
    value_types: tuple[type, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "modes", _coerce_modes(self.modes))
        object.__setattr__(self, "value_types", tuple(self.value_types))
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)
        for value_type in self.value_types:
            if not isinstance(value_type, type):
                msg = f"value_types must contain types, got {value_type!r}"
                raise ValueError(msg)

    @property
    def ignore_defaults(self) -> bool:
        return ComparatorMode.IGNORE_DEFAULTS in self.modes

    @property
    def lenient_dates(self) -> bool:
        return ComparatorMode.LENIENT_DATES in self.modes

    @property
    def lenient_order(self) -> bool:
        return ComparatorMode.LENIENT_ORDER in self.modes
