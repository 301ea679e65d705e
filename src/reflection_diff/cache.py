"""LayoutCache: LRU-backed cache of per-type record field layouts.

Computing which attributes of a class take part in a comparison means walking
its MRO, reading annotations, slots, dataclass and attrs metadata.  The result
only depends on the type, so it is computed once per type and kept in an
``LRUCache``.  Eviction is silent when ``max_size`` is exceeded.

Each ``LayoutCache`` instance owns its own ``LRUCache`` guarded by its own lock:
one comparator may be shared by several threads, and two caches never share
state.

Example::

    from reflection_diff.cache import LayoutCache

    cache = LayoutCache(max_size=256)
    layout = cache.get(MyRecord, build_layout)   # computed
    layout = cache.get(MyRecord, build_layout)   # served from memory
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass

from cachetools import LRUCache

__all__ = ["FieldLayout", "LayoutCache"]


@dataclass(frozen=True, slots=True)
class FieldLayout:
    """Static description of the comparable attributes of one type.

    Attributes:
        declared: Declared attribute names (slots and annotations), the
            runtime type's own names first, then each base class in MRO order.
        excluded: Names never compared: ClassVars, transient names,
            ``compare=False`` dataclass fields, ``eq=False`` attrs fields,
            ``cached_property`` caches.
    """

    declared: tuple[str, ...]
    excluded: frozenset[str]


class LayoutCache:
    """Thread-safe LRU cache mapping a type to its FieldLayout.

    Args:
        max_size: Maximum number of types to keep.  Defaults to 256.
    """

    def __init__(self, max_size: int = 256) -> None:
        self._cache: LRUCache[type, FieldLayout] = LRUCache(maxsize=max_size)
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of layouts this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of layouts stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, cls: type, build: Callable[[type], FieldLayout]) -> FieldLayout:
        """Return the layout of ``cls``, building it with ``build`` on a miss."""
        with self._lock:
            layout = self._cache.get(cls)
        if layout is not None:
            return layout

        # ``build`` is pure; concurrent misses store equal layouts.
        layout = build(cls)
        with self._lock:
            self._cache[cls] = layout
        return layout

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
