"""PathTracker: the stack of PathSegments maintained during recursive descent.

One tracker belongs to exactly one top-level ``compare()`` call.  Comparators
push a segment before recursing into a field, index, or key and pop it on the
way back out; ``snapshot()`` freezes the current route into every Difference
created at that point.

Rendering rules (``render_path``):
- FIELD and KEY segments are joined with ``.``: ``address.city``
- INDEX segments are appended in brackets: ``tags[0]``, ``[2].name``
- An empty path renders as ``<top-level>``
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from reflection_diff.tree.nodes import PathSegment, SegmentKind

__all__ = ["TOP_LEVEL", "PathTracker", "render_segments"]

TOP_LEVEL = "<top-level>"


class PathTracker:
    """Append/pop stack of PathSegments scoped to one comparison."""

    __slots__ = ("_segments",)

    def __init__(self, segments: Iterable[PathSegment] = ()) -> None:
        self._segments: list[PathSegment] = list(segments)

    def __len__(self) -> int:
        return len(self._segments)

    def push(self, segment: PathSegment) -> None:
        self._segments.append(segment)

    def pop(self) -> PathSegment:
        return self._segments.pop()

    @contextmanager
    def descend(self, segment: PathSegment) -> Iterator[None]:
        """Push ``segment`` for the duration of the ``with`` block."""
        self._segments.append(segment)
        try:
            yield
        finally:
            self._segments.pop()

    def snapshot(self) -> tuple[PathSegment, ...]:
        """Return the current route as an immutable tuple."""
        return tuple(self._segments)

    def copy(self) -> PathTracker:
        return PathTracker(self._segments)

    def render(self) -> str:
        return render_segments(self._segments)


def render_segments(segments: Iterable[PathSegment]) -> str:
    """Render a route as ``a.b[0].c``; an empty route is ``<top-level>``."""
    rendered = ""
    for segment in segments:
        if segment.kind == SegmentKind.INDEX:
            rendered += f"[{segment.value}]"
        elif rendered:
            rendered += f".{segment.value}"
        else:
            rendered = str(segment.value)
    return rendered or TOP_LEVEL
