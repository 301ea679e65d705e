"""CycleGuard: identity-keyed visited set that stops recursion on cycles.

A pair of operands moves from Unvisited to Visited the first time the
comparator descends into it and never moves back.  Meeting a Visited pair again
within the same top-level call (on a cycle, or as a sibling whose comparison
already finished) prunes that branch as no difference.

The guard keys on the identity of both operands, not on value equality:
structurally equal but distinct objects are never conflated with real aliasing.
The operands themselves are held alongside their ids so that no id can be
recycled by the garbage collector while the comparison is running.
"""

from __future__ import annotations

from typing import Any

__all__ = ["CycleGuard"]


class CycleGuard:
    """Visited set of ``(id(left), id(right))`` pairs for one comparison."""

    __slots__ = ("_visited",)

    def __init__(
        self,
        visited: dict[tuple[int, int], tuple[Any, Any]] | None = None,
    ) -> None:
        self._visited: dict[tuple[int, int], tuple[Any, Any]] = (
            dict(visited) if visited is not None else {}
        )

    def __len__(self) -> int:
        return len(self._visited)

    def __contains__(self, pair: tuple[Any, Any]) -> bool:
        left, right = pair
        return (id(left), id(right)) in self._visited

    def enter(self, left: Any, right: Any) -> bool:
        """Register the pair; return False when it was already visited."""
        key = (id(left), id(right))
        if key in self._visited:
            return False
        self._visited[key] = (left, right)
        return True

    def fork(self) -> CycleGuard:
        """Return an independent copy sharing the pairs visited so far.

        Used for trial comparisons (lenient-order matching) whose registrations
        must not leak back into the main traversal.
        """
        return CycleGuard(self._visited)
