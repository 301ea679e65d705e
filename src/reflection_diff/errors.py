"""Exception hierarchy for reflection-diff.

A difference between two values is never an error: it is the designed return
value of ``compare()``.  The exceptions below signal that the comparator could
not fulfil its contract at all, so a comparison that raises one of them yields
no partial result.
"""

from __future__ import annotations

__all__ = [
    "IntrospectionError",
    "RecursionBudgetExceeded",
    "ReflectionDiffError",
]


class ReflectionDiffError(Exception):
    """Base class for all reflection-diff failures."""


class IntrospectionError(ReflectionDiffError):
    """Reading a declared attribute of a record failed.

    Raised with the original exception chained as ``__cause__``.
    """

    def __init__(self, owner: type, name: str, reason: str) -> None:
        self.owner = owner
        self.name = name
        super().__init__(
            f"Unable to read attribute {name!r} of {owner.__qualname__}: {reason}"
        )


class RecursionBudgetExceeded(ReflectionDiffError):
    """The comparison descended deeper than ``ComparatorConfig.max_depth``."""

    def __init__(self, max_depth: int, path: str) -> None:
        self.max_depth = max_depth
        self.path = path
        super().__init__(f"Maximum comparison depth {max_depth} exceeded at {path}")
