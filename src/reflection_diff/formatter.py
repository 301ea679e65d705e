"""Plain-text rendering of difference trees for assertion messages.

Two layouts are provided:

- ``DefaultDifferenceFormatter``: one numbered entry per leaf difference with
  its message, location, and both operands.  For unordered collections the
  left elements without an equal right element are shown next to their closest
  right element, indicated as ``[left_index,right_index]``.
- ``TreeDifferenceFormatter``: every node of the tree, composite or leaf, as a
  ``[L]`` / ``[R]`` pair of lines prefixed by its location.

Values are rendered with a bounded ``reprlib.Repr`` so that huge or
self-referential operands never blow up a report.
"""

from __future__ import annotations

import reprlib
from collections.abc import Iterator
from typing import Any

from reflection_diff.result import (
    ComparisonOutcome,
    Difference,
    NoDifference,
    SequenceDifference,
)
from reflection_diff.tree.path import TOP_LEVEL

__all__ = [
    "DefaultDifferenceFormatter",
    "TreeDifferenceFormatter",
    "difference_report",
    "format_value",
]

_INDENT = "    "


def _make_repr() -> reprlib.Repr:
    value_repr = reprlib.Repr()
    value_repr.maxlevel = 4
    value_repr.maxstring = 80
    value_repr.maxother = 80
    value_repr.maxlist = value_repr.maxtuple = 10
    value_repr.maxdict = value_repr.maxset = value_repr.maxfrozenset = 10
    return value_repr


_REPR = _make_repr()


def format_value(value: Any) -> str:
    """Return a bounded, single-line representation of ``value``."""
    return _REPR.repr(value)


def _location(difference: Difference) -> str | None:
    return difference.rendered_path if difference.path else None


class DefaultDifferenceFormatter:
    """Renders the leaves of a difference tree as numbered entries.

    Example output::

        1) Different object values.
        ---------------------------
        Field: tags[0]
        Left : 'a'
        Right: 'b'
    """

    def format(self, difference: ComparisonOutcome) -> str:
        """Return the report of ``difference``; empty for NO_DIFFERENCE."""
        if isinstance(difference, NoDifference):
            return ""
        return "".join(self._entries(difference, counter=[0], indent=0))

    def _entries(
        self, difference: Difference, counter: list[int], indent: int
    ) -> Iterator[str]:
        if isinstance(difference, SequenceDifference) and difference.best_matches:
            yield from self._unordered_entries(difference, counter, indent)
            return

        has_children = False
        for _segment, child in difference.children():
            has_children = True
            yield from self._entries(child, counter, indent)
        if not has_children:
            yield self._leaf(difference, counter, indent)

    def _leaf(self, difference: Difference, counter: list[int], indent: int) -> str:
        counter[0] += 1
        message = f"{counter[0]}) {difference.message}"
        lines = [message, "-" * len(message)]
        location = _location(difference)
        if location is not None:
            lines.append(f"Field: {location}\n")
        lines.append(f"Left : {format_value(difference.left)}")
        lines.append(f"Right: {format_value(difference.right)}\n\n")
        return _indent_lines(lines, indent)

    def _unordered_entries(
        self, difference: SequenceDifference, counter: list[int], indent: int
    ) -> Iterator[str]:
        counter[0] += 1
        message = f"{counter[0]}) Different collections - Multiple possible matches"
        lines = [message, "-" * len(message)]
        location = _location(difference)
        if location is not None:
            lines.append(f"Field: {location}\n")
        lines.append("Differences with best matches:")
        lines.append("Compared elements are indicated as [leftIndex,rightIndex]\n")
        yield _indent_lines(lines, indent)

        for left_index, right_index, match in difference.best_matches:
            label = f"* [{left_index},{right_index}]"
            yield _indent_lines(
                [
                    f"{label}   Left : {format_value(match.left)}",
                    f"{' ' * len(label)}   Right: {format_value(match.right)}",
                ],
                indent,
            )
            yield "\n"
            yield from self._entries(match, counter=[0], indent=indent + 1)


class TreeDifferenceFormatter:
    """Renders every node of a difference tree with both of its operands.

    Example output::

        <top-level>   [L] Person(name='Ann', tags=['a'])
                      [R] Person(name='Ann', tags=['b'])
        tags   [L] ['a']
               [R] ['b']
        tags[0]   [L] 'a'
                  [R] 'b'
    """

    def format(self, difference: ComparisonOutcome) -> str:
        """Return the tree rendering of ``difference``; empty for NO_DIFFERENCE."""
        if isinstance(difference, NoDifference):
            return ""
        return "".join(self._nodes(difference, label=None))

    def _nodes(self, difference: Difference, label: str | None) -> Iterator[str]:
        if label is None:
            label = _location(difference) or TOP_LEVEL
        prefix = f"{label}   "
        yield f"{prefix}[L] {format_value(difference.left)}\n"
        yield f"{' ' * len(prefix)}[R] {format_value(difference.right)}\n"

        if isinstance(difference, SequenceDifference) and difference.best_matches:
            base = _location(difference) or ""
            for left_index, right_index, match in difference.best_matches:
                match_label = f"{base}[{left_index},{right_index}]"
                yield from self._nodes(match, label=match_label)
            return

        for _segment, child in difference.children():
            yield from self._nodes(child, label=None)


def _indent_lines(lines: list[str], indent: int) -> str:
    return "".join(f"{_INDENT * indent}{line}\n" for line in lines)


def difference_report(
    message: str | None,
    difference: ComparisonOutcome,
    formatter: DefaultDifferenceFormatter | TreeDifferenceFormatter | None = None,
) -> str:
    """Build an assertion failure message.

    Args:
        message:    Optional user supplied message, put on the first line.
        difference: The difference to describe.
        formatter:  Layout to use.  Defaults to ``DefaultDifferenceFormatter``.
    """
    formatter = formatter if formatter is not None else DefaultDifferenceFormatter()
    report = formatter.format(difference)
    if message:
        return f"{message}\n{report}"
    return report
