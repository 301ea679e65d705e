"""Public API functions for reflection-diff.

This module provides the user-facing functions: compare, is_equal, and
render_path.  Each comparison call creates a fresh ReflectionComparator so that
no state is shared between calls.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from typing import Any

from reflection_diff.algorithm.config import ComparatorConfig, ComparatorMode
from reflection_diff.comparator import ReflectionComparator
from reflection_diff.result import ComparisonOutcome, Difference, NoDifference
from reflection_diff.tree.nodes import PathSegment
from reflection_diff.tree.path import TOP_LEVEL, render_segments

__all__ = ["compare", "is_equal", "render_path"]


def _resolve_config(
    modes: tuple[ComparatorMode | str, ...],
    config: ComparatorConfig | None,
    collect_all: bool | None = None,
) -> ComparatorConfig:
    base = config if config is not None else ComparatorConfig()
    changes: dict[str, Any] = {}
    if modes:
        changes["modes"] = base.modes | frozenset(modes)
    if collect_all is not None:
        changes["collect_all"] = collect_all
    return replace(base, **changes) if changes else base


def compare(
    left: Any,
    right: Any,
    *modes: ComparatorMode | str,
    collect_all: bool | None = None,
    config: ComparatorConfig | None = None,
) -> ComparisonOutcome:
    """Compare two values and return the difference between them.

    Args:
        left:        Left (expected) value.
        right:       Right (actual) value.
        *modes:      Leniency modes, as members or strings (``"lenient_order"``).
                     Added to the modes of ``config`` when both are given.
        collect_all: Return the whole difference tree instead of the first
                     difference.  None (default) keeps ``config.collect_all``,
                     which is False unless a config says otherwise.
        config:      Base configuration.  Defaults to ``ComparatorConfig()``.

    Returns:
        ``NO_DIFFERENCE`` (falsy) when the values are equal, else a
        ``Difference``.

    Raises:
        ValueError: An unknown mode was given.
    """
    resolved = _resolve_config(modes, config, collect_all)
    return ReflectionComparator(config=resolved).compare(left, right)


def is_equal(
    left: Any,
    right: Any,
    *modes: ComparatorMode | str,
    config: ComparatorConfig | None = None,
) -> bool:
    """Return True if the two values are equal under the given modes.

    Args:
        left:   Left (expected) value.
        right:  Right (actual) value.
        *modes: Leniency modes, as members or strings.
        config: Base configuration.  Defaults to ``ComparatorConfig()``.
    """
    resolved = _resolve_config(modes, config)
    return ReflectionComparator(config=resolved).is_equal(left, right)


def render_path(
    difference_or_path: ComparisonOutcome | Iterable[PathSegment],
) -> str:
    """Render the location of a difference as ``a.b[0].c``.

    Args:
        difference_or_path: A ``Difference``, ``NO_DIFFERENCE``, or a sequence
            of PathSegments.

    Returns:
        The rendered path; ``<top-level>`` for an empty path or NO_DIFFERENCE.
    """
    if isinstance(difference_or_path, NoDifference):
        return TOP_LEVEL
    if isinstance(difference_or_path, Difference):
        return difference_or_path.rendered_path
    return render_segments(difference_or_path)
