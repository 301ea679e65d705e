"""Traversal vocabulary: value kinds, path segments, path tracking, cycle guard."""

from __future__ import annotations

from reflection_diff.tree.classifier import ValueClassifier
from reflection_diff.tree.guard import CycleGuard
from reflection_diff.tree.nodes import PathSegment, SegmentKind, ValueKind
from reflection_diff.tree.path import TOP_LEVEL, PathTracker, render_segments

__all__ = [
    "TOP_LEVEL",
    "CycleGuard",
    "PathSegment",
    "PathTracker",
    "SegmentKind",
    "ValueClassifier",
    "ValueKind",
    "render_segments",
]
