"""Comparison algorithms: configuration, leniency policies, and comparators."""

from __future__ import annotations

from reflection_diff.algorithm.config import ComparatorConfig, ComparatorMode
from reflection_diff.algorithm.context import ComparisonContext
from reflection_diff.algorithm.maps import compare_maps
from reflection_diff.algorithm.matcher import best_pairs, mismatch_score
from reflection_diff.algorithm.records import compare_records
from reflection_diff.algorithm.scalars import compare_dates, compare_scalars
from reflection_diff.algorithm.sequences import compare_sequences

__all__ = [
    "ComparatorConfig",
    "ComparatorMode",
    "ComparisonContext",
    "best_pairs",
    "compare_dates",
    "compare_maps",
    "compare_records",
    "compare_scalars",
    "compare_sequences",
    "mismatch_score",
]
