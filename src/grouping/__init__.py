"""Grouping algorithms for the fuzzy row grouper.

This package provides:
- Greedy single-pass similarity grouping
- Background dispatch of grouping runs to a worker thread
"""

from .dispatch import GroupingRunner
from .greedy import (
    PartitionStats,
    group_by_similarity,
    is_strict_partition,
    partition_stats,
)

__all__ = [
    "GroupingRunner",
    "PartitionStats",
    "group_by_similarity",
    "is_strict_partition",
    "partition_stats",
]
