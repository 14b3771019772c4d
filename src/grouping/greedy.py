"""Greedy similarity grouping for row keys.

This module groups a sequence of keys in a single deterministic pass. Each
row starts as the representative of its own group. Groups are visited in
index order, and each one absorbs every row not yet absorbed elsewhere whose
key is similar enough to its representative. Representatives are never
marked as absorbed, so by default a row can appear in an earlier group and
again as the representative of its own group; strict mode drops those
repeated groups.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from src.similarity.scoring import similarity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartitionStats:
    """Summary of a grouping result.

    Attributes:
        group_count: Number of groups returned
        multi_member_groups: Groups holding more than their representative
        largest_group: Size of the largest group (0 for no groups)
        repeated_rows: Row indices appearing in more than one group
    """
    group_count: int
    multi_member_groups: int
    largest_group: int
    repeated_rows: int

    def __post_init__(self):
        """Validate stats after initialization."""
        if self.multi_member_groups > self.group_count:
            raise ValueError(
                f"multi_member_groups {self.multi_member_groups} exceeds group_count {self.group_count}"
            )


def group_by_similarity(
    keys: Sequence[str],
    similarity_threshold: int,
    case_sensitive: bool = True,
    strict: bool = False,
    engine: str = "python",
) -> list[list[int]]:
    """Group row indices whose keys are similar to a group representative.

    The threshold is expected to be validated by the caller (0-100).

    By default the output reproduces the historical behaviour: one group per
    row, representative first, where representatives are never marked
    visited. A row absorbed by an earlier group therefore still leads its own
    later group, and may even pull in an earlier representative. With
    ``strict=True`` representatives are marked visited as their group starts
    and groups led by an already-visited row are dropped, so every index
    appears exactly once.

    Args:
        keys: One key per row, in row order
        similarity_threshold: Minimum score for a candidate to join a group
        case_sensitive: Compare keys case-sensitively
        strict: Produce a true partition (see above)
        engine: Distance engine passed to similarity()

    Returns:
        List of groups, each a list of row indices in merge order

    """
    n = len(keys)
    groups: list[list[int]] = [[i] for i in range(n)]
    visited = [False] * n
    result: list[list[int]] = []

    for group in groups:
        representative = group[0]
        if strict:
            if visited[representative]:
                continue
            visited[representative] = True

        for i in range(n):
            if i in group or visited[i]:
                continue
            score = similarity(keys[representative], keys[i], case_sensitive, engine)
            if score >= similarity_threshold:
                group.append(i)
                visited[i] = True

        result.append(group)

    logger.debug(
        f"Grouped {n} keys into {len(result)} groups at threshold {similarity_threshold} "
        f"(case_sensitive={case_sensitive}, strict={strict})"
    )
    return result


def is_strict_partition(groups: Sequence[Sequence[int]], n: int) -> bool:
    """Check that every index in 0..n appears in exactly one group.

    Args:
        groups: Grouping result
        n: Number of rows that were grouped

    Returns:
        True if the groups form a true partition of range(n)

    """
    counts = Counter(index for group in groups for index in group)
    return sorted(counts) == list(range(n)) and all(c == 1 for c in counts.values())


def partition_stats(groups: Sequence[Sequence[int]]) -> PartitionStats:
    """Compute summary statistics for a grouping result."""
    counts = Counter(index for group in groups for index in group)
    return PartitionStats(
        group_count=len(groups),
        multi_member_groups=sum(1 for group in groups if len(group) > 1),
        largest_group=max((len(group) for group in groups), default=0),
        repeated_rows=sum(1 for c in counts.values() if c > 1),
    )
