"""Background dispatch for grouping runs.

Grouping is O(N^2 * L^2) and can take seconds on large tables, so
interactive callers hand it to a worker thread and poll the returned future.
"""

from __future__ import annotations

import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional, Sequence

from src.grouping.greedy import group_by_similarity
from src.utils.logging_utils import get_logger

logger = get_logger(__name__)


class GroupingRunner:
    """Run grouping jobs on a single dedicated worker thread.

    Each submission captures its own immutable snapshot of the keys, so the
    caller may replace or mutate its table while a run is in flight. Results
    are delivered once, through the returned future, after the full grouping
    is computed. A started run is never interrupted.
    """

    def __init__(self, thread_name_prefix: str = "grouping") -> None:
        """Initialize the runner.

        Args:
            thread_name_prefix: Name prefix for the worker thread
        """
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=thread_name_prefix,
        )

    def submit(
        self,
        keys: Sequence[str],
        similarity_threshold: int,
        case_sensitive: bool = True,
        strict: bool = False,
        engine: str = "python",
    ) -> "Future[list[list[int]]]":
        """Submit a grouping run.

        Args:
            keys: One key per row; copied before the worker starts
            similarity_threshold: Minimum score (0-100) to join a group
            case_sensitive: Compare keys case-sensitively
            strict: Produce a true partition
            engine: Distance engine

        Returns:
            Future resolving to the list of groups

        """
        snapshot = tuple(keys)
        logger.info(
            f"Submitting grouping run: {len(snapshot)} keys, threshold={similarity_threshold}, "
            f"case_sensitive={case_sensitive}, strict={strict}, engine={engine}"
        )
        return self._executor.submit(
            _timed_grouping, snapshot, similarity_threshold, case_sensitive, strict, engine,
        )

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting runs and release the worker thread."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "GroupingRunner":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.shutdown(wait=True)
        return None


def _timed_grouping(
    keys: tuple[str, ...],
    similarity_threshold: int,
    case_sensitive: bool,
    strict: bool,
    engine: str,
) -> list[list[int]]:
    start = time.perf_counter()
    groups = group_by_similarity(keys, similarity_threshold, case_sensitive, strict, engine)
    elapsed = time.perf_counter() - start
    logger.info(f"Grouping finished: {len(groups)} groups from {len(keys)} keys in {elapsed:.2f}s")
    return groups
