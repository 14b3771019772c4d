"""Grouping session: the state an interactive front end owns.

A session holds the open table, the current settings, the pending or
finished grouping run and a list of user-facing messages. I/O failures are
recorded as messages rather than raised, so a front end can show them as
dismissible notifications and carry on.
"""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from src.grouping.dispatch import GroupingRunner
from src.utils.errors import SessionError, TableReadError, TableWriteError
from src.utils.io_utils import Table, extract_keys, read_table, write_grouped_table
from src.utils.logging_utils import get_logger
from src.utils.settings import AppSettings, clamp_similarity

logger = get_logger(__name__)


class LogLevel(Enum):
    """Severity of a user-facing message."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class LogMessage:
    """A user-facing message waiting to be confirmed."""

    msg: str
    level: LogLevel


class GroupingSession:
    """Coordinate table loading, background grouping and export."""

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        runner: Optional[GroupingRunner] = None,
    ) -> None:
        """Initialize the session.

        Args:
            settings: Application settings (defaults if None)
            runner: Background runner; one is created and owned if None
        """
        self.settings = settings or AppSettings()
        self._owns_runner = runner is None
        self._runner = runner or GroupingRunner()
        self.table: Optional[Table] = None
        self.messages: list[LogMessage] = []
        self._task: Optional["Future[list[list[int]]]"] = None

    # ---- messages ---------------------------------------------------

    def _notify(self, msg: str, level: LogLevel) -> None:
        self.messages.append(LogMessage(msg, level))
        if level is LogLevel.ERROR:
            logger.error(msg)
        elif level is LogLevel.WARNING:
            logger.warning(msg)
        else:
            logger.info(msg)

    @property
    def last_message(self) -> Optional[LogMessage]:
        """Most recent unconfirmed message, if any."""
        return self.messages[-1] if self.messages else None

    def confirm_message(self) -> Optional[LogMessage]:
        """Dismiss and return the most recent message."""
        return self.messages.pop() if self.messages else None

    # ---- table ------------------------------------------------------

    def open_table(self, path: Union[str, Path]) -> bool:
        """Load a CSV file as the current table.

        Returns:
            True on success; on failure an error message is recorded and the
            previously open table is kept

        """
        try:
            self.table = read_table(path)
        except TableReadError as e:
            logger.debug(f"open_table failed: {e}")
            self._notify("Failed to parse the csv file", LogLevel.ERROR)
            return False
        return True

    # ---- grouping ---------------------------------------------------

    def start_grouping(self) -> "Future[list[list[int]]]":
        """Submit a grouping run for the selected column.

        Keys are snapshotted before submission, so reopening a table while the
        run is in flight does not affect it. A previous unfinished run keeps
        running; its result is simply no longer tracked.

        Raises:
            SessionError: If no table is open
            ValueError: If the configured column does not exist

        """
        if self.table is None:
            raise SessionError("No table is open")

        grouping = self.settings.grouping
        keys = extract_keys(self.table, grouping.column)
        self._task = self._runner.submit(
            keys,
            clamp_similarity(grouping.similarity),
            case_sensitive=grouping.case_sensitive,
            strict=grouping.strict_partition,
            engine=grouping.engine,
        )
        return self._task

    @property
    def is_running(self) -> bool:
        """True while a submitted run has not finished."""
        return self._task is not None and not self._task.done()

    def poll(self) -> Optional[list[list[int]]]:
        """Return the latest result without blocking, or None if not ready."""
        if self._task is None or not self._task.done():
            return None
        return self._task.result()

    def wait(self, timeout: Optional[float] = None) -> list[list[int]]:
        """Block until the latest run finishes and return its groups.

        Raises:
            SessionError: If no run was started
            concurrent.futures.TimeoutError: If timeout expires first

        """
        if self._task is None:
            raise SessionError("No grouping run was started")
        return self._task.result(timeout=timeout)

    # ---- export -----------------------------------------------------

    def export(self, path: Union[str, Path]) -> bool:
        """Write the finished grouping to CSV.

        Returns:
            True on success; otherwise a warning or error message is recorded

        """
        groups = self.poll()
        if self.table is None or groups is None:
            self._notify("No grouping result to export", LogLevel.WARNING)
            return False
        try:
            write_grouped_table(path, self.table, groups)
        except TableWriteError as e:
            self._notify(f"Failed to export to {path}: {e.__cause__ or e}", LogLevel.ERROR)
            return False
        self._notify(f"Exported to {path}", LogLevel.INFO)
        return True

    def close(self) -> None:
        """Release the background runner if this session created it."""
        if self._owns_runner:
            self._runner.shutdown(wait=True)
