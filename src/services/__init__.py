"""Services layer for the fuzzy row grouper.

This package provides service classes that coordinate between front ends and core algorithms.
"""

from .grouping_session import GroupingSession, LogLevel, LogMessage

__all__ = [
    "GroupingSession",
    "LogLevel",
    "LogMessage",
]
