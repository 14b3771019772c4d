"""Utility modules for the fuzzy row grouper.
"""

from .errors import (
    GrouperError,
    SessionError,
    SettingsError,
    TableReadError,
    TableWriteError,
)
from .logging_utils import get_logger, setup_logging
from .path_utils import ensure_directory_exists, get_config_path

__all__ = [
    # Errors
    "GrouperError",
    "SessionError",
    "SettingsError",
    "TableReadError",
    "TableWriteError",
    # Logging utilities
    "get_logger",
    "setup_logging",
    # Path utilities
    "ensure_directory_exists",
    "get_config_path",
]
