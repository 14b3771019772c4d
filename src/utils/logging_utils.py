"""Logging utilities for the fuzzy row grouper."""

import logging
from pathlib import Path
from typing import Optional

from src.utils.path_utils import ensure_directory_exists

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure logging for the grouper.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path of a log file written alongside stderr

    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        ensure_directory_exists(Path(log_file).parent)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance

    """
    return logging.getLogger(name)
