"""Command line entry point for the fuzzy row grouper.

Usage:
    fuzzy-row-grouper --input data.csv --column Name --similarity 80
    fuzzy-row-grouper --input data.csv --column 2 --case-insensitive --output grouped.csv --show
"""

import argparse
import os
import sys
from typing import Optional, Sequence

import pandas as pd

from src.grouping.greedy import partition_stats
from src.services.grouping_session import GroupingSession, LogLevel
from src.similarity.edit_distance import ENGINES
from src.utils.errors import GrouperError
from src.utils.io_utils import build_grouped_frame
from src.utils.logging_utils import LOG_LEVELS, get_logger, setup_logging
from src.utils.path_utils import get_config_path
from src.utils.settings import clamp_similarity, load_settings, validate_settings

__version__ = "0.3.0"

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Group CSV rows by edit-distance similarity of one column",
    )
    parser.add_argument("--input", required=True, help="Input CSV file path (must have a header row)")
    parser.add_argument("--column", help="Column to group by (header name or 0-based index)")
    parser.add_argument(
        "--similarity",
        type=int,
        help="Minimum similarity 0-100 for a row to join a group (clamped into range)",
    )
    parser.add_argument(
        "--case-insensitive",
        action="store_true",
        help="Lower-case keys before comparing",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Assign every row to exactly one group (drops repeated representative groups)",
    )
    parser.add_argument("--engine", choices=list(ENGINES), help="Edit distance engine")
    parser.add_argument("--output", help="Write the grouped table to this CSV path")
    parser.add_argument(
        "--config",
        default=str(get_config_path()),
        help="Configuration file path",
    )
    parser.add_argument("--log-level", choices=list(LOG_LEVELS), help="Logging level")
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the grouped table to stdout",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Fuzzy Row Grouper v{__version__}",
        help="Show version information and exit",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Process exit code

    """
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
    except GrouperError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    grouping = settings.grouping
    if args.column is not None:
        grouping.column = args.column
    if args.similarity is not None:
        grouping.similarity = clamp_similarity(args.similarity)
    if args.case_insensitive:
        grouping.case_sensitive = False
    if args.strict:
        grouping.strict_partition = True
    if args.engine:
        grouping.engine = args.engine
    if args.log_level:
        settings.log_level = args.log_level

    setup_logging(settings.log_level, settings.log_file)
    for warning in validate_settings(settings):
        logger.warning(f"Settings: {warning}")

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    session = GroupingSession(settings)
    try:
        if not session.open_table(args.input):
            return 1

        try:
            session.start_grouping()
        except ValueError as e:
            logger.error(str(e))
            return 1

        try:
            groups = session.wait()
        except (GrouperError, ValueError) as e:
            logger.error(f"Grouping failed: {e}")
            return 1
        stats = partition_stats(groups)
        logger.info(
            f"Groups: {stats.group_count} ({stats.multi_member_groups} with more than one row, "
            f"largest {stats.largest_group})"
        )

        if args.show:
            frame = build_grouped_frame(session.table, groups)
            with pd.option_context("display.max_rows", None, "display.max_columns", None):
                print(frame.to_string(index=False))

        if args.output and not session.export(args.output):
            return 1
        return 0
    except KeyboardInterrupt:
        logger.warning("Grouping interrupted by user (Ctrl+C)")
        return 130
    finally:
        for message in session.messages:
            if message.level is not LogLevel.INFO:
                print(f"{message.level.value.upper()}: {message.msg}", file=sys.stderr)
        session.close()


if __name__ == "__main__":
    sys.exit(main())
