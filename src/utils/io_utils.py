"""IO utilities for reading delimited tables and exporting grouped rows.

Export layout (kept stable so existing exports stay comparable):
- header: "Index" followed by the original headers
- for each group, one line per member: original row index, then the row cells
- one fully blank line (same column count) after every group
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from src.utils.errors import TableReadError, TableWriteError
from src.utils.logging_utils import get_logger

logger = get_logger(__name__)

INDEX_HEADER = "Index"


@dataclass
class Table:
    """A parsed delimited file: headers plus string cells."""

    path: str
    headers: list[str]
    rows: list[list[str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


def _read_raw_csv(path: Path, skip_blank_lines: bool) -> pd.DataFrame:
    """Read a CSV with every cell kept as the literal string in the file."""
    df = pd.read_csv(
        path,
        header=None,
        dtype=str,
        keep_default_na=False,
        na_filter=False,
        skip_blank_lines=skip_blank_lines,
        encoding="utf-8",
    )
    # Short rows are padded by the parser
    return df.fillna("")


def read_table(path: Union[str, Path]) -> Table:
    """Read a CSV file with a header row into a Table.

    Duplicate header names are preserved as written. Blank lines are skipped.

    Args:
        path: Path to CSV file

    Returns:
        Table with headers and string rows

    Raises:
        TableReadError: If the file is missing, empty, or malformed

    """
    path = Path(path)
    try:
        df = _read_raw_csv(path, skip_blank_lines=True)
    except FileNotFoundError as e:
        raise TableReadError(f"CSV file not found: {path}") from e
    except pd.errors.EmptyDataError as e:
        raise TableReadError(f"Empty CSV file: {path}") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise TableReadError(f"Failed to parse CSV file {path}: {e}") from e

    records = df.values.tolist()
    headers = [str(h) for h in records[0]]
    rows = [[str(cell) for cell in record] for record in records[1:]]

    logger.info(f"Loaded {len(rows)} rows, {len(headers)} columns from {path}")
    return Table(path=str(path), headers=headers, rows=rows)


def resolve_column(table: Table, column: Union[int, str]) -> int:
    """Resolve a column given by header name or position.

    A string is matched against the headers first; a string of digits that
    is not a header name is then treated as a position.

    Args:
        table: Loaded table
        column: Header name or 0-based column index

    Returns:
        0-based column index

    Raises:
        ValueError: If the column does not exist

    """
    if isinstance(column, str):
        if column in table.headers:
            return table.headers.index(column)
        if not column.isdigit():
            raise ValueError(f"Unknown column '{column}', available: {table.headers}")
        column = int(column)

    if not 0 <= column < len(table.headers):
        raise ValueError(
            f"Column index {column} out of range for {len(table.headers)} columns"
        )
    return column


def extract_keys(table: Table, column: Union[int, str]) -> list[str]:
    """Extract the grouping keys (one per row) from a column."""
    col_idx = resolve_column(table, column)
    return [row[col_idx] for row in table.rows]


def build_grouped_frame(table: Table, groups: Sequence[Sequence[int]]) -> pd.DataFrame:
    """Lay out grouped rows as a DataFrame, one blank row after each group.

    Args:
        table: Source table
        groups: Grouping result (lists of row indices)

    Returns:
        DataFrame with columns ["Index", *headers]

    """
    columns = [INDEX_HEADER] + list(table.headers)
    blank = [""] * len(columns)
    records: list[list[str]] = []
    for group in groups:
        for r_idx in group:
            records.append([str(r_idx)] + list(table.rows[r_idx]))
        records.append(blank)
    return pd.DataFrame(records, columns=columns, dtype=str)


def write_grouped_table(
    path: Union[str, Path],
    table: Table,
    groups: Sequence[Sequence[int]],
) -> None:
    """Export grouped rows to CSV.

    Args:
        path: Output CSV path
        table: Source table
        groups: Grouping result

    Raises:
        TableWriteError: If the file cannot be written

    """
    frame = build_grouped_frame(table, groups)
    try:
        frame.to_csv(path, index=False, lineterminator="\n", encoding="utf-8")
    except OSError as e:
        raise TableWriteError(f"Failed to export to {path}: {e}") from e
    logger.info(f"Exported {len(groups)} groups to {path}")


def read_grouped_table(
    path: Union[str, Path],
) -> tuple[list[str], list[list[int]], dict[int, list[str]]]:
    """Read back a grouped export.

    Args:
        path: Path of a file written by write_grouped_table

    Returns:
        Tuple of (original headers, groups, row cells keyed by original index)

    Raises:
        TableReadError: If the file is missing or not a grouped export

    """
    path = Path(path)
    try:
        df = _read_raw_csv(path, skip_blank_lines=False)
    except FileNotFoundError as e:
        raise TableReadError(f"Export file not found: {path}") from e
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise TableReadError(f"Failed to parse export {path}: {e}") from e

    records = df.values.tolist()
    header = [str(h) for h in records[0]]
    if not header or header[0] != INDEX_HEADER:
        raise TableReadError(f"{path} is not a grouped export (missing '{INDEX_HEADER}' column)")

    groups: list[list[int]] = []
    rows: dict[int, list[str]] = {}
    current: list[int] = []
    for record in records[1:]:
        cells = [str(cell) for cell in record]
        if all(cell == "" for cell in cells):
            groups.append(current)
            current = []
            continue
        r_idx = int(cells[0])
        current.append(r_idx)
        rows[r_idx] = cells[1:]
    if current:
        groups.append(current)

    return header[1:], groups, rows
