"""Grapheme-aware Levenshtein distance.

Distances are counted in extended grapheme clusters (user-perceived
characters), so a base letter plus combining marks, or an emoji ZWJ
sequence, is a single edit unit.
"""

from __future__ import annotations

import logging

import regex
from rapidfuzz.distance import Levenshtein

logger = logging.getLogger(__name__)

ENGINES = ("python", "rapidfuzz")

_GRAPHEME_PATTERN = regex.compile(r"\X")


def split_graphemes(text: str) -> list[str]:
    """Split text into extended grapheme clusters.

    Args:
        text: Input string

    Returns:
        List of grapheme clusters in order

    """
    return _GRAPHEME_PATTERN.findall(text)


def levenshtein_distance(left: str, right: str) -> int:
    """Compute the Levenshtein distance between two strings over graphemes.

    Full (rows x cols) dynamic-programming table, O(len(left) * len(right))
    in time and memory. Very long keys are the known scaling limit.

    Args:
        left: First string
        right: Second string

    Returns:
        Minimum number of grapheme insertions, deletions or substitutions

    """
    l_units = split_graphemes(left)
    r_units = split_graphemes(right)
    rows = len(r_units) + 1
    cols = len(l_units) + 1
    table = [[0] * cols for _ in range(rows)]

    for row in range(rows):
        table[row][0] = row
    for col in range(cols):
        table[0][col] = col

    for row in range(1, rows):
        for col in range(1, cols):
            if l_units[col - 1] == r_units[row - 1]:
                table[row][col] = table[row - 1][col - 1]
            else:
                table[row][col] = (
                    min(
                        table[row - 1][col - 1],
                        table[row - 1][col],
                        table[row][col - 1],
                    )
                    + 1
                )

    return table[rows - 1][cols - 1]


def grapheme_distance(left: str, right: str, engine: str = "python") -> int:
    """Levenshtein distance over graphemes using the selected engine.

    Engine Selection:
    - "python" → the reference DP table in levenshtein_distance
    - "rapidfuzz" → rapidfuzz's Levenshtein over the two grapheme lists
      (unit weights, so results are identical)

    Args:
        left: First string
        right: Second string
        engine: "python" or "rapidfuzz"

    Returns:
        Edit distance in graphemes

    Raises:
        ValueError: If the engine name is unknown

    """
    if engine == "python":
        return levenshtein_distance(left, right)
    if engine == "rapidfuzz":
        return int(Levenshtein.distance(split_graphemes(left), split_graphemes(right)))
    raise ValueError(f"Unknown distance engine '{engine}', expected one of {ENGINES}")
