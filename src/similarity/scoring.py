"""Similarity scoring functionality."""

from __future__ import annotations

from src.similarity.edit_distance import grapheme_distance, split_graphemes


def similarity(
    left: str,
    right: str,
    case_sensitive: bool = True,
    engine: str = "python",
) -> int:
    """Score two keys on a 0-100 scale from their grapheme edit distance.

    The score is linear in edit distance relative to the longer key:
    ``(max_len - distance) * 100 // max_len``. Edit distance never exceeds
    ``max_len``, so the result stays within [0, 100]. Two empty keys score 100.

    Args:
        left: First key
        right: Second key
        case_sensitive: When False both keys are lower-cased first
        engine: Distance engine ("python" or "rapidfuzz")

    Returns:
        Integer similarity score in [0, 100]

    """
    if not case_sensitive:
        left = left.lower()
        right = right.lower()

    max_len = max(len(split_graphemes(left)), len(split_graphemes(right)))

    # Both keys empty
    if max_len == 0:
        return 100

    distance = grapheme_distance(left, right, engine)
    return (max_len - distance) * 100 // max_len
