"""Similarity module for the fuzzy row grouper.

This module provides grapheme-aware edit distance and the 0-100 similarity
score used by the grouping engine.
"""

from .edit_distance import (
    ENGINES,
    grapheme_distance,
    levenshtein_distance,
    split_graphemes,
)
from .scoring import similarity

__all__ = [
    "ENGINES",
    "grapheme_distance",
    "levenshtein_distance",
    "similarity",
    "split_graphemes",
]
