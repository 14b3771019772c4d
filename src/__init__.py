"""Fuzzy row grouper: group table rows by edit-distance similarity of a column."""
