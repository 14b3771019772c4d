"""
Tests for greedy similarity grouping.
"""

import pytest
from hypothesis import given, strategies as st

from src.grouping import (
    PartitionStats,
    group_by_similarity,
    is_strict_partition,
    partition_stats,
)

keys_strategy = st.lists(st.text(alphabet="abcAB", max_size=4), max_size=8)


class TestGroupBySimilarity:
    """Compatible (default) grouping behaviour."""

    def test_empty_keys(self):
        assert group_by_similarity([], 80, True) == []

    def test_all_distinct_at_100_are_singletons(self):
        keys = ["alpha", "beta", "gamma", "delta"]
        assert group_by_similarity(keys, 100, True) == [[0], [1], [2], [3]]

    def test_fruit_scenario(self):
        """apple/aple score exactly 80 and merge; banana stays alone.

        Row 0 is a representative, so it is never marked visited and row 1's
        own group pulls it back in.
        """
        keys = ["apple", "aple", "banana"]
        assert group_by_similarity(keys, 80, True) == [[0, 1], [1, 0], [2]]

    def test_threshold_zero(self):
        keys = ["x", "y", "z", "w"]
        assert group_by_similarity(keys, 0, True) == [[0, 1, 2, 3], [1, 0], [2], [3]]

    def test_case_insensitive_merges(self):
        assert group_by_similarity(["AB", "ab"], 100, False) == [[0, 1], [1, 0]]

    def test_case_sensitive_keeps_apart(self):
        assert group_by_similarity(["AB", "ab"], 100, True) == [[0], [1]]

    def test_duplicate_values(self):
        assert group_by_similarity(["x", "x", "x"], 100, True) == [[0, 1, 2], [1, 0], [2]]

    def test_no_transitive_merging(self):
        """aaaa~aaab and aaab~aabb at 75, but aaaa and aabb only score 50."""
        keys = ["aaaa", "aaab", "aabb"]
        assert group_by_similarity(keys, 75, True) == [[0, 1], [1, 0, 2], [2]]

    def test_one_group_per_row_with_own_representative(self):
        keys = ["ann", "anne", "bob", "bobby", "ann"]
        groups = group_by_similarity(keys, 60, True)
        assert len(groups) == len(keys)
        assert [g[0] for g in groups] == list(range(len(keys)))

    def test_input_not_mutated(self):
        keys = ["b", "a", "b"]
        group_by_similarity(keys, 100, True)
        assert keys == ["b", "a", "b"]

    @given(keys=keys_strategy, threshold=st.integers(0, 100), case_sensitive=st.booleans())
    def test_deterministic(self, keys, threshold, case_sensitive):
        first = group_by_similarity(keys, threshold, case_sensitive)
        second = group_by_similarity(keys, threshold, case_sensitive)
        assert first == second

    @given(keys=keys_strategy, threshold=st.integers(0, 100), case_sensitive=st.booleans())
    def test_every_row_is_covered(self, keys, threshold, case_sensitive):
        groups = group_by_similarity(keys, threshold, case_sensitive)
        assert {i for g in groups for i in g} == set(range(len(keys)))
        for group in groups:
            assert len(group) == len(set(group))

    @given(keys=keys_strategy, threshold=st.integers(0, 100))
    def test_engines_agree(self, keys, threshold):
        assert group_by_similarity(keys, threshold, True, engine="rapidfuzz") == group_by_similarity(
            keys, threshold, True, engine="python"
        )


class TestStrictGrouping:
    """strict=True produces a true partition."""

    def test_fruit_scenario(self):
        keys = ["apple", "aple", "banana"]
        assert group_by_similarity(keys, 80, True, strict=True) == [[0, 1], [2]]

    def test_threshold_zero_single_group(self):
        keys = ["x", "y", "z", "w"]
        assert group_by_similarity(keys, 0, True, strict=True) == [[0, 1, 2, 3]]

    def test_case_insensitive_merges(self):
        assert group_by_similarity(["AB", "ab"], 100, False, strict=True) == [[0, 1]]

    def test_no_transitive_merging(self):
        keys = ["aaaa", "aaab", "aabb"]
        assert group_by_similarity(keys, 75, True, strict=True) == [[0, 1], [2]]

    def test_all_distinct_at_100_are_singletons(self):
        keys = ["alpha", "beta", "gamma"]
        assert group_by_similarity(keys, 100, True, strict=True) == [[0], [1], [2]]

    @given(keys=keys_strategy, threshold=st.integers(0, 100), case_sensitive=st.booleans())
    def test_is_partition(self, keys, threshold, case_sensitive):
        groups = group_by_similarity(keys, threshold, case_sensitive, strict=True)
        assert is_strict_partition(groups, len(keys))

    def test_skipped_representative_frees_its_candidates(self):
        """Row 1 is absorbed by row 0, so its group never runs and row 3 stays
        available for row 2. The compatible run lets row 1 claim row 3 instead.
        """
        keys = ["aaaa", "aaab", "abbb", "aabb"]
        assert group_by_similarity(keys, 75, True) == [[0, 1], [1, 0, 3], [2], [3, 2]]
        assert group_by_similarity(keys, 75, True, strict=True) == [[0, 1], [2, 3]]

    @given(keys=keys_strategy, threshold=st.integers(0, 100), case_sensitive=st.booleans())
    def test_representatives_in_index_order(self, keys, threshold, case_sensitive):
        groups = group_by_similarity(keys, threshold, case_sensitive, strict=True)
        representatives = [g[0] for g in groups]
        assert representatives == sorted(representatives)


class TestPartitionHelpers:
    """Test partition helper functions."""

    def test_is_strict_partition(self):
        assert is_strict_partition([[0, 1], [2]], 3)
        assert is_strict_partition([], 0)
        assert not is_strict_partition([[0, 1], [1, 0], [2]], 3)
        assert not is_strict_partition([[0], [2]], 3)
        assert not is_strict_partition([[0], [1], [5]], 3)

    def test_partition_stats(self):
        stats = partition_stats([[0, 1], [1, 0, 2], [2], [3]])
        assert stats == PartitionStats(
            group_count=4,
            multi_member_groups=2,
            largest_group=3,
            repeated_rows=3,
        )

    def test_partition_stats_empty(self):
        assert partition_stats([]) == PartitionStats(0, 0, 0, 0)

    def test_partition_stats_validation(self):
        with pytest.raises(ValueError, match="multi_member_groups 3 exceeds group_count 2"):
            PartitionStats(group_count=2, multi_member_groups=3, largest_group=2, repeated_rows=0)
