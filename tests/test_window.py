"""Tests for the partial window matcher."""

from rapidfuzz.distance import Levenshtein

from reportsearch.core.schemas import Span
from reportsearch.engine.distance import CallableDistance, LevenshteinDistance
from reportsearch.engine.window import find_all_windows, find_best_window


def recording_measure(budgets):
    """Levenshtein measure that records the budget of every call."""
    def func(s1, s2, max_distance):
        budgets.append(max_distance)
        return Levenshtein.distance(s1, s2, score_cutoff=max_distance)
    return CallableDistance(func)


class TestFindBestWindow:
    """Test find-best mode."""

    def test_best_window_found(self):
        """Test that the closest window and its span are returned."""
        dist, span = find_best_window("cet", "cat dog runs ", LevenshteinDistance(), 1)
        assert dist == 1
        assert span == Span(1, 3)

    def test_ties_go_to_leftmost_window(self):
        """Test that the first window with the best distance wins."""
        dist, span = find_best_window("dog", "dig dug ", LevenshteinDistance(), 2)
        assert dist == 1
        assert span == Span(1, 3)

    def test_budget_shrinks_to_best_distance(self):
        """Test branch-and-bound pruning: later windows get the tighter budget."""
        budgets = []
        dist, span = find_best_window("abc", "abx abc", recording_measure(budgets), 2)
        assert dist == 0
        assert span == Span(5, 7)
        # "abx" scores 1, so every following window is evaluated with budget 1
        assert budgets == [2, 1, 1, 1, 1]

    def test_scan_stops_at_exact_match(self):
        """Test that no window is evaluated after a zero-distance hit."""
        budgets = []
        dist, span = find_best_window("ab", "xabyab", recording_measure(budgets), 1)
        assert dist == 0
        assert span == Span(2, 3)
        assert len(budgets) == 2

    def test_no_window_within_budget(self):
        """Test that failure returns the sentinel and an empty span."""
        dist, span = find_best_window("zzz", "abcdef", LevenshteinDistance(), 1)
        assert dist == 2
        assert span.is_empty

    def test_equal_lengths_single_evaluation(self):
        """Test that equal-length strings are compared once, as a whole."""
        budgets = []
        dist, span = find_best_window("abd ", "abc ", recording_measure(budgets), 2)
        assert dist == 1
        assert span == Span(1, 4)
        assert budgets == [2]

    def test_equal_lengths_over_budget(self):
        """Test that an equal-length miss still reports the whole span."""
        dist, span = find_best_window("abc", "xyz", LevenshteinDistance(), 1)
        assert dist == 2
        assert span == Span(1, 3)

    def test_empty_query(self):
        """Test that an empty query never matches."""
        dist, span = find_best_window("", "abc", LevenshteinDistance(), 2)
        assert dist == 3
        assert span == Span.empty()

    def test_strings_are_reordered(self):
        """Test that the shorter string is always used as the pattern."""
        dist, span = find_best_window("cat dog runs ", "dog", LevenshteinDistance(), 0)
        assert dist == 0
        assert span == Span(5, 7)


class TestFindAllWindows:
    """Test find-all mode."""

    def test_all_qualifying_windows_in_order(self):
        """Test that every window within budget is returned left to right."""
        matches = find_all_windows("ab", "abab", LevenshteinDistance(), 0)
        assert matches == [(0, Span(1, 2)), (0, Span(3, 4))]

    def test_budget_never_shrinks(self):
        """Test that every window is evaluated with the original budget."""
        budgets = []
        find_all_windows("abc", "abx abc", recording_measure(budgets), 2)
        assert budgets == [2, 2, 2, 2, 2]

    def test_windows_with_different_distances(self):
        """Test that distances are reported per window."""
        matches = find_all_windows("aaa", "xaaaax ", LevenshteinDistance(), 1)
        assert matches == [
            (1, Span(1, 3)),
            (0, Span(2, 4)),
            (0, Span(3, 5)),
            (1, Span(4, 6)),
        ]

    def test_empty_query(self):
        """Test that an empty query yields no windows."""
        assert find_all_windows("", "abc", LevenshteinDistance(), 2) == []

    def test_equal_lengths(self):
        """Test that equal-length strings yield at most the whole span."""
        assert find_all_windows("abd", "abc", LevenshteinDistance(), 1) == [(1, Span(1, 3))]
        assert find_all_windows("abd", "xyz", LevenshteinDistance(), 1) == []
