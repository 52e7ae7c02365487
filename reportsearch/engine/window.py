"""
Partial (windowed) approximate string search.

Slides a window the length of the shorter string across the longer one and
evaluates a bounded distance at each position. Positions are reported as
1-indexed inclusive ``Span`` values.
"""

from typing import List, Tuple

from reportsearch.core.schemas import Span
from reportsearch.engine.distance import thresholded_distance
from reportsearch.engine.interfaces import DistanceMeasure

WindowCandidate = Tuple[int, Span]


def _order(s1: str, s2: str) -> Tuple[str, str]:
    """Return (shorter, longer)."""
    return (s1, s2) if len(s1) <= len(s2) else (s2, s1)


def find_best_window(
    query: str,
    target: str,
    measure: DistanceMeasure,
    max_distance: int
) -> WindowCandidate:
    """
    Find the closest window of the target to the query.

    The budget handed to the distance measure shrinks to the best distance
    found so far, so later windows stop early once they cannot win. Ties go
    to the leftmost window.

    Args:
        query: Pattern string
        target: String to search in
        measure: Distance capability
        max_distance: Distance budget

    Returns:
        (distance, span) of the best window. When no window is within the
        budget the distance is ``max_distance + 1`` and the span is empty.
    """
    pattern, text = _order(query, target)
    len1, len2 = len(pattern), len(text)

    if len1 == len2:
        return thresholded_distance(measure, pattern, text, max_distance), Span(1, len2)

    best = max_distance + 1
    if len1 == 0:
        return best, Span.empty()

    best_start = 0
    budget = max_distance
    for start in range(len2 - len1 + 1):
        curr = thresholded_distance(measure, pattern, text[start:start + len1], budget)
        if curr < best:
            best = curr
            best_start = start
            budget = curr
            if best == 0:
                break

    if best > max_distance:
        return best, Span.empty()
    return best, Span(best_start + 1, best_start + len1)


def find_all_windows(
    query: str,
    target: str,
    measure: DistanceMeasure,
    max_distance: int
) -> List[WindowCandidate]:
    """
    Find every window of the target within the distance budget.

    The budget never shrinks here, since every qualifying window is kept.

    Args:
        query: Pattern string
        target: String to search in
        measure: Distance capability
        max_distance: Distance budget

    Returns:
        (distance, span) pairs, ordered by span start
    """
    pattern, text = _order(query, target)
    len1, len2 = len(pattern), len(text)
    matches: List[WindowCandidate] = []

    if len1 == 0:
        return matches

    if len1 == len2:
        curr = thresholded_distance(measure, pattern, text, max_distance)
        if curr <= max_distance:
            matches.append((curr, Span(1, len2)))
        return matches

    for start in range(len2 - len1 + 1):
        curr = thresholded_distance(measure, pattern, text[start:start + len1], max_distance)
        if curr <= max_distance:
            matches.append((curr, Span(start + 1, start + len1)))
    return matches
