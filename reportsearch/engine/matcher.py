"""
Query evaluation against reports.

``match`` and ``match_all`` are the single entry points for every query
variant. A failed match is a value (``None`` or ``[]``), never an error, so
results compose through Or/And without exception handling.
"""

from typing import Iterable, List, Optional, Tuple

from reportsearch.core.queries import AndQuery, FuzzyQuery, LiteralQuery, OrQuery, QueryBase
from reportsearch.core.schemas import ConjunctionMatch, Match, QueryMatch, Report, Span
from reportsearch.engine.overlap import non_overlapping_matches
from reportsearch.engine.window import find_all_windows, find_best_window
from reportsearch.utils.logger import log_match_event, setup_logger

logger = setup_logger(__name__)


def _searchable(query_text: str, report: Report) -> bool:
    """Leaf queries need non-empty text no longer than the report."""
    return 0 < len(query_text) <= len(report.text)


def _find_occurrences(pattern: str, text: str) -> List[int]:
    """0-indexed start of every occurrence, overlapping ones included."""
    starts = []
    start = text.find(pattern)
    while start != -1:
        starts.append(start)
        start = text.find(pattern, start + 1)
    return starts


def match(query: QueryBase, report: Report) -> Optional[Match]:
    """
    First (or best) match of a query in a report.

    - Literal: leftmost exact occurrence, distance 0.
    - Fuzzy: closest window, if within the threshold.
    - Or: first subquery that matches, in order.
    - And: every subquery's match as a ConjunctionMatch, or None as soon as
      one subquery fails.

    Args:
        query: Query to evaluate
        report: Report to search

    Returns:
        QueryMatch or ConjunctionMatch, or None when there is no match

    Raises:
        TypeError: If query is not a query
    """
    if isinstance(query, LiteralQuery):
        if not _searchable(query.text, report):
            return None
        start = report.text.find(query.text)
        if start == -1:
            return None
        return QueryMatch(
            query=query,
            report=report,
            distance=0,
            span=Span(start + 1, start + len(query.text))
        )

    if isinstance(query, FuzzyQuery):
        if not _searchable(query.text, report):
            return None
        dist, span = find_best_window(query.text, report.text, query.measure, query.threshold)
        log_match_event(logger, query.kind, "best window", text=repr(query.text), distance=dist)
        if dist > query.threshold:
            return None
        return QueryMatch(query=query, report=report, distance=dist, span=span)

    if isinstance(query, OrQuery):
        for subquery in query.subqueries:
            m = match(subquery, report)
            if m is not None:
                return m
        return None

    if isinstance(query, AndQuery):
        matches = []
        for idx, subquery in enumerate(query.subqueries):
            m = match(subquery, report)
            if m is None:
                log_match_event(logger, query.kind, "subquery failed", index=idx)
                return None
            matches.append(m)
        return ConjunctionMatch(matches=tuple(matches))

    raise TypeError(f"Not a query: {type(query).__name__}")


def match_all(query: QueryBase, report: Report) -> List[Match]:
    """
    Every match of a query in a report.

    - Literal: every exact occurrence, overlapping ones included.
    - Fuzzy: every window within the threshold, reduced to one
      representative per run of overlapping windows.
    - Or: each subquery's matches concatenated in subquery order.
    - And: ``[ConjunctionMatch]`` when the And matches, else ``[]``.
      Conjunctions report a single representative, not every combination.

    Args:
        query: Query to evaluate
        report: Report to search

    Returns:
        List of matches, empty when there is none

    Raises:
        TypeError: If query is not a query
    """
    if isinstance(query, LiteralQuery):
        if not _searchable(query.text, report):
            return []
        length = len(query.text)
        return [
            QueryMatch(query=query, report=report, distance=0, span=Span(start + 1, start + length))
            for start in _find_occurrences(query.text, report.text)
        ]

    if isinstance(query, FuzzyQuery):
        if not _searchable(query.text, report):
            return []
        candidates = find_all_windows(query.text, report.text, query.measure, query.threshold)
        representatives = non_overlapping_matches(candidates)
        log_match_event(
            logger, query.kind, "all windows",
            text=repr(query.text), candidates=len(candidates), kept=len(representatives)
        )
        return [
            QueryMatch(query=query, report=report, distance=dist, span=span)
            for dist, span in representatives
        ]

    if isinstance(query, OrQuery):
        results: List[Match] = []
        for subquery in query.subqueries:
            results.extend(match_all(subquery, report))
        return results

    if isinstance(query, AndQuery):
        m = match(query, report)
        return [] if m is None else [m]

    raise TypeError(f"Not a query: {type(query).__name__}")


def search(query: QueryBase, reports: Iterable[Report]) -> List[Tuple[Report, Match]]:
    """
    Match a query against each report in turn.

    A linear scan: every report is evaluated independently.

    Args:
        query: Query to evaluate
        reports: Reports to search

    Returns:
        (report, match) pairs for the reports that match, in input order
    """
    hits = []
    scanned = 0
    for report in reports:
        scanned += 1
        m = match(query, report)
        if m is not None:
            hits.append((report, m))
    logger.debug(f"Search matched {len(hits)}/{scanned} reports")
    return hits
