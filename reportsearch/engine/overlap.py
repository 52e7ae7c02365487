"""Consolidation of overlapping window candidates."""

from typing import List, Sequence

from reportsearch.engine.window import WindowCandidate


def non_overlapping_matches(matches: Sequence[WindowCandidate]) -> List[WindowCandidate]:
    """
    Keep one representative per run of overlapping candidates.

    Candidates must be ordered by span start. A run is a chain of spans
    where each one starts at or before the end of the run so far, so two
    spans that do not touch (e.g. 1-3 and 4-5) still share a run when a
    third span (2-4) bridges them. The representative is the lowest
    distance candidate of the whole run; the earliest wins ties.

    Args:
        matches: (distance, span) candidates ordered by span start

    Returns:
        One (distance, span) per run, in order
    """
    if len(matches) <= 1:
        return list(matches)

    representatives: List[WindowCandidate] = []
    best_curr_match = matches[0]
    run_end = best_curr_match[1].end
    for candidate in matches:
        dist, span = candidate
        if span.start <= run_end:
            run_end = max(run_end, span.end)
            if dist < best_curr_match[0]:
                best_curr_match = candidate
        else:
            representatives.append(best_curr_match)
            best_curr_match = candidate
            run_end = span.end
    representatives.append(best_curr_match)
    return representatives
