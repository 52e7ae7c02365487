"""
Bounded edit-distance measures and the thresholded distance adapter.

Measures are thin wrappers over ``rapidfuzz.distance``. Passing the budget as
``score_cutoff`` lets rapidfuzz stop as soon as the budget is exceeded, in
which case it reports ``score_cutoff + 1``.
"""

from typing import Callable, Dict, List, Type

from rapidfuzz.distance import OSA, DamerauLevenshtein, Levenshtein

from reportsearch.engine.interfaces import DistanceMeasure
from reportsearch.utils.exceptions import ConfigurationError


class LevenshteinDistance(DistanceMeasure):
    """Insertions, deletions and substitutions."""

    name = "levenshtein"

    def distance(self, s1: str, s2: str, max_distance: int) -> int:
        return Levenshtein.distance(s1, s2, score_cutoff=max_distance)


class DamerauLevenshteinDistance(DistanceMeasure):
    """Levenshtein plus transpositions of adjacent characters (unrestricted)."""

    name = "damerau_levenshtein"

    def distance(self, s1: str, s2: str, max_distance: int) -> int:
        return DamerauLevenshtein.distance(s1, s2, score_cutoff=max_distance)


class OSADistance(DistanceMeasure):
    """Optimal string alignment: restricted Damerau-Levenshtein."""

    name = "osa"

    def distance(self, s1: str, s2: str, max_distance: int) -> int:
        return OSA.distance(s1, s2, score_cutoff=max_distance)


class CallableDistance(DistanceMeasure):
    """
    Adapts any ``(s1, s2, max_distance) -> int`` function to a measure.

    The function must honor the same contract as ``DistanceMeasure.distance``.
    """

    name = "callable"

    def __init__(self, func: Callable[[str, str, int], int]):
        self.func = func

    def distance(self, s1: str, s2: str, max_distance: int) -> int:
        return self.func(s1, s2, max_distance)

    def __repr__(self) -> str:
        return f"CallableDistance({self.func!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CallableDistance) and other.func is self.func

    def __hash__(self) -> int:
        return hash(self.func)


DISTANCE_MEASURES: Dict[str, Type[DistanceMeasure]] = {
    LevenshteinDistance.name: LevenshteinDistance,
    DamerauLevenshteinDistance.name: DamerauLevenshteinDistance,
    OSADistance.name: OSADistance,
}


def get_measure_names() -> List[str]:
    """
    Get list of all registered measure names.

    Returns:
        List of measure name strings
    """
    return list(DISTANCE_MEASURES.keys())


def get_distance_measure(name: str) -> DistanceMeasure:
    """
    Build a registered distance measure by name.

    Args:
        name: Measure name (key of DISTANCE_MEASURES)

    Returns:
        A new measure instance

    Raises:
        ConfigurationError: If name is not registered
    """
    try:
        return DISTANCE_MEASURES[name.lower()]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown distance measure: {name}",
            detail=f"Available measures: {', '.join(get_measure_names())}"
        )


def thresholded_distance(measure: DistanceMeasure, s1: str, s2: str, max_distance: int) -> int:
    """
    Distance between two strings, capped at a budget.

    Args:
        measure: Distance capability
        s1: First string
        s2: Second string
        max_distance: Distance budget

    Returns:
        The distance if it is within the budget, otherwise exactly
        ``max_distance + 1``
    """
    dist = measure.distance(s1, s2, max_distance)
    return dist if dist <= max_distance else max_distance + 1
