"""Boolean literal and fuzzy text search over normalized reports."""

from reportsearch.config import Settings, settings
from reportsearch.core.queries import (
    AndQuery,
    FuzzyQuery,
    LiteralQuery,
    OrQuery,
    Query,
    combine_and,
    combine_or,
    parse_query,
)
from reportsearch.core.schemas import ConjunctionMatch, FrozenMetadata, Match, QueryMatch, Report, Span
from reportsearch.engine.distance import (
    CallableDistance,
    DamerauLevenshteinDistance,
    LevenshteinDistance,
    OSADistance,
    get_distance_measure,
    thresholded_distance,
)
from reportsearch.engine.interfaces import DistanceMeasure
from reportsearch.engine.matcher import match, match_all, search
from reportsearch.utils.exceptions import ConfigurationError, ReportSearchError
from reportsearch.utils.text_normalizer import TextNormalizer

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "settings",
    "Query",
    "LiteralQuery",
    "FuzzyQuery",
    "OrQuery",
    "AndQuery",
    "combine_or",
    "combine_and",
    "parse_query",
    "Report",
    "FrozenMetadata",
    "Span",
    "QueryMatch",
    "ConjunctionMatch",
    "Match",
    "DistanceMeasure",
    "LevenshteinDistance",
    "DamerauLevenshteinDistance",
    "OSADistance",
    "CallableDistance",
    "get_distance_measure",
    "thresholded_distance",
    "match",
    "match_all",
    "search",
    "TextNormalizer",
    "ReportSearchError",
    "ConfigurationError",
]
