"""
Query model: literal and fuzzy leaf queries plus Or/And combinators.

The variant set is closed. Each model carries a ``kind`` tag so nested
queries can be validated from plain mappings (see ``parse_query``).
Matching lives in ``reportsearch.engine.matcher``; the ``match`` and
``match_all`` methods here only delegate to it.
"""

import math
from typing import TYPE_CHECKING, Annotated, Any, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from reportsearch.config import settings
from reportsearch.engine.distance import CallableDistance, get_distance_measure
from reportsearch.engine.interfaces import DistanceMeasure
from reportsearch.utils.text_normalizer import TextNormalizer

if TYPE_CHECKING:
    from reportsearch.core.schemas import Match, Report


class QueryBase(BaseModel):
    """Behavior shared by every query variant."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def match(self, report: "Report") -> Optional["Match"]:
        """First (or best) match of this query in the report, or None."""
        from reportsearch.engine.matcher import match
        return match(self, report)

    def match_all(self, report: "Report") -> List["Match"]:
        """Every match of this query in the report."""
        from reportsearch.engine.matcher import match_all
        return match_all(self, report)

    def __or__(self, other: "QueryBase") -> "OrQuery":
        return combine_or(self, other)

    def __and__(self, other: "QueryBase") -> "AndQuery":
        return combine_and(self, other)


class LiteralQuery(QueryBase):
    """
    Exact substring query.

    The text has its punctuation replaced by spaces but, unlike report
    text, goes through no replacement table and gets no trailing space.
    """
    kind: Literal["literal"] = "literal"
    text: str = Field(..., description="Punctuation-stripped query text")

    def __init__(self, text: str, **data: Any):
        super().__init__(text=text, **data)

    @field_validator("text")
    @classmethod
    def strip_punctuation(cls, v: str) -> str:
        return TextNormalizer.strip_punctuation(v)


class FuzzyQuery(QueryBase):
    """
    Approximate substring query bounded by an edit distance.

    Attributes:
        text: Punctuation-stripped query text
        measure: Distance capability (a measure, a registered name, or a
            ``(s1, s2, max_distance) -> int`` function)
        threshold: Largest accepted distance. A fractional value is floored,
            so ``1.5`` accepts the same matches as ``1``.
    """
    kind: Literal["fuzzy"] = "fuzzy"
    text: str = Field(..., description="Punctuation-stripped query text")
    measure: DistanceMeasure = Field(
        default_factory=lambda: get_distance_measure(settings.default_distance),
        description="Distance capability"
    )
    threshold: int = Field(
        default_factory=lambda: settings.default_threshold,
        ge=0,
        description="Maximum accepted edit distance"
    )

    def __init__(
        self,
        text: str,
        measure: Union[DistanceMeasure, str, None] = None,
        threshold: Union[int, float, None] = None,
        **data: Any
    ):
        if measure is not None:
            data["measure"] = measure
        if threshold is not None:
            data["threshold"] = threshold
        super().__init__(text=text, **data)

    @field_validator("text")
    @classmethod
    def strip_punctuation(cls, v: str) -> str:
        return TextNormalizer.strip_punctuation(v)

    @field_validator("measure", mode="before")
    @classmethod
    def resolve_measure(cls, v: Any) -> Any:
        """Accept registered measure names and plain distance functions."""
        if isinstance(v, str):
            return get_distance_measure(v)
        if isinstance(v, type) and issubclass(v, DistanceMeasure):
            return v()
        if callable(v) and not isinstance(v, DistanceMeasure):
            return CallableDistance(v)
        return v

    @field_validator("threshold", mode="before")
    @classmethod
    def floor_threshold(cls, v: Any) -> Any:
        """Floor fractional thresholds; distances are whole edits."""
        if isinstance(v, float):
            if not math.isfinite(v):
                raise ValueError("threshold must be finite")
            return math.floor(v)
        return v


class OrQuery(QueryBase):
    """Matches when any subquery matches; subqueries are tried in order."""
    kind: Literal["or"] = "or"
    subqueries: Tuple["Query", ...] = Field(..., min_length=2)

    def __init__(self, *subqueries: QueryBase, **data: Any):
        if subqueries:
            data["subqueries"] = subqueries
        super().__init__(**data)


class AndQuery(QueryBase):
    """Matches when every subquery matches the full report."""
    kind: Literal["and"] = "and"
    subqueries: Tuple["Query", ...] = Field(..., min_length=2)

    def __init__(self, *subqueries: QueryBase, **data: Any):
        if subqueries:
            data["subqueries"] = subqueries
        super().__init__(**data)


Query = Annotated[
    Union[LiteralQuery, FuzzyQuery, OrQuery, AndQuery],
    Field(discriminator="kind"),
]

OrQuery.model_rebuild()
AndQuery.model_rebuild()

_query_adapter = TypeAdapter(Query)


def combine_or(q1: QueryBase, q2: QueryBase) -> OrQuery:
    """
    Build ``q1 OR q2``, splicing existing Or subquery lists.

    Operand order is preserved, so the flat result is tried in the same
    order as the nested tree it replaces.

    Args:
        q1: Left operand
        q2: Right operand

    Returns:
        Flat OrQuery
    """
    left = q1.subqueries if isinstance(q1, OrQuery) else (q1,)
    right = q2.subqueries if isinstance(q2, OrQuery) else (q2,)
    return OrQuery(*left, *right)


def combine_and(q1: QueryBase, q2: QueryBase) -> AndQuery:
    """
    Build ``q1 AND q2``, splicing existing And subquery lists.

    Args:
        q1: Left operand
        q2: Right operand

    Returns:
        Flat AndQuery
    """
    left = q1.subqueries if isinstance(q1, AndQuery) else (q1,)
    right = q2.subqueries if isinstance(q2, AndQuery) else (q2,)
    return AndQuery(*left, *right)


def parse_query(data: Mapping[str, Any]) -> QueryBase:
    """
    Validate a nested mapping into a query.

    Each level needs a ``kind`` of literal, fuzzy, or, and. Combinators are
    kept exactly as nested in the input.

    Args:
        data: Query mapping, e.g. loaded from JSON

    Returns:
        Query instance

    Raises:
        pydantic.ValidationError: If the mapping does not describe a query
    """
    return _query_adapter.validate_python(data)
