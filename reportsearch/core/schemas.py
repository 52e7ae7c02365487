"""Canonical data models for reports and match results."""

from collections.abc import Mapping
from typing import Any, Callable, Dict, FrozenSet, Iterator, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_serializer, field_validator

from reportsearch.config import settings
from reportsearch.core.queries import Query
from reportsearch.utils.exceptions import ConfigurationError
from reportsearch.utils.logger import setup_logger
from reportsearch.utils.text_normalizer import TextNormalizer, normalizer

logger = setup_logger(__name__)

MetadataKeyValidator = Callable[[FrozenSet[str]], None]


# ============================================================================
# Positions
# ============================================================================

class Span(BaseModel):
    """
    Inclusive, 1-indexed character interval into a report's text.

    ``Span(1, 3)`` covers the first three characters. The empty span is
    ``Span(1, 0)``.
    """
    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=1, description="First character (1-indexed)")
    end: int = Field(..., ge=0, description="Last character (inclusive)")

    def __init__(self, start: int, end: int, **data: Any):
        super().__init__(start=start, end=end, **data)

    @field_validator("end")
    @classmethod
    def validate_end(cls, v: int, info: ValidationInfo) -> int:
        """Ensure end >= start - 1."""
        if "start" in info.data and v < info.data["start"] - 1:
            raise ValueError("end must be >= start - 1")
        return v

    @classmethod
    def empty(cls) -> "Span":
        return cls(1, 0)

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    def as_slice(self) -> slice:
        """Equivalent Python slice (0-indexed, half-open)."""
        return slice(self.start - 1, self.end)

    def __len__(self) -> int:
        return self.end - self.start + 1


# ============================================================================
# Reports
# ============================================================================

class FrozenMetadata(Mapping):
    """
    Read-only mapping holding report metadata.

    Hashes by field names so reports stay hashable whatever the values hold.
    """
    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, Any] = ()):
        self._fields = dict(fields)

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __hash__(self) -> int:
        return hash(frozenset(self._fields))

    def __repr__(self) -> str:
        return f"FrozenMetadata({self._fields!r})"

    def __reduce__(self):
        return (type(self), (self._fields,))


def check_metadata_keys(keys: FrozenSet[str]) -> None:
    """
    Default metadata key validator.

    Rejects keys listed in ``settings.reserved_metadata_keys``, which is
    empty unless configured.

    Raises:
        ConfigurationError: If a reserved key is present
    """
    reserved = keys & frozenset(settings.reserved_metadata_keys)
    if reserved:
        raise ConfigurationError(
            "Report metadata uses reserved field names",
            detail=", ".join(sorted(reserved))
        )


class Report(BaseModel):
    """
    A normalized text document with named metadata.

    The text is normalized once at construction (replacement table,
    punctuation, trailing space) and never changes afterwards. Metadata is
    stored as a read-only, hashable mapping.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    text: str = Field(..., description="Normalized report text")
    metadata: FrozenMetadata = Field(default_factory=FrozenMetadata, description="Named metadata fields")

    def __init__(
        self,
        text: str,
        metadata: Optional[Mapping[str, Any]] = None,
        *,
        normalizer: Optional[TextNormalizer] = None,
        key_validator: Optional[MetadataKeyValidator] = None
    ):
        """
        Build a report from raw text.

        Args:
            text: Raw report text
            metadata: Named metadata fields
            normalizer: Normalizer to use instead of the configured default
            key_validator: Metadata key policy to use instead of the default

        Raises:
            ConfigurationError: If metadata is not a mapping with string
                field names, or the field names are rejected
        """
        self.__pydantic_validator__.validate_python(
            {"text": text, "metadata": {} if metadata is None else metadata},
            self_instance=self,
            context={"normalizer": normalizer, "key_validator": key_validator},
        )

    @field_validator("text")
    @classmethod
    def normalize_text(cls, v: str, info: ValidationInfo) -> str:
        context = info.context or {}
        return (context.get("normalizer") or normalizer).normalize(v)

    @field_validator("metadata", mode="before")
    @classmethod
    def validate_metadata(cls, v: Any, info: ValidationInfo) -> FrozenMetadata:
        """Check field names, run the key policy and freeze the mapping."""
        if not isinstance(v, Mapping):
            logger.warning(f"Rejected report metadata of type {type(v).__name__}")
            raise ConfigurationError(
                "Report metadata must be a mapping",
                detail=type(v).__name__
            )

        bad_keys = [k for k in v if not isinstance(k, str)]
        if bad_keys:
            detail = ", ".join(sorted(repr(k) for k in bad_keys))
            logger.warning(f"Rejected report metadata keys: {detail}")
            raise ConfigurationError("Report metadata field names must be strings", detail=detail)

        context = info.context or {}
        key_validator = context.get("key_validator") or check_metadata_keys
        try:
            key_validator(frozenset(v.keys()))
        except ConfigurationError as e:
            logger.warning(f"Rejected report metadata keys: {e.detail or e.message}")
            raise
        except ValueError as e:
            logger.warning(f"Rejected report metadata keys: {str(e)}")
            raise ConfigurationError("Invalid report metadata", detail=str(e)) from e
        return FrozenMetadata(v)

    @field_serializer("metadata")
    def serialize_metadata(self, v: FrozenMetadata) -> Dict[str, Any]:
        return dict(v)


# ============================================================================
# Match Results
# ============================================================================

class QueryMatch(BaseModel):
    """
    A single match of a leaf query (or an Or resolving to one).

    Holds references to the query and report it came from.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    query: Query = Field(..., description="Query that matched")
    report: Report = Field(..., description="Report that was searched")
    distance: int = Field(..., ge=0, description="Edit distance (0 for literal matches)")
    span: Span = Field(..., description="Matched characters in report.text")

    @property
    def matched_text(self) -> str:
        """Report text covered by the span."""
        return self.report.text[self.span.as_slice()]


class ConjunctionMatch(BaseModel):
    """First matches of every And subquery, in subquery order."""
    model_config = ConfigDict(frozen=True)

    matches: Tuple[Union[QueryMatch, "ConjunctionMatch"], ...] = Field(
        ..., description="One match per subquery"
    )

    def __len__(self) -> int:
        return len(self.matches)

    def __iter__(self):
        return iter(self.matches)

    def __getitem__(self, index: int) -> Union[QueryMatch, "ConjunctionMatch"]:
        return self.matches[index]


ConjunctionMatch.model_rebuild()

Match = Union[QueryMatch, ConjunctionMatch]
