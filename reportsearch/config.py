"""Library configuration management via environment variables."""

import logging
from typing import List, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REPORTSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    debug: bool = False

    # Fuzzy query defaults
    default_distance: str = "damerau_levenshtein"
    default_threshold: int = Field(default=2, ge=0)

    # Report normalization: ordered (pattern, replacement) rules, applied as a fold
    replacements: List[Tuple[str, str]] = Field(default_factory=list)

    # Metadata field names rejected at Report construction
    reserved_metadata_keys: List[str] = Field(default_factory=list)

    @property
    def log_level(self) -> int:
        """Resolve the logging level."""
        return logging.DEBUG if self.debug else logging.INFO


# Global settings instance
settings = Settings()
