"""Custom exception classes."""

from typing import Optional


class ReportSearchError(Exception):
    """Base exception for all library errors."""

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(self.message)


class ConfigurationError(ReportSearchError):
    """Raised when a report or query is configured with invalid settings."""
    pass
