"""Structured logging configuration."""

import logging
import sys
from typing import Any

from reportsearch.config import settings

# Configure logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Handlers live on the package logger only
PACKAGE_LOGGER = "reportsearch"


def setup_logger(name: str, level: int = settings.log_level) -> logging.Logger:
    """
    Setup a logger with consistent formatting.

    Module loggers carry no handlers of their own and propagate to the
    package logger. That logger gets a ``NullHandler`` so host applications
    decide where records go, plus a formatted stdout handler when
    ``settings.debug`` is on.

    Args:
        name: Logger name (typically __name__)
        level: Logging level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    root = logging.getLogger(PACKAGE_LOGGER)

    # Avoid duplicate handlers
    if root.handlers:
        return logger

    root.addHandler(logging.NullHandler())

    if settings.debug:
        # Console handler
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)

        # Formatter
        formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
        handler.setFormatter(formatter)

        root.addHandler(handler)

    return logger


def log_match_event(logger: logging.Logger, query_kind: str, event: str, **kwargs: Any) -> None:
    """
    Log a structured match event at DEBUG level.

    Args:
        logger: Logger instance
        query_kind: Query variant tag (literal, fuzzy, or, and)
        event: Event description
        **kwargs: Additional context
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    context = " ".join(f"{k}={v}" for k, v in kwargs.items())
    logger.debug(f"[QUERY:{query_kind}] {event} {context}".strip())
