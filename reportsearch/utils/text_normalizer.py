"""Deterministic text normalization for report matching."""

import re
from typing import Sequence, Tuple, Union

from reportsearch.config import settings

# Characters replaced by a single space in both reports and queries
PUNCTUATION_PATTERN = re.compile(r"[.!?><\\-]")

ReplacementRule = Tuple[Union[str, re.Pattern], str]


class TextNormalizer:
    """
    Deterministic text normalizer for report and query text.

    Reports go through the full pipeline (replacement table, punctuation,
    trailing space). Queries only have their punctuation stripped so that
    they line up with the punctuation-insensitive report text.
    """

    def __init__(self, replacements: Sequence[ReplacementRule] = ()):
        """
        Initialize normalizer.

        Args:
            replacements: Ordered (pattern, replacement) rules. String
                patterns are replaced literally, compiled patterns with
                ``pattern.sub``. Each rule sees the output of the previous one.
        """
        self.replacements = tuple(replacements)

    def apply_replacements(self, text: str) -> str:
        """Fold the replacement table over the text, in order."""
        for pattern, replacement in self.replacements:
            if isinstance(pattern, str):
                text = text.replace(pattern, replacement)
            else:
                text = pattern.sub(replacement, text)
        return text

    @staticmethod
    def strip_punctuation(text: str) -> str:
        """
        Replace each punctuation character with a single space.

        Idempotent: the output contains none of the replaced characters.

        Args:
            text: Raw text

        Returns:
            Text with ``. ! ? > < \\ -`` replaced by spaces
        """
        return PUNCTUATION_PATTERN.sub(" ", text)

    def normalize(self, text: str) -> str:
        """
        Normalize report text for matching.

        Transformations (order matters):
        1. Replacement table, applied as a left fold
        2. Punctuation replaced by spaces
        3. One trailing space appended, so the last word ends on a boundary

        Args:
            text: Raw report text

        Returns:
            Normalized text
        """
        text = self.apply_replacements(text)
        text = self.strip_punctuation(text)
        return text + " "


# Default instance built from configuration
normalizer = TextNormalizer(settings.replacements)
