"""Tests for text normalization."""

import re

import pytest

from reportsearch.utils.text_normalizer import TextNormalizer, normalizer


class TestTextNormalizer:
    """Test TextNormalizer class."""

    def test_punctuation_replaced_and_trailing_space_added(self):
        """Test that report text loses punctuation and gains one trailing space."""
        assert normalizer.normalize("cat-dog runs") == "cat dog runs "

    @pytest.mark.parametrize("char", [".", "!", "?", ">", "<", "\\", "-"])
    def test_each_punctuation_character_becomes_space(self, char):
        """Test every character of the punctuation set."""
        assert TextNormalizer.strip_punctuation(f"a{char}b") == "a b"

    def test_other_characters_are_kept(self):
        """Test that characters outside the punctuation set survive."""
        assert TextNormalizer.strip_punctuation("a,b;c:d'e") == "a,b;c:d'e"

    def test_strip_punctuation_is_idempotent(self):
        """Test that stripping twice equals stripping once."""
        text = "Is it -- really? <yes>. Done!\\"
        once = TextNormalizer.strip_punctuation(text)
        assert TextNormalizer.strip_punctuation(once) == once

    def test_replacements_fold_in_order(self):
        """Test that each rule sees the output of the previous one."""
        rules = [("colour", "color"), ("color", "hue")]
        assert TextNormalizer(rules).normalize("colour") == "hue "
        # Reversed order: the second rule never sees "color"
        assert TextNormalizer(list(reversed(rules))).normalize("colour") == "color "

    def test_replacements_run_before_punctuation(self):
        """Test that replacement output is still punctuation-stripped."""
        normalizer_ = TextNormalizer([("and", "&-")])
        assert normalizer_.normalize("salt and pepper") == "salt &  pepper "

    def test_regex_replacement(self):
        """Test that compiled patterns are applied with re.sub."""
        normalizer_ = TextNormalizer([(re.compile(r"\s+"), " ")])
        assert normalizer_.normalize("no   more\tgaps") == "no more gaps "

    def test_empty_text(self):
        """Test that empty text normalizes to a single space."""
        assert normalizer.normalize("") == " "

    def test_renormalizing_adds_only_trailing_space(self):
        """Test that normalizing normalized text differs by one trailing space."""
        once = normalizer.normalize("end. of-line!")
        twice = normalizer.normalize(once)
        assert twice == once + " "
        assert twice.rstrip(" ") == once.rstrip(" ")
