"""Unit tests for playlist pattern matching."""

import pytest

from vodtube.services.uploader.matcher import category_matches


class TestExactPatterns:
    """Patterns without wildcard."""

    def test_case_insensitive_equality(self):
        """Test exact match ignores case."""
        assert category_matches("Valorant", "valorant") is True
        assert category_matches("valorant", "VALORANT") is True

    def test_no_partial_match(self):
        """Test substrings do not match."""
        assert category_matches("valorant", "valorant ranked") is False
        assert category_matches("minecraft", "mine") is False


class TestSingleWildcard:
    """Patterns with one '*'."""

    def test_prefix(self):
        """Test trailing wildcard."""
        assert category_matches("just chatting*", "Just Chatting IRL") is True
        assert category_matches("just*", "Just Chatting") is True
        assert category_matches("just*", "Chatting") is False

    def test_suffix(self):
        """Test leading wildcard."""
        assert category_matches("*chatting", "just chatting") is True
        assert category_matches("*craft", "Minecraft") is True
        assert category_matches("*craft", "Crafting") is False

    def test_prefix_and_suffix(self):
        """Test wildcard in the middle."""
        assert category_matches("mine*craft", "Minecraft") is True
        assert category_matches("mine*craft", "Minecraft Dungeons") is False

    def test_prefix_and_suffix_may_overlap(self):
        """Test "a*b" matches "ab" with an empty middle."""
        assert category_matches("a*b", "ab") is True

    def test_star_alone_matches_everything(self):
        """Test "*" matches any category, including empty."""
        assert category_matches("*", "Anything") is True
        assert category_matches("*", "") is True


class TestMultipleWildcards:
    """Patterns with more than one '*' compare for equality."""

    @pytest.mark.parametrize("category", ["super mario bros", "super bros", "superbros"])
    def test_not_treated_as_glob(self, category):
        """Test multi-star patterns do not glob."""
        assert category_matches("super*mario*bros", category) is False

    def test_literal_equality(self):
        """Test a category equal to the pattern matches."""
        assert category_matches("*A*", "*a*") is True
