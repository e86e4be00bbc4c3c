"""
Tests for the text counting primitives.
"""

import pytest

from countcraft.core.analysis.text_analyzer import (
    HeadingInfo,
    count_characters_with_spaces,
    count_characters_without_spaces,
    count_headings_by_level,
    count_lines,
    count_words,
    extract_headings,
)

BODY = "# Title\n\nHello world, this is a test.\n\n## Section\nMore text here.\n"


class TestCountWords:
    """Tests for word counting."""

    def test_sample_body(self):
        assert count_words(BODY) == 11

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("", 0),
            ("   \n\t", 0),
            ("... !!! ---", 0),
            ("well-known fact", 3),
            ("snake_case stays_one", 2),
            ("version 2.0", 3),
            ("café naïve", 2),
        ],
    )
    def test_word_boundaries(self, text, expected):
        assert count_words(text) == expected


class TestCountCharacters:
    """Tests for character counting."""

    def test_with_spaces_counts_everything(self):
        assert count_characters_with_spaces(BODY) == 66
        assert count_characters_with_spaces("a b") == 3

    def test_without_spaces_drops_all_whitespace(self):
        assert count_characters_without_spaces(BODY) == 51
        assert count_characters_without_spaces("a b\tc\r\n") == 3

    def test_empty(self):
        assert count_characters_with_spaces("") == 0
        assert count_characters_without_spaces("") == 0

    def test_astral_characters_count_as_two(self):
        assert count_characters_with_spaces("😀") == 2
        assert count_characters_without_spaces("a 😀") == 3


class TestCountLines:
    """Tests for line counting."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("", 0),
            ("a", 1),
            ("a\n", 2),
            ("\n", 2),
            ("a\nb", 2),
            ("a\r\nb\r\n", 3),
        ],
    )
    def test_line_counts(self, text, expected):
        assert count_lines(text) == expected

    def test_sample_body(self):
        assert count_lines(BODY) == 7


class TestHeadings:
    """Tests for heading extraction."""

    def test_levels_and_line_numbers(self):
        headings = extract_headings("# A\ntext\n### C\n")
        assert headings == [
            HeadingInfo(level=1, text="A", line_number=1),
            HeadingInfo(level=3, text="C", line_number=3),
        ]

    def test_non_headings_are_ignored(self):
        text = "####### Seven\n#NoSpace\n  ## indented\n###### Six\n#\n"
        headings = extract_headings(text)
        assert [h.level for h in headings] == [6]
        assert headings[0].text == "Six"

    def test_crlf_text(self):
        headings = extract_headings("# One\r\n## Two\r\n")
        assert [h.text for h in headings] == ["One", "Two"]

    def test_count_by_level(self):
        text = "# A\n## B\n## C\n#### D\n"
        assert count_headings_by_level(text) == {1: 1, 2: 2, 4: 1}

    def test_count_by_level_without_headings(self):
        assert count_headings_by_level("no headings here") == {}
