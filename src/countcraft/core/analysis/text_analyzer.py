"""
Pure text counting primitives.

Every function here takes a string and returns a number (or a list of
headings); there is no I/O and no state. Word boundaries follow one fixed
rule: a word is a maximal run of word characters (letters, digits and
underscore), so "well-known" is two words and punctuation-only tokens are
not words at all.

Heading and line counts are structural and always run on raw body text.
Word and character counts may run on rendered text instead; choosing which
text to pass is the caller's job.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List

WORD_RE = re.compile(r"\w+")
WHITESPACE_RE = re.compile(r"\s")
LINE_BREAK_RE = re.compile(r"\r?\n")
HEADING_RE = re.compile(r"(#{1,6})\s+(.+)")


@dataclass(frozen=True)
class HeadingInfo:
    """A heading found in raw text."""

    level: int
    text: str
    line_number: int  # 1-based


def _code_units(text: str) -> int:
    # Lengths are measured in UTF-16 code units so astral characters
    # (emoji and friends) count as two, matching editor character counters.
    return len(text.encode("utf-16-le")) // 2


def count_words(text: str) -> int:
    """Count maximal runs of word characters."""
    return sum(1 for _ in WORD_RE.finditer(text))


def count_characters_with_spaces(text: str) -> int:
    """Total length of the text, unmodified."""
    return _code_units(text)


def count_characters_without_spaces(text: str) -> int:
    """Length of the text with every whitespace character removed."""
    return _code_units(WHITESPACE_RE.sub("", text))


def count_lines(text: str) -> int:
    """
    Count line-terminator-delimited segments.

    An empty string has no lines; any other string has one more line than
    it has line feeds (``\\r\\n`` counts once).
    """
    if not text:
        return 0
    return len(LINE_BREAK_RE.split(text))


def extract_headings(text: str) -> List[HeadingInfo]:
    """
    Find ATX-style headings line by line.

    A heading line starts with one to six ``#`` characters, then at least
    one whitespace character, then content. Seven or more ``#`` or a ``#``
    run followed directly by text does not count.
    """
    headings: List[HeadingInfo] = []
    for index, line in enumerate(LINE_BREAK_RE.split(text)):
        match = HEADING_RE.fullmatch(line)
        if match:
            headings.append(
                HeadingInfo(
                    level=len(match.group(1)),
                    text=match.group(2).strip(),
                    line_number=index + 1,
                )
            )
    return headings


def count_headings_by_level(text: str) -> Dict[int, int]:
    """Group extracted headings into a level -> count mapping."""
    counts = Counter(heading.level for heading in extract_headings(text))
    return dict(sorted(counts.items()))
