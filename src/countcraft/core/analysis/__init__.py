"""Text analysis primitives for CountCraft."""

from .content_extractor import (
    FrontMatterSpan,
    extract_body,
    find_front_matter_span,
    strip_front_matter,
)
from .text_analyzer import (
    HeadingInfo,
    count_characters_with_spaces,
    count_characters_without_spaces,
    count_headings_by_level,
    count_lines,
    count_words,
    extract_headings,
)

__all__ = [
    "FrontMatterSpan",
    "extract_body",
    "find_front_matter_span",
    "strip_front_matter",
    "HeadingInfo",
    "count_words",
    "count_characters_with_spaces",
    "count_characters_without_spaces",
    "count_lines",
    "extract_headings",
    "count_headings_by_level",
]
