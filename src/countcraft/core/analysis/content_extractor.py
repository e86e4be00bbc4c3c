"""
Front-matter-aware body extraction.

A document is an optional metadata block followed by a body. The block's
position either comes from the host's metadata index (a FrontMatterSpan)
or from find_front_matter_span(), a structural scan of the raw content.
strip_front_matter() removes the span's lines, delimiters included.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

LINE_BREAK_RE = re.compile(r"\r?\n")

FRONT_MATTER_OPEN = "---"
FRONT_MATTER_CLOSE = ("---", "...")


@dataclass(frozen=True)
class FrontMatterSpan:
    """Line range of a metadata block, 0-based and inclusive at both ends."""

    start_line: int
    end_line: int

    def is_valid_for(self, line_count: int) -> bool:
        return 0 <= self.start_line <= self.end_line < line_count


def split_lines(content: str) -> List[str]:
    """Split on bare LF or CRLF terminators."""
    return LINE_BREAK_RE.split(content)


def find_front_matter_span(content: str) -> Optional[FrontMatterSpan]:
    """
    Locate a leading metadata block by scanning the raw content.

    The block must open on the first line with ``---`` and close on a later
    line holding ``---`` or ``...``. An unclosed block is not a block.
    """
    lines = split_lines(content)
    if not lines or lines[0].rstrip() != FRONT_MATTER_OPEN:
        return None
    for index in range(1, len(lines)):
        if lines[index].rstrip() in FRONT_MATTER_CLOSE:
            return FrontMatterSpan(start_line=0, end_line=index)
    return None


def strip_front_matter(content: str, span: Optional[FrontMatterSpan] = None) -> str:
    """
    Return the body: content with the span's lines removed.

    Lines before ``span.start_line`` and after ``span.end_line`` are kept and
    rejoined with ``\\n``. Without a span the content is returned unchanged.
    A malformed span (end before start, or outside the document) is treated
    the same as no span.
    """
    if span is None:
        return content
    lines = split_lines(content)
    if not span.is_valid_for(len(lines)):
        return content
    body_lines = lines[: span.start_line] + lines[span.end_line + 1 :]
    return "\n".join(body_lines)


def extract_body(content: str, span: Optional[FrontMatterSpan] = None) -> str:
    """Strip the supplied span, or the structurally scanned one when none is given."""
    if span is None:
        span = find_front_matter_span(content)
    return strip_front_matter(content, span)
