"""
Metadata index adapters.

A MetadataIndex answers structural questions about a document without the
engine re-reading it: where its front matter sits and where its headings
start. StructuralMetadataIndex builds those answers from raw content and
caches them per document until the document's modification time changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from countcraft.core.adapters.document_store import ContentStore
from countcraft.core.analysis.content_extractor import (
    FrontMatterSpan,
    find_front_matter_span,
)
from countcraft.core.analysis.text_analyzer import extract_headings
from countcraft.core.utils.logger import log_debug


@dataclass(frozen=True)
class HeadingPosition:
    level: int
    start_line: int  # 0-based line in the raw content


@dataclass(frozen=True)
class IndexEntry:
    front_matter: Optional[FrontMatterSpan]
    headings: Tuple[HeadingPosition, ...] = field(default_factory=tuple)


class MetadataIndex(ABC):
    """Host-maintained structural metadata."""

    @abstractmethod
    def get_front_matter_span(self, document_id: str) -> Optional[FrontMatterSpan]:
        raise NotImplementedError

    @abstractmethod
    def get_heading_positions(self, document_id: str) -> List[HeadingPosition]:
        """Headings in document order, limited to lines after the front matter."""
        raise NotImplementedError

    def invalidate(self, document_id: str | None = None) -> None:
        """Forget cached entries; called after the engine rewrites a document."""
        return None


def build_index_entry(content: str) -> IndexEntry:
    span = find_front_matter_span(content)
    front_matter_end = span.end_line if span else -1
    headings = tuple(
        HeadingPosition(level=heading.level, start_line=heading.line_number - 1)
        for heading in extract_headings(content)
        if heading.line_number - 1 > front_matter_end
    )
    return IndexEntry(front_matter=span, headings=headings)


class StructuralMetadataIndex(MetadataIndex):
    """Index computed by scanning content, cached on modification time."""

    def __init__(self, content_store: ContentStore):
        self.content_store = content_store
        self._entries: Dict[str, Tuple[Optional[float], IndexEntry]] = {}

    def _entry(self, document_id: str) -> IndexEntry:
        mtime = self.content_store.modification_time(document_id)
        cached = self._entries.get(document_id)
        if cached is not None and mtime is not None and cached[0] == mtime:
            return cached[1]
        entry = build_index_entry(self.content_store.read_content(document_id))
        log_debug("INDEX", f"Indexed {document_id}", f"{len(entry.headings)} headings")
        self._entries[document_id] = (mtime, entry)
        return entry

    def get_front_matter_span(self, document_id: str) -> Optional[FrontMatterSpan]:
        return self._entry(document_id).front_matter

    def get_heading_positions(self, document_id: str) -> List[HeadingPosition]:
        return list(self._entry(document_id).headings)

    def invalidate(self, document_id: str | None = None) -> None:
        if document_id is None:
            self._entries.clear()
        else:
            self._entries.pop(document_id, None)

    def is_cached(self, document_id: str) -> bool:
        return document_id in self._entries
