"""
Renderers turn a markdown body into the visible text a reader sees.

Only word and character counters use rendered text; line and heading
counters always read the raw body.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bs4 import BeautifulSoup
from markdown_it import MarkdownIt


class Renderer(ABC):
    @abstractmethod
    def render_to_plain_text(self, body: str, document_id: str) -> str:
        raise NotImplementedError


class MarkdownItRenderer(Renderer):
    """Render with markdown-it-py, then keep only the text nodes."""

    def __init__(self) -> None:
        self._md = MarkdownIt("commonmark").enable(["table", "strikethrough"])

    def render_to_plain_text(self, body: str, document_id: str) -> str:
        html = self._md.render(body)
        return BeautifulSoup(html, "html.parser").get_text()
