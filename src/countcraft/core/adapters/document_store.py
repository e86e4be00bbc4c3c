"""
Document storage adapters.

ContentStore and PropertyStore are the contracts the statistics engine
needs from its host. MarkdownVault implements both over a directory of
markdown files, keeping numeric properties in each file's YAML front matter.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from countcraft.core.analysis.content_extractor import (
    find_front_matter_span,
    split_lines,
)
from countcraft.core.utils.config.base import MARKDOWN_SUFFIXES
from countcraft.core.utils.logger import log_error, log_warning
from countcraft.utils.error_handling import ContentUnavailableError

# Directories the vault never descends into
IGNORED_DIRS = {".git", ".obsidian", ".countcraft", ".trash", "node_modules"}


class ContentStore(ABC):
    """Read access to raw document content."""

    @abstractmethod
    def read_content(self, document_id: str) -> str:
        """Return raw content (front matter + body); raise ContentUnavailableError."""
        raise NotImplementedError

    @abstractmethod
    def list_documents(self) -> List[str]:
        raise NotImplementedError

    def is_processable(self, document_id: str) -> bool:
        return True

    def modification_time(self, document_id: str) -> Optional[float]:
        return None


class PropertyStore(ABC):
    """Per-document key/value properties."""

    @abstractmethod
    def set_property(self, document_id: str, name: str, value: int) -> bool:
        """Create or update a numeric property; other properties stay untouched."""
        raise NotImplementedError

    @abstractmethod
    def get_property(self, document_id: str, name: str) -> Optional[Any]:
        raise NotImplementedError


class MarkdownVault(ContentStore, PropertyStore):
    """A directory of markdown documents identified by their relative paths."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def resolve(self, document_id: str) -> Path:
        path = Path(document_id)
        return path if path.is_absolute() else self.root / path

    def document_id(self, path: str | Path) -> str:
        """Map a filesystem path to the id used by this vault."""
        resolved = Path(path).resolve()
        try:
            return resolved.relative_to(self.root.resolve()).as_posix()
        except ValueError:
            return str(resolved)

    def list_documents(self) -> List[str]:
        if not self.root.is_dir():
            return []
        documents = []
        for path in self.root.rglob("*"):
            relative = path.relative_to(self.root)
            if any(part in IGNORED_DIRS for part in relative.parts[:-1]):
                continue
            if path.is_file() and path.suffix.lower() in MARKDOWN_SUFFIXES:
                documents.append(relative.as_posix())
        return sorted(documents)

    def is_processable(self, document_id: str) -> bool:
        path = self.resolve(document_id)
        return path.suffix.lower() in MARKDOWN_SUFFIXES and path.is_file()

    def modification_time(self, document_id: str) -> Optional[float]:
        try:
            return self.resolve(document_id).stat().st_mtime_ns / 1e9
        except OSError:
            return None

    def read_content(self, document_id: str) -> str:
        path = self.resolve(document_id)
        try:
            with open(path, encoding="utf-8", newline="") as handle:
                return handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ContentUnavailableError(document_id, str(exc)) from exc

    def read_properties(self, document_id: str) -> Dict[str, Any]:
        """Parse the front matter of a document; documents without one have no properties."""
        content = self.read_content(document_id)
        span = find_front_matter_span(content)
        if span is None:
            return {}
        lines = split_lines(content)
        data = yaml.safe_load("\n".join(lines[span.start_line + 1 : span.end_line]))
        return data if isinstance(data, dict) else {}

    def get_property(self, document_id: str, name: str) -> Optional[Any]:
        return self.read_properties(document_id).get(name)

    def set_property(self, document_id: str, name: str, value: int) -> bool:
        """
        Write ``name: value`` into the document's front matter.

        Only the line holding ``name`` is replaced (or a new line appended
        before the closing delimiter); every other line of the front matter
        is kept byte for byte. Creates the front matter when the document has
        none. Returns False (never raises) when the document cannot be read,
        its front matter is not a YAML mapping, or the file cannot be written.
        An unchanged value is not rewritten.
        """
        try:
            content = self.read_content(document_id)
        except ContentUnavailableError as exc:
            log_error("VAULT", "Cannot update properties", str(exc))
            return False

        lines = split_lines(content)
        entry = _property_line(name, value)
        span = find_front_matter_span(content)
        if span is not None:
            data = self._parse_mapping(document_id, lines[1 : span.end_line])
            if data is None:
                return False
            existing = data.get(name)
            if type(existing) is int and existing == value:
                return True
            block = _replace_property(lines[1 : span.end_line], name, entry)
            if self._parse_mapping(document_id, block, name, value) is None:
                return False
            updated_lines = [lines[0], *block, *lines[span.end_line :]]
        else:
            updated_lines = ["---", entry, "---", *lines]

        newline = "\r\n" if "\r\n" in content else "\n"
        try:
            with open(self.resolve(document_id), "w", encoding="utf-8", newline="") as handle:
                handle.write(newline.join(updated_lines))
        except OSError as exc:
            log_error("VAULT", f"Cannot write {document_id}", str(exc))
            return False
        return True

    def _parse_mapping(
        self,
        document_id: str,
        block: List[str],
        name: Optional[str] = None,
        expected: Optional[int] = None,
    ) -> Optional[Dict[str, Any]]:
        try:
            data = yaml.safe_load("\n".join(block)) or {}
        except yaml.YAMLError as exc:
            log_warning("VAULT", f"Unparseable front matter in {document_id}", str(exc))
            return None
        if not isinstance(data, dict):
            log_warning("VAULT", f"Front matter of {document_id} is not a mapping")
            return None
        if name is not None and data.get(name) != expected:
            # flow-style or otherwise unusual blocks the line edit cannot handle
            log_warning("VAULT", f"Cannot place {name} in front matter of {document_id}")
            return None
        return data


def _property_line(name: str, value: int) -> str:
    """Render one ``name: value`` line, quoting the key when YAML needs it."""
    return yaml.safe_dump(
        {name: value}, allow_unicode=True, default_flow_style=False, width=1 << 16
    ).rstrip("\n")


def _is_continuation(line: str) -> bool:
    return line[:1] in (" ", "\t") or line == "-" or line.startswith("- ")


def _replace_property(block: List[str], name: str, entry: str) -> List[str]:
    """Swap the top-level ``name`` entry (and its continuation lines) for ``entry``."""
    key = re.compile(
        r"""^(?:{0}|"{0}"|'{0}')\s*:(?:\s|$)""".format(re.escape(name))
    )
    for index, line in enumerate(block):
        if not key.match(line):
            continue
        end = index + 1
        while end < len(block) and _is_continuation(block[end]):
            end += 1
        return [*block[:index], entry, *block[end:]]
    return [*block, entry]
