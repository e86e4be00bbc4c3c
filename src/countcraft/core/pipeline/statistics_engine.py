"""
Statistics engine for CountCraft.

Data flows one way: raw content -> body -> FileStats -> one scalar per
enabled counter -> property writes. Every call works on a snapshot of the
counter configs it was given; the engine keeps no state between calls
beyond its collaborators.

Failures stay as small as possible:
- a counter with a bad parameter, or a rejected property write, fails
  alone and its sibling counters still run
- an unreadable document fails that document only; batches carry on
"""

from __future__ import annotations

import logging
import math
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from countcraft.core.adapters.document_store import ContentStore, MarkdownVault, PropertyStore
from countcraft.core.adapters.metadata_index import MetadataIndex, StructuralMetadataIndex
from countcraft.core.adapters.renderer import MarkdownItRenderer, Renderer
from countcraft.core.analysis.content_extractor import extract_body, strip_front_matter
from countcraft.core.analysis.text_analyzer import (
    count_characters_with_spaces,
    count_characters_without_spaces,
    count_headings_by_level,
    count_lines,
    count_words,
)
from countcraft.core.counters.models import CounterConfig, CountResult, FileStats
from countcraft.core.counters.registry import project
from countcraft.core.utils.config.base import COUNT_MODES, MESSAGES
from countcraft.core.utils.config.main import CountCraftConfig
from countcraft.core.utils.logger import (
    get_logger,
    log_batch_complete,
    log_batch_start,
    log_calculation_complete,
    log_calculation_start,
    log_property_write,
)
from countcraft.core.utils.notifications import Notifier, NullNotifier
from countcraft.utils.error_handling import (
    CalculationFailure,
    ContentUnavailableError,
    CountCraftError,
    PropertyWriteFailedError,
    categorize,
    error_message,
)

@dataclass
class CalculationResult:
    """Outcome of one document's calculation pass."""

    document_id: str
    values: CountResult = field(default_factory=dict)
    stats: Optional[FileStats] = None
    failures: List[CalculationFailure] = field(default_factory=list)
    used_cache: bool = False

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class BatchResult:
    """Outcome of a whole-collection run."""

    processed: int
    total: int
    results: List[CalculationResult] = field(default_factory=list)
    failures: List[CalculationFailure] = field(default_factory=list)

    @property
    def summary(self) -> str:
        return f"{self.processed}/{self.total}"


def _enabled(configs: Iterable[CounterConfig]) -> Tuple[CounterConfig, ...]:
    return tuple(config for config in configs if config.enabled)


def _label(config: CounterConfig) -> str:
    return config.name or config.property or config.id


class StatisticsEngine:
    """
    Computes document statistics and writes them as properties.

    Args:
        content_store: reads raw document content
        property_store: receives one numeric write per enabled counter
        metadata_index: optional structural cache (front matter, headings)
        renderer: turns a body into visible text; required for rendered mode
        notifier: best-effort user reporting
        logger: logger to use; defaults to the package logger
        count_mode: ``raw`` or ``rendered`` text for word/character counts
    """

    def __init__(
        self,
        content_store: ContentStore,
        property_store: PropertyStore,
        metadata_index: Optional[MetadataIndex] = None,
        renderer: Optional[Renderer] = None,
        notifier: Optional[Notifier] = None,
        logger: Optional[logging.Logger] = None,
        count_mode: str = "raw",
    ):
        if count_mode not in COUNT_MODES:
            raise ValueError(f"Unknown count mode: {count_mode}")
        if count_mode == "rendered" and renderer is None:
            raise ValueError("Rendered counting requires a renderer")
        self.content_store = content_store
        self.property_store = property_store
        self.metadata_index = metadata_index
        self.renderer = renderer
        self.notifier = notifier or NullNotifier()
        self.logger = logger or get_logger()
        self.count_mode = count_mode

    @classmethod
    def for_vault(
        cls,
        vault: MarkdownVault,
        config: CountCraftConfig,
        notifier: Optional[Notifier] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "StatisticsEngine":
        """Wire an engine to a markdown vault using the configured count mode."""
        count_mode = config.counters.count_mode
        return cls(
            content_store=vault,
            property_store=vault,
            metadata_index=StructuralMetadataIndex(vault),
            renderer=MarkdownItRenderer() if count_mode == "rendered" else None,
            notifier=notifier,
            logger=logger,
            count_mode=count_mode,
        )

    def _notify(self, message: str, level: str = "info") -> None:
        try:
            self.notifier.notify(message, level)
        except Exception as exc:
            self.logger.warning(f"Notification failed: {error_message(exc)}")

    def is_processable(self, document_id: str) -> bool:
        return self.content_store.is_processable(document_id)

    def read_body(self, document_id: str) -> str:
        """
        Read a document and strip its front matter.

        The metadata index supplies the span when present; otherwise the
        content is scanned structurally.

        Raises:
            ContentUnavailableError: the document cannot be read
        """
        content = self.content_store.read_content(document_id)
        if self.metadata_index is not None:
            return strip_front_matter(
                content, self.metadata_index.get_front_matter_span(document_id)
            )
        return extract_body(content)

    def calculate_base_stats(
        self,
        body: str,
        document_id: str = "",
        headings_by_level: Optional[Dict[int, int]] = None,
    ) -> FileStats:
        """
        Compute FileStats for a body.

        Word and character counts use rendered text in rendered mode; line
        and heading counts always use the raw body. Pass
        ``headings_by_level`` to reuse headings known from a cache.
        """
        text = body
        if self.count_mode == "rendered":
            text = self.renderer.render_to_plain_text(body, document_id)
        if headings_by_level is None:
            headings_by_level = count_headings_by_level(body)
        return FileStats(
            word_count=count_words(text),
            char_count_with_spaces=count_characters_with_spaces(text),
            char_count_without_spaces=count_characters_without_spaces(text),
            line_count=count_lines(body),
            heading_count=sum(headings_by_level.values()),
            headings_by_level=dict(headings_by_level),
        )

    def _apply_configs(
        self,
        document_id: str,
        configs: Sequence[CounterConfig],
        stats: FileStats,
    ) -> Tuple[CountResult, List[CalculationFailure]]:
        values: CountResult = {}
        failures: List[CalculationFailure] = []

        for config in configs:
            try:
                value = project(config.type, stats, config.parameter)
                try:
                    written = self.property_store.set_property(
                        document_id, config.property, value
                    )
                except Exception as exc:
                    raise PropertyWriteFailedError(
                        document_id, config.property, error_message(exc)
                    ) from exc
                if not written:
                    raise PropertyWriteFailedError(document_id, config.property)
            except (CountCraftError, ValueError) as exc:
                message = error_message(exc)
                failures.append(
                    CalculationFailure(
                        document_id=document_id,
                        category=categorize(exc),
                        message=message,
                        config_id=config.id,
                        config_name=config.name,
                        property_name=config.property,
                    )
                )
                self.logger.error(
                    f"Error processing config {config.id} on {document_id}: {message}"
                )
                self._notify(f"Error calculating {_label(config)}: {message}", "error")
                continue

            values[config.property] = value
            log_property_write(document_id, config.property, value, True, self.logger)

        if values and self.metadata_index is not None:
            self.metadata_index.invalidate(document_id)

        return values, failures

    def _report(self, result: CalculationResult) -> None:
        if result.values:
            listing = ", ".join(f"{prop}: {value}" for prop, value in result.values.items())
            self._notify(f"{MESSAGES['CALCULATION_COMPLETE']} {listing}", "success")
        elif not result.failures:
            self._notify(MESSAGES["NO_CALCULATIONS"], "warning")

    def calculate_document(
        self,
        document_id: str,
        configs: Iterable[CounterConfig],
        report: bool = False,
    ) -> CalculationResult:
        """
        Full-scan calculation for one document.

        Reads the body, computes FileStats and writes one property per
        enabled counter. With ``report`` the outcome is summarized through
        the notifier.

        Raises:
            ContentUnavailableError: the document cannot be read
        """
        enabled = _enabled(configs)
        if not enabled:
            self.logger.debug("No enabled counter configurations found")
            result = CalculationResult(document_id)
            if report:
                self._report(result)
            return result

        log_calculation_start(document_id, [c.property for c in enabled], self.logger)
        try:
            body = self.read_body(document_id)
        except ContentUnavailableError as exc:
            self.logger.error(f"Error calculating file stats: {exc}")
            self._notify(f"Error calculating statistics: {error_message(exc)}", "error")
            raise

        stats = self.calculate_base_stats(body, document_id)
        values, failures = self._apply_configs(document_id, enabled, stats)
        result = CalculationResult(document_id, values, stats, failures)
        log_calculation_complete(document_id, values, len(failures), self.logger)
        if report:
            self._report(result)
        return result

    def _cached_headings(self, document_id: str) -> Optional[Dict[int, int]]:
        if self.metadata_index is None:
            return None
        positions = self.metadata_index.get_heading_positions(document_id)
        if not positions:
            return None
        counts = Counter(position.level for position in positions)
        return dict(sorted(counts.items()))

    def calculate_from_cache(
        self,
        document_id: str,
        configs: Iterable[CounterConfig],
        report: bool = False,
    ) -> CalculationResult:
        """
        Cache-assisted calculation for one document.

        Heading counts come from the metadata index when it knows any
        headings, so the body is not scanned for them again; word, character
        and line counts always come from the body. The returned FileStats
        equal what calculate_document() computes for the same content.
        """
        enabled = _enabled(configs)
        if not enabled:
            return CalculationResult(document_id, used_cache=True)

        cached_levels = self._cached_headings(document_id)
        body = self.read_body(document_id)
        stats = self.calculate_base_stats(body, document_id, cached_levels)

        values, failures = self._apply_configs(document_id, enabled, stats)
        result = CalculationResult(document_id, values, stats, failures, used_cache=True)
        log_calculation_complete(document_id, values, len(failures), self.logger)
        if report:
            self._report(result)
        return result

    def calculate_batch(
        self, document_ids: Iterable[str], configs: Iterable[CounterConfig]
    ) -> BatchResult:
        """
        Calculate every document, strictly one after another.

        Per-document failures are logged and recorded, never raised.
        Progress is reported at each tenth of the total when there are more
        than ten documents.
        """
        snapshot = tuple(configs)
        documents = list(document_ids)
        total = len(documents)

        if not _enabled(snapshot):
            self._notify(MESSAGES["NO_ENABLED_COUNTERS"], "warning")
            return BatchResult(processed=0, total=total)

        self._notify(f"Starting batch calculation for {total} files...")
        log_batch_start(total, self.logger)
        started = time.perf_counter()
        step = math.ceil(total / 10) if total > 10 else 0

        batch = BatchResult(processed=0, total=total)
        for document_id in documents:
            try:
                result = self.calculate_document(document_id, snapshot)
            except Exception as exc:
                message = error_message(exc)
                self.logger.error(f"Error processing file {document_id}: {message}")
                batch.failures.append(
                    CalculationFailure(
                        document_id=document_id,
                        category=categorize(exc),
                        message=message,
                    )
                )
                continue

            batch.processed += 1
            batch.results.append(result)
            batch.failures.extend(result.failures)
            if step and batch.processed % step == 0:
                self._notify(
                    f"Progress: {batch.processed}/{total} files processed", "progress"
                )

        self._notify(
            f"Batch calculation completed: {batch.processed}/{total} files processed",
            "success" if batch.processed == total else "warning",
        )
        log_batch_complete(
            batch.processed, total, time.perf_counter() - started, self.logger
        )
        return batch

    def preview(self, document_id: str) -> FileStats:
        """
        Compute FileStats without writing any property.

        Raises:
            ContentUnavailableError: the document is not processable or readable
        """
        if not self.is_processable(document_id):
            raise ContentUnavailableError(document_id, "File is not processable")
        return self.calculate_base_stats(self.read_body(document_id), document_id)


def format_preview(stats: FileStats, name: str) -> str:
    """Human-readable preview of computed statistics."""
    lines = [
        f"Statistics for {name}:",
        f"Words: {stats.word_count}",
        f"Characters (with spaces): {stats.char_count_with_spaces}",
        f"Characters (without spaces): {stats.char_count_without_spaces}",
        f"Lines: {stats.line_count}",
        f"Headings: {stats.heading_count}",
    ]
    if stats.headings_by_level:
        lines.append("Headings by level:")
        lines.extend(
            f"  Level {level}: {count}"
            for level, count in sorted(stats.headings_by_level.items())
        )
    return "\n".join(lines)
