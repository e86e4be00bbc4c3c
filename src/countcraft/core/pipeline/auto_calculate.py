"""
Debounced auto-recalculation.

Change notifications arrive per document. Each document gets its own
timer; a newer notification for the same document restarts it, so a burst
of edits produces a single recalculation once the document settles.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Iterable, Optional

from countcraft.core.counters.models import CounterConfig
from countcraft.core.utils.config.base import DEFAULT_DEBOUNCE_SECONDS
from countcraft.utils.error_handling import error_message

from .statistics_engine import CalculationResult, StatisticsEngine

ConfigsProvider = Callable[[], Iterable[CounterConfig]]


class AutoRecalculator:
    """
    Recalculate documents shortly after they change.

    Args:
        engine: engine used for the cache-assisted calculation
        configs_provider: returns the current counter configs; called when
            a timer fires so edits made in the meantime are honoured
        delay: seconds to wait after the last change
        enabled: when False, notifications are ignored
        on_result: optional callback receiving each CalculationResult
    """

    def __init__(
        self,
        engine: StatisticsEngine,
        configs_provider: ConfigsProvider,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
        enabled: bool = True,
        on_result: Optional[Callable[[CalculationResult], None]] = None,
    ):
        self.engine = engine
        self.configs_provider = configs_provider
        self.delay = max(0.0, float(delay))
        self.enabled = enabled
        self.on_result = on_result
        self.logger = engine.logger
        self._timers: Dict[str, threading.Timer] = {}
        self._lock = threading.Lock()

    def notify_changed(self, document_id: str) -> bool:
        """
        Schedule a recalculation for a changed document.

        Returns False when auto-calculation is disabled or the document is
        not processable.
        """
        if not self.enabled:
            return False
        if not self.engine.is_processable(document_id):
            self.logger.debug(f"Ignoring change to unprocessable {document_id}")
            return False

        timer = threading.Timer(self.delay, self._run, args=(document_id,))
        timer.daemon = True
        with self._lock:
            previous = self._timers.pop(document_id, None)
            if previous is not None:
                previous.cancel()
            self._timers[document_id] = timer
        timer.start()
        return True

    def _run(self, document_id: str) -> None:
        try:
            self._recalculate(document_id)
        finally:
            with self._lock:
                if self._timers.get(document_id) is threading.current_thread():
                    del self._timers[document_id]

    def _recalculate(self, document_id: str) -> None:
        try:
            configs = tuple(self.configs_provider())
            result = self.engine.calculate_from_cache(document_id, configs)
        except Exception as exc:
            self.logger.error(
                f"Auto-calculation failed for {document_id}: {error_message(exc)}"
            )
            return

        if result.values:
            self.logger.info(f"Auto-calculated stats for {document_id}")
        if self.on_result is not None:
            try:
                self.on_result(result)
            except Exception as exc:
                self.logger.warning(f"Result callback failed: {error_message(exc)}")

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._timers)

    def cancel(self, document_id: str) -> None:
        with self._lock:
            timer = self._timers.pop(document_id, None)
        if timer is not None:
            timer.cancel()

    def cancel_all(self) -> None:
        with self._lock:
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.cancel()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until every scheduled recalculation has run; False on timeout."""
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            with self._lock:
                timers = list(self._timers.values())
            if not timers:
                return True
            for timer in timers:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return False
                timer.join(remaining)
