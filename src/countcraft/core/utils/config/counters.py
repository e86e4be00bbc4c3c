"""Counter calculation settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Tuple

from countcraft.core.counters.models import CounterConfig
from .base import COUNT_MODES, DEFAULT_COUNT_MODE, DEFAULT_DEBOUNCE_SECONDS


@dataclass
class CounterSettings:
    """Configured counters and how they are calculated."""

    calculations: List[CounterConfig] = field(default_factory=list)
    auto_calculate: bool = False
    count_mode: Literal["raw", "rendered"] = DEFAULT_COUNT_MODE
    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    ribbon_enabled: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Normalize and validate settings (warn + default on invalid)."""
        from countcraft.core.utils.logger import log_warning

        mode = str(self.count_mode).strip().lower()
        if mode not in COUNT_MODES:
            log_warning(
                "CONFIG", f"Invalid counters.count_mode '{self.count_mode}', using 'raw'"
            )
            mode = DEFAULT_COUNT_MODE
        self.count_mode = mode  # type: ignore[assignment]

        try:
            delay = float(self.debounce_seconds)
        except (TypeError, ValueError):
            log_warning(
                "CONFIG",
                f"Invalid counters.debounce_seconds '{self.debounce_seconds}', "
                f"using {DEFAULT_DEBOUNCE_SECONDS}",
            )
            delay = DEFAULT_DEBOUNCE_SECONDS
        if delay < 0.0:
            log_warning(
                "CONFIG", f"counters.debounce_seconds {delay} < 0; clamping to 0.0"
            )
            delay = 0.0
        self.debounce_seconds = delay

    def enabled_calculations(self) -> Tuple[CounterConfig, ...]:
        return tuple(config for config in self.calculations if config.enabled)

    def find(self, config_id: str) -> CounterConfig | None:
        for config in self.calculations:
            if config.id == config_id:
                return config
        return None

    def replace(self, updated: CounterConfig) -> None:
        """Swap in a new snapshot for the config with the same id."""
        self.calculations = [
            updated if config.id == updated.id else config
            for config in self.calculations
        ]

    def remove(self, config_id: str) -> bool:
        before = len(self.calculations)
        self.calculations = [c for c in self.calculations if c.id != config_id]
        return len(self.calculations) != before
