"""Top-level CountCraft configuration."""

from __future__ import annotations

import os
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from countcraft.core.config.coercion import coerce_bool, coerce_float
from countcraft.core.counters.models import CounterConfig
from .counters import CounterSettings
from .system import LoggingConfig


class CountCraftConfig:
    """
    Main configuration class for CountCraft.

    Combines configuration from several sources, lowest priority first:
    1. Default values
    2. Settings file (JSON)
    3. ``.env`` file in the working directory
    4. ``COUNTCRAFT_*`` environment variables

    Sections:
    - counters: configured counters, auto-calculation and count mode
    - logging: log level, log file and debug mode
    """

    def __init__(self, config_file: str | None = None):
        self.counters = CounterSettings()
        self.logging = LoggingConfig()
        self.config_file = config_file

        if config_file:
            self._load_from_file(config_file)

        load_dotenv(override=False)
        self._load_from_env()

    def _load_from_env(self) -> None:
        """
        Load configuration from environment variables.

        Supported environment variables:
        - COUNTCRAFT_LOG_LEVEL: Logging level
        - COUNTCRAFT_LOG_FILE: Log file path
        - COUNTCRAFT_DEBUG: Enable debug logging (1/true/yes/on)
        - COUNTCRAFT_AUTO_CALCULATE: Recalculate on document changes
        - COUNTCRAFT_COUNT_MODE: 'raw' or 'rendered'
        - COUNTCRAFT_DEBOUNCE_SECONDS: Delay before auto-recalculation
        """
        level = os.getenv("COUNTCRAFT_LOG_LEVEL")
        if level:
            self.logging.level = level.strip().upper()

        log_file = os.getenv("COUNTCRAFT_LOG_FILE")
        if log_file:
            self.logging.log_file = log_file

        debug = coerce_bool(os.getenv("COUNTCRAFT_DEBUG"))
        if isinstance(debug, bool):
            self.logging.debug_mode = debug

        auto = coerce_bool(os.getenv("COUNTCRAFT_AUTO_CALCULATE"))
        if isinstance(auto, bool):
            self.counters.auto_calculate = auto

        mode = os.getenv("COUNTCRAFT_COUNT_MODE")
        if mode:
            self.counters.count_mode = mode  # type: ignore[assignment]

        delay = coerce_float(os.getenv("COUNTCRAFT_DEBOUNCE_SECONDS"))
        if isinstance(delay, float):
            self.counters.debounce_seconds = delay

        self.counters.validate()

    def _load_from_file(self, config_file: str) -> None:
        """
        Load settings from a JSON file written by save_to_file().

        Missing files are ignored. Unknown keys are ignored. The file may use
        the sectioned layout or the older flat layout.
        """
        from countcraft.core.config.persistence import load_settings_safe

        data = load_settings_safe(Path(config_file))
        if data is None:
            return
        self.apply_dict(data)

    def apply_dict(self, data: Dict[str, Any]) -> None:
        """Apply a (normalized) settings dict on top of the current values."""
        counters = data.get("counters") or {}
        for key, value in counters.items():
            if key == "calculations":
                self.counters.calculations = [
                    item if isinstance(item, CounterConfig) else CounterConfig(**item)
                    for item in value
                ]
            elif hasattr(self.counters, key):
                setattr(self.counters, key, value)
        self.counters.validate()

        for key, value in (data.get("logging") or {}).items():
            if hasattr(self.logging, key):
                setattr(self.logging, key, value)

    def to_dict(self) -> Dict[str, Any]:
        """Return a complete configuration snapshot as a dictionary."""
        counters = asdict(self.counters)
        counters["calculations"] = [
            config.model_dump(mode="json") for config in self.counters.calculations
        ]
        return {"counters": counters, "logging": asdict(self.logging)}

    def save_to_file(self, config_file: str | None = None) -> Path:
        """Save the configuration atomically; returns the path written."""
        from countcraft.core.config.persistence import (
            get_settings_path,
            save_settings_atomic,
        )

        target = Path(config_file or self.config_file or get_settings_path())
        save_settings_atomic(self.to_dict(), target)
        return target

    def status(self) -> Dict[str, Any]:
        return {
            "calculations_count": len(self.counters.calculations),
            "enabled_count": len(self.counters.enabled_calculations()),
            "ribbon_enabled": self.counters.ribbon_enabled,
            "auto_calculate_enabled": self.counters.auto_calculate,
        }


_config: Optional[CountCraftConfig] = None


def get_config() -> CountCraftConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        from countcraft.core.config.persistence import get_settings_path

        _config = CountCraftConfig(str(get_settings_path()))
    return _config


def set_config(config: CountCraftConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def load_config(config_file: str) -> CountCraftConfig:
    """Load configuration from file and set as global config."""
    config = CountCraftConfig(config_file)
    set_config(config)
    return config


def reset_config() -> None:
    global _config
    _config = None
