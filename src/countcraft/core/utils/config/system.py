"""System configuration classes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base import LOG_LEVELS


@dataclass
class LoggingConfig:
    """Logging verbosity and destination."""

    level: str = "INFO"
    log_file: Optional[str] = None
    debug_mode: bool = False

    def effective_level(self) -> str:
        if self.debug_mode:
            return "DEBUG"
        level = str(self.level).upper()
        return level if level in LOG_LEVELS else "INFO"
