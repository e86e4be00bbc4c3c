"""
User notification utilities for CountCraft.

Notifications are best-effort: the engine wraps every call so a failing
notifier can never abort a calculation. RichNotifier prints to the terminal;
NullNotifier discards everything.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rich.console import Console
from rich.markup import escape

console = Console()

LEVEL_STYLES = {
    "info": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "bold red",
    "progress": "blue",
}


class Notifier(ABC):
    """Best-effort progress and result reporting."""

    @abstractmethod
    def notify(self, message: str, level: str = "info") -> None:
        raise NotImplementedError


class NullNotifier(Notifier):
    """Discards every notification."""

    def notify(self, message: str, level: str = "info") -> None:
        return None


class RichNotifier(Notifier):
    """Prints notifications through a rich console."""

    def __init__(self, output: Console | None = None, quiet: bool = False):
        self.console = output or console
        self.quiet = quiet

    def notify(self, message: str, level: str = "info") -> None:
        if self.quiet and level in ("info", "progress"):
            return
        style = LEVEL_STYLES.get(level, LEVEL_STYLES["info"])
        self.console.print(escape(message), style=style)
