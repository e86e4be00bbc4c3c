"""
Standardized exit codes for CountCraft CLI commands.

Scripts can rely on these codes: calculation runs that record any failure
exit with EXIT_ERROR, invalid counter or settings input with
EXIT_CONFIG_ERROR.
"""

from typing import Optional

import typer
from rich.console import Console

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_USER_CANCEL = 130  # Standard for SIGINT (Ctrl+C)

_console = Console()


class CliExit(typer.Exit):
    """
    CLI exit with a consistent code and an optional message.

    Usage:
        raise CliExit.success()
        raise CliExit.error("Calculation failed")
        raise CliExit.user_cancel()
    """

    def __init__(self, code: int, message: Optional[str] = None):
        self.message = message
        super().__init__(code)
        if message:
            style = "red" if code in (EXIT_ERROR, EXIT_CONFIG_ERROR) else None
            _console.print(message, style=style, markup=False)

    @classmethod
    def success(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_SUCCESS, message)

    @classmethod
    def error(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_ERROR, message)

    @classmethod
    def config_error(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_CONFIG_ERROR, message)

    @classmethod
    def user_cancel(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_USER_CANCEL, message or "Operation cancelled by user")
