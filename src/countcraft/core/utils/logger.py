# countcraft/core/utils/logger.py

"""
Logging configuration and utilities for CountCraft.

This module provides centralized logging configuration and utility functions
for consistent error reporting and debugging across all CountCraft modules.

The logging system provides:
- Consistent log formatting across all modules
- Console output with an optional log file
- Module-tagged messages with optional context
- Calculation and batch tracking helpers

Verbosity is configuration, not global state: callers pick the level when
calling setup_logging() (``debug_mode`` in the settings maps to DEBUG), and
components such as the statistics engine receive their logger explicitly.
"""

import logging
import sys
from typing import Any

# Global logger instance for singleton pattern
_logger: logging.Logger | None = None

# Default logging configuration values
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME = "countcraft"


def setup_logging(
    level: str = DEFAULT_LOG_LEVEL,
    log_file: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Set up logging configuration for CountCraft.

    Initializes the ``countcraft`` logger with a console handler and an
    optional file handler. Calling it again replaces the existing handlers,
    so it can be used to change verbosity at runtime.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional). If provided, logs will be
                 written to both console and file.
        format_string: Custom log format string (optional).

    Returns:
        Configured logger instance
    """
    global _logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.disabled = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(format_string or DEFAULT_LOG_FORMAT)

    # stderr keeps command output on stdout clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """
    Get the global logger instance.

    If the logger hasn't been initialized yet, it is set up with the
    default configuration.
    """
    if _logger is None:
        return setup_logging()
    return _logger


def _format(module: str, message: str, context: str = "") -> str:
    formatted = f"[{module.upper()}] {message}"
    if context:
        formatted += f" | Context: {context}"
    return formatted


def log_error(
    module: str, error: str, context: str = "", exception: Exception | None = None
) -> None:
    """
    Log a standardized error message.

    Args:
        module: Name of the module where the error occurred
        error: Error message describing what went wrong
        context: Additional context information (optional)
        exception: Exception object to include stack trace (optional)
    """
    logger = get_logger()
    message = _format(module, error, context)
    if exception:
        logger.error(message, exc_info=exception)
    else:
        logger.error(message)


def log_warning(module: str, warning: str, context: str = "") -> None:
    """Log a standardized warning message."""
    get_logger().warning(_format(module, warning, context))


def log_info(module: str, message: str, context: str = "") -> None:
    """Log a standardized info message."""
    get_logger().info(_format(module, message, context))


def log_debug(module: str, message: str, context: str = "") -> None:
    """Log a standardized debug message."""
    get_logger().debug(_format(module, message, context))


def log_calculation_start(
    document_id: str, properties: list[str], logger: logging.Logger | None = None
) -> None:
    """
    Log the start of a single-document calculation.

    Args:
        document_id: Identifier (path) of the document
        properties: Property names that will be computed
        logger: Logger to use instead of the global one (optional)
    """
    (logger or get_logger()).debug(
        f"Calculating stats for {document_id}: {', '.join(properties)}"
    )


def log_calculation_complete(
    document_id: str,
    results: dict[str, int],
    failures: int = 0,
    logger: logging.Logger | None = None,
) -> None:
    """Log the outcome of a single-document calculation."""
    message = f"Calculation completed for {document_id}: {results}"
    if failures:
        message += f" ({failures} failed)"
    (logger or get_logger()).debug(message)


def log_batch_start(total: int, logger: logging.Logger | None = None) -> None:
    """Log the start of a batch calculation."""
    (logger or get_logger()).info(f"Starting batch calculation for {total} documents")


def log_batch_complete(
    processed: int, total: int, duration: float | None = None,
    logger: logging.Logger | None = None,
) -> None:
    """Log the completion of a batch calculation."""
    message = f"Batch calculation completed: {processed}/{total} documents processed"
    if duration is not None:
        message += f" (took {duration:.2f}s)"
    (logger or get_logger()).info(message)


def log_property_write(
    document_id: str,
    name: str,
    value: int,
    success: bool,
    logger: logging.Logger | None = None,
) -> None:
    """Log a property write against a document."""
    if success:
        (logger or get_logger()).debug(f"Updated {name}: {value} ({document_id})")
    else:
        (logger or get_logger()).error(
            f"Property write failed: {name}={value} ({document_id})"
        )


def log_configuration_change(setting: str, old_value: Any, new_value: Any) -> None:
    """
    Log a configuration change.

    Args:
        setting: Name of the setting that changed
        old_value: Previous value of the setting
        new_value: New value of the setting
    """
    get_logger().info(f"Configuration changed: {setting} = {old_value} -> {new_value}")


def reset_logging() -> None:
    """
    Reset the global logger instance.

    Useful for tests or when the logging system must be reconfigured from
    scratch.
    """
    global _logger
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    _logger = None
