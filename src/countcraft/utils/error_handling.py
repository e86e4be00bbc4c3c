"""
Error kinds and failure records for CountCraft.

Failures are isolated to the smallest unit possible:
- ContentUnavailableError aborts one document's calculation
- InvalidParameterError aborts one counter's projection
- PropertyWriteFailedError aborts one property write
- UnknownCounterTypeError signals a programming error

The engine records each isolated failure as a CalculationFailure so callers
can report them without parsing log output.
"""

import json
from dataclasses import dataclass
from enum import Enum


class ErrorCategory(Enum):
    """Error categories used when reporting isolated failures."""

    CONTENT_UNAVAILABLE = "CONTENT_UNAVAILABLE"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    UNKNOWN_COUNTER_TYPE = "UNKNOWN_COUNTER_TYPE"
    PROPERTY_WRITE_FAILED = "PROPERTY_WRITE_FAILED"
    SETTINGS = "SETTINGS"
    UNKNOWN = "UNKNOWN"


class CountCraftError(Exception):
    """Base class for all CountCraft errors."""

    category = ErrorCategory.UNKNOWN


class ContentUnavailableError(CountCraftError):
    """A document could not be read."""

    category = ErrorCategory.CONTENT_UNAVAILABLE

    def __init__(self, document_id: str, reason: str = ""):
        self.document_id = document_id
        self.reason = reason
        message = f"Content unavailable for {document_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class InvalidParameterError(CountCraftError):
    """A parameterized counter has a missing or out-of-range parameter."""

    category = ErrorCategory.INVALID_PARAMETER


class UnknownCounterTypeError(CountCraftError):
    """A counter type has no projection; should be unreachable."""

    category = ErrorCategory.UNKNOWN_COUNTER_TYPE


class PropertyWriteFailedError(CountCraftError):
    """The property store rejected a write."""

    category = ErrorCategory.PROPERTY_WRITE_FAILED

    def __init__(self, document_id: str, property_name: str, reason: str = ""):
        self.document_id = document_id
        self.property_name = property_name
        message = f"Failed to write property '{property_name}' on {document_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class SettingsImportError(CountCraftError):
    """Imported settings did not have the expected structure."""

    category = ErrorCategory.SETTINGS


@dataclass(frozen=True)
class CalculationFailure:
    """One isolated failure recorded during a calculation pass."""

    document_id: str
    category: ErrorCategory
    message: str
    config_id: str | None = None
    config_name: str | None = None
    property_name: str | None = None


def error_message(error: object) -> str:
    """Safely extract a readable message from an exception or arbitrary value."""
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    if isinstance(error, str):
        return error
    try:
        return json.dumps(error)
    except (TypeError, ValueError):
        return str(error)


def categorize(error: BaseException) -> ErrorCategory:
    """Return the error category for an exception."""
    if isinstance(error, CountCraftError):
        return error.category
    return ErrorCategory.UNKNOWN
