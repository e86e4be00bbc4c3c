"""
Utility functions for CountCraft.

Error kinds, failure records and message helpers shared by the engine,
the adapters and the command line.
"""

from .error_handling import (
    CalculationFailure,
    ContentUnavailableError,
    CountCraftError,
    ErrorCategory,
    InvalidParameterError,
    PropertyWriteFailedError,
    SettingsImportError,
    UnknownCounterTypeError,
    error_message,
)
