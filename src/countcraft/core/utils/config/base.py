"""Shared configuration constants."""

from __future__ import annotations

PLUGIN_NAME = "CountCraft"

SETTINGS_DIR_NAME = ".countcraft"
SETTINGS_FILE_NAME = "settings.json"


COUNT_MODES = ("raw", "rendered")
DEFAULT_COUNT_MODE = "raw"

# Delay between a change notification and the recalculation it triggers
DEFAULT_DEBOUNCE_SECONDS = 0.5

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

MARKDOWN_SUFFIXES = (".md",)

MESSAGES = {
    "CALCULATION_COMPLETE": "Calculation completed successfully!",
    "NO_CALCULATIONS": "No calculations were performed (all may be disabled)",
    "NO_ENABLED_COUNTERS": "No counter configurations are enabled",
    "NOT_PROCESSABLE": "Selected file cannot be processed (must be a markdown file)",
}
