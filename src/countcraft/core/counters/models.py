"""Counter configuration and statistics models."""

from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

_ID_ALPHABET = string.digits + string.ascii_lowercase


class CounterType(str, Enum):
    """The closed set of statistics a counter can request."""

    WORD_COUNT = "wordCount"
    CHAR_COUNT_WITH_SPACES = "charCountWithSpaces"
    CHAR_COUNT_WITHOUT_SPACES = "charCountWithoutSpaces"
    LINE_COUNT = "lineCount"
    HEADING_COUNT = "headingCount"
    HEADING_LEVEL_COUNT = "headingLevelCount"


def generate_counter_id() -> str:
    """Return a fresh opaque id: ``counter_<epoch-ms>_<9 base36 chars>``."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"counter_{int(time.time() * 1000)}_{suffix}"


class CounterConfig(BaseModel):
    """
    One user-defined mapping from a counter type to a document property.

    Configs are immutable; an edit produces a new config carrying the same
    id (see ``with_changes``). ``type`` may be missing on a draft so the
    validator can report it, and ``property`` is only trimmed, never
    rewritten.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    id: str = Field(default_factory=generate_counter_id)
    name: str = ""
    type: Optional[CounterType] = None
    property: str = ""
    enabled: bool = True
    parameter: Optional[Union[int, float, str]] = None

    @field_validator("property", mode="before")
    def trim_property(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    def with_changes(self, **changes: object) -> "CounterConfig":
        """Return an edited copy; the id never changes."""
        changes.pop("id", None)
        return CounterConfig(**{**self.model_dump(), **changes})


@dataclass(frozen=True)
class FileStats:
    """Base statistics for one document body."""

    word_count: int
    char_count_with_spaces: int
    char_count_without_spaces: int
    line_count: int
    heading_count: int
    headings_by_level: Dict[int, int] = field(default_factory=dict)


# property name -> value written during one calculation pass
CountResult = Dict[str, int]
