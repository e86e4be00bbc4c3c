"""
Counter registry for CountCraft.

Single source of truth for the supported counter types: their display
metadata, their parameter rules, their default property names, and the
projection that turns FileStats into the one number a counter writes.

The projection table is checked against CounterType at import time, so a
new counter type cannot be added without a projection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Literal, Optional, Tuple

from countcraft.core.config.coercion import coerce_integer
from countcraft.core.counters.models import CounterType, FileStats
from countcraft.utils.error_handling import (
    InvalidParameterError,
    UnknownCounterTypeError,
)

HEADING_LEVEL_MIN = 1
HEADING_LEVEL_MAX = 6


@dataclass(frozen=True)
class CounterDefinition:
    """Display and parameter metadata for one counter type."""

    type: CounterType
    name: str
    description: str
    has_parameter: bool = False
    parameter_name: Optional[str] = None
    parameter_type: Optional[Literal["number", "string"]] = None
    parameter_min: Optional[int] = None
    parameter_max: Optional[int] = None


COUNTER_DEFINITIONS: Tuple[CounterDefinition, ...] = (
    CounterDefinition(
        type=CounterType.WORD_COUNT,
        name="Word Count",
        description="Counts the total number of words in the note",
    ),
    CounterDefinition(
        type=CounterType.CHAR_COUNT_WITH_SPACES,
        name="Character Count (with spaces)",
        description="Counts all characters including spaces",
    ),
    CounterDefinition(
        type=CounterType.CHAR_COUNT_WITHOUT_SPACES,
        name="Character Count (without spaces)",
        description="Counts characters excluding spaces and line breaks",
    ),
    CounterDefinition(
        type=CounterType.LINE_COUNT,
        name="Line Count",
        description="Counts the total number of lines in the note",
    ),
    CounterDefinition(
        type=CounterType.HEADING_COUNT,
        name="Heading Count (All Levels)",
        description="Counts all headings regardless of level",
    ),
    CounterDefinition(
        type=CounterType.HEADING_LEVEL_COUNT,
        name="Heading Count (Specific Level)",
        description="Counts headings of a specific level",
        has_parameter=True,
        parameter_name="Level",
        parameter_type="number",
        parameter_min=HEADING_LEVEL_MIN,
        parameter_max=HEADING_LEVEL_MAX,
    ),
)

DEFAULT_PROPERTY_NAMES: Dict[CounterType, str] = {
    CounterType.WORD_COUNT: "word-count",
    CounterType.CHAR_COUNT_WITH_SPACES: "char-count-with-spaces",
    CounterType.CHAR_COUNT_WITHOUT_SPACES: "char-count-without-spaces",
    CounterType.LINE_COUNT: "line-count",
    CounterType.HEADING_COUNT: "heading-count",
    CounterType.HEADING_LEVEL_COUNT: "heading-level-count",
}

_DEFINITIONS_BY_TYPE: Dict[CounterType, CounterDefinition] = {
    definition.type: definition for definition in COUNTER_DEFINITIONS
}


def _resolve_type(counter_type: Any) -> Optional[CounterType]:
    if isinstance(counter_type, CounterType):
        return counter_type
    try:
        return CounterType(counter_type)
    except ValueError:
        return None


def get_definition(counter_type: Any) -> Optional[CounterDefinition]:
    """Look up a counter definition; unknown types return None."""
    resolved = _resolve_type(counter_type)
    if resolved is None:
        return None
    return _DEFINITIONS_BY_TYPE.get(resolved)


def list_definitions() -> Tuple[CounterDefinition, ...]:
    """Return all counter definitions in catalog order."""
    return COUNTER_DEFINITIONS


def default_property_name(counter_type: Any) -> Optional[str]:
    resolved = _resolve_type(counter_type)
    return DEFAULT_PROPERTY_NAMES.get(resolved) if resolved else None


def resolve_heading_level(parameter: Any) -> Optional[int]:
    """Return the heading level a parameter names, or None if it is not 1-6."""
    level = coerce_integer(parameter)
    if level is None or not HEADING_LEVEL_MIN <= level <= HEADING_LEVEL_MAX:
        return None
    return level


def _project_heading_level(stats: FileStats, parameter: Any) -> int:
    if parameter is None:
        raise InvalidParameterError("Heading level parameter is required")
    level = resolve_heading_level(parameter)
    if level is None:
        raise InvalidParameterError(
            f"Heading level must be between {HEADING_LEVEL_MIN} and {HEADING_LEVEL_MAX}"
        )
    return stats.headings_by_level.get(level, 0)


Projection = Callable[[FileStats, Any], int]

PROJECTIONS: Dict[CounterType, Projection] = {
    CounterType.WORD_COUNT: lambda stats, _: stats.word_count,
    CounterType.CHAR_COUNT_WITH_SPACES: lambda stats, _: stats.char_count_with_spaces,
    CounterType.CHAR_COUNT_WITHOUT_SPACES: lambda stats, _: stats.char_count_without_spaces,
    CounterType.LINE_COUNT: lambda stats, _: stats.line_count,
    CounterType.HEADING_COUNT: lambda stats, _: stats.heading_count,
    CounterType.HEADING_LEVEL_COUNT: _project_heading_level,
}

_missing = set(CounterType) - set(PROJECTIONS)
if _missing or set(CounterType) - set(_DEFINITIONS_BY_TYPE):
    raise RuntimeError(
        f"Counter registry is incomplete: {sorted(t.value for t in _missing)}"
    )


def project(counter_type: Any, stats: FileStats, parameter: Any = None) -> int:
    """
    Resolve the scalar a counter type requests from computed statistics.

    Raises:
        InvalidParameterError: heading level missing or outside 1-6
        UnknownCounterTypeError: the type is not a CounterType
    """
    resolved = _resolve_type(counter_type)
    projection = PROJECTIONS.get(resolved) if resolved else None
    if projection is None:
        raise UnknownCounterTypeError(f"Unknown counter type: {counter_type}")
    return projection(stats, parameter)
