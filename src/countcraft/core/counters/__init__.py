"""Counter types, configurations and projections."""

from .models import CounterConfig, CounterType, CountResult, FileStats, generate_counter_id
from .registry import (
    COUNTER_DEFINITIONS,
    DEFAULT_PROPERTY_NAMES,
    CounterDefinition,
    default_property_name,
    get_definition,
    list_definitions,
    project,
    resolve_heading_level,
)
