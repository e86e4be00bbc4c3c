"""Validation of counter configurations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from countcraft.core.counters.models import CounterConfig, CounterType
from countcraft.core.counters.registry import (
    HEADING_LEVEL_MAX,
    HEADING_LEVEL_MIN,
    resolve_heading_level,
)


class ValidationErrorKind(Enum):
    PROPERTY_NAME_REQUIRED = "property_name_required"
    DUPLICATE_PROPERTY = "duplicate_property"
    TYPE_REQUIRED = "type_required"
    PARAMETER_OUT_OF_RANGE = "parameter_out_of_range"


@dataclass(frozen=True)
class ValidationError:
    kind: ValidationErrorKind
    field: str
    message: str
    property_name: Optional[str] = None


def validate_counter_config(
    candidate: CounterConfig, existing_configs: Iterable[CounterConfig]
) -> Optional[ValidationError]:
    """
    Validate a counter config against the configured collection.

    Checks run in order and the first failure wins:
    1. the trimmed property name is non-empty
    2. no other config (different id) uses the same trimmed property name
    3. a counter type is set
    4. a heading level parameter, when given, is an integer from 1 to 6

    Property names are compared exactly as entered, so ``Words`` and
    ``words`` are different properties. The candidate itself may appear in
    ``existing_configs`` (an edit); it is matched by id and skipped.

    Returns:
        The first violated rule, or None when the config is valid.
    """
    prop = (candidate.property or "").strip()
    if not prop:
        return ValidationError(
            ValidationErrorKind.PROPERTY_NAME_REQUIRED,
            "property",
            "Property name is required",
        )

    for existing in existing_configs:
        if existing.id != candidate.id and (existing.property or "").strip() == prop:
            return ValidationError(
                ValidationErrorKind.DUPLICATE_PROPERTY,
                "property",
                f'Property name "{prop}" is already used by another calculation',
                property_name=prop,
            )

    if candidate.type is None:
        return ValidationError(
            ValidationErrorKind.TYPE_REQUIRED, "type", "Counter type is required"
        )

    if (
        candidate.type == CounterType.HEADING_LEVEL_COUNT
        and candidate.parameter is not None
        and resolve_heading_level(candidate.parameter) is None
    ):
        return ValidationError(
            ValidationErrorKind.PARAMETER_OUT_OF_RANGE,
            "parameter",
            f"Heading level must be between {HEADING_LEVEL_MIN} and {HEADING_LEVEL_MAX}",
        )

    return None
