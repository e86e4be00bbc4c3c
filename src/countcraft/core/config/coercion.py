"""Value coercion utilities for counter parameters and environment settings."""

from __future__ import annotations

import math
from typing import Any, Optional


def coerce_bool(value: Any) -> Any:
    """Coerce common truthy/falsy strings; other values pass through."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    return value


def coerce_float(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return value
    return value


def coerce_number(value: Any) -> Optional[float]:
    """
    Interpret a counter parameter as a finite number.

    Accepts ints, floats and numeric strings (surrounding whitespace
    ignored). Booleans, blanks, NaN and infinities are not numbers.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            number = float(stripped)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def coerce_integer(value: Any) -> Optional[int]:
    """Interpret a counter parameter as an integer; ``2``, ``"2"`` and ``2.0`` all qualify."""
    number = coerce_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)
