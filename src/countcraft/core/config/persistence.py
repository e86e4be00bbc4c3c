"""Settings file persistence, export and import."""

from __future__ import annotations

import json
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as ModelValidationError

from countcraft.core.config.validation import validate_counter_config
from countcraft.core.counters.models import CounterConfig
from countcraft.core.utils.config.base import SETTINGS_DIR_NAME, SETTINGS_FILE_NAME
from countcraft.utils.error_handling import SettingsImportError

SETTINGS_SCHEMA_VERSION = 1

# Flat keys used by earlier settings files, mapped to (section, key)
_LEGACY_KEYS = {
    "calculations": ("counters", "calculations"),
    "autoCalculate": ("counters", "auto_calculate"),
    "ribbonEnabled": ("counters", "ribbon_enabled"),
    "debugMode": ("logging", "debug_mode"),
}
_BOOLEAN_KEYS = {
    ("counters", "auto_calculate"),
    ("counters", "ribbon_enabled"),
    ("logging", "debug_mode"),
}


@contextmanager
def settings_write_lock(path: Path):
    """Lock abstraction (no-op; single writer per settings file)."""
    yield


def _wrap_settings(settings_dict: Dict[str, Any]) -> Dict[str, Any]:
    return {"schema_version": SETTINGS_SCHEMA_VERSION, "config": settings_dict}


def _unwrap_settings(payload: Dict[str, Any]) -> Dict[str, Any]:
    if "config" in payload and isinstance(payload["config"], dict):
        return payload["config"]
    return payload


def get_settings_path() -> Path:
    """Settings location: ``COUNTCRAFT_SETTINGS_FILE`` or ``./.countcraft/settings.json``."""
    override = os.getenv("COUNTCRAFT_SETTINGS_FILE")
    if override:
        return Path(override)
    return Path.cwd() / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME


def save_settings_atomic(settings_dict: Dict[str, Any], target_path: Path) -> None:
    target_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = target_path.with_suffix(".tmp")
    payload = _wrap_settings(settings_dict)
    with settings_write_lock(target_path):
        temp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        temp_path.replace(target_path)


def load_settings_safe(settings_path: Path) -> Optional[Dict[str, Any]]:
    if not settings_path.exists():
        return None
    payload = json.loads(settings_path.read_text(encoding="utf-8"))
    return normalize_settings(_unwrap_settings(payload)) if isinstance(payload, dict) else None


def normalize_settings(data: Dict[str, Any]) -> Dict[str, Any]:
    """Fold legacy flat keys into the sectioned layout."""
    normalized: Dict[str, Any] = {
        key: dict(value) if isinstance(value, dict) else value
        for key, value in data.items()
        if key not in _LEGACY_KEYS
    }
    for legacy_key, (section, key) in _LEGACY_KEYS.items():
        if legacy_key in data:
            target = normalized.setdefault(section, {})
            if isinstance(target, dict):
                target.setdefault(key, data[legacy_key])
    return normalized


def export_settings(settings_dict: Dict[str, Any]) -> str:
    """Serialize settings for backup."""
    return json.dumps(settings_dict, indent=2)


def _parse_calculations(raw: Any) -> List[CounterConfig]:
    if not isinstance(raw, list):
        raise SettingsImportError("'calculations' must be a list")
    configs: List[CounterConfig] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise SettingsImportError(f"Calculation #{index + 1} must be an object")
        if not item.get("id") or not item.get("type") or not item.get("property"):
            raise SettingsImportError(
                f"Calculation #{index + 1} needs an id, a type and a property"
            )
        if not isinstance(item.get("enabled"), bool):
            raise SettingsImportError(
                f"Calculation #{index + 1} needs a boolean 'enabled' flag"
            )
        try:
            configs.append(CounterConfig(**item))
        except ModelValidationError as exc:
            raise SettingsImportError(
                f"Calculation #{index + 1} is invalid: {exc.errors()[0]['msg']}"
            ) from exc
    for config in configs:
        problem = validate_counter_config(config, configs)
        if problem is not None:
            raise SettingsImportError(problem.message)
    return configs


def parse_imported_settings(settings_json: str) -> Dict[str, Any]:
    """
    Parse and validate settings exported by export_settings().

    Accepts the sectioned layout, the ``schema_version`` wrapper and the
    older flat layout. Calculations are returned as CounterConfig objects.

    Raises:
        SettingsImportError: the text is not valid settings JSON
    """
    try:
        payload = json.loads(settings_json)
    except json.JSONDecodeError as exc:
        raise SettingsImportError(f"Invalid settings format: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise SettingsImportError("Invalid settings format")

    data = normalize_settings(_unwrap_settings(payload))
    for section in ("counters", "logging"):
        if section in data and not isinstance(data[section], dict):
            raise SettingsImportError(f"'{section}' must be an object")

    for section, key in _BOOLEAN_KEYS:
        value = data.get(section, {}).get(key)
        if value is not None and not isinstance(value, bool):
            raise SettingsImportError(f"'{key}' must be true or false")

    counters = data.get("counters", {})
    if "calculations" in counters:
        counters["calculations"] = _parse_calculations(counters["calculations"])
    return data
