"""YAML config loader with preference persistence and dotted get/set."""

import json
import os
from pathlib import Path
from typing import Any

import yaml

from weatherdash.config.defaults import DEFAULT_LOCATIONS
from weatherdash.config.schema import DashboardConfig

API_KEY_ENV = "OPENWEATHER_API_KEY"


def load_config(path: str | Path) -> DashboardConfig:
    """Load and validate config from a YAML file.

    A missing file yields the defaults. If no locations are specified,
    injects DEFAULT_LOCATIONS. OPENWEATHER_API_KEY overrides provider.api_key.
    """
    path = Path(path)
    raw: dict[str, Any] = {}
    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    if "locations" not in raw or not raw["locations"]:
        raw["locations"] = [loc.model_dump() for loc in DEFAULT_LOCATIONS]

    env_key = os.environ.get(API_KEY_ENV)
    if env_key:
        raw["provider"] = {**(raw.get("provider") or {}), "api_key": env_key}

    return DashboardConfig(**raw)


def save_config(config: DashboardConfig, path: str | Path) -> None:
    """Write config back to YAML, leaving out an API key taken from the environment."""
    path = Path(path)
    data = json.loads(config.model_dump_json())
    if os.environ.get(API_KEY_ENV):
        data["provider"].pop("api_key", None)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(data, f, sort_keys=False)


def get_config_value(config: DashboardConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'display.temperature_unit'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: DashboardConfig, dotted_key: str, value: Any) -> DashboardConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new DashboardConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = _child(target, part, dotted_key)
    if not isinstance(target, dict) or parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    # Attempt type coercion for common cases
    old_value = target.get(parts[-1])
    if isinstance(old_value, bool) and isinstance(value, str):
        value = _parse_bool(value)
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return DashboardConfig(**data)


def _child(node: Any, part: str, dotted_key: str) -> Any:
    if isinstance(node, list):
        try:
            return node[int(part)]
        except (ValueError, IndexError):
            raise KeyError(f"Config key not found: {dotted_key}") from None
    if isinstance(node, dict) and part in node:
        return node[part]
    raise KeyError(f"Config key not found: {dotted_key}")


_TRUE_STRINGS = ("1", "true", "yes", "on")
_FALSE_STRINGS = ("0", "false", "no", "off")


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    raise ValueError(f"Not a boolean: {value!r}")
