"""YAML config loader with environment overlay and runtime get/set."""

import json
import os
from pathlib import Path
from typing import Any

import yaml

from tripweather.config.defaults import API_KEY_ENV_VAR
from tripweather.config.schema import WeatherConfig


def load_config(path: str | Path | None = None) -> WeatherConfig:
    """Load and validate config from a YAML file.

    A missing path or file yields defaults. If the file leaves ``api.api_key``
    empty, OPENWEATHER_API_KEY from the environment is injected.
    """
    raw: dict = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    api = raw.setdefault("api", {}) or {}
    raw["api"] = api
    if not api.get("api_key"):
        api["api_key"] = os.environ.get(API_KEY_ENV_VAR, "")

    return WeatherConfig(**raw)


def get_config_value(config: WeatherConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'cache.ttl_minutes'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: WeatherConfig, dotted_key: str, value: Any) -> WeatherConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new WeatherConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    old_value = target[parts[-1]]
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return WeatherConfig(**data)
