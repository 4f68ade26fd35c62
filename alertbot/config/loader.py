"""YAML config loader with environment overrides and dotted-key lookup."""

import os
from pathlib import Path
from typing import Any

import yaml

from alertbot.config.schema import BotConfig

# env var -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "FORECAST_API_KEY": ("forecast", "api_key"),
    "VIBER_API_KEY": ("viber", "api_key"),
    "VIBER_ADMIN_ID": ("viber", "admin_id"),
    "PORT": ("server", "port"),
}


def load_config(path: str | Path | None = None) -> BotConfig:
    """Load and validate config from a YAML file.

    A missing path or an empty file yields the defaults. Secrets and the
    server port may be supplied through the environment instead.
    """
    raw: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    _apply_env_overrides(raw, os.environ)
    return BotConfig(**raw)


def _apply_env_overrides(raw: dict[str, Any], environ: Any) -> None:
    for var, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(var)
        if value:
            section_map = raw.get(section) or {}
            section_map[key] = value
            raw[section] = section_map


def get_config_value(config: BotConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'schedule.interval_seconds'."""
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
