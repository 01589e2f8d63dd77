"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. Settings field defaults
#   2. config/config.yaml  - Static defaults checked into the repo
#   3. .env file / environment variables - only the fields actually set
#
# The YAML file groups keys by concern:
#
#   crawl:
#     seed_url: ...
#     max_workers: 4
#   logging:
#     level: INFO
#
# _flatten_yaml() maps those sections onto the flat Settings fields.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from pilkiscraper.config.settings import Settings
from pilkiscraper.utils.errors import ConfigurationError

DEFAULT_CONFIG_PATH = "config/config.yaml"

# YAML (section, key) pairs whose Settings field name differs from the key.
_RENAMED_KEYS = {
    ("logging", "level"): "log_level",
    ("app", "env"): "app_env",
}


def load_settings(path: str | Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Build Settings from the YAML file, then overlay environment values.

    A missing file is not an error: the Settings defaults apply.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Fully resolved Settings.

    Raises:
        ConfigurationError: The YAML is malformed or a value fails validation.
    """
    yaml_config = _read_yaml(Path(path))
    values = _flatten_yaml(yaml_config)

    try:
        env_settings = Settings()
        # Only fields the environment actually set may override the file.
        env_overrides = env_settings.model_dump(include=env_settings.model_fields_set)
        _deep_merge(values, env_overrides)
        return Settings(**values)
    except ValidationError as exc:
        raise ConfigurationError(message=f"Invalid configuration: {exc}") from exc


def _read_yaml(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        return {}
    try:
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(message=f"Cannot read {config_path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ConfigurationError(message=f"{config_path} must contain a mapping")
    return loaded


def _flatten_yaml(yaml_config: dict[str, Any]) -> dict[str, Any]:
    """Turn ``{section: {key: value}}`` into flat Settings keyword arguments."""
    flat: dict[str, Any] = {}
    for section, entries in yaml_config.items():
        if not isinstance(entries, dict):
            raise ConfigurationError(message=f"Config section '{section}' must be a mapping")
        for key, value in entries.items():
            flat[_RENAMED_KEYS.get((section, key), key)] = value
    return flat


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
