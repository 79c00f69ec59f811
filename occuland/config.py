"""Configuration loader for the Occuland registries

Configurable values come from config/config.yaml. Configuration is
validated at load time using Pydantic, so typos and invalid values fail
fast with clear error messages.

Usage:
    from occuland.config import load_config, get, get_validated_config

    # Load and validate (call once at startup)
    load_config("config/config.yaml")

    # Get values by dot-path
    symbol = get("registry.symbol")

    # Or use the typed config object (preferred)
    config = get_validated_config()
    policy = config.registry.token_id_policy
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .config_schema import AppConfig, load_validated_config, validate_config_dict


# Global config instances
_config: dict[str, Any] | None = None
_validated_config: AppConfig | None = None

# Default config path
DEFAULT_CONFIG_PATH: Path = Path(__file__).parent.parent / "config" / "config.yaml"


def load_config(config_path: str | None = None) -> dict[str, Any]:
    """Load and validate configuration from YAML file.

    When no path is given and the default file is absent (e.g. an installed
    package without the repository's config/ directory), the schema
    defaults are used.

    Args:
        config_path: Path to config file. Defaults to config/config.yaml.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    global _config, _validated_config

    if config_path is None and not DEFAULT_CONFIG_PATH.exists():
        _validated_config = AppConfig()
        _config = _validated_config.model_dump()
        return _config

    path: Path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    _validated_config = load_validated_config(path)

    with open(path) as f:
        loaded: Any = yaml.safe_load(f)
        if not isinstance(loaded, dict):
            loaded = {}
        _config = loaded

    return _config


def get_config() -> dict[str, Any]:
    """Get the loaded configuration dict. Loads default if not already loaded.

    For typed access, use get_validated_config() instead.
    """
    global _config
    if _config is None:
        load_config()
    if _config is None:
        raise RuntimeError("Config failed to load. Call load_config() first.")
    return _config


def get_validated_config() -> AppConfig:
    """Get the validated configuration object.

    Loads default config if not already loaded.
    """
    global _validated_config
    if _validated_config is None:
        load_config()
    if _validated_config is None:
        raise RuntimeError("Validated config failed to load. Call load_config() first.")
    return _validated_config


def get(key: str, default: Any = None) -> Any:
    """Get a config value by dot-separated key path.

    Keys missing from the YAML file resolve against the validated config,
    so schema defaults are visible here too.

    Examples:
        get("registry.token_id_policy")
        get("land.update_operator_policy")
    """
    value: Any = get_validated_config().model_dump()
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value


def set_config_value(key: str, value: Any) -> None:
    """Set a config value by dot-separated key path and re-validate.

    Used for runtime overrides (tests, embedding applications).

    Args:
        key: Dot-separated key path (e.g., "registry.token_id_policy")
        value: Value to set

    Raises:
        pydantic.ValidationError: If the override makes the config invalid.
            The previous config stays in effect.
    """
    global _config, _validated_config

    if _config is None:
        load_config()

    if _config is None:
        raise RuntimeError("Config failed to load. Call load_config() first.")

    updated: dict[str, Any] = {
        k: dict(v) if isinstance(v, dict) else v for k, v in _config.items()
    }
    keys = key.split(".")
    target = updated

    # Navigate to parent
    for k in keys[:-1]:
        if not isinstance(target.get(k), dict):
            target[k] = {}
        target = target[k]

    target[keys[-1]] = value

    _validated_config = validate_config_dict(updated)
    _config = updated


def reset_config() -> None:
    """Forget the loaded config so the next access reloads it."""
    global _config, _validated_config
    _config = None
    _validated_config = None


def configure_logging(level: str | None = None) -> None:
    """Set the level of the ``occuland`` logger hierarchy from config."""
    resolved = level or get_validated_config().logging.level
    logging.getLogger("occuland").setLevel(resolved.upper())
