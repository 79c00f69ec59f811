"""Pydantic schema for configuration validation.

All config values are validated at load time. Typos and invalid values
fail fast with clear error messages.

Usage:
    from occuland.config_schema import load_validated_config, AppConfig
    config = load_validated_config("config/config.yaml")
    # config is now a validated AppConfig instance
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# BASE MODEL WITH STRICT VALIDATION
# =============================================================================

class StrictModel(BaseModel):
    """Base model that rejects unknown fields (catches typos)."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# REGISTRY MODELS
# =============================================================================

TokenIdPolicy = Literal["sequential", "explicit"]
UpdateOperatorPolicy = Literal["owner_or_approved", "anyone"]


class RegistryConfig(StrictModel):
    """Occuland asset registry configuration.

    token_id_policy decides what the id argument of mint() means:
    - sequential: token ids come from a monotonic counter, the argument is
      kept on the token as its source id
    - explicit: the argument is the token id and must be unused
    """

    name: str = Field(
        default="Occuland: NFT Asset",
        min_length=1,
        description="Collection name returned by name()"
    )
    symbol: str = Field(
        default="OCCLND",
        min_length=1,
        description="Collection symbol returned by symbol()"
    )
    token_id_policy: TokenIdPolicy = Field(
        default="sequential",
        description="How minted token ids are assigned"
    )
    first_token_id: int = Field(
        default=1,
        ge=1,
        description="First id handed out under the sequential policy"
    )


class LandConfig(StrictModel):
    """Land registry configuration."""

    name: str = Field(default="Land", min_length=1)
    symbol: str = Field(default="LAND", min_length=1)
    update_operator_policy: UpdateOperatorPolicy = Field(
        default="owner_or_approved",
        description="Who may call set_update_operator on a parcel"
    )


# =============================================================================
# LOGGING MODEL
# =============================================================================

class LoggingConfig(StrictModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Level for the occuland logger hierarchy"
    )
    output_file: str | None = Field(
        default=None,
        description="JSONL file for registry events (None keeps them in memory only)"
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


# =============================================================================
# ROOT CONFIG MODEL
# =============================================================================

class AppConfig(StrictModel):
    """Root configuration model.

    All fields have sensible defaults, so an empty config file is valid.
    """

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    land: LandConfig = Field(default_factory=LandConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# LOADING FUNCTIONS
# =============================================================================

def load_validated_config(config_path: str | Path = "config/config.yaml") -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to config YAML file.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid (with detailed error message).
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw_config = yaml.safe_load(f) or {}

    return AppConfig.model_validate(raw_config)


def validate_config_dict(config_dict: dict[str, Any]) -> AppConfig:
    """Validate a configuration dictionary.

    Args:
        config_dict: Configuration as a dictionary.

    Returns:
        Validated AppConfig instance.

    Raises:
        pydantic.ValidationError: If config is invalid.
    """
    return AppConfig.model_validate(config_dict)


__all__ = [
    "AppConfig",
    "RegistryConfig",
    "LandConfig",
    "LoggingConfig",
    "TokenIdPolicy",
    "UpdateOperatorPolicy",
    "load_validated_config",
    "validate_config_dict",
]
