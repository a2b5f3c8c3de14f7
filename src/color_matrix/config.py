"""
Configuration management using Pydantic for color-matrix.
Provides type-safe configuration with validation and environment variable support.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from color_matrix.common.constants import HighlightConstants, ImageConstants, SystemConstants

logger = logging.getLogger(__name__)


class TagConfig(BaseSettings):
    """Colorspace tag enforcement."""

    strict: bool = Field(
        default=True,
        description="Raise on tag/buffer mismatch during buffer assignment instead of re-inferring",
    )

    model_config = SettingsConfigDict(env_prefix="CM_TAGS_", extra="ignore")


class HighlightConfig(BaseSettings):
    """Mask compositing configuration."""

    mask_threshold: int = Field(
        default=HighlightConstants.MASK_THRESHOLD,
        ge=ImageConstants.CHANNEL_MIN,
        le=ImageConstants.CHANNEL_MAX,
        description="Mask pixels above this value are highlighted",
    )
    saturation: int = Field(
        default=HighlightConstants.HIGHLIGHT_SATURATION,
        ge=ImageConstants.CHANNEL_MIN,
        le=ImageConstants.CHANNEL_MAX,
        description="Saturation of highlighted pixels",
    )
    value: int = Field(
        default=HighlightConstants.HIGHLIGHT_VALUE,
        ge=ImageConstants.CHANNEL_MIN,
        le=ImageConstants.CHANNEL_MAX,
        description="Brightness of highlighted pixels",
    )

    model_config = SettingsConfigDict(env_prefix="CM_HIGHLIGHT_", extra="ignore")


class SystemConfig(BaseSettings):
    """System configuration."""

    log_level: str = Field(default=SystemConstants.LOG_LEVEL_DEFAULT, description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Log file path")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    model_config = SettingsConfigDict(env_prefix="CM_SYSTEM_", extra="ignore")


def _without_env_overrides(settings_cls, key: str, section: Dict[str, Any]) -> Dict[str, Any]:
    """Drop entries of a YAML section whose sub-config env var is set."""
    field = settings_cls.model_fields.get(key)
    config_cls = field.annotation if field else None
    if not (isinstance(config_cls, type) and issubclass(config_cls, BaseSettings)):
        return section

    prefix = config_cls.model_config.get("env_prefix", "")
    env_names = {name.upper() for name in os.environ}
    return {
        name: value
        for name, value in section.items()
        if f"{prefix}{name}".upper() not in env_names
    }


class Settings(BaseSettings):
    """Main package settings."""

    # Sub-configurations
    tags: TagConfig = Field(default_factory=TagConfig)
    highlight: HighlightConfig = Field(default_factory=HighlightConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)

    environment: str = Field(
        default="production", description="Environment (development, staging, production)"
    )

    # Config file support
    config_file: Optional[str] = Field(default=None, description="Path to YAML config file")

    @model_validator(mode="before")
    @classmethod
    def load_config_file(cls, values):
        """Load configuration from YAML file if specified."""
        if not isinstance(values, dict):
            return values

        config_file = values.get("config_file") or os.getenv("CM_CONFIG_FILE")

        if config_file and Path(config_file).exists():
            try:
                with open(config_file, "r") as f:
                    file_config = yaml.safe_load(f)
                    if file_config:
                        # Env vars and explicit values take precedence
                        for key, value in file_config.items():
                            if isinstance(value, dict):
                                value = _without_env_overrides(cls, key, value)
                                if isinstance(values.get(key), dict):
                                    values[key] = {**value, **values[key]}
                                    continue
                            if key not in values or values[key] is None:
                                values[key] = value
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config file {config_file}: {e}")

        return values

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_envs = ["development", "staging", "production", "test"]
        if v not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of {valid_envs}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump(exclude_none=True)

    def save_to_file(self, path: str) -> None:
        """Save current configuration to YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)

    model_config = SettingsConfigDict(
        env_prefix=SystemConstants.ENV_PREFIX,
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with validated configuration
    """
    return Settings()


def reload_settings() -> Settings:
    """Reload settings, clearing the cache."""
    get_settings.cache_clear()
    return get_settings()


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from the system settings."""
    settings = settings or get_settings()

    kwargs: Dict[str, Any] = {
        "level": getattr(logging, settings.system.log_level),
        "format": SystemConstants.LOG_FORMAT,
    }
    if settings.system.log_file:
        kwargs["filename"] = settings.system.log_file

    logging.basicConfig(**kwargs)
