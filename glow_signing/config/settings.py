"""
Configuration system using Pydantic for type-safe settings management.

Settings are read from ``GLOW_SIGNING_*`` environment variables and can be
overridden by an optional YAML file.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from glow_signing.exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SigningSettings(BaseSettings):
    """Settings for signing credential resolution.

    Example:
        >>> settings = SigningSettings(properties_file="android/key.properties")
        >>> resolver = SigningConfigResolver.from_settings(settings)
    """

    model_config = SettingsConfigDict(
        env_prefix="GLOW_SIGNING_",
        case_sensitive=False,
    )

    properties_file: Path = Field(
        default=Path("key.properties"), description="Path to the key.properties file"
    )
    properties_required: bool = Field(
        default=False, description="Fail when the properties file is missing"
    )
    use_environment: bool = Field(
        default=True, description="Fall back to STORE_FILE/KEY_ALIAS/... for release"
    )
    keyring_service: str | None = Field(
        default=None, description="Keyring service consulted after the environment"
    )
    strict: bool = Field(
        default=False, description="Reject credentials with missing alias or passwords"
    )
    base_dir: Path | None = Field(
        default=None, description="Directory relative keystore paths are resolved against"
    )
    application_id: str = Field(default="com.breez.spark.glow", description="Android application id")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}")
        return level

    @property
    def log_level_int(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> SigningSettings:
        """Load settings from YAML file with environment variable interpolation.

        Supports ${VAR_NAME} and ${VAR_NAME:-default} substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            SigningSettings instance

        Raises:
            ConfigurationError: If config file is invalid or missing
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file) as f:
                yaml_content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            yaml_content = cls._interpolate_env_vars(yaml_content)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment variable reference in config: {e}") from e

        try:
            config_dict = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**config_dict)
        except Exception as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Interpolate ${VAR_NAME} placeholders with environment variables.

        Comment lines are left unchanged.

        Raises:
            ValueError: If a required environment variable is not set
        """
        pattern = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.getenv(var_name)

            if value is not None:
                return value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable {var_name} is not set")

        def process_line(line: str) -> str:
            if line.lstrip().startswith("#"):
                return line
            return pattern.sub(replace_var, line)

        return "\n".join(process_line(line) for line in content.split("\n"))
