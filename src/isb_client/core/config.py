"""
ISB Client Configuration Management

Centralized configuration using Pydantic Settings with support for:
- Environment variables
- YAML configuration files
- Default values
- Validation
"""

from __future__ import annotations

import os
from enum import Enum
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ClientConfig(BaseSettings):
    """
    Innovation Sandbox client configuration.

    Configuration is loaded from:
    1. Environment variables (ISB_ prefix)
    2. .env file
    3. YAML config file (if specified)
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="ISB_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Basic settings
    environment: str = Field("development", description="Environment: development, staging, production")
    log_level: LogLevel = Field(LogLevel.INFO, description="Log level")

    # API access
    base_url: str = Field("http://localhost:3000", description="Innovation Sandbox API base URL")
    token: SecretStr | None = Field(None, description="Static bearer token")
    timeout_seconds: float = Field(15.0, description="Per-request timeout in seconds", gt=0, le=600)

    # Token signing
    jwt_secret: SecretStr | None = Field(None, description="HMAC secret used to sign identity tokens")
    admin_email: str | None = Field(None, description="Identity used for generated admin tokens")
    admin_token_ttl_minutes: int = Field(60, description="Validity of generated admin tokens", ge=1, le=1440)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "ClientConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}

        return cls(**yaml_config)

    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    def can_sign_admin_token(self) -> bool:
        """Check whether an admin token can be generated locally."""
        return self.jwt_secret is not None and bool(self.admin_email)


@lru_cache
def get_config() -> ClientConfig:
    """
    Get cached configuration instance.

    Loads configuration from:
    1. ISB_CONFIG_PATH environment variable (YAML file)
    2. Default locations: ./config/isb.yaml, ./isb.yaml
    3. Environment variables
    """
    config_path = os.environ.get("ISB_CONFIG_PATH")

    if config_path and Path(config_path).exists():
        return ClientConfig.from_yaml(config_path)

    default_paths = [
        Path("./config/isb.yaml"),
        Path("./isb.yaml"),
    ]

    for path in default_paths:
        if path.exists():
            return ClientConfig.from_yaml(path)

    return ClientConfig()


def reset_config() -> None:
    """Reset cached configuration (useful for testing)."""
    get_config.cache_clear()
