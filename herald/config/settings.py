"""
Application settings and configuration management.

Uses Pydantic Settings for validation and environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BotSettings(BaseSettings):
    """Discord bot configuration."""

    name: str = Field(default="Herald", description="Bot display name")
    token: str = Field(default="", description="Discord bot token")
    dev_guild_id: int | None = Field(
        default=None,
        description="If set, syncs slash commands to this guild instantly (dev mode). "
                    "If None, syncs globally (up to 1 hour propagation).",
    )


class StoreSettings(BaseSettings):
    """Guild configuration store."""

    path: Path = Field(
        default=Path("welcomeConfig.json"),
        description="JSON document holding every guild's welcome/goodbye templates",
    )

    model_config = SettingsConfigDict(env_prefix="STORE_")


class StatusSettings(BaseSettings):
    """Keep-alive HTTP endpoint."""

    enabled: bool = Field(default=True, description="Serve the keep-alive/status endpoint")
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(
        default=3000,
        # "port" keeps STATUS__PORT working through Settings' nested delimiter
        validation_alias=AliasChoices("STATUS_PORT", "port", "PORT"),
        description="Listen port. Read from STATUS_PORT, else the PORT variable "
                    "that hosting platforms inject.",
    )

    model_config = SettingsConfigDict(env_prefix="STATUS_")


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: Literal["development", "production"] = Field(
        default="development", description="Deployment environment"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    # Sub-configurations
    bot: BotSettings = Field(default_factory=BotSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    status: StatusSettings = Field(default_factory=StatusSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        env_file: Path to .env file (optional)

    Returns:
        Loaded settings instance
    """
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
