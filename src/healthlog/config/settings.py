"""Configuration management for healthlog using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class ExportSettings(BaseSettings):
    """Location and scope of the daily log export file."""

    model_config = SettingsConfigDict(env_prefix="EXPORT_", env_file=".env", extra="ignore")

    path: Path = Path("~/.local/share/healthlog/daily_logs.json")
    user_id: str = ""  # empty accepts every user in the file
    history_days: int = Field(default=30, ge=1)


class ApiSettings(BaseSettings):
    """HTTP API settings."""

    model_config = SettingsConfigDict(env_prefix="API_", env_file=".env", extra="ignore")

    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main healthlog settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # General
    environment: Literal["development", "production"] = "development"  # production logs JSON
    log_level: LogLevel = "INFO"
    timezone: str = "UTC"

    # Sub-settings
    export: ExportSettings = Field(default_factory=ExportSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)


# Global settings instance
settings = Settings()
