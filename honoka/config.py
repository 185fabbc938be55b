"""
Centralized configuration management for honoka.
"""
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import PROGRAM

# --- Path Configuration ---


def get_default_db_path() -> Path:
    """Returns the default path for the database file under the per-user data directory."""
    return Path.home() / ".local" / "share" / PROGRAM / "data.db"


class Settings(BaseSettings):
    """
    Defines application settings, loaded from environment variables or .env files.
    """

    model_config = SettingsConfigDict(
        env_prefix="HONOKA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Overridden by HONOKA_DB_PATH.
    db_path: Path = Field(default_factory=get_default_db_path)

    # Overridden by HONOKA_LOG_LEVEL.
    log_level: str = "CRITICAL"


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
