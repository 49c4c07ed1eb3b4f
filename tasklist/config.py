"""
Unified configuration for the tasklist service and its client.

The database path resolution:
1. Checks TASKLIST_DB_PATH environment variable first
2. Falls back to DATABASE_PATH / .env value
3. Falls back to data/tasks.sqlite under the project root

This module uses Pydantic Settings for type-safe configuration management
with support for .env files and environment variable overrides.
"""
import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Relative to the project root
DEFAULT_DB_PATH = "data/tasks.sqlite"

DEFAULT_PORT = 8000
DEFAULT_API_URL = f"http://localhost:{DEFAULT_PORT}/api/tasks"


class Settings(BaseSettings):
    """Application settings for tasklist.

    All configuration values can be set via environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================================================
    # Database Configuration
    # ============================================================================
    database_path: str = Field(default="", validate_default=True)
    sql_echo: bool = False  # Log every SQL statement at DEBUG

    # Whether update() rewrites updated_at. False keeps the creation value.
    refresh_updated_at: bool = True

    # ============================================================================
    # Server Configuration
    # ============================================================================
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cors_origins: List[str] = ["*"]

    # ============================================================================
    # Logging Configuration
    # ============================================================================
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    # ============================================================================
    # Client Configuration
    # ============================================================================
    api_url: str = Field(
        default=DEFAULT_API_URL,
        validation_alias=AliasChoices("TASKLIST_API_URL", "api_url"),
    )
    client_timeout: float = 30.0

    @field_validator("database_path", mode="before")
    @classmethod
    def resolve_database_path(cls, v: Optional[str]) -> str:
        """
        Resolve database path.

        Resolution order:
        1. TASKLIST_DB_PATH environment variable
        2. Value from .env file, DATABASE_PATH or constructor argument
        3. data/tasks.sqlite under the project root

        Returns:
            Absolute path to the database file
        """
        env_path = os.getenv("TASKLIST_DB_PATH")
        if env_path:
            return os.path.abspath(env_path)

        if v:
            return os.path.abspath(v)

        project_root = Path(__file__).resolve().parent.parent
        return os.path.abspath(str(project_root / DEFAULT_DB_PATH))

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    return Settings()


def get_database_path() -> str:
    """Get the resolved database path from settings."""
    return get_settings().database_path


def ensure_database_directory(db_path: Optional[str] = None) -> None:
    """
    Ensure the database directory exists.

    Args:
        db_path: Path to the database file. If None, uses get_database_path().
    """
    if db_path is None:
        db_path = get_database_path()
    db_dir = os.path.dirname(os.path.abspath(db_path))
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
