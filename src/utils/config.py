"""
Configuration management for Talent-Match.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Base paths
ROOT_DIR = Path(__file__).parent.parent.parent
SRC_DIR = ROOT_DIR / "src"
LOGS_DIR = ROOT_DIR / "logs"


class DatabaseSettings(BaseSettings):
    """MongoDB database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "talent_match"
    username: str | None = None
    password: str | None = None
    server_selection_timeout_ms: int = 5000
    max_pool_size: int = 50


class MatchingSettings(BaseSettings):
    """Auto-matching engine configuration."""

    model_config = SettingsConfigDict(env_prefix="MATCHING_")

    # "title" compares the candidate's current job title to the job's
    # classification name; "classification_id" compares classification ids.
    pool_strategy: Literal["title", "classification_id"] = "title"

    # Workers scoring candidates of one job in parallel
    max_concurrency: int = Field(default=4, ge=1, le=64)

    # Score composition (points, not fractions)
    base_score: int = 50
    skills_weight: int = 30
    experience_weight: int = 20

    @field_validator("base_score", "skills_weight", "experience_weight")
    @classmethod
    def validate_points(cls, v: int) -> int:
        """Score components must be non-negative point values."""
        if v < 0:
            raise ValueError("Score component points must be non-negative")
        return v


class APISettings(BaseSettings):
    """HTTP API configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    elevated_roles: list[str] = Field(default_factory=lambda: ["consultant", "admin"])


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = LOGS_DIR / "talent_match.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True
    file_output: bool = True


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "Talent-Match"
    version: str = "0.1.0"
    description: str = "Classification-based candidate auto-matching"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    api: APISettings = Field(default_factory=APISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
