"""
Configuration management for the projection engine.

Loads settings from environment variables (and a local .env file).
"""

from enum import Enum
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file before settings are initialized
load_dotenv()


class DstFallbackPolicy(str, Enum):
    """What to assume when an airport's DST table has no entry for a year."""
    SUMMER = "summer"
    MONTH_ESTIMATE = "month_estimate"  # March through October = summer


class ProjectionSettings(BaseSettings):
    """Window and alignment parameters for traffic projections."""

    slot_minutes: int = Field(default=15)
    # Fixed look-back before "now"
    window_before_hours: float = Field(default=2.0)
    # Look-ahead past the ETA, and the minimum look-ahead overall
    window_after_eta_hours: float = Field(default=2.0)
    min_window_after_hours: float = Field(default=2.0)
    # ETA closer than this to "now" counts as "now"
    eta_now_tolerance_seconds: int = Field(default=60)
    # Date-less slots further than this from "now" wrap by a day
    legacy_wrap_hours: float = Field(default=12.0)
    dst_fallback: DstFallbackPolicy = Field(default=DstFallbackPolicy.SUMMER)
    # Airport used by the CLI when --airport is omitted
    default_airport: str | None = Field(default=None)

    model_config = SettingsConfigDict(env_prefix="PROJECTION_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO")
    log_dir: str = Field(default="logs")
    log_file: str = Field(default="projection.log")
    rotation: str = Field(default="10 MB")
    retention: str = Field(default="7 days")
    enable_file: bool = Field(default=False)

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""

    projection: ProjectionSettings = Field(default_factory=ProjectionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Environment name (development, staging, production)
    environment: str = Field(default="development")

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_nested_delimiter="__",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: The application settings
    """
    return Settings()


# Export for easy access
settings = get_settings()

__all__ = [
    "DstFallbackPolicy",
    "Settings",
    "ProjectionSettings",
    "LoggingSettings",
    "get_settings",
    "settings",
]
