"""Configuration module for the projection engine."""

from src.projection.config.config import (
    DstFallbackPolicy,
    Settings,
    ProjectionSettings,
    LoggingSettings,
    get_settings,
    settings,
)

__all__ = [
    "DstFallbackPolicy",
    "Settings",
    "ProjectionSettings",
    "LoggingSettings",
    "get_settings",
    "settings",
]
