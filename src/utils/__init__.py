"""
Utility modules for the traffic projection engine.

Provides:
    - logger: Loguru-based logging with stdout and optional file output
    - exceptions: Custom exception classes for error handling
"""

from src.utils.logger import logger, setup_logger, configure_logging, log_diagnostic
from src.utils.exceptions import (
    # Base
    ProjectionServiceError,
    # Payload
    PayloadError,
    BaselinePayloadError,
    ForecastPayloadError,
    # Clock
    ClockError,
    UnknownAirportError,
    # Configuration
    ConfigurationError,
    MissingConfigError,
)

__all__ = [
    # Logger
    "logger",
    "setup_logger",
    "configure_logging",
    "log_diagnostic",
    # Base
    "ProjectionServiceError",
    # Payload
    "PayloadError",
    "BaselinePayloadError",
    "ForecastPayloadError",
    # Clock
    "ClockError",
    "UnknownAirportError",
    # Configuration
    "ConfigurationError",
    "MissingConfigError",
]
