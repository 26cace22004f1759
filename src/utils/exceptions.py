"""
Custom exceptions for the traffic projection engine.

Provides a hierarchy of exceptions for different error scenarios:
- Payload errors (baseline and forecast JSON from the upstream service)
- Clock errors (airport time configuration)
- Configuration errors

The projection entry points never let payload errors escape for
recoverable data-quality issues; they are raised at the loader boundary
and turned into diagnostics by the engine.
"""


class ProjectionServiceError(Exception):
    """Base exception for all projection engine errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


# =============================================================================
# Payload Exceptions
# =============================================================================

class PayloadError(ProjectionServiceError):
    """Base exception for malformed input payloads."""
    pass


class BaselinePayloadError(PayloadError):
    """Error when a baseline payload cannot be parsed."""

    def __init__(self, message: str, airport: str | None = None):
        self.airport = airport
        super().__init__(message)


class ForecastPayloadError(PayloadError):
    """Error when a forecast payload is malformed (e.g. length mismatch)."""

    def __init__(self, message: str, series: str | None = None, expected: int | None = None, actual: int | None = None):
        self.series = series
        self.expected = expected
        self.actual = actual
        super().__init__(message)


# =============================================================================
# Clock Exceptions
# =============================================================================

class ClockError(ProjectionServiceError):
    """Base exception for airport clock errors."""
    pass


class UnknownAirportError(ClockError):
    """Error when an airport code is not in the registry and no default is allowed."""

    def __init__(self, airport: str):
        self.airport = airport
        super().__init__(f"Unknown airport: {airport}")


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigurationError(ProjectionServiceError):
    """Error with engine configuration."""
    pass


class MissingConfigError(ConfigurationError):
    """Error when required configuration is missing."""

    def __init__(self, config_key: str):
        self.config_key = config_key
        super().__init__(f"Missing required configuration: {config_key}")


# Export all exceptions
__all__ = [
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
