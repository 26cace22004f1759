"""
Airport-local time conversion.

Offsets come from a small airport registry plus the DST table shipped with
each airport's baseline, not from a timezone database. Local times are
fixed-offset aware datetimes, so their hour/minute fields read as airport
wall time and converting back to UTC is exact.
"""

from datetime import date, datetime, timedelta, timezone

from src.utils import logger
from src.utils.exceptions import UnknownAirportError
from src.projection.config import DstFallbackPolicy, settings
from src.projection.models import AirportClock
from src.projection.components.slots import time_slot_key


# Airport code -> IANA timezone identifier
AIRPORT_TIMEZONES: dict[str, str] = {
    "KORD": "America/Chicago",
    "KLGA": "America/New_York",
    "KJFK": "America/New_York",
    "KEWR": "America/New_York",
    "KLAX": "America/Los_Angeles",
    "KSFO": "America/Los_Angeles",
    "KDEN": "America/Denver",
    "KSBA": "America/Los_Angeles",
    "KSMO": "America/Los_Angeles",
}

# Timezone -> (winter, summer) UTC offsets in hours
UTC_OFFSETS: dict[str, tuple[float, float]] = {
    "America/Los_Angeles": (-8, -7),
    "America/Denver": (-7, -6),
    "America/Chicago": (-6, -5),
    "America/New_York": (-5, -4),
}

DEFAULT_TIMEZONE = "America/Chicago"


def airport_timezone(airport: str) -> str:
    """Get the timezone for an airport code, defaulting to Chicago."""
    return AIRPORT_TIMEZONES.get(airport, DEFAULT_TIMEZONE)


def create_clock(
    airport: str,
    dst_dates_by_year: dict[int, tuple[date, date]] | None = None,
    strict: bool = False,
) -> AirportClock:
    """
    Build an AirportClock from the registry and an airport's DST table.

    Args:
        airport: ICAO airport code
        dst_dates_by_year: year -> (start, end) DST window
        strict: Raise for airports missing from the registry instead of
            using the default timezone

    Raises:
        UnknownAirportError: If strict and the airport is not registered
    """
    if airport not in AIRPORT_TIMEZONES:
        if strict:
            raise UnknownAirportError(airport)
        logger.warning(f"Airport {airport} not in registry, using {DEFAULT_TIMEZONE} offsets")

    winter, summer = UTC_OFFSETS[airport_timezone(airport)]
    return AirportClock(
        airport=airport,
        winter_offset_hours=winter,
        summer_offset_hours=summer,
        dst_dates_by_year=dict(dst_dates_by_year or {}),
    )


def is_dst(day: date, clock: AirportClock, policy: DstFallbackPolicy | None = None) -> bool:
    """
    Whether a calendar date falls inside the airport's DST window.

    Years missing from the table follow the fallback policy.
    """
    if isinstance(day, datetime):
        day = day.date()

    window = clock.dst_dates_by_year.get(day.year)
    if window is None:
        policy = policy or settings.projection.dst_fallback
        logger.debug(f"No DST dates for {clock.airport} {day.year}, applying {policy.value} fallback")
        if policy is DstFallbackPolicy.MONTH_ESTIMATE:
            return 3 <= day.month < 11
        return True

    start, end = window
    return start <= day < end


def _as_utc(instant: datetime) -> datetime:
    # Naive instants are taken to be UTC
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def utc_offset_hours(instant: datetime, clock: AirportClock, policy: DstFallbackPolicy | None = None) -> float:
    """UTC offset in effect at an instant, chosen by its UTC calendar date."""
    instant = _as_utc(instant)
    if is_dst(instant.date(), clock, policy):
        return clock.summer_offset_hours
    return clock.winter_offset_hours


def utc_to_local(instant: datetime, clock: AirportClock, policy: DstFallbackPolicy | None = None) -> datetime:
    """Convert a UTC instant to airport-local time."""
    instant = _as_utc(instant)
    offset = utc_offset_hours(instant, clock, policy)
    return instant.astimezone(timezone(timedelta(hours=offset)))


def local_to_utc(local: datetime, clock: AirportClock, policy: DstFallbackPolicy | None = None) -> datetime:
    """
    Convert airport-local time back to a UTC instant.

    Aware values carry their offset and convert exactly. Naive wall times
    take the offset that the table would have produced for the resulting
    instant, preferring summer where both fit; wall times inside the
    spring-forward gap use the offset of their local date.
    """
    if local.tzinfo is not None:
        return local.astimezone(timezone.utc)

    for offset in (clock.summer_offset_hours, clock.winter_offset_hours):
        candidate = (local - timedelta(hours=offset)).replace(tzinfo=timezone.utc)
        if utc_offset_hours(candidate, clock, policy) == offset:
            return candidate

    if is_dst(local.date(), clock, policy):
        offset = clock.summer_offset_hours
    else:
        offset = clock.winter_offset_hours
    return (local - timedelta(hours=offset)).replace(tzinfo=timezone.utc)


def format_local_time(instant: datetime, clock: AirportClock, policy: DstFallbackPolicy | None = None) -> str:
    """Format a UTC instant as "HH:MM" airport time."""
    return utc_to_local(instant, clock, policy).strftime("%H:%M")


def local_time_slot(instant: datetime, clock: AirportClock, policy: DstFallbackPolicy | None = None) -> str:
    """Airport-local slot key containing a UTC instant."""
    return time_slot_key(utc_to_local(instant, clock, policy))


__all__ = [
    "AIRPORT_TIMEZONES",
    "UTC_OFFSETS",
    "DEFAULT_TIMEZONE",
    "airport_timezone",
    "create_clock",
    "is_dst",
    "utc_offset_hours",
    "utc_to_local",
    "local_to_utc",
    "format_local_time",
    "local_time_slot",
]
