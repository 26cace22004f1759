"""
Helpers for "HH:MM" time-slot keys.
"""

from datetime import datetime, time

from src.projection.config import settings


def slot_minutes_of_day(time_slot: str) -> int:
    """
    Parse an "HH:MM" key into minutes since midnight.

    Raises:
        ValueError: If the key is not a valid "HH:MM" string
    """
    hours_str, sep, minutes_str = time_slot.partition(":")
    digits = hours_str + minutes_str
    if not sep or len(hours_str) != 2 or len(minutes_str) != 2 or not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"Invalid time slot: {time_slot!r}")

    hours, minutes = int(hours_str), int(minutes_str)
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time slot: {time_slot!r}")
    return hours * 60 + minutes


def is_time_slot(time_slot: str, slot_minutes: int | None = None) -> bool:
    """Whether a key is a valid "HH:MM" string on a slot boundary."""
    slot_minutes = slot_minutes or settings.projection.slot_minutes
    try:
        return slot_minutes_of_day(time_slot) % slot_minutes == 0
    except (ValueError, AttributeError):
        return False


def time_slot_key(moment: datetime | time, slot_minutes: int | None = None) -> str:
    """Floor a wall-clock time to its slot and format it as "HH:MM"."""
    slot_minutes = slot_minutes or settings.projection.slot_minutes
    floored = (moment.minute // slot_minutes) * slot_minutes
    return f"{moment.hour:02d}:{floored:02d}"


__all__ = [
    "slot_minutes_of_day",
    "is_time_slot",
    "time_slot_key",
]
