"""
Relative "hours from now" window construction.

Slots are placed on a single axis relative to a frozen local "now". Dated
slots shift by whole days from "today"; date-less (legacy) slots wrap by a
day when they sit more than half a day from now.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from src.utils import logger
from src.projection.config import ProjectionSettings, settings
from src.projection.models import RelativeSlot, Window
from src.projection.components.slots import is_time_slot, slot_minutes_of_day


def eta_is_now(now: datetime, eta: datetime | None, config: ProjectionSettings | None = None) -> bool:
    """Whether an ETA is close enough to now to be treated as now."""
    if eta is None:
        return True
    config = config or settings.projection
    return abs((eta - now).total_seconds()) < config.eta_now_tolerance_seconds


def compute_window(now: datetime, eta: datetime | None = None, config: ProjectionSettings | None = None) -> Window:
    """
    Window around now: a fixed look-back, and a look-ahead reaching past the ETA.

    An ETA within the tolerance of now counts as "now". Callers that round
    instants should decide that on the raw values and pass eta=None.
    """
    config = config or settings.projection
    start = -config.window_before_hours

    if eta_is_now(now, eta, config):
        return Window(start, config.min_window_after_hours)

    hours_ahead = (eta - now).total_seconds() / 3600
    end = max(hours_ahead + config.window_after_eta_hours, config.min_window_after_hours)
    return Window(start, end)


def _now_minutes(now_local: datetime) -> int:
    return now_local.hour * 60 + now_local.minute


def hours_from_now(
    time_slot: str,
    slot_date: date | None,
    now_local: datetime,
    today: date,
    config: ProjectionSettings | None = None,
) -> float:
    """
    Hours between now and the start of a slot.

    Raises:
        ValueError: If the slot key is malformed
    """
    hours = (slot_minutes_of_day(time_slot) - _now_minutes(now_local)) / 60
    if slot_date is not None:
        return hours + 24 * (slot_date - today).days

    wrap = (config or settings.projection).legacy_wrap_hours
    if hours > wrap:
        hours -= 24
    elif hours < -wrap:
        hours += 24
    return hours


def resolve_slot_date(
    time_slot: str,
    now_local: datetime,
    today: date,
    config: ProjectionSettings | None = None,
) -> date:
    """Calendar date a date-less slot refers to, after the legacy wrap."""
    naive = (slot_minutes_of_day(time_slot) - _now_minutes(now_local)) / 60
    wrapped = hours_from_now(time_slot, None, now_local, today, config)
    return today + timedelta(days=round((wrapped - naive) / 24))


def dates_in_window(now_local: datetime, window: Window) -> list[date]:
    """Local calendar dates the window touches, in order."""
    first = (now_local + timedelta(hours=window.start_hours)).date()
    last = (now_local + timedelta(hours=window.end_hours)).date()
    return [first + timedelta(days=offset) for offset in range((last - first).days + 1)]


def slot_label(time_slot: str, calendar_date: date, today: date) -> str:
    """Slot key for today, with a day marker such as "(+1d)" otherwise."""
    offset = (calendar_date - today).days
    if offset == 0:
        return time_slot
    return f"{time_slot} ({offset:+d}d)"


def build_relative_slots(
    candidates: Iterable[tuple[str, date | None]],
    now_local: datetime,
    today: date,
    window: Window,
    config: ProjectionSettings | None = None,
) -> tuple[RelativeSlot, ...]:
    """
    Place candidate slots relative to now, keep those inside the window.

    Args:
        candidates: (time slot, calendar date or None) pairs; may repeat
        now_local: Frozen airport-local now
        today: Airport-local date of now
        window: Requested window in hours

    Returns:
        Relative slots sorted by hours from now, one per (slot, date)
    """
    placed: dict[tuple[str, date], RelativeSlot] = {}
    slot_minutes = config.slot_minutes if config else None

    for time_slot, slot_date in candidates:
        if not is_time_slot(time_slot, slot_minutes):
            logger.warning(f"Skipping candidate slot {time_slot!r}: not a valid time slot")
            continue
        hours = hours_from_now(time_slot, slot_date, now_local, today, config)
        if slot_date is not None:
            placements = [(hours, slot_date)]
        else:
            resolved = resolve_slot_date(time_slot, now_local, today, config)
            # A date-less slot can also show up a day later when the window reaches tomorrow
            placements = [(hours, resolved), (hours + 24, resolved + timedelta(days=1))]

        for slot_hours, calendar_date in placements:
            if not window.contains(slot_hours) or (time_slot, calendar_date) in placed:
                continue
            placed[(time_slot, calendar_date)] = RelativeSlot(
                hours_from_now=slot_hours,
                time_slot=time_slot,
                calendar_date=calendar_date,
                label=slot_label(time_slot, calendar_date, today),
            )

    return tuple(sorted(placed.values(), key=lambda slot: slot.hours_from_now))


__all__ = [
    "compute_window",
    "hours_from_now",
    "resolve_slot_date",
    "dates_in_window",
    "slot_label",
    "build_relative_slots",
]
