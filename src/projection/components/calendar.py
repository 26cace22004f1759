"""
Calendar classification of airport-local dates.

Maps a local date to:
- a season (summer while the airport's DST window is active, else winter)
- a weekday name ("monday" ... "sunday")
- an optional holiday-offset key such as "christmas_-1" or "new_years_day_2"

All arithmetic is on dates, never datetimes, so DST shifts cannot move a
date across midnight.
"""

from datetime import date, datetime
from typing import Callable, NamedTuple

from src.projection.config import DstFallbackPolicy
from src.projection.models import AirportClock, Season
from src.projection.components.time_converter import is_dst


WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

THURSDAY = 3


class Holiday(NamedTuple):
    """A holiday with the day offsets that get their own baseline bucket."""
    name: str
    display_name: str
    offsets: tuple[int, ...]
    date_in: Callable[[int], date]


def _as_date(day: date | datetime) -> date:
    return day.date() if isinstance(day, datetime) else day


def weekday_name(local_date: date | datetime) -> str:
    """Weekday name of a local calendar date."""
    return WEEKDAY_NAMES[_as_date(local_date).weekday()]


def classify_season(
    local_date: date | datetime,
    clock: AirportClock,
    policy: DstFallbackPolicy | None = None,
) -> Season:
    """Summer inside the airport's DST window, winter outside it."""
    return Season.SUMMER if is_dst(_as_date(local_date), clock, policy) else Season.WINTER


def thanksgiving_date(year: int) -> date:
    """Fourth Thursday of November."""
    november_first = date(year, 11, 1)
    days_until_first_thursday = (THURSDAY - november_first.weekday() + 7) % 7
    first_thursday = 1 + days_until_first_thursday
    return date(year, 11, first_thursday + 21)


HOLIDAYS: tuple[Holiday, ...] = (
    Holiday("christmas", "Christmas", (-1, 0, 1), lambda year: date(year, 12, 25)),
    Holiday("new_years_day", "New Year's Day", (0, 1, 2), lambda year: date(year, 1, 1)),
    Holiday("thanksgiving", "Thanksgiving", (-1, 0, 1), thanksgiving_date),
    Holiday("independence_day", "Independence Day", (-1, 0, 1), lambda year: date(year, 7, 4)),
)

_HOLIDAYS_BY_NAME = {holiday.name: holiday for holiday in HOLIDAYS}


def holiday_key(name: str, offset: int) -> str:
    return f"{name}_{offset}"


def parse_holiday_key(key: str) -> tuple[Holiday, int] | None:
    """Split "thanksgiving_-1" into its holiday and offset."""
    name, sep, offset_str = key.rpartition("_")
    holiday = _HOLIDAYS_BY_NAME.get(name)
    if not sep or holiday is None:
        return None
    try:
        return holiday, int(offset_str)
    except ValueError:
        return None


def classify_holiday(local_date: date | datetime) -> str | None:
    """
    Holiday-offset key for a local date, or None for an ordinary day.

    The distance is measured to the holiday in the same calendar year, so
    Dec 31 is not "new_years_day_-1".
    """
    day = _as_date(local_date)
    for holiday in HOLIDAYS:
        offset = (day - holiday.date_in(day.year)).days
        if offset in holiday.offsets:
            return holiday_key(holiday.name, offset)
    return None


def holiday_label(key: str) -> str:
    """Human label for a holiday-offset key, e.g. "Day After Thanksgiving"."""
    parsed = parse_holiday_key(key)
    if parsed is None:
        return key
    holiday, offset = parsed
    if offset == 0:
        return holiday.display_name
    if offset == -1:
        return f"Day Before {holiday.display_name}"
    if offset == 1:
        return f"Day After {holiday.display_name}"
    if offset > 0:
        return f"{offset} Days After {holiday.display_name}"
    return f"{-offset} Days Before {holiday.display_name}"


__all__ = [
    "WEEKDAY_NAMES",
    "Holiday",
    "HOLIDAYS",
    "weekday_name",
    "classify_season",
    "thanksgiving_date",
    "holiday_key",
    "parse_holiday_key",
    "classify_holiday",
    "holiday_label",
]
