"""
Data model for the traffic projection engine.

Every type here is immutable once built. Baselines and clocks are loaded
once per session and shared; projections are derived values that compare
structurally, so two projections built from the same inputs are equal.
"""

from datetime import date
from enum import Enum
from typing import NamedTuple


class Season(str, Enum):
    """Baseline season, decided by the airport's DST window."""
    SUMMER = "summer"
    WINTER = "winter"

    @property
    def other(self) -> "Season":
        return Season.WINTER if self is Season.SUMMER else Season.SUMMER


class SlotStats(NamedTuple):
    """Historical average for one 15-minute slot."""
    average_count: float
    sample_days: int = 0


# "HH:MM" -> stats; keys are unique and quantized to the slot length
SlotMap = dict[str, SlotStats]


class SeasonBaseline(NamedTuple):
    """Baseline buckets for one season."""
    day_of_week_time_slots: dict[str, SlotMap]
    holiday_time_slots: dict[str, SlotMap]
    seasonal_time_slots: SlotMap


class BaselineTable(NamedTuple):
    """Both seasons' baselines for an airport, tagged with a monotonic version."""
    airport: str
    seasons: dict[Season, SeasonBaseline]
    version: int = 0

    def season(self, season: Season) -> SeasonBaseline | None:
        return self.seasons.get(season)


class AirportClock(NamedTuple):
    """UTC offsets and DST table for an airport."""
    airport: str
    winter_offset_hours: float
    summer_offset_hours: float
    # year -> (start, end); start inclusive, end exclusive
    dst_dates_by_year: dict[int, tuple[date, date]]


class SeriesEntry(NamedTuple):
    """One forecast or observed count. A missing date means "today"."""
    time_slot: str
    date: date | None
    count: float | None


class TrafficSeries(NamedTuple):
    """Forecast or actuals series, tagged with a monotonic version."""
    entries: tuple[SeriesEntry, ...]
    version: int = 0

    @property
    def is_legacy(self) -> bool:
        return any(entry.date is None for entry in self.entries)


ForecastSeries = TrafficSeries
ActualsSeries = TrafficSeries


class Found(NamedTuple):
    """A baseline bucket was found."""
    slot_map: SlotMap
    label: str
    is_holiday: bool
    season: Season
    bucket: str


class NotFound(NamedTuple):
    """No baseline bucket applies; callers render "no data"."""
    reason: str


BaselineSelection = Found | NotFound


class Window(NamedTuple):
    """Projection window in hours relative to now, inclusive on both ends."""
    start_hours: float
    end_hours: float

    def contains(self, hours: float) -> bool:
        return self.start_hours <= hours <= self.end_hours


class RelativeSlot(NamedTuple):
    """A time slot re-expressed as hours from now, scoped to a calendar date."""
    hours_from_now: float
    time_slot: str
    calendar_date: date
    label: str


class ProjectedSlot(NamedTuple):
    """Merged values for one relative slot."""
    label: str
    time_slot: str
    calendar_date: date
    hours_from_now: float
    baseline_count: float | None
    seasonal_average_count: float | None
    forecast_count: float | None
    actual_count: float | None
    sample_days: int | None = None

    def to_dict(self) -> dict:
        """Convert to the row shape consumed by chart rendering."""
        return {
            "label": self.label,
            "timeSlot": self.time_slot,
            "calendarDate": self.calendar_date.isoformat(),
            "hoursFromNow": self.hours_from_now,
            "baselineCount": self.baseline_count,
            "seasonalAverageCount": self.seasonal_average_count,
            "forecastCount": self.forecast_count,
            "actualCount": self.actual_count,
            "sampleDays": self.sample_days,
        }


class PointEstimate(NamedTuple):
    """Expected traffic at one slot; index is None when the slot is outside the window."""
    index: int | None
    value: float | None


class Diagnostic(NamedTuple):
    """A recovered data-quality problem."""
    code: str
    message: str


class Projection(NamedTuple):
    """Aligned "hours from now" traffic projection."""
    airport: str
    today: date
    eta_date: date
    window: Window
    slots: tuple[ProjectedSlot, ...]
    now: PointEstimate
    eta: PointEstimate
    baseline_labels: tuple[str, ...]
    diagnostics: tuple[Diagnostic, ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "airport": self.airport,
            "today": self.today.isoformat(),
            "etaDate": self.eta_date.isoformat(),
            "window": {"start": self.window.start_hours, "end": self.window.end_hours},
            "slots": [slot.to_dict() for slot in self.slots],
            "now": {"nowIndex": self.now.index, "nowValue": self.now.value},
            "eta": {"etaIndex": self.eta.index, "etaValue": self.eta.value},
            "baselineLabels": list(self.baseline_labels),
            "diagnostics": [d._asdict() for d in self.diagnostics],
        }


class NoProjection(NamedTuple):
    """No source produced any slot inside the window."""
    reason: str
    diagnostics: tuple[Diagnostic, ...] = ()


__all__ = [
    "Season",
    "SlotStats",
    "SlotMap",
    "SeasonBaseline",
    "BaselineTable",
    "AirportClock",
    "SeriesEntry",
    "TrafficSeries",
    "ForecastSeries",
    "ActualsSeries",
    "Found",
    "NotFound",
    "BaselineSelection",
    "Window",
    "RelativeSlot",
    "ProjectedSlot",
    "PointEstimate",
    "Diagnostic",
    "Projection",
    "NoProjection",
]
