"""
Merging of baseline, forecast and observed series onto relative slots.

Rules:
- Forecast counts only land on slots dated today or on the ETA's date
- Actual counts only land on slots dated today
- Expected traffic at a slot is the forecast when present, else the baseline
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime

from src.utils import log_diagnostic
from src.projection.config import ProjectionSettings
from src.projection.models import (
    BaselineSelection,
    Diagnostic,
    Found,
    PointEstimate,
    ProjectedSlot,
    RelativeSlot,
    TrafficSeries,
)
from src.projection.components.slots import is_time_slot
from src.projection.components.window import resolve_slot_date


SeriesLookup = dict[tuple[str, date], float | None]


def index_series(
    series: TrafficSeries | None,
    name: str,
    now_local: datetime,
    today: date,
    config: ProjectionSettings | None = None,
) -> tuple[SeriesLookup, list[Diagnostic]]:
    """
    Key a series by (time slot, calendar date).

    Date-less entries resolve to the date nearest now (legacy mode).
    Entries whose slot key is malformed or off the slot grid are skipped
    with a diagnostic, dated or not.
    """
    lookup: SeriesLookup = {}
    diagnostics: list[Diagnostic] = []
    if series is None:
        return lookup, diagnostics

    slot_minutes = config.slot_minutes if config else None
    for entry in series.entries:
        if not is_time_slot(entry.time_slot, slot_minutes):
            diagnostic = Diagnostic(
                code=f"{name}_invalid_slot",
                message=f"Skipped {name} entry with time slot {entry.time_slot!r}",
            )
            log_diagnostic(diagnostic.code, diagnostic.message)
            diagnostics.append(diagnostic)
            continue
        slot_date = entry.date or resolve_slot_date(entry.time_slot, now_local, today, config)
        lookup[(entry.time_slot, slot_date)] = entry.count

    return lookup, diagnostics


def _stats_for(selection: BaselineSelection | None, time_slot: str):
    if isinstance(selection, Found):
        return selection.slot_map.get(time_slot)
    return None


def merge_slots(
    relative_slots: Iterable[RelativeSlot],
    day_selections: Mapping[date, BaselineSelection],
    seasonal_selections: Mapping[date, BaselineSelection],
    forecast: SeriesLookup,
    actuals: SeriesLookup,
    today: date,
    eta_date: date,
) -> tuple[ProjectedSlot, ...]:
    """
    Produce merged values for each relative slot.

    Args:
        relative_slots: Windowed slots, sorted by hours from now
        day_selections: Calendar date -> day baseline selection
        seasonal_selections: Calendar date -> seasonal baseline selection
        forecast: Forecast counts keyed by (time slot, date)
        actuals: Observed counts keyed by (time slot, date)
        today: Airport-local date of now
        eta_date: Airport-local date of the ETA

    Returns:
        One ProjectedSlot per relative slot, same order
    """
    forecast_dates = {today, eta_date}
    merged = []

    for slot in relative_slots:
        key = (slot.time_slot, slot.calendar_date)
        day_stats = _stats_for(day_selections.get(slot.calendar_date), slot.time_slot)
        seasonal_stats = _stats_for(seasonal_selections.get(slot.calendar_date), slot.time_slot)

        merged.append(ProjectedSlot(
            label=slot.label,
            time_slot=slot.time_slot,
            calendar_date=slot.calendar_date,
            hours_from_now=slot.hours_from_now,
            baseline_count=day_stats.average_count if day_stats else None,
            seasonal_average_count=seasonal_stats.average_count if seasonal_stats else None,
            forecast_count=forecast.get(key) if slot.calendar_date in forecast_dates else None,
            actual_count=actuals.get(key) if slot.calendar_date == today else None,
            sample_days=day_stats.sample_days if day_stats else None,
        ))

    return tuple(merged)


def expected_count(slot: ProjectedSlot) -> float | None:
    """Forecast when present, else baseline, else None."""
    if slot.forecast_count is not None:
        return slot.forecast_count
    return slot.baseline_count


def point_estimate(slots: tuple[ProjectedSlot, ...], time_slot: str, calendar_date: date) -> PointEstimate:
    """Expected traffic at the slot matching (time slot, date)."""
    for index, slot in enumerate(slots):
        if slot.time_slot == time_slot and slot.calendar_date == calendar_date:
            return PointEstimate(index=index, value=expected_count(slot))
    return PointEstimate(index=None, value=None)


__all__ = [
    "SeriesLookup",
    "index_series",
    "merge_slots",
    "expected_count",
    "point_estimate",
]
