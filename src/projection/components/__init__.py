"""Components of the projection pipeline, leaves first."""

from src.projection.components.slots import slot_minutes_of_day, is_time_slot, time_slot_key
from src.projection.components.time_converter import (
    create_clock,
    is_dst,
    utc_to_local,
    local_to_utc,
    format_local_time,
    local_time_slot,
)
from src.projection.components.calendar import (
    weekday_name,
    classify_season,
    classify_holiday,
    thanksgiving_date,
    holiday_label,
)
from src.projection.components.baseline_selector import select_baseline, select_seasonal, select_for_date
from src.projection.components.aligner import MISSING, SlotAlignment, align_time_slots
from src.projection.components.window import compute_window, eta_is_now, hours_from_now, build_relative_slots
from src.projection.components.merger import merge_slots, expected_count, point_estimate
from src.projection.components.payloads import ForecastLoad, load_airport, load_forecast
from src.projection.components.timeline import BaselineTimeline, build_baseline_timeline

__all__ = [
    # Slots
    "slot_minutes_of_day",
    "is_time_slot",
    "time_slot_key",
    # Time conversion
    "create_clock",
    "is_dst",
    "utc_to_local",
    "local_to_utc",
    "format_local_time",
    "local_time_slot",
    # Calendar
    "weekday_name",
    "classify_season",
    "classify_holiday",
    "thanksgiving_date",
    "holiday_label",
    # Baseline selection
    "select_baseline",
    "select_seasonal",
    "select_for_date",
    # Alignment
    "MISSING",
    "SlotAlignment",
    "align_time_slots",
    # Window
    "compute_window",
    "eta_is_now",
    "hours_from_now",
    "build_relative_slots",
    # Merge
    "merge_slots",
    "expected_count",
    "point_estimate",
    # Payloads
    "ForecastLoad",
    "load_airport",
    "load_forecast",
    # Timeline
    "BaselineTimeline",
    "build_baseline_timeline",
]
