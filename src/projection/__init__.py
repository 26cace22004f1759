"""
Airport-local traffic projection engine.

This module provides:
- Airport clock conversion driven by per-airport DST tables
- Season, weekday and holiday classification of local dates
- Baseline bucket selection with holiday fallbacks
- Slot alignment and "hours from now" windowing
- Merging of baseline, forecast and observed counts into one projection

Quick start:
    from src.projection import load_airport, load_forecast, ProjectionEngine

    clock, baseline = load_airport("KORD", baseline_json, version=1)
    loaded = load_forecast(forecast_json, version=7)
    engine = ProjectionEngine(clock, baseline)
    projection = engine.project(loaded.forecast, loaded.actuals, now=now, eta=eta)

Configuration (environment variables):
    PROJECTION_WINDOW_BEFORE_HOURS: Look-back before now (default: 2)
    PROJECTION_WINDOW_AFTER_ETA_HOURS: Look-ahead past the ETA (default: 2)
    PROJECTION_DST_FALLBACK: summer | month_estimate (default: summer)
"""

__version__ = "0.1.0"

from src.projection.config import settings, get_settings, DstFallbackPolicy
from src.projection.models import (
    Season,
    SlotStats,
    SeasonBaseline,
    BaselineTable,
    AirportClock,
    SeriesEntry,
    TrafficSeries,
    Found,
    NotFound,
    Window,
    RelativeSlot,
    ProjectedSlot,
    PointEstimate,
    Diagnostic,
    Projection,
    NoProjection,
)
from src.projection.components import (
    create_clock,
    utc_to_local,
    local_to_utc,
    format_local_time,
    classify_season,
    classify_holiday,
    weekday_name,
    select_baseline,
    align_time_slots,
    compute_window,
    build_relative_slots,
    merge_slots,
    load_airport,
    load_forecast,
    build_baseline_timeline,
)
from src.projection.engine import project_traffic, ProjectionEngine, round_to_minute
from src.projection.export import projection_to_frame, timeline_to_frame

__all__ = [
    # Config
    "settings",
    "get_settings",
    "DstFallbackPolicy",
    # Models
    "Season",
    "SlotStats",
    "SeasonBaseline",
    "BaselineTable",
    "AirportClock",
    "SeriesEntry",
    "TrafficSeries",
    "Found",
    "NotFound",
    "Window",
    "RelativeSlot",
    "ProjectedSlot",
    "PointEstimate",
    "Diagnostic",
    "Projection",
    "NoProjection",
    # Components
    "create_clock",
    "utc_to_local",
    "local_to_utc",
    "format_local_time",
    "classify_season",
    "classify_holiday",
    "weekday_name",
    "select_baseline",
    "align_time_slots",
    "compute_window",
    "build_relative_slots",
    "merge_slots",
    "load_airport",
    "load_forecast",
    "build_baseline_timeline",
    # Engine
    "project_traffic",
    "ProjectionEngine",
    "round_to_minute",
    # Export
    "projection_to_frame",
    "timeline_to_frame",
]
