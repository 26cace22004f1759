"""
Tests for the full-day baseline timeline and tabular export.
"""

from datetime import datetime, timezone

import polars as pl

from src.projection.engine import project_traffic
from src.projection.export import PROJECTION_SCHEMA, projection_to_frame, timeline_to_frame
from src.projection.models import BaselineTable, NotFound, Season, SeasonBaseline, SlotStats
from src.projection.components.timeline import build_baseline_timeline

NOW = datetime(2025, 7, 1, 15, 0, tzinfo=timezone.utc)


def test_timeline_for_ordinary_day(clock, baseline):
    timeline = build_baseline_timeline(clock, baseline, NOW)

    assert len(timeline.labels) == 96
    assert timeline.labels[timeline.current_index] == "10:00"
    assert timeline.title == "Tuesday Average vs Summer Seasonal Average"
    assert set(timeline.day_counts) == {2.0}
    assert set(timeline.seasonal_counts) == {5.0}
    assert timeline.day_sample_days[0] == 8
    assert timeline.seasonal_sample_days[0] == 120


def test_timeline_aligns_partial_curves(clock):
    table = BaselineTable(
        airport="KORD",
        seasons={
            Season.SUMMER: SeasonBaseline(
                day_of_week_time_slots={"tuesday": {"06:00": SlotStats(1.0, 4), "07:00": SlotStats(2.0, 4)}},
                holiday_time_slots={},
                seasonal_time_slots={"05:00": SlotStats(3.0, 90), "06:00": SlotStats(4.0, 90)},
            ),
        },
    )

    timeline = build_baseline_timeline(clock, table, NOW)

    assert timeline.labels == ("05:00", "06:00", "07:00")
    assert timeline.day_counts == (None, 1.0, 2.0)
    assert timeline.seasonal_counts == (3.0, 4.0, None)
    assert timeline.seasonal_sample_days == (90, 90, None)
    # 10:00 is not in the day curve, so the first day slot is current
    assert timeline.current_index == 1


def test_timeline_without_baseline(clock):
    result = build_baseline_timeline(clock, BaselineTable(airport="KORD", seasons={}), NOW)
    assert isinstance(result, NotFound)


def test_projection_frame(clock, baseline):
    projection = project_traffic(clock, baseline, now=NOW)

    df = projection_to_frame(projection)

    assert df.height == len(projection.slots)
    assert df.columns == list(PROJECTION_SCHEMA) + ["is_now", "is_eta"]
    assert df["calendar_date"].dtype == pl.Date
    assert df["is_now"].sum() == 1
    assert df.filter(pl.col("is_now"))["time_slot"].to_list() == ["10:00"]
    assert df["baseline_count"].to_list() == [2.0] * df.height
    assert df["forecast_count"].null_count() == df.height


def test_timeline_frame(clock, baseline):
    df = timeline_to_frame(build_baseline_timeline(clock, baseline, NOW))

    assert df.shape == (96, 5)
    assert df["seasonal_sample_days"].dtype == pl.Int64
