"""
Tests for merging baseline, forecast and actuals onto relative slots.
"""

from datetime import date, datetime

from src.utils import logger
from src.projection.models import (
    Found,
    NotFound,
    ProjectedSlot,
    RelativeSlot,
    Season,
    SeriesEntry,
    TrafficSeries,
)
from src.projection.components.merger import (
    expected_count,
    index_series,
    merge_slots,
    point_estimate,
)

from conftest import slot_map

TODAY = date(2025, 7, 1)
TOMORROW = date(2025, 7, 2)
DAY_AFTER = date(2025, 7, 3)
NOW_LOCAL = datetime(2025, 7, 1, 22, 0)


def _found(value: float) -> Found:
    return Found(slot_map(value), "Test Average", False, Season.SUMMER, "test")


def _slots(*pairs) -> list[RelativeSlot]:
    return [RelativeSlot(float(i), slot, day, slot) for i, (slot, day) in enumerate(pairs)]


def _merge(relative, forecast_entries=(), actual_entries=(), eta_date=TODAY):
    forecast, _ = index_series(TrafficSeries(tuple(forecast_entries)), "forecast", NOW_LOCAL, TODAY)
    actuals, _ = index_series(TrafficSeries(tuple(actual_entries)), "actuals", NOW_LOCAL, TODAY)
    days = {TODAY: _found(2.0), TOMORROW: _found(3.0), DAY_AFTER: _found(4.0)}
    seasonal = {day: _found(5.0) for day in days}
    return merge_slots(relative, days, seasonal, forecast, actuals, TODAY, eta_date)


def test_baseline_and_seasonal_per_date():
    merged = _merge(_slots(("23:00", TODAY), ("01:00", TOMORROW)))

    assert [s.baseline_count for s in merged] == [2.0, 3.0]
    assert [s.seasonal_average_count for s in merged] == [5.0, 5.0]
    assert merged[0].sample_days == 8


def test_tomorrow_actuals_never_reach_today():
    relative = _slots(("23:00", TODAY), ("23:00", TOMORROW))
    merged = _merge(
        relative,
        forecast_entries=[SeriesEntry("23:00", TOMORROW, 9.0)],
        actual_entries=[SeriesEntry("23:00", TOMORROW, 4.0)],
        eta_date=TOMORROW,
    )

    assert merged[0].actual_count is None
    assert merged[0].forecast_count is None
    assert merged[1].actual_count is None, "actuals never apply to future dates"
    assert merged[1].forecast_count == 9.0


def test_today_forecast_does_not_leak_into_tomorrow():
    relative = _slots(("23:00", TODAY), ("23:00", TOMORROW))
    merged = _merge(
        relative,
        forecast_entries=[SeriesEntry("23:00", TODAY, 6.0)],
        actual_entries=[SeriesEntry("23:00", TODAY, 7.0)],
    )

    assert merged[0].forecast_count == 6.0
    assert merged[0].actual_count == 7.0
    assert merged[1].forecast_count is None
    assert merged[1].actual_count is None


def test_forecast_limited_to_today_and_eta_date():
    relative = _slots(("01:00", TOMORROW), ("01:00", DAY_AFTER))
    entries = [SeriesEntry("01:00", TOMORROW, 8.0), SeriesEntry("01:00", DAY_AFTER, 9.0)]

    merged = _merge(relative, forecast_entries=entries, eta_date=TOMORROW)

    assert merged[0].forecast_count == 8.0
    assert merged[1].forecast_count is None


def test_legacy_entries_resolve_near_now():
    # At 22:00, a date-less 00:30 entry belongs to tomorrow, 21:00 to today
    lookup, diagnostics = index_series(
        TrafficSeries((SeriesEntry("00:30", None, 1.0), SeriesEntry("21:00", None, 2.0))),
        "forecast",
        NOW_LOCAL,
        TODAY,
    )
    assert lookup == {("00:30", TOMORROW): 1.0, ("21:00", TODAY): 2.0}
    assert diagnostics == []


def test_invalid_entries_are_skipped_with_diagnostic():
    lookup, diagnostics = index_series(
        TrafficSeries((SeriesEntry("25:00", None, 1.0), SeriesEntry("21:00", TODAY, 2.0))),
        "actuals",
        NOW_LOCAL,
        TODAY,
    )
    assert lookup == {("21:00", TODAY): 2.0}
    assert [d.code for d in diagnostics] == ["actuals_invalid_slot"]


def test_missing_baseline_selection_yields_none():
    forecast, _ = index_series(None, "forecast", NOW_LOCAL, TODAY)
    merged = merge_slots(
        _slots(("23:00", TODAY)),
        {TODAY: NotFound("no data")},
        {},
        forecast,
        {},
        TODAY,
        TODAY,
    )
    assert merged[0].baseline_count is None
    assert merged[0].seasonal_average_count is None
    assert merged[0].sample_days is None


def _projected(baseline, forecast) -> ProjectedSlot:
    return ProjectedSlot("10:00", "10:00", TODAY, 0.0, baseline, None, forecast, None)


def test_expected_prefers_forecast():
    assert expected_count(_projected(3.0, 7.0)) == 7.0
    assert expected_count(_projected(3.0, None)) == 3.0
    assert expected_count(_projected(None, None)) is None
    assert expected_count(_projected(3.0, 0.0)) == 0.0


def test_point_estimates_evaluated_per_index():
    slots = (
        ProjectedSlot("10:00", "10:00", TODAY, 0.0, 3.0, None, 7.0, None),
        ProjectedSlot("11:00", "11:00", TODAY, 1.0, 4.0, None, None, None),
    )
    now = point_estimate(slots, "10:00", TODAY)
    eta = point_estimate(slots, "11:00", TODAY)
    missing = point_estimate(slots, "11:00", TOMORROW)

    assert (now.index, now.value) == (0, 7.0)
    assert (eta.index, eta.value) == (1, 4.0)
    assert (missing.index, missing.value) == (None, None)


def test_dated_entries_with_bad_slot_keys_are_skipped():
    lookup, diagnostics = index_series(
        TrafficSeries((
            SeriesEntry("25:00", TODAY, 1.0),
            SeriesEntry("10:07", TODAY, 2.0),
            SeriesEntry("+1:00", TOMORROW, 3.0),
            SeriesEntry("23:00", TODAY, 4.0),
        )),
        "forecast",
        NOW_LOCAL,
        TODAY,
    )
    assert lookup == {("23:00", TODAY): 4.0}
    assert [d.code for d in diagnostics] == ["forecast_invalid_slot"] * 3


def test_skipped_entries_are_logged_with_their_code():
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="WARNING")
    try:
        index_series(TrafficSeries((SeriesEntry("25:00", TODAY, 1.0),)), "actuals", NOW_LOCAL, TODAY)
    finally:
        logger.remove(handler_id)

    assert [r["extra"].get("diagnostic") for r in records] == ["actuals_invalid_slot"]
    assert "25:00" in records[0]["message"]
