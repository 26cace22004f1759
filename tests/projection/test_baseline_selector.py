"""
Tests for baseline bucket selection and its fallback order.
"""

from datetime import date

from src.projection.models import BaselineTable, Found, NotFound, Season, SeasonBaseline
from src.projection.components.baseline_selector import select_baseline, select_for_date, select_seasonal

from conftest import slot_map


def test_weekday_bucket_in_own_season(baseline):
    result = select_baseline(Season.SUMMER, "tuesday", None, baseline)

    assert isinstance(result, Found)
    assert result.label == "Tuesday Average"
    assert not result.is_holiday
    assert result.season is Season.SUMMER
    assert result.slot_map["10:00"].average_count == 2.0


def test_holiday_bucket_in_own_season(baseline):
    result = select_baseline(Season.WINTER, "thursday", "thanksgiving_0", baseline)

    assert isinstance(result, Found)
    assert result.is_holiday
    assert result.bucket == "thanksgiving_0"
    assert result.label == "Thanksgiving Average"
    assert result.slot_map["12:00"].average_count == 50.0


def test_holiday_bucket_falls_back_to_other_season(baseline):
    # christmas_0 only exists in the summer table
    result = select_baseline(Season.WINTER, "thursday", "christmas_0", baseline)

    assert isinstance(result, Found)
    assert result.is_holiday
    assert result.season is Season.SUMMER
    assert result.slot_map["12:00"].average_count == 70.0


def test_missing_holiday_falls_back_to_weekday(baseline):
    result = select_baseline(Season.WINTER, "wednesday", "christmas_-1", baseline)

    assert isinstance(result, Found)
    assert not result.is_holiday
    assert result.label == "Wednesday Average"
    assert result.slot_map["12:00"].average_count == 13.0


def test_not_found_when_weekday_missing():
    table = BaselineTable(
        airport="KORD",
        seasons={Season.SUMMER: SeasonBaseline({"monday": slot_map(1.0)}, {}, {})},
    )
    result = select_baseline(Season.SUMMER, "friday", None, table)
    assert isinstance(result, NotFound)
    assert "friday" in result.reason


def test_not_found_when_season_missing():
    table = BaselineTable(airport="KORD", seasons={})
    assert isinstance(select_baseline(Season.WINTER, "monday", "christmas_0", table), NotFound)
    assert isinstance(select_seasonal(Season.WINTER, table), NotFound)


def test_empty_bucket_is_not_found():
    table = BaselineTable(
        airport="KORD",
        seasons={Season.SUMMER: SeasonBaseline({"monday": {}}, {}, {})},
    )
    assert isinstance(select_baseline(Season.SUMMER, "monday", None, table), NotFound)


def test_select_seasonal(baseline):
    result = select_seasonal(Season.WINTER, baseline)
    assert isinstance(result, Found)
    assert result.label == "Winter Seasonal Average"
    assert result.slot_map["00:00"].average_count == 15.0


def test_select_for_date_thanksgiving(clock, baseline):
    selection, seasonal = select_for_date(date(2025, 11, 27), clock, baseline)

    assert isinstance(selection, Found)
    assert selection.bucket == "thanksgiving_0"
    assert seasonal.season is Season.WINTER


def test_select_for_date_ordinary_summer_day(clock, baseline, july_first):
    selection, seasonal = select_for_date(july_first, clock, baseline)

    assert selection.bucket == "tuesday"
    assert seasonal.label == "Summer Seasonal Average"
