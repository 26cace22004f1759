"""
Shared fixtures for projection tests.

The sample baseline is for KORD (UTC-6 winter, UTC-5 summer):
- summer weekday buckets hold weekday index + 1 (monday=1.0 ... sunday=7.0)
- winter weekday buckets hold the same plus 10
- christmas_0 exists only in summer (70.0), thanksgiving_0 only in winter (50.0)
- seasonal averages: summer 5.0, winter 15.0
"""

from datetime import date

import pytest

from src.projection.components.calendar import WEEKDAY_NAMES
from src.projection.components.payloads import load_airport
from src.projection.models import SlotStats

DST_DATES = {
    "2024": {"start": "2024-03-10", "end": "2024-11-03"},
    "2025": {"start": "2025-03-09", "end": "2025-11-02"},
}


def all_slot_keys(step_minutes: int = 15) -> list[str]:
    return [f"{m // 60:02d}:{m % 60:02d}" for m in range(0, 24 * 60, step_minutes)]


def raw_bucket(value: float, days: int = 8) -> dict:
    return {key: {"averageCount": value, "sampleSize": {"days": days}} for key in all_slot_keys()}


def slot_map(value: float, days: int = 8) -> dict[str, SlotStats]:
    return {key: SlotStats(value, days) for key in all_slot_keys()}


def make_baseline_payload() -> dict:
    return {
        "summer": {
            "dayOfWeekTimeSlots": {name: raw_bucket(i + 1.0) for i, name in enumerate(WEEKDAY_NAMES)},
            "holidayTimeSlots": {"christmas_0": raw_bucket(70.0)},
            "seasonalTimeSlots": raw_bucket(5.0, days=120),
        },
        "winter": {
            "dayOfWeekTimeSlots": {name: raw_bucket(i + 11.0) for i, name in enumerate(WEEKDAY_NAMES)},
            "holidayTimeSlots": {"thanksgiving_0": raw_bucket(50.0, days=3)},
            "seasonalTimeSlots": raw_bucket(15.0, days=150),
        },
        "dstDatesByYear": DST_DATES,
    }


@pytest.fixture
def baseline_payload() -> dict:
    return make_baseline_payload()


@pytest.fixture
def airport(baseline_payload):
    """(clock, baseline) for KORD at version 1."""
    return load_airport("KORD", baseline_payload, version=1)


@pytest.fixture
def clock(airport):
    return airport[0]


@pytest.fixture
def baseline(airport):
    return airport[1]


@pytest.fixture
def july_first() -> date:
    return date(2025, 7, 1)  # Tuesday, summer
