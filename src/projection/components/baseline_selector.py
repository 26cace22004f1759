"""
Baseline bucket selection.

Fallback order for a date:
1. Holiday bucket in the date's own season
2. Holiday bucket in the other season (sparse tables)
3. Weekday bucket in the date's own season

Every lookup returns Found or NotFound; a missing baseline is never an
exception.
"""

from datetime import date, datetime

from src.utils import logger
from src.projection.config import DstFallbackPolicy
from src.projection.models import (
    AirportClock,
    BaselineSelection,
    BaselineTable,
    Found,
    NotFound,
    Season,
)
from src.projection.components.calendar import (
    classify_holiday,
    classify_season,
    holiday_label,
    weekday_name,
)


def select_baseline(
    season: Season,
    weekday: str,
    holiday: str | None,
    baseline: BaselineTable,
) -> BaselineSelection:
    """
    Pick the slot map that applies to a classified date.

    Args:
        season: The date's season
        weekday: The date's weekday name
        holiday: Holiday-offset key, or None
        baseline: Both seasons' baselines

    Returns:
        Found with the slot map and a display label, or NotFound
    """
    if holiday is not None:
        for candidate in (season, season.other):
            season_data = baseline.season(candidate)
            slot_map = season_data.holiday_time_slots.get(holiday) if season_data else None
            if slot_map:
                if candidate is not season:
                    logger.debug(f"Using {candidate.value} bucket for {holiday} ({season.value} missing)")
                return Found(
                    slot_map=slot_map,
                    label=f"{holiday_label(holiday)} Average",
                    is_holiday=True,
                    season=candidate,
                    bucket=holiday,
                )
        logger.debug(f"No {holiday} bucket in either season, falling back to {weekday}")

    season_data = baseline.season(season)
    slot_map = season_data.day_of_week_time_slots.get(weekday) if season_data else None
    if not slot_map:
        return NotFound(f"No {weekday} baseline for {baseline.airport} in {season.value}")

    return Found(
        slot_map=slot_map,
        label=f"{weekday.capitalize()} Average",
        is_holiday=False,
        season=season,
        bucket=weekday,
    )


def select_seasonal(season: Season, baseline: BaselineTable) -> BaselineSelection:
    """The season's aggregate bucket."""
    season_data = baseline.season(season)
    if season_data is None or not season_data.seasonal_time_slots:
        return NotFound(f"No {season.value} seasonal baseline for {baseline.airport}")

    return Found(
        slot_map=season_data.seasonal_time_slots,
        label=f"{season.value.capitalize()} Seasonal Average",
        is_holiday=False,
        season=season,
        bucket="seasonal",
    )


def select_for_date(
    local_date: date | datetime,
    clock: AirportClock,
    baseline: BaselineTable,
    policy: DstFallbackPolicy | None = None,
) -> tuple[BaselineSelection, BaselineSelection]:
    """
    Classify a local date and select its day and seasonal baselines.

    Returns:
        Tuple of (day selection, seasonal selection)
    """
    season = classify_season(local_date, clock, policy)
    selection = select_baseline(
        season=season,
        weekday=weekday_name(local_date),
        holiday=classify_holiday(local_date),
        baseline=baseline,
    )
    return selection, select_seasonal(season, baseline)


__all__ = [
    "select_baseline",
    "select_seasonal",
    "select_for_date",
]
