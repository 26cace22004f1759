"""
Validation of upstream JSON payloads into engine types.

Baseline payloads are required: a malformed one raises
BaselinePayloadError at this boundary. Forecast payloads are optional
enrichment: problems drop only the affected series and come back as
diagnostics, so a bad forecast never blocks baseline-only rendering.
"""

from datetime import date
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.utils import log_diagnostic, logger
from src.utils.exceptions import BaselinePayloadError, ForecastPayloadError
from src.projection.config import ProjectionSettings, settings
from src.projection.models import (
    AirportClock,
    BaselineTable,
    Diagnostic,
    Season,
    SeasonBaseline,
    SeriesEntry,
    SlotMap,
    SlotStats,
    TrafficSeries,
)
from src.projection.components.slots import is_time_slot
from src.projection.components.time_converter import create_clock


# =============================================================================
# Baseline payload
# =============================================================================

class SampleSizePayload(BaseModel):
    days: int = 0


class SlotPayload(BaseModel):
    """One slot of a baseline bucket."""

    model_config = ConfigDict(populate_by_name=True)

    average_count: float | None = Field(default=None, alias="averageCount")
    # Older baselines name the same field averageArrivals
    average_arrivals: float | None = Field(default=None, alias="averageArrivals")
    sample_size: SampleSizePayload | None = Field(default=None, alias="sampleSize")

    def to_stats(self) -> SlotStats | None:
        """Slot statistics, or None when neither count field is set."""
        count = self.average_count if self.average_count is not None else self.average_arrivals
        if count is None:
            return None
        days = self.sample_size.days if self.sample_size else 0
        return SlotStats(average_count=count, sample_days=days)


class SeasonPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day_of_week_time_slots: dict[str, dict[str, SlotPayload]] = Field(default_factory=dict, alias="dayOfWeekTimeSlots")
    holiday_time_slots: dict[str, dict[str, SlotPayload]] = Field(default_factory=dict, alias="holidayTimeSlots")
    seasonal_time_slots: dict[str, SlotPayload] = Field(default_factory=dict, alias="seasonalTimeSlots")


class DstWindowPayload(BaseModel):
    start: date
    end: date


class BaselinePayload(BaseModel):
    """Per-airport baseline as served by the pattern-matching service."""

    model_config = ConfigDict(populate_by_name=True)

    summer: SeasonPayload | None = None
    winter: SeasonPayload | None = None
    dst_dates_by_year: dict[int, DstWindowPayload] = Field(default_factory=dict, alias="dstDatesByYear")


def _slot_map(raw_slots: dict[str, SlotPayload], slot_minutes: int, where: str) -> SlotMap:
    slot_map = {}
    for key in sorted(raw_slots):
        if not is_time_slot(key, slot_minutes):
            logger.warning(f"Skipping baseline slot {key!r} in {where}: not on a {slot_minutes}-minute boundary")
            continue
        stats = raw_slots[key].to_stats()
        if stats is None:
            logger.warning(f"Skipping baseline slot {key!r} in {where}: no average count")
            continue
        slot_map[key] = stats
    return slot_map


def _season_baseline(payload: SeasonPayload, season: Season, slot_minutes: int) -> SeasonBaseline:
    return SeasonBaseline(
        day_of_week_time_slots={
            weekday.lower(): _slot_map(slots, slot_minutes, f"{season.value}/{weekday}")
            for weekday, slots in payload.day_of_week_time_slots.items()
        },
        holiday_time_slots={
            key: _slot_map(slots, slot_minutes, f"{season.value}/{key}")
            for key, slots in payload.holiday_time_slots.items()
        },
        seasonal_time_slots=_slot_map(payload.seasonal_time_slots, slot_minutes, f"{season.value}/seasonal"),
    )


def parse_baseline_payload(raw: dict, airport: str | None = None) -> BaselinePayload:
    """
    Validate a raw baseline dict.

    Raises:
        BaselinePayloadError: If the payload does not match the schema
    """
    try:
        return BaselinePayload.model_validate(raw)
    except ValidationError as e:
        raise BaselinePayloadError(f"Invalid baseline payload: {e.error_count()} error(s)", airport=airport) from e


def load_airport(
    airport: str,
    raw: dict,
    version: int = 0,
    config: ProjectionSettings | None = None,
) -> tuple[AirportClock, BaselineTable]:
    """
    Build an airport's clock and baseline table from its baseline payload.

    Args:
        airport: ICAO airport code
        raw: Baseline payload dict
        version: Monotonic version of this payload

    Returns:
        Tuple of (AirportClock, BaselineTable)

    Raises:
        BaselinePayloadError: If the payload does not match the schema
    """
    config = config or settings.projection
    payload = parse_baseline_payload(raw, airport)

    seasons = {}
    for season in Season:
        season_payload = getattr(payload, season.value)
        if season_payload is None:
            logger.warning(f"Baseline for {airport} has no {season.value} section")
            continue
        seasons[season] = _season_baseline(season_payload, season, config.slot_minutes)

    dst_table = {
        year: (window.start, window.end)
        for year, window in payload.dst_dates_by_year.items()
    }
    clock = create_clock(airport, dst_table)
    baseline = BaselineTable(airport=airport, seasons=seasons, version=version)

    logger.info(f"Loaded baseline for {airport}: seasons={[s.value for s in seasons]}, "
                f"dst_years={sorted(dst_table)}, version={version}")
    return clock, baseline


# =============================================================================
# Forecast payload
# =============================================================================

class ForecastPayload(BaseModel):
    """Live flight-plan forecast with optional per-slot dates and actuals."""

    model_config = ConfigDict(populate_by_name=True)

    time_slots: list[str] = Field(alias="timeSlots")
    arrival_counts: list[float | None] = Field(alias="arrivalCounts")
    slot_dates: list[date] | None = Field(default=None, alias="slotDates")
    actual_counts: list[float | None] | None = Field(default=None, alias="actualCounts")


class ForecastLoad(NamedTuple):
    """Result of loading a forecast payload. Dropped series are None."""
    forecast: TrafficSeries | None
    actuals: TrafficSeries | None
    diagnostics: tuple[Diagnostic, ...]


def _check_length(series: str, expected: int, values: list | None) -> None:
    if values is not None and len(values) != expected:
        raise ForecastPayloadError(
            f"{series} has {len(values)} entries, expected {expected}",
            series=series,
            expected=expected,
            actual=len(values),
        )


def _check_slots(time_slots: list[str], slot_minutes: int) -> None:
    bad = [slot for slot in time_slots if not is_time_slot(slot, slot_minutes)]
    if bad:
        raise ForecastPayloadError(f"timeSlots has {len(bad)} invalid key(s), first {bad[0]!r}", series="timeSlots")


def _series(time_slots: list[str], dates: list[date] | None, counts: list[float | None], version: int) -> TrafficSeries:
    entries = tuple(
        SeriesEntry(
            time_slot=slot,
            date=dates[index] if dates is not None else None,
            count=counts[index],
        )
        for index, slot in enumerate(time_slots)
    )
    return TrafficSeries(entries=entries, version=version)


def _diagnostic(code: str, error: ForecastPayloadError) -> Diagnostic:
    log_diagnostic(code, f"Forecast series dropped: {error.message}")
    return Diagnostic(code=code, message=error.message)


def load_forecast(
    raw: dict | None,
    version: int = 0,
    config: ProjectionSettings | None = None,
) -> ForecastLoad:
    """
    Validate a forecast payload, dropping only the series that are malformed.

    - Invalid schema or slot keys: forecast and actuals dropped
    - slotDates length mismatch: forecast and actuals dropped
    - arrivalCounts length mismatch: forecast dropped
    - actualCounts length mismatch: actuals dropped

    Never raises.
    """
    if raw is None:
        return ForecastLoad(forecast=None, actuals=None, diagnostics=())

    config = config or settings.projection
    try:
        payload = ForecastPayload.model_validate(raw)
    except ValidationError as e:
        error = ForecastPayloadError(f"Invalid forecast payload: {e.error_count()} error(s)")
        return ForecastLoad(None, None, (_diagnostic("forecast_invalid", error),))

    slots = payload.time_slots
    try:
        _check_slots(slots, config.slot_minutes)
        _check_length("slotDates", len(slots), payload.slot_dates)
    except ForecastPayloadError as e:
        code = "forecast_invalid" if e.series == "timeSlots" else "slot_dates_length_mismatch"
        return ForecastLoad(None, None, (_diagnostic(code, e),))

    diagnostics = []
    forecast = actuals = None

    try:
        _check_length("arrivalCounts", len(slots), payload.arrival_counts)
        forecast = _series(slots, payload.slot_dates, payload.arrival_counts, version)
    except ForecastPayloadError as e:
        diagnostics.append(_diagnostic("forecast_length_mismatch", e))

    if payload.actual_counts is not None:
        try:
            _check_length("actualCounts", len(slots), payload.actual_counts)
            actuals = _series(slots, payload.slot_dates, payload.actual_counts, version)
        except ForecastPayloadError as e:
            diagnostics.append(_diagnostic("actuals_length_mismatch", e))

    return ForecastLoad(forecast=forecast, actuals=actuals, diagnostics=tuple(diagnostics))


__all__ = [
    "SlotPayload",
    "SeasonPayload",
    "BaselinePayload",
    "ForecastPayload",
    "ForecastLoad",
    "parse_baseline_payload",
    "load_airport",
    "load_forecast",
]
