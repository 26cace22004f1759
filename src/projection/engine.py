"""
Traffic projection pipeline.

This is the main entry point that:
1. Freezes "now" (rounded to the minute) and converts now/ETA to airport time
2. Builds the window and classifies every local date it touches
3. Selects day and seasonal baselines per date
4. Aligns baseline, seasonal and forecast slots per date
5. Places slots relative to now and merges all series
6. Computes expected traffic at now and at the ETA

Nothing here reads a clock, performs I/O, or raises for data-quality
problems; those come back as diagnostics or NoProjection.
"""

from datetime import datetime, timedelta, timezone
from typing import NamedTuple

from src.utils import log_diagnostic, logger
from src.projection.config import ProjectionSettings, settings
from src.projection.models import (
    ActualsSeries,
    AirportClock,
    BaselineTable,
    Diagnostic,
    ForecastSeries,
    Found,
    NoProjection,
    NotFound,
    Projection,
    TrafficSeries,
)
from src.projection.components.aligner import align_time_slots
from src.projection.components.baseline_selector import select_for_date
from src.projection.components.merger import index_series, merge_slots, point_estimate
from src.projection.components.slots import time_slot_key
from src.projection.components.time_converter import utc_to_local
from src.projection.components.window import build_relative_slots, compute_window, dates_in_window, eta_is_now


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def round_to_minute(instant: datetime) -> datetime:
    """Round an instant to the nearest minute, as aware UTC."""
    instant = _as_utc(instant)
    floored = instant.replace(second=0, microsecond=0)
    if instant - floored >= timedelta(seconds=30):
        floored += timedelta(minutes=1)
    return floored


def freeze_instants(
    now: datetime,
    eta: datetime | None,
    config: ProjectionSettings,
) -> tuple[datetime, datetime, bool]:
    """
    Round now and the ETA to the minute.

    Whether the ETA counts as "now" is decided on the raw instants, so
    rounding cannot push a near-now ETA past the tolerance.

    Returns:
        Tuple of (rounded now, rounded ETA, ETA is now)
    """
    now = _as_utc(now)
    at_now = eta_is_now(now, _as_utc(eta) if eta is not None else None, config)
    rounded_now = round_to_minute(now)
    if at_now:
        return rounded_now, rounded_now, True
    return rounded_now, round_to_minute(eta), False


def project_traffic(
    clock: AirportClock,
    baseline: BaselineTable,
    forecast: ForecastSeries | None = None,
    actuals: ActualsSeries | None = None,
    *,
    now: datetime,
    eta: datetime | None = None,
    diagnostics: tuple[Diagnostic, ...] = (),
    config: ProjectionSettings | None = None,
) -> Projection | NoProjection:
    """
    Build the "hours from now" projection for an airport.

    Args:
        clock: Airport clock
        baseline: Airport baseline table
        forecast: Live forecast series (optional)
        actuals: Observed counts (optional)
        now: The single frozen "now" for this invocation (UTC)
        eta: Selected ETA (UTC); None means "now"
        diagnostics: Diagnostics already collected upstream (e.g. payload loading)

    Returns:
        Projection, or NoProjection when no source has a slot in the window
    """
    config = config or settings.projection
    policy = config.dst_fallback
    diagnostics = list(diagnostics)

    now, eta, at_now = freeze_instants(now, eta, config)

    now_local = utc_to_local(now, clock, policy)
    eta_local = utc_to_local(eta, clock, policy)
    today, eta_date = now_local.date(), eta_local.date()

    window = compute_window(now, None if at_now else eta, config)

    forecast_lookup, forecast_diagnostics = index_series(forecast, "forecast", now_local, today, config)
    actual_lookup, actual_diagnostics = index_series(actuals, "actuals", now_local, today, config)
    diagnostics.extend(forecast_diagnostics + actual_diagnostics)

    day_selections, seasonal_selections = {}, {}
    candidates = []
    labels = []

    for local_date in dates_in_window(now_local, window):
        selection, seasonal = select_for_date(local_date, clock, baseline, policy)
        day_selections[local_date] = selection
        seasonal_selections[local_date] = seasonal

        if isinstance(selection, NotFound):
            log_diagnostic("baseline_not_found", f"{clock.airport} {local_date}: {selection.reason}")
            diagnostics.append(Diagnostic(code="baseline_not_found", message=selection.reason))
        else:
            logger.debug(f"{clock.airport} {local_date}: using {selection.label} ({selection.season.value})")
            labels.append(selection.label)

        forecast_slots = [slot for slot, slot_date in forecast_lookup if slot_date == local_date]
        alignment = align_time_slots(
            selection.slot_map if isinstance(selection, Found) else {},
            seasonal.slot_map if isinstance(seasonal, Found) else {},
            forecast_slots,
        )
        candidates.extend((time_slot, local_date) for time_slot in alignment.aligned_keys)

    relative_slots = build_relative_slots(candidates, now_local, today, window, config)
    slots = merge_slots(
        relative_slots,
        day_selections,
        seasonal_selections,
        forecast_lookup,
        actual_lookup,
        today,
        eta_date,
    )

    has_data = any(
        slot.baseline_count is not None or slot.forecast_count is not None
        for slot in slots
    )
    if not has_data:
        reason = f"No baseline or forecast data for {clock.airport} between {window.start_hours:+.2f}h and {window.end_hours:+.2f}h"
        logger.warning(reason)
        return NoProjection(reason=reason, diagnostics=tuple(diagnostics))

    projection = Projection(
        airport=clock.airport,
        today=today,
        eta_date=eta_date,
        window=window,
        slots=slots,
        now=point_estimate(slots, time_slot_key(now_local, config.slot_minutes), today),
        eta=point_estimate(slots, time_slot_key(eta_local, config.slot_minutes), eta_date),
        baseline_labels=tuple(dict.fromkeys(labels)),
        diagnostics=tuple(diagnostics),
    )
    logger.debug(f"Projection {clock.airport}: {len(slots)} slots, now={projection.now.value}, eta={projection.eta.value}")
    return projection


class CacheKey(NamedTuple):
    baseline_version: int
    forecast_version: int | None
    actuals_version: int | None
    now: datetime
    eta: datetime
    diagnostics: tuple[Diagnostic, ...]


class ProjectionEngine:
    """
    Per-airport projection engine with a last-result cache.

    The cache is keyed on explicit input versions, the minute-rounded
    now/ETA and the upstream diagnostics. A miss recomputes; a hit returns
    the previous (equal) result.
    """

    def __init__(
        self,
        clock: AirportClock,
        baseline: BaselineTable,
        config: ProjectionSettings | None = None,
    ):
        """
        Initialize the engine.

        Args:
            clock: Airport clock, read-only
            baseline: Airport baseline table, read-only
            config: Projection settings (defaults to settings)
        """
        self.clock = clock
        self.baseline = baseline
        self.config = config or settings.projection

        self._last: tuple[CacheKey, Projection | NoProjection] | None = None

        logger.info(f"ProjectionEngine initialized for {clock.airport} (baseline v{baseline.version})")

    def _cache_key(
        self,
        forecast: TrafficSeries | None,
        actuals: TrafficSeries | None,
        now: datetime,
        eta: datetime | None,
        diagnostics: tuple[Diagnostic, ...],
    ) -> CacheKey:
        now, eta, _ = freeze_instants(now, eta, self.config)
        return CacheKey(
            baseline_version=self.baseline.version,
            forecast_version=forecast.version if forecast is not None else None,
            actuals_version=actuals.version if actuals is not None else None,
            now=now,
            eta=eta,
            diagnostics=tuple(diagnostics),
        )

    def project(
        self,
        forecast: TrafficSeries | None = None,
        actuals: TrafficSeries | None = None,
        *,
        now: datetime,
        eta: datetime | None = None,
        diagnostics: tuple[Diagnostic, ...] = (),
    ) -> Projection | NoProjection:
        """Project traffic, reusing the previous result when nothing changed."""
        key = self._cache_key(forecast, actuals, now, eta, diagnostics)
        last = self._last
        if last is not None and last[0] == key:
            return last[1]

        result = project_traffic(
            self.clock,
            self.baseline,
            forecast,
            actuals,
            now=now,
            eta=eta,
            diagnostics=diagnostics,
            config=self.config,
        )
        self._last = (key, result)
        return result

    def invalidate(self) -> None:
        """Drop the cached result."""
        self._last = None


__all__ = [
    "round_to_minute",
    "freeze_instants",
    "project_traffic",
    "CacheKey",
    "ProjectionEngine",
]
