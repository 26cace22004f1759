"""
Tabular export of projections for reporting and the CLI.
"""

import polars as pl

from src.projection.models import Projection
from src.projection.components.timeline import BaselineTimeline


PROJECTION_SCHEMA = {
    "label": pl.Utf8,
    "time_slot": pl.Utf8,
    "calendar_date": pl.Date,
    "hours_from_now": pl.Float64,
    "baseline_count": pl.Float64,
    "seasonal_average_count": pl.Float64,
    "forecast_count": pl.Float64,
    "actual_count": pl.Float64,
    "sample_days": pl.Int64,
}


def projection_to_frame(projection: Projection) -> pl.DataFrame:
    """
    Convert a projection into one row per slot.

    Adds is_now / is_eta marker columns for the two point estimates.
    """
    df = pl.DataFrame(
        [slot._asdict() for slot in projection.slots],
        schema=PROJECTION_SCHEMA,
    )

    row_index = pl.int_range(0, pl.len())
    return df.with_columns([
        (row_index == (projection.now.index if projection.now.index is not None else -1)).alias("is_now"),
        (row_index == (projection.eta.index if projection.eta.index is not None else -1)).alias("is_eta"),
    ])


def timeline_to_frame(timeline: BaselineTimeline) -> pl.DataFrame:
    """Convert a baseline timeline into one row per aligned slot."""
    return pl.DataFrame({
        "time_slot": list(timeline.labels),
        "day_count": list(timeline.day_counts),
        "seasonal_count": list(timeline.seasonal_counts),
        "day_sample_days": list(timeline.day_sample_days),
        "seasonal_sample_days": list(timeline.seasonal_sample_days),
    }, schema={
        "time_slot": pl.Utf8,
        "day_count": pl.Float64,
        "seasonal_count": pl.Float64,
        "day_sample_days": pl.Int64,
        "seasonal_sample_days": pl.Int64,
    })


__all__ = ["PROJECTION_SCHEMA", "projection_to_frame", "timeline_to_frame"]
