"""
Full-day baseline timeline: the selected day's curve against the seasonal average.
"""

from datetime import datetime
from typing import NamedTuple

from src.projection.config import ProjectionSettings, settings
from src.projection.models import AirportClock, BaselineTable, NotFound
from src.projection.components.aligner import align_time_slots, source_keys
from src.projection.components.baseline_selector import select_for_date
from src.projection.components.slots import time_slot_key
from src.projection.components.time_converter import utc_to_local


class BaselineTimeline(NamedTuple):
    """Day and seasonal averages aligned on one set of slot labels."""
    labels: tuple[str, ...]
    day_counts: tuple[float | None, ...]
    seasonal_counts: tuple[float | None, ...]
    day_sample_days: tuple[int | None, ...]
    seasonal_sample_days: tuple[int | None, ...]
    current_index: int
    day_label: str
    seasonal_label: str

    @property
    def title(self) -> str:
        return f"{self.day_label} vs {self.seasonal_label}"


def build_baseline_timeline(
    clock: AirportClock,
    baseline: BaselineTable,
    selected: datetime,
    config: ProjectionSettings | None = None,
) -> BaselineTimeline | NotFound:
    """
    Align the selected date's baseline with its season's average.

    The current index points at the selected slot when the day curve has
    it, otherwise at the day curve's first slot.
    """
    config = config or settings.projection
    local = utc_to_local(selected, clock, config.dst_fallback)

    selection, seasonal = select_for_date(local.date(), clock, baseline, config.dst_fallback)
    if isinstance(selection, NotFound):
        return selection
    if isinstance(seasonal, NotFound):
        return seasonal

    day_keys = source_keys(selection.slot_map)
    seasonal_keys = source_keys(seasonal.slot_map)
    alignment = align_time_slots(day_keys, seasonal_keys)

    day_stats = alignment.gather(0, [selection.slot_map[key] for key in day_keys])
    seasonal_stats = alignment.gather(1, [seasonal.slot_map[key] for key in seasonal_keys])

    selected_slot = time_slot_key(local, config.slot_minutes)
    matched = selected_slot if selected_slot in selection.slot_map else day_keys[0]

    return BaselineTimeline(
        labels=alignment.aligned_keys,
        day_counts=tuple(s.average_count if s else None for s in day_stats),
        seasonal_counts=tuple(s.average_count if s else None for s in seasonal_stats),
        day_sample_days=tuple(s.sample_days if s else None for s in day_stats),
        seasonal_sample_days=tuple(s.sample_days if s else None for s in seasonal_stats),
        current_index=alignment.aligned_keys.index(matched),
        day_label=selection.label,
        seasonal_label=seasonal.label,
    )


__all__ = ["BaselineTimeline", "build_baseline_timeline"]
