"""
Time-slot alignment across differently keyed series.

Every chart that puts a day curve next to a seasonal curve (or a forecast)
needs the same thing: the sorted union of slot keys, and for each source
where each aligned key sits in that source's own arrays. This module is the
one place that does it.
"""

from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple, TypeVar

T = TypeVar("T")

# Marks an aligned key absent from a source
MISSING = None


class SlotAlignment(NamedTuple):
    """Sorted union of slot keys with per-source index lookups."""
    aligned_keys: tuple[str, ...]
    # indices[source][position] -> index into that source's key list, or MISSING
    indices: tuple[tuple[int | None, ...], ...]

    def present_count(self, source: int) -> int:
        """Number of aligned keys the source actually has."""
        return sum(1 for index in self.indices[source] if index is not MISSING)

    def gather(self, source: int, values: Sequence[T]) -> list[T | None]:
        """Spread a source's values onto the aligned keys, None where missing."""
        return [
            values[index] if index is not MISSING else None
            for index in self.indices[source]
        ]


def source_keys(source: Mapping[str, Any] | Sequence[str]) -> list[str]:
    """
    Key order of a source: sorted for maps, as given for key sequences.
    """
    if isinstance(source, Mapping):
        return sorted(source)
    return list(source)


def align_time_slots(*sources: Mapping[str, Any] | Sequence[str]) -> SlotAlignment:
    """
    Align slot-keyed sources onto one sorted key set.

    Args:
        *sources: Slot maps ("HH:MM" -> value) or key sequences

    Returns:
        SlotAlignment whose aligned keys contain every source key once

    Raises:
        ValueError: If no source is given
    """
    if not sources:
        raise ValueError("align_time_slots needs at least one source")

    key_lists = [source_keys(source) for source in sources]
    aligned = tuple(sorted(set().union(*key_lists)))

    positions = [{key: index for index, key in enumerate(keys)} for keys in key_lists]
    indices = tuple(
        tuple(position.get(key, MISSING) for key in aligned)
        for position in positions
    )
    return SlotAlignment(aligned_keys=aligned, indices=indices)


__all__ = [
    "MISSING",
    "SlotAlignment",
    "source_keys",
    "align_time_slots",
]
