"""Free-time bookkeeping with normalized sets of half-open intervals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .time_utils import millis_to_minutes


@dataclass(frozen=True, order=True)
class TimeSlot:
    """Half-open ``[start, end)`` interval of free time, in civil milliseconds."""
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def minutes(self) -> float:
        return millis_to_minutes(self.duration)


def normalize_slots(slots: Iterable[TimeSlot]) -> List[TimeSlot]:
    """Drop empty slots, sort by start and merge slots that touch or overlap."""
    ordered = sorted((slot for slot in slots if slot.end > slot.start), key=lambda slot: slot.start)
    merged: List[TimeSlot] = []
    for slot in ordered:
        if merged and merged[-1].end >= slot.start:
            merged[-1] = TimeSlot(merged[-1].start, max(merged[-1].end, slot.end))
        else:
            merged.append(slot)
    return merged


def subtract_time(slots: Iterable[TimeSlot], range_start: int, range_end: int) -> List[TimeSlot]:
    """Remove ``[range_start, range_end)`` from every slot and return a new normalized list."""
    if range_end <= range_start:
        return normalize_slots(slots)
    remaining: List[TimeSlot] = []
    for slot in slots:
        if slot.end <= range_start or slot.start >= range_end:
            remaining.append(slot)
        elif range_start <= slot.start and range_end >= slot.end:
            continue
        elif range_start > slot.start and range_end < slot.end:
            remaining.append(TimeSlot(slot.start, range_start))
            remaining.append(TimeSlot(range_end, slot.end))
        elif range_start <= slot.start:
            remaining.append(TimeSlot(range_end, slot.end))
        else:
            remaining.append(TimeSlot(slot.start, range_start))
    return normalize_slots(remaining)


def total_duration(slots: Iterable[TimeSlot]) -> int:
    return sum(slot.duration for slot in slots if slot.end > slot.start)


def overlap_duration(slots: Iterable[TimeSlot], range_start: int, range_end: int) -> int:
    """Milliseconds of ``[range_start, range_end)`` covered by the given slots."""
    covered = 0
    for slot in slots:
        low = max(slot.start, range_start)
        high = min(slot.end, range_end)
        if high > low:
            covered += high - low
    return covered


def sort_slots(slots: Iterable[TimeSlot]) -> List[TimeSlot]:
    return sorted(slots, key=lambda slot: slot.start)


__all__ = [
    "TimeSlot",
    "normalize_slots",
    "overlap_duration",
    "sort_slots",
    "subtract_time",
    "total_duration",
]
