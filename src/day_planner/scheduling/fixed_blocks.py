"""Projection of recurring fixed blocks onto a calendar day."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List

from day_planner.core.ids import IdGenerator
from day_planner.core.models import ActivityType, FixedBlock, Weekday
from day_planner.monitoring.logging import get_logger

from .activities import ScheduledActivity, new_activity
from .slots import TimeSlot, subtract_time
from .time_utils import MILLIS_IN_DAY, MILLIS_IN_MINUTE, start_of_day_millis, to_millis

logger = get_logger(__name__)


@dataclass
class PlacementResult:
    window_start: int
    day_end: int
    free_slots: List[TimeSlot]
    activities: List[ScheduledActivity] = field(default_factory=list)


class FixedBlockPlacer:
    """Carve the day's fixed blocks out of the free time between ``now`` and midnight."""

    def __init__(self, fixed_blocks: Iterable[FixedBlock], ids: IdGenerator):
        self.fixed_blocks = list(fixed_blocks)
        self.ids = ids

    def blocks_for(self, day: date) -> List[FixedBlock]:
        weekday = Weekday.of(day)
        return [block for block in self.fixed_blocks if block.applies_to(weekday)]

    def place(self, day: date, now: datetime) -> PlacementResult:
        day_start = start_of_day_millis(day)
        day_end = day_start + MILLIS_IN_DAY
        # Nothing may be placed in the past.
        window_start = max(to_millis(now), day_start)
        free_slots = [TimeSlot(window_start, day_end)] if window_start < day_end else []
        result = PlacementResult(window_start=window_start, day_end=day_end, free_slots=free_slots)

        for block in self.blocks_for(day):
            block_start = day_start + block.start_minutes * MILLIS_IN_MINUTE
            block_end = day_start + block.end_minutes * MILLIS_IN_MINUTE

            # A block in progress is shown from the window start onwards.
            shown_start = max(block_start, window_start)
            if block_end > shown_start:
                result.activities.append(
                    new_activity(self.ids, ActivityType.FIXED_BLOCK, block.description, shown_start, block_end)
                )
            # A block already under way still occupies the rest of its span.
            result.free_slots = subtract_time(result.free_slots, block_start, block_end)

        logger.debug(
            "fixed_blocks.placed",
            day=day.isoformat(),
            placed=len(result.activities),
            free_slots=len(result.free_slots),
        )
        return result


__all__ = ["FixedBlockPlacer", "PlacementResult"]
