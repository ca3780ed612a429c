"""Filler revision blocks for whatever free time is left."""

from __future__ import annotations

from typing import Iterable, List

from day_planner.core.ids import IdGenerator
from day_planner.core.models import ActivityType

from .activities import ScheduledActivity, new_activity
from .settings import PlannerSettings
from .slots import TimeSlot, sort_slots
from .time_utils import MILLIS_IN_MINUTE


class RevisionFiller:
    def __init__(self, settings: PlannerSettings, ids: IdGenerator):
        self.settings = settings
        self.ids = ids

    def fill(self, free_slots: Iterable[TimeSlot]) -> List[ScheduledActivity]:
        """Chop each free slot into revision blocks, leaving sub-minimum tails idle."""
        block_millis = self.settings.revision_block_minutes * MILLIS_IN_MINUTE
        min_millis = self.settings.min_revision_block_minutes * MILLIS_IN_MINUTE
        activities: List[ScheduledActivity] = []
        if block_millis <= 0:
            return activities

        for slot in sort_slots(free_slots):
            cursor = slot.start
            while slot.end - cursor >= max(min_millis, 1):
                block_end = cursor + min(block_millis, slot.end - cursor)
                activities.append(
                    new_activity(self.ids, ActivityType.REVISION, self.settings.revision_label, cursor, block_end)
                )
                cursor = block_end
        return activities


__all__ = ["RevisionFiller"]
