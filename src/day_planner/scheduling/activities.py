"""Scheduled activity records produced by a scheduling pass."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from day_planner.core.ids import IdGenerator
from day_planner.core.models import ActivityType

from .time_utils import from_millis, millis_to_minutes

ACTIVITY_ID_PREFIX = "sa"


@dataclass
class ScheduledActivity:
    """One concrete, dated interval of the day timeline"""
    id: str
    type: ActivityType
    name: str
    start_millis: int
    end_millis: int
    task_id: Optional[str] = None

    @property
    def start(self) -> datetime:
        return from_millis(self.start_millis)

    @property
    def end(self) -> datetime:
        return from_millis(self.end_millis)

    @property
    def duration_minutes(self) -> float:
        return millis_to_minutes(self.end_millis - self.start_millis)


def new_activity(
    ids: IdGenerator,
    activity_type: ActivityType,
    name: str,
    start_millis: int,
    end_millis: int,
    task_id: Optional[str] = None,
) -> ScheduledActivity:
    return ScheduledActivity(
        id=ids.new_id(ACTIVITY_ID_PREFIX),
        type=activity_type,
        name=name,
        start_millis=start_millis,
        end_millis=end_millis,
        task_id=task_id,
    )


__all__ = ["ScheduledActivity", "new_activity"]
