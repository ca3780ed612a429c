"""Deadline-paced packing of task work into free time."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List

from day_planner.core.backlog import TaskBacklog
from day_planner.core.ids import IdGenerator
from day_planner.core.models import ActivityType, Task
from day_planner.monitoring.logging import get_logger

from .activities import ScheduledActivity, new_activity
from .settings import PlannerSettings
from .slots import TimeSlot, sort_slots, subtract_time
from .time_utils import MILLIS_IN_MINUTE, days_between

logger = get_logger(__name__)


@dataclass
class PacingResult:
    free_slots: List[TimeSlot]
    activities: List[ScheduledActivity] = field(default_factory=list)


def order_pending_tasks(tasks: Iterable[Task]) -> List[Task]:
    """Incomplete tasks with work left, highest priority first, earliest deadline on ties."""
    pending = [task for task in tasks if task.is_pending]
    return sorted(pending, key=lambda task: (-task.priority.rank, task.deadline))


def compute_daily_goal(
    remaining_minutes: int,
    days_until_deadline: float,
    settings: PlannerSettings = PlannerSettings(),
) -> int:
    """Minutes of a task to aim for today.

    With time left before the deadline, one buffer day is held back and the
    remaining work is spread over the other days, bounded to
    ``[min_chunk_minutes, chunk_ceiling_minutes]``. A deadline that is due or
    past asks for everything today.

    The ceiling also applies when only one effective day is left, so a very
    large task can fall behind its deadline.
    """
    if days_until_deadline > 0 and remaining_minutes > 0:
        effective_days = max(1.0, days_until_deadline - settings.buffer_days)
        goal = math.ceil(remaining_minutes / effective_days)
        goal = min(settings.chunk_ceiling_minutes, goal)
        return max(settings.min_chunk_minutes, goal)
    return remaining_minutes


class TaskPacer:
    """Greedy packer that gives each pending task up to its daily goal of free time."""

    def __init__(self, settings: PlannerSettings, ids: IdGenerator):
        self.settings = settings
        self.ids = ids

    def pace(
        self,
        free_slots: Iterable[TimeSlot],
        backlog: TaskBacklog,
        now: datetime,
        day: date,
    ) -> PacingResult:
        """Place task chunks and breaks for ``day``, writing remaining minutes back into ``backlog``."""
        result = PacingResult(free_slots=sort_slots(free_slots))
        for task in order_pending_tasks(backlog):
            self._pace_task(task, result, backlog, now, day)
        return result

    def _pace_task(self, task: Task, result: PacingResult, backlog: TaskBacklog, now: datetime, day: date) -> None:
        settings = self.settings
        left = task.remaining_minutes
        goal = compute_daily_goal(left, days_between(task.deadline, now), settings)
        scheduled_today = 0

        result.free_slots = sort_slots(result.free_slots)
        for slot in list(result.free_slots):
            if left <= 0 or scheduled_today >= goal:
                break

            # Partial minutes cannot hold work.
            slot_minutes = slot.duration // MILLIS_IN_MINUTE
            if slot_minutes <= 0:
                continue

            chunk = min(left, goal - scheduled_today, slot_minutes)
            if chunk < settings.min_chunk_minutes:
                continue

            chunk_end = slot.start + chunk * MILLIS_IN_MINUTE
            result.activities.append(
                new_activity(self.ids, ActivityType.TASK, task.name, slot.start, chunk_end, task_id=task.id)
            )
            busy_end = chunk_end
            if slot_minutes >= chunk + settings.break_minutes and settings.break_minutes > 0:
                busy_end = chunk_end + settings.break_minutes * MILLIS_IN_MINUTE
                result.activities.append(
                    new_activity(self.ids, ActivityType.BREAK, settings.break_label, chunk_end, busy_end)
                )
            result.free_slots = subtract_time(result.free_slots, slot.start, busy_end)

            left -= chunk
            scheduled_today += chunk

        backlog.update_remaining(task.id, left)
        if scheduled_today:
            task.scheduled_date = day

        logger.debug(
            "pacer.task.paced",
            task_id=task.id,
            priority=task.priority.value,
            daily_goal=goal,
            scheduled=scheduled_today,
            remaining=left,
        )


__all__ = ["PacingResult", "TaskPacer", "compute_daily_goal", "order_pending_tasks"]
