"""Day-schedule synthesis pipeline."""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime
from typing import Iterable, List, Optional

from day_planner.core.backlog import TaskBacklog
from day_planner.core.ids import IdGenerator, UuidIdGenerator
from day_planner.core.models import FixedBlock, Task
from day_planner.monitoring.logging import get_logger

from .activities import ScheduledActivity
from .fixed_blocks import FixedBlockPlacer
from .pacer import TaskPacer
from .revision import RevisionFiller
from .settings import PlannerSettings

logger = get_logger(__name__)


class ScheduleBuilder:
    """Run fixed blocks, task pacing and revision filling, in that order.

    Fixed blocks have absolute priority, tasks are packed into what remains
    and filler only uses the leftovers. The one side effect is the in-place
    update of each paced task's ``remaining_minutes``; callers persist the
    tasks afterwards and must not run two passes over the same backlog at
    once.
    """

    def __init__(
        self,
        settings: Optional[PlannerSettings] = None,
        id_generator: Optional[IdGenerator] = None,
    ):
        self.settings = settings or PlannerSettings()
        self.ids = id_generator or UuidIdGenerator()

    def build(
        self,
        day: date,
        now: datetime,
        tasks: Iterable[Task] | TaskBacklog,
        fixed_blocks: Iterable[FixedBlock],
    ) -> List[ScheduledActivity]:
        backlog = tasks if isinstance(tasks, TaskBacklog) else TaskBacklog(tasks)

        placement = FixedBlockPlacer(fixed_blocks, self.ids).place(day, now)
        pacing = TaskPacer(self.settings, self.ids).pace(placement.free_slots, backlog, now, day)
        revision = RevisionFiller(self.settings, self.ids).fill(pacing.free_slots)

        activities = placement.activities + pacing.activities + revision
        activities.sort(key=lambda activity: activity.start_millis)

        counts = Counter(activity.type.value for activity in activities)
        logger.info(
            "schedule.generated",
            day=day.isoformat(),
            activities=len(activities),
            fixed=counts.get("FIXED_BLOCK", 0),
            tasks=counts.get("TASK", 0),
            breaks=counts.get("BREAK", 0),
            revision=counts.get("REVISION", 0),
        )
        return activities


def generate_daily_schedule(
    target_date: date,
    now: datetime,
    tasks: Iterable[Task] | TaskBacklog,
    fixed_blocks: Iterable[FixedBlock],
    *,
    settings: Optional[PlannerSettings] = None,
    id_generator: Optional[IdGenerator] = None,
) -> List[ScheduledActivity]:
    """Build the ordered activity timeline of ``target_date`` as seen at ``now``.

    Task records are updated in place with their new remaining minutes.
    """
    builder = ScheduleBuilder(settings=settings, id_generator=id_generator)
    return builder.build(target_date, now, tasks, fixed_blocks)


__all__ = ["ScheduleBuilder", "generate_daily_schedule"]
