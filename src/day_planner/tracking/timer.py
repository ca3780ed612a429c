"""Stopwatch that burns down a task's remaining minutes outside a scheduling pass."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from day_planner.core.clock import Clock
from day_planner.core.models import Task
from day_planner.monitoring.logging import get_logger
from day_planner.storage.base import PlannerStore
from day_planner.utils.exceptions import TimerError

logger = get_logger(__name__)


class TaskTimer:
    """Track time spent on one task at a time.

    The running timer is persisted through the store, so a new process picks
    up a timer started by a previous one.
    """

    def __init__(self, store: PlannerStore, clock: Clock = datetime.now):
        self.store = store
        self.clock = clock

    @property
    def active(self) -> Optional[tuple[str, datetime]]:
        return self.store.load_active_timer()

    def start(self, task_id: str) -> Task:
        running = self.active
        if running is not None:
            raise TimerError(f"A timer is already running for task {running[0]}", task_id=running[0])

        task = self.store.get_task(task_id)
        if task is None:
            raise TimerError(f"Unknown task {task_id}", task_id=task_id)
        if task.is_completed:
            raise TimerError(f"Task {task_id} is already completed", task_id=task_id)

        started_at = self.clock()
        self.store.save_active_timer(task_id, started_at)
        logger.info("timer.started", task_id=task_id, started_at=started_at.isoformat())
        return task

    def elapsed_minutes(self, now: Optional[datetime] = None) -> int:
        running = self.active
        if running is None:
            return 0
        _, started_at = running
        return self._whole_minutes(started_at, now or self.clock())

    def stop(self) -> Optional[Task]:
        """Charge the elapsed whole minutes to the task; complete it when nothing remains."""
        running = self.active
        if running is None:
            return None

        task_id, started_at = running
        elapsed = self._whole_minutes(started_at, self.clock())
        self.store.clear_active_timer()

        task = self.store.get_task(task_id)
        if task is None:
            logger.warning("timer.stopped.orphan", task_id=task_id, elapsed_minutes=elapsed)
            return None

        task.remaining_minutes = max(0, task.remaining_minutes - elapsed)
        if task.remaining_minutes <= 0:
            task.mark_completed()
        self.store.update_task(task)

        logger.info(
            "timer.stopped",
            task_id=task_id,
            elapsed_minutes=elapsed,
            remaining=task.remaining_minutes,
            completed=task.is_completed,
        )
        return task

    @staticmethod
    def _whole_minutes(started_at: datetime, now: datetime) -> int:
        return max(0, int((now - started_at).total_seconds() // 60))


__all__ = ["TaskTimer"]
