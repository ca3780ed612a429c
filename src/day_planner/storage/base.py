"""Persistent store port shared by the SQLite and JSON backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from day_planner.core.models import FixedBlock, Task
from day_planner.monitoring.logging import get_logger

logger = get_logger(__name__)

Snapshot = Tuple[List[Task], List[FixedBlock]]


class PlannerStore(ABC):
    """Load/save of the task backlog and fixed blocks, plus the running timer.

    ``load`` never raises on unreadable or malformed data: it logs a warning
    and returns empty collections. The record-level helpers are expressed in
    terms of ``load``/``save`` and may be overridden with cheaper queries.
    """

    @abstractmethod
    def load(self) -> Snapshot:
        ...

    @abstractmethod
    def save(self, tasks: List[Task], fixed_blocks: List[FixedBlock]) -> None:
        ...

    @abstractmethod
    def load_active_timer(self) -> Optional[Tuple[str, datetime]]:
        ...

    @abstractmethod
    def save_active_timer(self, task_id: str, started_at: datetime) -> None:
        ...

    @abstractmethod
    def clear_active_timer(self) -> None:
        ...

    def get_task(self, task_id: str) -> Optional[Task]:
        tasks, _ = self.load()
        return next((task for task in tasks if task.id == task_id), None)

    def add_task(self, task: Task) -> Task:
        tasks, blocks = self.load()
        if task.remaining_minutes is None:
            task.remaining_minutes = task.estimated_minutes
        self.save(tasks + [task], blocks)
        logger.info("store.task.added", task_id=task.id, name=task.name)
        return task

    def add_fixed_block(self, block: FixedBlock) -> FixedBlock:
        tasks, blocks = self.load()
        self.save(tasks, blocks + [block])
        logger.info("store.fixed_block.added", block_id=block.id, day=block.day_of_week.value)
        return block

    def update_task(self, task: Task) -> None:
        tasks, blocks = self.load()
        self.save([task if existing.id == task.id else existing for existing in tasks], blocks)

    def mark_task_completed(self, task_id: str) -> bool:
        tasks, blocks = self.load()
        task = next((task for task in tasks if task.id == task_id), None)
        if task is None:
            return False
        task.mark_completed()
        self.save(tasks, blocks)
        logger.info("store.task.completed", task_id=task_id)
        return True

    def delete_task(self, task_id: str) -> bool:
        tasks, blocks = self.load()
        kept = [task for task in tasks if task.id != task_id]
        if len(kept) == len(tasks):
            return False
        self.save(kept, blocks)
        logger.info("store.task.deleted", task_id=task_id)
        return True

    def delete_fixed_block(self, block_id: str) -> bool:
        tasks, blocks = self.load()
        kept = [block for block in blocks if block.id != block_id]
        if len(kept) == len(blocks):
            return False
        self.save(tasks, kept)
        logger.info("store.fixed_block.deleted", block_id=block_id)
        return True


__all__ = ["PlannerStore", "Snapshot"]
