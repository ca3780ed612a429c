"""Authoritative task collection shared by the pacer and the store."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from .models import Task


class TaskBacklog:
    """Insertion-ordered mapping from task identifier to the one live ``Task`` record.

    The backlog never copies tasks: pacing mutates the objects it was built
    from, so whoever handed them in sees the updated remaining minutes and
    can persist them directly.
    """

    def __init__(self, tasks: Iterable[Task] = ()):
        self._tasks: dict[str, Task] = {}
        for task in tasks:
            # First occurrence wins when the same identifier appears twice.
            self._tasks.setdefault(task.id, task)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def get(self, task_id: str) -> Optional[Task]:
        return self._tasks.get(task_id)

    def update_remaining(self, task_id: str, remaining_minutes: int) -> Optional[Task]:
        task = self._tasks.get(task_id)
        if task is not None:
            task.remaining_minutes = remaining_minutes
        return task


__all__ = ["TaskBacklog"]
