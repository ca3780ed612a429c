"""Plain-dict (JSON-ready) encoding of tasks and fixed blocks."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional

from day_planner.core.models import FixedBlock, Task, TaskPriority, Weekday
from day_planner.scheduling.time_utils import to_local_naive


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO timestamp, accepting the ``Z`` suffix of browser exports."""
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return to_local_naive(datetime.fromisoformat(text))


def task_to_dict(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "name": task.name,
        "description": task.description,
        "priority": TaskPriority(task.priority).value,
        "deadline": _iso(task.deadline),
        "estimatedMinutes": task.estimated_minutes,
        "type": task.task_type,
        "isCompleted": bool(task.is_completed),
        "scheduledDate": _iso(task.scheduled_date),
        "remainingMinutes": task.remaining_minutes,
    }


def task_from_dict(data: Dict[str, Any]) -> Task:
    """Decode a task; raises ``KeyError``/``ValueError``/``TypeError`` on malformed input."""
    scheduled = data.get("scheduledDate")
    return Task(
        id=str(data["id"]),
        name=str(data["name"]),
        description=data.get("description"),
        priority=TaskPriority(data["priority"]),
        deadline=parse_timestamp(data["deadline"]),
        estimated_minutes=int(data["estimatedMinutes"]),
        task_type=data.get("type"),
        is_completed=bool(data.get("isCompleted", False)),
        # Browser exports store a full UTC timestamp here.
        scheduled_date=parse_timestamp(scheduled).date() if scheduled else None,
        remaining_minutes=(
            int(data["remainingMinutes"]) if data.get("remainingMinutes") is not None else None
        ),
    )


def fixed_block_to_dict(block: FixedBlock) -> Dict[str, Any]:
    return {
        "id": block.id,
        "dayOfWeek": Weekday(block.day_of_week).value,
        "description": block.description,
        "startHour": block.start_hour,
        "startMinute": block.start_minute,
        "endHour": block.end_hour,
        "endMinute": block.end_minute,
    }


def fixed_block_from_dict(data: Dict[str, Any]) -> FixedBlock:
    return FixedBlock(
        id=str(data["id"]),
        day_of_week=Weekday(data["dayOfWeek"]),
        description=str(data["description"]),
        start_hour=int(data["startHour"]),
        start_minute=int(data.get("startMinute", 0)),
        end_hour=int(data["endHour"]),
        end_minute=int(data.get("endMinute", 0)),
    )


__all__ = [
    "fixed_block_from_dict",
    "fixed_block_to_dict",
    "parse_timestamp",
    "task_from_dict",
    "task_to_dict",
]
