"""Input normalisation and validation for new tasks and fixed blocks.

Everything here runs before data reaches the scheduler, which assumes
well-formed records and never rejects anything itself.
"""

from __future__ import annotations

import re
from datetime import datetime, time
from typing import Optional, Tuple

from day_planner.core.ids import IdGenerator, UuidIdGenerator
from day_planner.core.models import FixedBlock, Task, TaskPriority, Weekday
from day_planner.scheduling.time_utils import to_local_naive
from day_planner.utils.exceptions import ValidationError

TASK_ID_PREFIX = "task"
FIXED_BLOCK_ID_PREFIX = "fb"

_CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")
_WILDCARDS = {"all", "all_days", "all-days", "every day", "everyday", "daily", "*"}


def parse_clock_time(value: str, field: str = "time") -> Tuple[int, int]:
    """Parse ``HH:MM`` into ``(hour, minute)``."""
    match = _CLOCK_RE.match(value or "")
    if not match:
        raise ValidationError(field, f"expected HH:MM, got {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValidationError(field, f"{value!r} is not a time of day")
    return hour, minute


def parse_weekday(value: str) -> Weekday:
    """Accept weekday names in any case, or a wildcard such as ``all``/``daily``."""
    cleaned = (value or "").strip().lower()
    if cleaned in _WILDCARDS:
        return Weekday.ALL_DAYS
    try:
        return Weekday(cleaned.upper())
    except ValueError:
        raise ValidationError("day", f"unknown weekday {value!r}") from None


def parse_priority(value: str) -> TaskPriority:
    try:
        return TaskPriority((value or "").strip().upper())
    except ValueError:
        raise ValidationError("priority", f"expected HIGH, MEDIUM or LOW, got {value!r}") from None


def parse_deadline(value: str) -> datetime:
    """Parse an ISO date or datetime; a bare date means the end of that day."""
    text = (value or "").strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError("deadline", f"expected YYYY-MM-DD[ HH:MM], got {value!r}") from None
    if len(text) == 10:
        parsed = datetime.combine(parsed.date(), time(23, 59))
    return to_local_naive(parsed)


def build_fixed_block(
    day: str | Weekday,
    description: str,
    start: str,
    end: str,
    ids: Optional[IdGenerator] = None,
) -> FixedBlock:
    """Validate form-style input and return a new fixed block."""
    weekday = day if isinstance(day, Weekday) else parse_weekday(day)
    label = (description or "").strip()
    if not label:
        raise ValidationError("description", "must not be empty")

    start_hour, start_minute = parse_clock_time(start, "start")
    end_hour, end_minute = parse_clock_time(end, "end")
    if end_hour * 60 + end_minute <= start_hour * 60 + start_minute:
        raise ValidationError("end", "end time must be after start time")

    ids = ids or UuidIdGenerator()
    return FixedBlock(
        id=ids.new_id(FIXED_BLOCK_ID_PREFIX),
        day_of_week=weekday,
        description=label,
        start_hour=start_hour,
        start_minute=start_minute,
        end_hour=end_hour,
        end_minute=end_minute,
    )


def build_task(
    name: str,
    deadline: str | datetime,
    estimated_minutes: int | str,
    *,
    now: datetime,
    priority: str | TaskPriority = TaskPriority.MEDIUM,
    description: str = "",
    task_type: Optional[str] = None,
    ids: Optional[IdGenerator] = None,
) -> Task:
    """Validate form-style input and return a new task with its full estimate remaining.

    Args:
        name: Short task name shown in the timeline.
        deadline: Absolute deadline (``datetime`` or ISO text).
        estimated_minutes: Total estimated work, a positive integer.
        now: Current time; deadlines before it are rejected.
        priority: HIGH, MEDIUM or LOW.
        description: Free text.
        task_type: Category tag such as ``HOMEWORK``.
        ids: Identifier generator, random UUIDs by default.
    """
    clean_name = (name or "").strip()
    if not clean_name:
        raise ValidationError("name", "must not be empty")

    try:
        estimate = int(estimated_minutes)
    except (TypeError, ValueError):
        raise ValidationError("estimated_minutes", f"expected a whole number, got {estimated_minutes!r}") from None
    if estimate <= 0:
        raise ValidationError("estimated_minutes", "must be a positive number of minutes")

    due = to_local_naive(deadline) if isinstance(deadline, datetime) else parse_deadline(deadline)
    if due < now:
        raise ValidationError("deadline", "cannot be in the past")

    ids = ids or UuidIdGenerator()
    return Task(
        id=ids.new_id(TASK_ID_PREFIX),
        name=clean_name,
        description=(description or "").strip(),
        priority=priority if isinstance(priority, TaskPriority) else parse_priority(priority),
        deadline=due,
        estimated_minutes=estimate,
        task_type=task_type.strip().upper() if task_type else None,
        remaining_minutes=estimate,
    )


__all__ = [
    "FIXED_BLOCK_ID_PREFIX",
    "TASK_ID_PREFIX",
    "build_fixed_block",
    "build_task",
    "parse_clock_time",
    "parse_deadline",
    "parse_priority",
    "parse_weekday",
]
