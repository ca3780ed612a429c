"""Core domain records and injectable ports."""

from day_planner.core.backlog import TaskBacklog
from day_planner.core.clock import Clock, FixedClock, system_clock
from day_planner.core.ids import CounterIdGenerator, IdGenerator, UuidIdGenerator
from day_planner.core.models import (
    ActiveTimer,
    ActivityType,
    FixedBlock,
    Task,
    TaskPriority,
    Weekday,
)

__all__ = [
    "ActiveTimer",
    "ActivityType",
    "Clock",
    "CounterIdGenerator",
    "FixedBlock",
    "FixedClock",
    "IdGenerator",
    "Task",
    "TaskBacklog",
    "TaskPriority",
    "UuidIdGenerator",
    "Weekday",
    "system_clock",
]
