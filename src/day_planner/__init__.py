"""Day Planner - turns fixed commitments and a deadline-bound backlog into a day timeline"""

from day_planner.core.backlog import TaskBacklog
from day_planner.core.ids import CounterIdGenerator, UuidIdGenerator
from day_planner.core.models import ActivityType, FixedBlock, Task, TaskPriority, Weekday
from day_planner.scheduling import (
    PlannerSettings,
    ScheduleBuilder,
    ScheduledActivity,
    TimeSlot,
    generate_daily_schedule,
    subtract_time,
)
from day_planner.storage import JsonFilePlannerStore, PlannerStore, SQLitePlannerStore, open_store
from day_planner.tracking import TaskTimer

__version__ = "0.1.0"

__all__ = [
    "ActivityType",
    "CounterIdGenerator",
    "FixedBlock",
    "JsonFilePlannerStore",
    "PlannerSettings",
    "PlannerStore",
    "SQLitePlannerStore",
    "ScheduleBuilder",
    "ScheduledActivity",
    "Task",
    "TaskBacklog",
    "TaskPriority",
    "TaskTimer",
    "TimeSlot",
    "UuidIdGenerator",
    "Weekday",
    "generate_daily_schedule",
    "open_store",
    "subtract_time",
]
