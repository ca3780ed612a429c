"""Day-schedule synthesis: free-time arithmetic, pacing and filling."""

from .activities import ScheduledActivity
from .fixed_blocks import FixedBlockPlacer, PlacementResult
from .pacer import PacingResult, TaskPacer, compute_daily_goal, order_pending_tasks
from .revision import RevisionFiller
from .scheduler import ScheduleBuilder, generate_daily_schedule
from .settings import PlannerSettings
from .slots import TimeSlot, normalize_slots, overlap_duration, subtract_time, total_duration

__all__ = [
    "FixedBlockPlacer",
    "PacingResult",
    "PlacementResult",
    "PlannerSettings",
    "RevisionFiller",
    "ScheduleBuilder",
    "ScheduledActivity",
    "TaskPacer",
    "TimeSlot",
    "compute_daily_goal",
    "generate_daily_schedule",
    "normalize_slots",
    "order_pending_tasks",
    "overlap_duration",
    "subtract_time",
    "total_duration",
]
