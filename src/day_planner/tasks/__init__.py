"""Task and fixed-block input handling."""

from .validation import (
    build_fixed_block,
    build_task,
    parse_clock_time,
    parse_deadline,
    parse_priority,
    parse_weekday,
)

__all__ = [
    "build_fixed_block",
    "build_task",
    "parse_clock_time",
    "parse_deadline",
    "parse_priority",
    "parse_weekday",
]
