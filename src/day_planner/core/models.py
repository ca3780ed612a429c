"""SQLAlchemy models for tasks and recurring fixed blocks"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from sqlalchemy import Boolean, Column, Date, DateTime, Enum as SQLEnum, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Weekday(str, Enum):
    """Day-of-week selector for fixed blocks"""
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"
    ALL_DAYS = "ALL_DAYS"  # Wildcard, matches every day

    @classmethod
    def of(cls, day: date) -> "Weekday":
        """Return the weekday tag of a calendar day."""
        return _WEEK[day.weekday()]


_WEEK = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
    Weekday.SUNDAY,
)


class TaskPriority(str, Enum):
    """Task priority levels"""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


class ActivityType(str, Enum):
    """Kinds of scheduled activity in a day timeline"""
    FIXED_BLOCK = "FIXED_BLOCK"
    TASK = "TASK"
    BREAK = "BREAK"
    REVISION = "REVISION"


class FixedBlock(Base):
    """Recurring fixed commitment (class, shift, meal...)"""
    __tablename__ = "fixed_blocks"

    id = Column(String(64), primary_key=True)
    day_of_week = Column(
        SQLEnum(
            Weekday,
            native_enum=False,
            validate_strings=True,
            create_constraint=False,
        ),
        nullable=False,
    )
    description = Column(Text, nullable=False)
    start_hour = Column(Integer, nullable=False)
    start_minute = Column(Integer, nullable=False, default=0)
    end_hour = Column(Integer, nullable=False)
    end_minute = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index('ix_fixed_block_day', 'day_of_week'),
    )

    @property
    def start_minutes(self) -> int:
        return self.start_hour * 60 + self.start_minute

    @property
    def end_minutes(self) -> int:
        return self.end_hour * 60 + self.end_minute

    def applies_to(self, weekday: Weekday) -> bool:
        return self.day_of_week in (weekday, Weekday.ALL_DAYS)

    def __repr__(self):
        return (
            f"<FixedBlock(id={self.id}, day={self.day_of_week}, "
            f"{self.start_hour:02d}:{self.start_minute:02d}-{self.end_hour:02d}:{self.end_minute:02d})>"
        )


class Task(Base):
    """Deadline-bound unit of work with a remaining-minutes counter"""
    __tablename__ = "tasks"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(
        SQLEnum(
            TaskPriority,
            native_enum=False,
            validate_strings=True,
            create_constraint=False,
        ),
        default=TaskPriority.MEDIUM,
        nullable=False,
    )
    deadline = Column(DateTime, nullable=False)
    estimated_minutes = Column(Integer, nullable=False)
    task_type = Column(String(64), nullable=True)  # HOMEWORK, ASSIGNMENT, ...
    is_completed = Column(Boolean, default=False, nullable=False)
    remaining_minutes = Column(Integer, nullable=False)
    scheduled_date = Column(Date, nullable=True)  # Last day a pass placed work for it

    __table_args__ = (
        Index('ix_task_completed_deadline', 'is_completed', 'deadline'),
    )

    def __init__(self, **kwargs: Any):
        kwargs.setdefault("is_completed", False)
        kwargs.setdefault("priority", TaskPriority.MEDIUM)
        if kwargs.get("remaining_minutes") is None:
            kwargs["remaining_minutes"] = kwargs.get("estimated_minutes")
        super().__init__(**kwargs)

    @property
    def is_pending(self) -> bool:
        return not self.is_completed and (self.remaining_minutes or 0) > 0

    def mark_completed(self) -> None:
        self.is_completed = True
        self.remaining_minutes = 0

    def __repr__(self):
        return (
            f"<Task(id={self.id}, priority={self.priority}, remaining={self.remaining_minutes}, "
            f"completed={self.is_completed})>"
        )


class ActiveTimer(Base):
    """Single-row table holding the running elapsed-time tracker, if any"""
    __tablename__ = "active_timer"

    id = Column(Integer, primary_key=True)
    task_id = Column(String(64), nullable=False)
    started_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<ActiveTimer(task_id={self.task_id}, started_at={self.started_at})>"
