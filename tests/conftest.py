"""
Shared fixtures: a fixed Monday, deterministic identifiers and throwaway stores.

2026-10-19 is a Monday; every scenario is expressed relative to it.
"""

from datetime import date, datetime, timedelta

import pytest

from day_planner.core.clock import FixedClock
from day_planner.core.ids import CounterIdGenerator
from day_planner.core.models import FixedBlock, Task, TaskPriority, Weekday
from day_planner.storage import JsonFilePlannerStore, SQLitePlannerStore

MONDAY = date(2026, 10, 19)


def at(hour: int, minute: int = 0, day: date = MONDAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


def make_task(
    task_id: str = "task_1",
    *,
    name: str = "Essay",
    priority: TaskPriority = TaskPriority.MEDIUM,
    deadline: datetime | None = None,
    estimated_minutes: int = 90,
    remaining_minutes: int | None = None,
    is_completed: bool = False,
) -> Task:
    return Task(
        id=task_id,
        name=name,
        description="",
        priority=priority,
        deadline=deadline or at(8) + timedelta(days=3),
        estimated_minutes=estimated_minutes,
        task_type="HOMEWORK",
        is_completed=is_completed,
        remaining_minutes=remaining_minutes,
    )


def make_block(
    block_id: str = "fb_1",
    *,
    day: Weekday = Weekday.MONDAY,
    start: tuple[int, int] = (9, 0),
    end: tuple[int, int] = (10, 0),
    description: str = "Lecture",
) -> FixedBlock:
    return FixedBlock(
        id=block_id,
        day_of_week=day,
        description=description,
        start_hour=start[0],
        start_minute=start[1],
        end_hour=end[0],
        end_minute=end[1],
    )


@pytest.fixture
def ids():
    return CounterIdGenerator()


@pytest.fixture
def clock():
    return FixedClock(at(8))


@pytest.fixture
def sqlite_store(tmp_path):
    store = SQLitePlannerStore(tmp_path / "planner.db")
    yield store
    store.close()


@pytest.fixture
def json_store(tmp_path):
    return JsonFilePlannerStore(tmp_path / "planner.json")


@pytest.fixture(params=["sqlite", "json"])
def store(request, tmp_path):
    """Both store backends, so port behaviour is checked once for each."""
    if request.param == "sqlite":
        store = SQLitePlannerStore(tmp_path / "planner.db")
        yield store
        store.close()
    else:
        yield JsonFilePlannerStore(tmp_path / "planner.json")
