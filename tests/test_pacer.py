"""
Tests for deadline pacing of the task backlog.
"""

from datetime import timedelta

import pytest

from day_planner.core.backlog import TaskBacklog
from day_planner.core.models import ActivityType, TaskPriority
from day_planner.scheduling.pacer import TaskPacer, compute_daily_goal, order_pending_tasks
from day_planner.scheduling.settings import PlannerSettings
from day_planner.scheduling.slots import TimeSlot
from day_planner.scheduling.time_utils import to_millis

from .conftest import MONDAY, at, make_task


def slot(start, end):
    return TimeSlot(to_millis(start), to_millis(end))


def spans(activities, kind):
    return [(a.start, a.end) for a in activities if a.type is kind]


# ============================================================================
# Daily goal
# ============================================================================


@pytest.mark.parametrize(
    ("remaining", "days", "expected"),
    [
        (90, 3.0, 45),  # two effective days
        (1000, 1.5, 120),  # ceiling
        (1000, 0.5, 120),  # under one effective day still capped
        (20, 5.0, 30),  # floor
        (150, 0.0, 150),  # due now: everything today
        (150, -2.0, 150),  # overdue
        (0, 3.0, 0),
    ],
)
def test_compute_daily_goal(remaining, days, expected):
    assert compute_daily_goal(remaining, days) == expected


def test_daily_goal_follows_settings():
    settings = PlannerSettings(chunk_ceiling_minutes=90, min_chunk_minutes=15, buffer_days=0)
    assert compute_daily_goal(400, 2.0, settings) == 90
    assert compute_daily_goal(20, 4.0, settings) == 15


def test_pending_order_is_priority_then_deadline():
    soon = at(8) + timedelta(days=1)
    later = at(8) + timedelta(days=4)
    tasks = [
        make_task("low", priority=TaskPriority.LOW, deadline=soon),
        make_task("high_late", priority=TaskPriority.HIGH, deadline=later),
        make_task("done", priority=TaskPriority.HIGH, is_completed=True),
        make_task("empty", priority=TaskPriority.HIGH, remaining_minutes=0),
        make_task("high_soon", priority=TaskPriority.HIGH, deadline=soon),
        make_task("medium", priority=TaskPriority.MEDIUM, deadline=soon),
    ]

    assert [task.id for task in order_pending_tasks(tasks)] == ["high_soon", "high_late", "medium", "low"]


# ============================================================================
# Placement
# ============================================================================


@pytest.fixture
def pacer(ids):
    return TaskPacer(PlannerSettings(), ids)


def test_goal_sized_chunk_with_break(pacer):
    task = make_task(estimated_minutes=90, deadline=at(8) + timedelta(days=3))
    backlog = TaskBacklog([task])

    result = pacer.pace([slot(at(8), at(23))], backlog, at(8), MONDAY)

    assert spans(result.activities, ActivityType.TASK) == [(at(8), at(8, 45))]
    assert spans(result.activities, ActivityType.BREAK) == [(at(8, 45), at(8, 50))]
    assert result.activities[0].task_id == task.id
    assert result.activities[1].name == "Short Break"
    assert result.free_slots == [slot(at(8, 50), at(23))]
    assert task.remaining_minutes == 45
    assert task.scheduled_date == MONDAY
    assert task.is_completed is False


def test_chunk_below_minimum_is_not_placed(pacer):
    task = make_task(estimated_minutes=60, remaining_minutes=20, deadline=at(8) + timedelta(days=5))

    result = pacer.pace([slot(at(8), at(23))], TaskBacklog([task]), at(8), MONDAY)

    assert result.activities == []
    assert result.free_slots == [slot(at(8), at(23))]
    assert task.remaining_minutes == 20
    assert task.scheduled_date is None


def test_due_task_takes_everything_and_is_not_completed(pacer):
    task = make_task(estimated_minutes=150, deadline=at(8))

    result = pacer.pace([slot(at(8), at(11, 20))], TaskBacklog([task]), at(8), MONDAY)

    assert spans(result.activities, ActivityType.TASK) == [(at(8), at(10, 30))]
    assert spans(result.activities, ActivityType.BREAK) == [(at(10, 30), at(10, 35))]
    assert task.remaining_minutes == 0
    assert task.is_completed is False


def test_small_slots_are_skipped(pacer):
    task = make_task(estimated_minutes=90)

    result = pacer.pace([slot(at(8), at(8, 20)), slot(at(9), at(12))], TaskBacklog([task]), at(8), MONDAY)

    assert spans(result.activities, ActivityType.TASK) == [(at(9), at(9, 45))]
    assert result.free_slots[0] == slot(at(8), at(8, 20))


def test_break_is_dropped_when_it_does_not_fit(pacer):
    task = make_task(estimated_minutes=120, deadline=at(20) + timedelta(days=1))
    slots = [slot(at(8), at(9)), slot(at(10), at(12))]

    result = pacer.pace(slots, TaskBacklog([task]), at(8), MONDAY)

    # First slot is filled exactly, the daily goal continues into the next one.
    assert spans(result.activities, ActivityType.TASK) == [(at(8), at(9)), (at(10), at(11))]
    assert spans(result.activities, ActivityType.BREAK) == [(at(11), at(11, 5))]
    assert task.remaining_minutes == 0


def test_higher_priority_claims_scarce_time(pacer):
    high = make_task("high", priority=TaskPriority.HIGH, estimated_minutes=60, deadline=at(8) + timedelta(days=2))
    low = make_task("low", priority=TaskPriority.LOW, estimated_minutes=120, deadline=at(8) + timedelta(days=10))

    result = pacer.pace([slot(at(8), at(9))], TaskBacklog([low, high]), at(8), MONDAY)

    assert [a.task_id for a in result.activities] == ["high"]
    assert high.remaining_minutes == 0
    assert low.remaining_minutes == 120
    assert low.scheduled_date is None


def test_earlier_deadline_goes_first_on_equal_priority(pacer):
    later = make_task("later", priority=TaskPriority.HIGH, estimated_minutes=90, deadline=at(8) + timedelta(days=3))
    sooner = make_task("sooner", priority=TaskPriority.HIGH, estimated_minutes=60, deadline=at(8) + timedelta(days=2))

    result = pacer.pace([slot(at(8), at(12))], TaskBacklog([later, sooner]), at(8), MONDAY)

    tasks = [(a.task_id, a.start, a.end) for a in result.activities if a.type is ActivityType.TASK]
    assert tasks == [("sooner", at(8), at(9)), ("later", at(9, 5), at(9, 50))]


def test_no_break_when_break_length_is_zero(ids):
    pacer = TaskPacer(PlannerSettings(break_minutes=0), ids)
    task = make_task(estimated_minutes=90)

    result = pacer.pace([slot(at(8), at(12))], TaskBacklog([task]), at(8), MONDAY)

    assert [a.type for a in result.activities] == [ActivityType.TASK]
    assert result.free_slots == [slot(at(8, 45), at(12))]
