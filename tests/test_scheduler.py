"""
End-to-end tests for day-schedule synthesis.
"""

from datetime import timedelta

from hypothesis import given, settings
from hypothesis import strategies as st

from day_planner.core.backlog import TaskBacklog
from day_planner.core.ids import CounterIdGenerator
from day_planner.core.models import ActivityType, TaskPriority, Weekday
from day_planner.scheduling import ScheduleBuilder, generate_daily_schedule
from day_planner.scheduling.time_utils import MILLIS_IN_DAY, start_of_day_millis, to_millis

from .conftest import MONDAY, at, make_block, make_task

DAY_START = start_of_day_millis(MONDAY)
DAY_END = DAY_START + MILLIS_IN_DAY


def timeline(activities):
    return [(a.type, a.start, a.end) for a in activities]


def test_block_only_day_fills_the_rest_with_revision(ids):
    activities = generate_daily_schedule(MONDAY, at(7), [], [make_block()], id_generator=ids)

    revision = [(a.start, a.end) for a in activities if a.type is ActivityType.REVISION]
    assert revision[:2] == [(at(7), at(8)), (at(8), at(9))]
    assert revision[2:] == [
        (at(hour), at(hour + 1) if hour < 23 else at(0, day=MONDAY + timedelta(days=1)))
        for hour in range(10, 24)
    ]
    assert [(a.start, a.end) for a in activities if a.type is ActivityType.FIXED_BLOCK] == [(at(9), at(10))]
    assert len(activities) == 17
    assert activities[0].start == at(7)
    assert activities[-1].end_millis == DAY_END


def test_single_task_then_break_then_revision(ids):
    task = make_task(estimated_minutes=90, deadline=at(8) + timedelta(days=3))

    activities = generate_daily_schedule(MONDAY, at(8), [task], [], id_generator=ids)

    assert timeline(activities[:2]) == [
        (ActivityType.TASK, at(8), at(8, 45)),
        (ActivityType.BREAK, at(8, 45), at(8, 50)),
    ]
    revision = activities[2:]
    assert len(revision) == 15
    assert {a.type for a in revision} == {ActivityType.REVISION}
    assert revision[0].start == at(8, 50)
    assert revision[-1].end == at(23, 50)
    assert task.remaining_minutes == 45


def test_near_done_task_is_left_for_another_day(ids):
    task = make_task(estimated_minutes=60, remaining_minutes=20, deadline=at(8) + timedelta(days=5))

    activities = generate_daily_schedule(MONDAY, at(8), [task], [], id_generator=ids)

    assert ActivityType.TASK not in {a.type for a in activities}
    assert task.remaining_minutes == 20


def test_due_task_is_pushed_into_today(ids):
    task = make_task(estimated_minutes=150, deadline=at(8))
    block = make_block(start=(11, 20), end=(23, 59), description="Shift")

    activities = generate_daily_schedule(MONDAY, at(8), [task], [block], id_generator=ids)

    assert timeline(activities) == [
        (ActivityType.TASK, at(8), at(10, 30)),
        (ActivityType.BREAK, at(10, 30), at(10, 35)),
        (ActivityType.REVISION, at(10, 35), at(11, 20)),
        (ActivityType.FIXED_BLOCK, at(11, 20), at(23, 59)),
    ]
    assert task.remaining_minutes == 0
    assert task.is_completed is False


def test_planning_tomorrow_stamps_the_planned_day(ids):
    tuesday = MONDAY + timedelta(days=1)
    task = make_task(estimated_minutes=90)

    activities = generate_daily_schedule(tuesday, at(20), [task], [], id_generator=ids)

    assert timeline(activities[:1]) == [(ActivityType.TASK, at(0, day=tuesday), at(1, day=tuesday))]
    assert task.remaining_minutes == 30
    assert task.scheduled_date == tuesday


def test_past_day_is_empty(ids):
    task = make_task()

    activities = generate_daily_schedule(MONDAY, at(9, day=MONDAY + timedelta(days=1)), [task], [], id_generator=ids)

    assert activities == []
    assert task.remaining_minutes == 90


def test_builder_accepts_a_backlog(ids):
    task = make_task(estimated_minutes=90)
    backlog = TaskBacklog([task, make_task(task.id, estimated_minutes=500)])

    ScheduleBuilder(id_generator=ids).build(MONDAY, at(8), backlog, [])

    assert len(backlog) == 1
    assert backlog.get(task.id).remaining_minutes == 45


def test_activity_ids_are_unique(ids):
    activities = generate_daily_schedule(MONDAY, at(7), [make_task()], [make_block()], id_generator=ids)

    assert len({a.id for a in activities}) == len(activities)


def test_remaining_minutes_survive_a_store_round_trip(store, ids):
    store.add_task(make_task(estimated_minutes=90))
    store.add_fixed_block(make_block())

    tasks, blocks = store.load()
    generate_daily_schedule(MONDAY, at(8), tasks, blocks, id_generator=ids)
    store.save(tasks, blocks)

    [task] = store.load()[0]
    assert task.remaining_minutes == 45
    assert task.scheduled_date == MONDAY


# ============================================================================
# Properties over arbitrary days
# ============================================================================

task_rows = st.lists(
    st.tuples(
        st.sampled_from(list(TaskPriority)),
        st.integers(min_value=1, max_value=600),
        st.integers(min_value=-3 * 24 * 60, max_value=14 * 24 * 60),
        st.booleans(),
    ),
    max_size=6,
)
block_edges = st.lists(st.integers(min_value=0, max_value=24 * 60), unique=True, max_size=8)


@settings(max_examples=75, deadline=None)
@given(task_rows, block_edges, st.integers(min_value=0, max_value=24 * 60 - 1))
def test_schedule_is_ordered_and_conserves_minutes(rows, edges, now_minute):
    now = at(0) + timedelta(minutes=now_minute)
    tasks = [
        make_task(
            f"task_{index}",
            priority=priority,
            estimated_minutes=estimate,
            deadline=now + timedelta(minutes=offset),
            is_completed=completed,
        )
        for index, (priority, estimate, offset, completed) in enumerate(rows)
    ]
    edges = sorted(edges)
    blocks = [
        make_block(f"fb_{i}", day=Weekday.ALL_DAYS, start=divmod(edges[i], 60), end=divmod(edges[i + 1], 60))
        for i in range(0, len(edges) - 1, 2)
    ]
    before = {task.id: task.remaining_minutes for task in tasks}

    activities = generate_daily_schedule(MONDAY, now, tasks, blocks, id_generator=CounterIdGenerator())

    window_start = to_millis(now)
    for activity in activities:
        assert window_start <= activity.start_millis < activity.end_millis <= DAY_END
    for earlier, later in zip(activities, activities[1:]):
        assert earlier.end_millis <= later.start_millis
    for task in tasks:
        assert 0 <= task.remaining_minutes <= before[task.id]
        if task.is_completed:
            assert task.remaining_minutes == before[task.id]
        placed = sum(a.duration_minutes for a in activities if a.task_id == task.id)
        assert placed == before[task.id] - task.remaining_minutes
