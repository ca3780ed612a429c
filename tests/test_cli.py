"""
Tests for the command line interface.
"""

import pytest
from rich.console import Console

from day_planner.interfaces.cli import PlannerCLI, build_parser, dispatch, main
from day_planner.scheduling import PlannerSettings

from .conftest import MONDAY


@pytest.fixture
def console():
    return Console(record=True, width=140, color_system=None)


@pytest.fixture
def cli(json_store, clock, ids, console):
    return PlannerCLI(json_store, PlannerSettings(), clock=clock, timer_clock=clock, ids=ids, console=console)


def run(cli, *argv):
    return dispatch(cli, build_parser().parse_args(list(argv)))


def output(console):
    return console.export_text()


def test_add_and_list_blocks(cli, console):
    assert run(cli, "add-block", "monday", "09:00", "10:00", "Lecture") == 0
    assert run(cli, "add-block", "all", "12:30", "13:00", "Lunch") == 0
    assert run(cli, "blocks") == 0

    text = output(console)
    assert "Added fixed block Lecture (fb_1)" in text
    assert "09:00 - 10:00" in text
    assert "Every Day" in text


def test_add_and_list_tasks(cli, console, json_store):
    assert run(cli, "add-task", "Essay", "--deadline", "2026-10-22", "--minutes", "90", "--priority", "high") == 0
    assert run(cli, "tasks") == 0

    [task] = json_store.load()[0]
    assert task.id == "task_1"
    text = output(console)
    assert "Essay" in text
    assert "HIGH" in text
    assert "1h 30m" in text


def test_schedule_prints_timeline_and_saves_progress(cli, console, json_store):
    run(cli, "add-task", "Essay", "--deadline", "2026-10-22 08:00", "--minutes", "90")
    run(cli, "add-block", "monday", "09:00", "10:00", "Lecture")

    assert run(cli, "schedule", "--date", MONDAY.isoformat()) == 0

    text = output(console)
    assert "Monday, October 19, 2026" in text
    assert "08:00 - 08:45" in text
    assert "Short Break" in text
    assert "Lecture" in text
    assert "23:00 - 24:00" in text
    assert json_store.load()[0][0].remaining_minutes == 45


def test_past_day_has_no_schedule(cli, console):
    assert run(cli, "schedule", "--date", "2026-10-18") == 0

    assert "No schedule generated" in output(console)


def test_complete_and_delete(cli, console, json_store):
    run(cli, "add-task", "Essay", "--deadline", "2026-10-22", "--minutes", "90")
    run(cli, "add-block", "friday", "09:00", "10:00", "Lab")

    assert run(cli, "complete", "task_1") == 0
    assert run(cli, "tasks") == 0
    assert "No pending tasks" in output(console)
    assert run(cli, "complete", "task_9") == 1
    assert run(cli, "delete-task", "task_1") == 0
    assert run(cli, "delete-task", "task_1") == 1
    assert run(cli, "delete-block", "fb_1") == 0
    assert run(cli, "delete-block", "fb_1") == 1
    assert json_store.load() == ([], [])


def test_timer_flow(cli, console, clock, json_store):
    run(cli, "add-task", "Essay", "--deadline", "2026-10-22", "--minutes", "90")

    assert run(cli, "timer", "start", "task_1") == 0
    clock.advance(minutes=30)
    assert run(cli, "timer", "status") == 0
    assert run(cli, "timer", "stop") == 0
    assert run(cli, "timer", "stop") == 0

    text = output(console)
    assert "Timer started for Essay" in text
    assert "30m elapsed, 1h remaining" in text
    assert "Essay: 1h remaining" in text
    assert "No timer is running." in text
    assert json_store.load()[0][0].remaining_minutes == 60


def test_main_reports_validation_errors(tmp_path, capsys):
    config = tmp_path / "planner.yaml"
    config.write_text(f"storage:\n  backend: json\n  json_path: {tmp_path / 'planner.json'}\n")

    assert main(["--config", str(config), "add-block", "monday", "10:00", "09:00", "Lecture"]) == 2
    assert "end time must be after start time" in capsys.readouterr().out

    assert main(["--config", str(config), "blocks"]) == 0
    assert "No fixed blocks added yet." in capsys.readouterr().out


def test_main_reports_unknown_backend(tmp_path, capsys):
    config = tmp_path / "planner.yaml"
    config.write_text("storage:\n  backend: redis\n")

    assert main(["--config", str(config), "blocks"]) == 2
    assert "Unknown storage backend: redis" in capsys.readouterr().out


def test_main_reports_malformed_config(tmp_path, capsys):
    config = tmp_path / "planner.yaml"
    config.write_text("storage: [unclosed\n")

    assert main(["--config", str(config), "blocks"]) == 2
    assert "Cannot read config file" in capsys.readouterr().out
