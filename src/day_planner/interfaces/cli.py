"""Command line interface for the day planner."""

from __future__ import annotations

import argparse
import sys
from datetime import date, datetime
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from day_planner.core.clock import Clock, system_clock
from day_planner.core.ids import IdGenerator, UuidIdGenerator
from day_planner.core.models import ActivityType
from day_planner.monitoring.logging import configure_logging, get_logger
from day_planner.scheduling import PlannerSettings, ScheduleBuilder
from day_planner.storage import PlannerStore, open_store
from day_planner.tasks.validation import build_fixed_block, build_task
from day_planner.tracking import TaskTimer
from day_planner.utils.config import get_config
from day_planner.utils.display import format_block_time, format_minutes, format_time_range, shorten
from day_planner.utils.exceptions import PlannerError

logger = get_logger(__name__)

_ACTIVITY_STYLES = {
    ActivityType.FIXED_BLOCK: "bold magenta",
    ActivityType.TASK: "bold green",
    ActivityType.BREAK: "dim",
    ActivityType.REVISION: "cyan",
}


class PlannerCLI:
    """Glue between parsed arguments, the store and the scheduler"""

    def __init__(
        self,
        store: PlannerStore,
        settings: PlannerSettings,
        *,
        clock: Clock = system_clock,
        timer_clock: Clock = datetime.now,
        ids: Optional[IdGenerator] = None,
        console: Optional[Console] = None,
    ):
        self.store = store
        self.settings = settings
        self.clock = clock
        self.timer_clock = timer_clock
        self.ids = ids or UuidIdGenerator()
        self.console = console or Console()

    def schedule(self, day: Optional[date] = None) -> int:
        now = self.clock()
        target = day or now.date()
        tasks, blocks = self.store.load()
        activities = ScheduleBuilder(self.settings, self.ids).build(target, now, tasks, blocks)
        # Remaining minutes consumed by the pass must be written back.
        self.store.save(tasks, blocks)

        if not activities:
            self.console.print("No schedule generated for this day. Add some tasks and fixed blocks!")
            return 0

        table = Table(title=target.strftime("%A, %B %d, %Y"))
        table.add_column("Time")
        table.add_column("Activity")
        table.add_column("Kind")
        table.add_column("Length", justify="right")
        for activity in activities:
            style = _ACTIVITY_STYLES.get(activity.type, "")
            table.add_row(
                format_time_range(activity.start, activity.end),
                f"[{style}]{activity.name}[/]" if style else activity.name,
                activity.type.value,
                format_minutes(activity.duration_minutes),
            )
        self.console.print(table)
        return 0

    def list_tasks(self, include_completed: bool = False) -> int:
        tasks, _ = self.store.load()
        shown = tasks if include_completed else [task for task in tasks if not task.is_completed]
        if not shown:
            self.console.print("No pending tasks! Good job!" if not include_completed else "No tasks added yet.")
            return 0

        table = Table(title="Tasks")
        for column in ("ID", "Name", "Priority", "Due", "Remaining", "Status"):
            table.add_column(column)
        for task in shown:
            table.add_row(
                task.id,
                shorten(task.name, 40),
                task.priority.value,
                task.deadline.strftime("%Y-%m-%d %H:%M"),
                format_minutes(task.remaining_minutes),
                "Completed" if task.is_completed else "Pending",
            )
        self.console.print(table)
        return 0

    def list_blocks(self) -> int:
        _, blocks = self.store.load()
        if not blocks:
            self.console.print("No fixed blocks added yet.")
            return 0

        table = Table(title="Fixed blocks")
        for column in ("ID", "Day", "Description", "Time"):
            table.add_column(column)
        for block in blocks:
            day = "Every Day" if block.day_of_week.value == "ALL_DAYS" else block.day_of_week.value.title()
            table.add_row(
                block.id,
                day,
                shorten(block.description, 40),
                f"{format_block_time(block.start_hour, block.start_minute)} - "
                f"{format_block_time(block.end_hour, block.end_minute)}",
            )
        self.console.print(table)
        return 0

    def add_task(self, args: argparse.Namespace) -> int:
        task = build_task(
            args.name,
            args.deadline,
            args.minutes,
            now=self.clock(),
            priority=args.priority,
            description=args.description or "",
            task_type=args.type,
            ids=self.ids,
        )
        self.store.add_task(task)
        self.console.print(f"Added task [bold]{task.name}[/] ({task.id})")
        return 0

    def add_block(self, args: argparse.Namespace) -> int:
        block = build_fixed_block(args.day, args.description, args.start, args.end, ids=self.ids)
        self.store.add_fixed_block(block)
        self.console.print(f"Added fixed block [bold]{block.description}[/] ({block.id})")
        return 0

    def complete(self, task_id: str) -> int:
        if self.store.mark_task_completed(task_id):
            self.console.print(f"Task {task_id} marked as completed")
            return 0
        self.console.print(f"[red]No task {task_id}[/]")
        return 1

    def delete_task(self, task_id: str) -> int:
        if self.store.delete_task(task_id):
            self.console.print(f"Deleted task {task_id}")
            return 0
        self.console.print(f"[red]No task {task_id}[/]")
        return 1

    def delete_block(self, block_id: str) -> int:
        if self.store.delete_fixed_block(block_id):
            self.console.print(f"Deleted fixed block {block_id}")
            return 0
        self.console.print(f"[red]No fixed block {block_id}[/]")
        return 1

    def timer(self, action: str, task_id: Optional[str] = None) -> int:
        timer = TaskTimer(self.store, clock=self.timer_clock)
        if action == "start":
            task = timer.start(task_id)
            self.console.print(f"Timer started for [bold]{task.name}[/]")
            return 0
        if action == "stop":
            task = timer.stop()
            if task is None:
                self.console.print("No timer is running.")
            elif task.is_completed:
                self.console.print(f"[green]{task.name} completed[/]")
            else:
                self.console.print(f"{task.name}: {format_minutes(task.remaining_minutes)} remaining")
            return 0

        running = timer.active
        if running is None:
            self.console.print("No timer is running.")
            return 0
        task = self.store.get_task(running[0])
        elapsed = timer.elapsed_minutes()
        name = task.name if task else running[0]
        remaining = max(0, task.remaining_minutes - elapsed) if task else 0
        self.console.print(f"{name}: {format_minutes(elapsed)} elapsed, {format_minutes(remaining)} remaining")
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="day-planner", description="Plan a day around fixed blocks and deadlines.")
    parser.add_argument("--config", help="YAML file overriding the packaged configuration")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log scheduling details")
    sub = parser.add_subparsers(dest="command", required=True)

    p_schedule = sub.add_parser("schedule", help="Generate the timeline of a day")
    p_schedule.add_argument("--date", type=date.fromisoformat, help="Day to plan (YYYY-MM-DD), today by default")

    p_tasks = sub.add_parser("tasks", help="List tasks")
    p_tasks.add_argument("--all", action="store_true", help="Include completed tasks")

    sub.add_parser("blocks", help="List fixed blocks")

    p_add_task = sub.add_parser("add-task", help="Add a deadline-bound task")
    p_add_task.add_argument("name")
    p_add_task.add_argument("--deadline", required=True, help="YYYY-MM-DD or YYYY-MM-DD HH:MM")
    p_add_task.add_argument("--minutes", required=True, help="Estimated minutes of work")
    p_add_task.add_argument("--priority", default="MEDIUM", help="HIGH, MEDIUM or LOW")
    p_add_task.add_argument("--description", default="")
    p_add_task.add_argument("--type", default=None, help="Category tag, e.g. HOMEWORK")

    p_add_block = sub.add_parser("add-block", help="Add a recurring fixed block")
    p_add_block.add_argument("day", help="Weekday name or 'all'")
    p_add_block.add_argument("start", help="HH:MM")
    p_add_block.add_argument("end", help="HH:MM")
    p_add_block.add_argument("description")

    p_complete = sub.add_parser("complete", help="Mark a task completed")
    p_complete.add_argument("task_id")

    p_delete_task = sub.add_parser("delete-task", help="Delete a task")
    p_delete_task.add_argument("task_id")

    p_delete_block = sub.add_parser("delete-block", help="Delete a fixed block")
    p_delete_block.add_argument("block_id")

    p_timer = sub.add_parser("timer", help="Track time spent on a task")
    timer_sub = p_timer.add_subparsers(dest="action", required=True)
    p_timer_start = timer_sub.add_parser("start")
    p_timer_start.add_argument("task_id")
    timer_sub.add_parser("stop")
    timer_sub.add_parser("status")

    return parser


def dispatch(cli: PlannerCLI, args: argparse.Namespace) -> int:
    if args.command == "schedule":
        return cli.schedule(args.date)
    if args.command == "tasks":
        return cli.list_tasks(include_completed=args.all)
    if args.command == "blocks":
        return cli.list_blocks()
    if args.command == "add-task":
        return cli.add_task(args)
    if args.command == "add-block":
        return cli.add_block(args)
    if args.command == "complete":
        return cli.complete(args.task_id)
    if args.command == "delete-task":
        return cli.delete_task(args.task_id)
    if args.command == "delete-block":
        return cli.delete_block(args.block_id)
    if args.command == "timer":
        return cli.timer(args.action, getattr(args, "task_id", None))
    raise ValueError(f"Unknown command {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console()
    try:
        config = get_config(args.config)
        log_settings = config.get("logging") or {}
        configure_logging(
            "DEBUG" if args.verbose else str(log_settings.get("level") or "WARNING"),
            log_settings.get("log_dir"),
            reconfigure=True,
        )
        cli = PlannerCLI(open_store(config), PlannerSettings.from_config(config), console=console)
        return dispatch(cli, args)
    except PlannerError as exc:
        console.print(f"[red]{escape(str(exc))}[/]")
        logger.debug("cli.command.failed", command=args.command, error=str(exc))
        return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
