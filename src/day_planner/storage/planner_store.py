"""SQLite-backed planner store"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from day_planner.core.models import ActiveTimer, FixedBlock, Task
from day_planner.monitoring.logging import get_logger
from day_planner.utils.exceptions import StoreError

from .base import PlannerStore, Snapshot
from .sqlite import SQLiteStore

logger = get_logger(__name__)

_TIMER_ROW_ID = 1


class SQLitePlannerStore(SQLiteStore, PlannerStore):
    """Tasks, fixed blocks and the active timer in one SQLite database"""

    def __init__(self, db_path: str | Path, *, echo: bool = False):
        super().__init__(db_path, echo=echo)
        try:
            self.create_tables()
        except SQLAlchemyError as exc:
            # load() reports and resets; writes will raise StoreError.
            logger.warning("store.init.failed", path=str(self.db_path), error=str(exc))

    def load(self) -> Snapshot:
        """Return detached tasks and fixed blocks, or empty lists if the database is unreadable."""

        def _op(session: Session) -> Snapshot:
            tasks = session.query(Task).order_by(Task.deadline).all()
            blocks = session.query(FixedBlock).all()
            return tasks, blocks

        try:
            tasks, blocks = self._run_read(_op)
        except (SQLAlchemyError, LookupError, ValueError) as exc:
            logger.warning("store.load.reset", path=str(self.db_path), error=str(exc))
            return [], []
        logger.debug("store.loaded", tasks=len(tasks), fixed_blocks=len(blocks))
        return tasks, blocks

    def save(self, tasks: List[Task], fixed_blocks: List[FixedBlock]) -> None:
        """Make the database hold exactly the given tasks and fixed blocks"""

        def _op(session: Session) -> None:
            task_ids = [task.id for task in tasks]
            block_ids = [block.id for block in fixed_blocks]
            session.query(Task).filter(Task.id.notin_(task_ids)).delete(synchronize_session=False)
            session.query(FixedBlock).filter(FixedBlock.id.notin_(block_ids)).delete(synchronize_session=False)
            for task in tasks:
                session.merge(task)
            for block in fixed_blocks:
                session.merge(block)

        self._write(_op, "save")
        logger.debug("store.saved", tasks=len(tasks), fixed_blocks=len(fixed_blocks))

    def get_task(self, task_id: str) -> Optional[Task]:
        def _op(session: Session) -> Optional[Task]:
            return session.query(Task).filter(Task.id == task_id).first()

        try:
            return self._run_read(_op)
        except (SQLAlchemyError, LookupError, ValueError) as exc:
            logger.warning("store.task.unreadable", task_id=task_id, path=str(self.db_path), error=str(exc))
            return None

    def add_task(self, task: Task) -> Task:
        if task.remaining_minutes is None:
            task.remaining_minutes = task.estimated_minutes

        def _op(session: Session) -> Task:
            return session.merge(task)

        stored = self._write(_op, "add_task")
        logger.info("store.task.added", task_id=task.id, name=task.name)
        return stored

    def add_fixed_block(self, block: FixedBlock) -> FixedBlock:
        def _op(session: Session) -> FixedBlock:
            return session.merge(block)

        stored = self._write(_op, "add_fixed_block")
        logger.info("store.fixed_block.added", block_id=block.id, day=block.day_of_week.value)
        return stored

    def update_task(self, task: Task) -> None:
        def _op(session: Session) -> None:
            session.merge(task)

        self._write(_op, "update_task")

    def mark_task_completed(self, task_id: str) -> bool:
        def _op(session: Session) -> bool:
            task = session.query(Task).filter(Task.id == task_id).first()
            if task is None:
                return False
            task.mark_completed()
            return True

        completed = self._write(_op, "mark_task_completed")
        if completed:
            logger.info("store.task.completed", task_id=task_id)
        return completed

    def delete_task(self, task_id: str) -> bool:
        def _op(session: Session) -> bool:
            return session.query(Task).filter(Task.id == task_id).delete(synchronize_session=False) > 0

        deleted = self._write(_op, "delete_task")
        if deleted:
            logger.info("store.task.deleted", task_id=task_id)
        return deleted

    def delete_fixed_block(self, block_id: str) -> bool:
        def _op(session: Session) -> bool:
            query = session.query(FixedBlock).filter(FixedBlock.id == block_id)
            return query.delete(synchronize_session=False) > 0

        deleted = self._write(_op, "delete_fixed_block")
        if deleted:
            logger.info("store.fixed_block.deleted", block_id=block_id)
        return deleted

    def load_active_timer(self) -> Optional[Tuple[str, datetime]]:
        def _op(session: Session) -> Optional[ActiveTimer]:
            return session.get(ActiveTimer, _TIMER_ROW_ID)

        try:
            timer = self._run_read(_op)
        except SQLAlchemyError as exc:
            logger.warning("store.timer.reset", error=str(exc))
            return None
        if timer is None:
            return None
        return timer.task_id, timer.started_at

    def save_active_timer(self, task_id: str, started_at: datetime) -> None:
        def _op(session: Session) -> None:
            session.merge(ActiveTimer(id=_TIMER_ROW_ID, task_id=task_id, started_at=started_at))

        self._write(_op, "save_active_timer")

    def clear_active_timer(self) -> None:
        def _op(session: Session) -> None:
            session.query(ActiveTimer).delete(synchronize_session=False)

        self._write(_op, "clear_active_timer")

    def _write(self, operation, action: str):
        try:
            return self._run_write(operation)
        except SQLAlchemyError as exc:
            logger.error("store.write.failed", action=action, path=str(self.db_path), error=str(exc))
            raise StoreError(f"Failed to {action.replace('_', ' ')}: {exc}") from exc


__all__ = ["SQLitePlannerStore"]
