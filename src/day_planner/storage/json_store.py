"""File-backed planner store keeping everything in one JSON document."""

from __future__ import annotations

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from day_planner.core.models import FixedBlock, Task
from day_planner.monitoring.logging import get_logger
from day_planner.utils.exceptions import StoreError

from .base import PlannerStore, Snapshot
from .serialization import (
    fixed_block_from_dict,
    fixed_block_to_dict,
    parse_timestamp,
    task_from_dict,
    task_to_dict,
)

logger = get_logger(__name__)


class JsonFilePlannerStore(PlannerStore):
    """Persist ``{"tasks": [...], "fixedBlocks": [...], "activeTimer": {...}}`` to a file.

    The layout matches what the browser version kept in local storage, so an
    exported document can be loaded as is.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _read_document(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as exc:
            logger.warning("store.load.reset", path=str(self.path), error=str(exc))
            return {}
        if not isinstance(document, dict):
            logger.warning("store.load.reset", path=str(self.path), error="document is not an object")
            return {}
        return document

    def _write_document(self, document: Dict[str, Any]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.error("store.write.failed", path=str(self.path), error=str(exc))
            raise StoreError(f"Failed to write {self.path}: {exc}") from exc

    def load(self) -> Snapshot:
        document = self._read_document()
        try:
            tasks = [task_from_dict(item) for item in document.get("tasks") or []]
            blocks = [fixed_block_from_dict(item) for item in document.get("fixedBlocks") or []]
        except (KeyError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("store.load.reset", path=str(self.path), error=repr(exc))
            return [], []
        logger.debug("store.loaded", tasks=len(tasks), fixed_blocks=len(blocks))
        return tasks, blocks

    def save(self, tasks: List[Task], fixed_blocks: List[FixedBlock]) -> None:
        document = self._read_document()
        document["tasks"] = [task_to_dict(task) for task in tasks]
        document["fixedBlocks"] = [fixed_block_to_dict(block) for block in fixed_blocks]
        self._write_document(document)
        logger.debug("store.saved", tasks=len(tasks), fixed_blocks=len(fixed_blocks))

    def load_active_timer(self) -> Optional[Tuple[str, datetime]]:
        timer = self._read_document().get("activeTimer")
        if not timer:
            return None
        try:
            return str(timer["taskId"]), parse_timestamp(timer["startTime"])
        except (KeyError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("store.timer.reset", path=str(self.path), error=repr(exc))
            return None

    def save_active_timer(self, task_id: str, started_at: datetime) -> None:
        document = self._read_document()
        document["activeTimer"] = {"taskId": task_id, "startTime": started_at.isoformat()}
        self._write_document(document)

    def clear_active_timer(self) -> None:
        document = self._read_document()
        if document.pop("activeTimer", None) is not None:
            self._write_document(document)


__all__ = ["JsonFilePlannerStore"]
