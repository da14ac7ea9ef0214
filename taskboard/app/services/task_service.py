"""Task service: input validation and store outcome mapping for the CRUD operations."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from taskboard.app.core.errors import NotFoundError, ValidationError
from taskboard.app.core.logging_config import task_extra
from taskboard.ports.task_store import ITaskStore
from taskboard.validation import has_required_fields

logger = logging.getLogger(__name__)

CREATE_FIELDS_REQUIRED = "Required fields cannot be empty"
UPDATE_FIELDS_REQUIRED = "Topic and description cannot be empty"
TASK_ID_REQUIRED = "Task ID cannot be empty"

MIN_ROW_ID = -(2**63)
MAX_ROW_ID = 2**63 - 1


class TaskService:
    def __init__(self, store: ITaskStore, *, trim_required_fields: bool = False) -> None:
        self.store = store
        self.trim_required_fields = trim_required_fields

    def _require_fields(self, topic: Any, description: Any, message: str, op: str) -> None:
        if not has_required_fields(topic, description, trim=self.trim_required_fields):
            logger.info("rejected: %s", message, extra=task_extra(op))
            raise ValidationError(message)

    @staticmethod
    def _require_task_id(task_id: Optional[str], op: str) -> None:
        if task_id is None or task_id == "":
            logger.info("rejected: %s", TASK_ID_REQUIRED, extra=task_extra(op))
            raise ValidationError(TASK_ID_REQUIRED)

    @staticmethod
    def _row_id(task_id: str) -> int:
        # Ids are integers; anything else cannot match a stored row
        try:
            row_id = int(task_id)
        except (TypeError, ValueError):
            raise NotFoundError() from None
        # Outside a signed 64-bit INTEGER column no row can match
        if not MIN_ROW_ID <= row_id <= MAX_ROW_ID:
            raise NotFoundError()
        return row_id

    def create_task(self, topic: Any, description: Any) -> Dict[str, Any]:
        self._require_fields(topic, description, CREATE_FIELDS_REQUIRED, "create")
        task = self.store.create(topic, description)
        logger.info("task created", extra=task_extra("create", task.get("task_id")))
        return task

    def list_tasks(self) -> List[Dict[str, Any]]:
        return list(self.store.list() or [])

    def update_task(self, task_id: Optional[str], topic: Any, description: Any) -> None:
        self._require_task_id(task_id, "update")
        self._require_fields(topic, description, UPDATE_FIELDS_REQUIRED, "update")
        affected = self.store.update(self._row_id(task_id), topic, description)
        if not affected:
            raise NotFoundError()
        logger.info("task updated", extra=task_extra("update", task_id))

    def delete_task(self, task_id: Optional[str]) -> str:
        """Delete a task and return the identifier exactly as it was given."""

        self._require_task_id(task_id, "delete")
        affected = self.store.delete(self._row_id(task_id))
        if not affected:
            raise NotFoundError()
        logger.info("task deleted", extra=task_extra("delete", task_id))
        return task_id
