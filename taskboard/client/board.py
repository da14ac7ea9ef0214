"""Task board UI state.

The board holds the client's copy of the task list plus the create/edit
modal state. Every successful mutation is followed by a full list re-fetch;
local state is never patched. Only one mutation may be in flight at a time.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from taskboard.client.api_client import TaskApiClient, TaskApiError
from taskboard.validation import has_required_fields

logger = logging.getLogger(__name__)

IDLE = "idle"
LOADING = "loading"
ERROR = "error"

MSG_REQUIRED = "Topic and description are required"
MSG_LOAD_FAILED = "Failed to load tasks"
MSG_CREATE_FAILED = "Failed to create task"
MSG_UPDATE_FAILED = "Failed to update task"
MSG_DELETE_FAILED = "Failed to delete task"


@dataclass
class TaskForm:
    topic: str = ""
    description: str = ""

    def clear(self) -> None:
        self.topic = ""
        self.description = ""


class TaskBoard:
    def __init__(self, api: TaskApiClient) -> None:
        self.api = api
        self.tasks: List[Dict[str, Any]] = []
        self.status = IDLE
        self.error = ""
        self.modal_open = False
        self.form = TaskForm()
        self.editing: Optional[Dict[str, Any]] = None
        self._mutation_lock = threading.Lock()

    @property
    def is_loading(self) -> bool:
        return self.status == LOADING

    @property
    def in_flight(self) -> bool:
        return self._mutation_lock.locked()

    @property
    def modal_error(self) -> str:
        return self.error if self.modal_open else ""

    @property
    def banner_error(self) -> str:
        return self.error if not self.modal_open else ""

    def _fail(self, message: str, exc: Exception) -> None:
        # Store error codes stay in the log; the user only sees the action message
        logger.warning("%s: %s", message, exc)
        self.status = ERROR
        self.error = message

    def start(self) -> None:
        self.refresh()

    def refresh(self) -> bool:
        self.status = LOADING
        try:
            self.tasks = list(self.api.list_tasks())
        except TaskApiError as exc:
            self._fail(MSG_LOAD_FAILED, exc)
            return False
        self.status = IDLE
        return True

    def open_create(self) -> None:
        self.form.clear()
        self.editing = None
        self.modal_open = True
        self.error = ""

    def open_edit(self, task: Dict[str, Any]) -> None:
        self.form = TaskForm(topic=task.get("topic") or "", description=task.get("description") or "")
        self.editing = task
        self.modal_open = True
        self.error = ""

    def close_modal(self) -> None:
        self.modal_open = False
        self.editing = None
        self.form.clear()
        self.error = ""

    def submit(self) -> bool:
        """Create or update from the form. Returns True when the store was mutated."""

        if not self._mutation_lock.acquire(blocking=False):
            logger.info("submit ignored: a request is already in flight")
            return False
        try:
            if not has_required_fields(self.form.topic, self.form.description, trim=True):
                self.status = ERROR
                self.error = MSG_REQUIRED
                return False

            self.status = LOADING
            try:
                if self.editing is not None:
                    self.api.update_task(
                        self.editing["task_id"], self.form.topic, self.form.description
                    )
                else:
                    self.api.create_task(self.form.topic, self.form.description)
            except TaskApiError as exc:
                self._fail(MSG_UPDATE_FAILED if self.editing is not None else MSG_CREATE_FAILED, exc)
                return False

            self.close_modal()
            self.refresh()
            return True
        finally:
            self._mutation_lock.release()

    def delete(self, task_id: int) -> bool:
        if not self._mutation_lock.acquire(blocking=False):
            logger.info("delete ignored: a request is already in flight")
            return False
        try:
            self.status = LOADING
            try:
                self.api.delete_task(task_id)
            except TaskApiError as exc:
                self._fail(MSG_DELETE_FAILED, exc)
                return False
            self.error = ""
            self.refresh()
            return True
        finally:
            self._mutation_lock.release()
