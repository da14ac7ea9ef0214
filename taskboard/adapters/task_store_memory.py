"""In-process task store (no database). Used for local runs and tests."""

from __future__ import annotations

import itertools
import threading
from datetime import datetime, timezone
from typing import Any, Optional

from taskboard.ports.task_store import ITaskStore


def _as_utc(value: Any) -> datetime:
    """Coerce a seeded created_at (datetime, epoch seconds, ISO string) to aware UTC."""
    if value is None:
        return datetime.now(timezone.utc)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(float(value), tz=timezone.utc)
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if not isinstance(value, datetime):
        raise TypeError(f"created_at must be a datetime, number or ISO string, got {value!r}")
    if value.tzinfo is None:
        # Naive values are taken as UTC, matching the SQL store
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class InMemoryTaskStore(ITaskStore):
    """Task store kept in a dict; ids come from a counter and are never reused."""

    def __init__(self, tasks: Optional[list[dict[str, Any]]] = None) -> None:
        self._lock = threading.Lock()
        self._rows: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)
        for task in tasks or []:
            self._seed(task)

    def _seed(self, task: dict[str, Any]) -> None:
        row = dict(task)
        row["created_at"] = _as_utc(row.get("created_at"))
        task_id = int(row["task_id"])
        row["task_id"] = task_id
        self._rows[task_id] = row
        next_id = max(self._rows) + 1
        self._ids = itertools.count(next_id)

    def init_schema(self) -> None:
        return None

    def create(self, topic: str, description: str) -> dict[str, Any]:
        with self._lock:
            task_id = next(self._ids)
            row = {
                "task_id": task_id,
                "topic": topic,
                "description": description,
                "created_at": datetime.now(timezone.utc),
            }
            self._rows[task_id] = row
            return dict(row)

    def list(self) -> list[dict[str, Any]]:
        with self._lock:
            rows = [dict(row) for row in self._rows.values()]
        return sorted(rows, key=lambda r: (r["created_at"], r["task_id"]), reverse=True)

    def update(self, task_id: int, topic: str, description: str) -> int:
        with self._lock:
            row = self._rows.get(task_id)
            if row is None:
                return 0
            row["topic"] = topic
            row["description"] = description
            return 1

    def delete(self, task_id: int) -> int:
        with self._lock:
            return 1 if self._rows.pop(task_id, None) is not None else 0

    def close(self) -> None:
        return None
