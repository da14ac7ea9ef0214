"""Port interface for task persistence (store boundary)."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ITaskStore(Protocol):
    """Task store abstraction for the four CRUD statements plus schema setup.

    Implementations raise ``StoreError`` for any backend failure and report
    "no such row" through return values, never through exceptions.
    """

    def init_schema(self) -> None:
        """Create the task table when it does not exist yet."""

    def create(self, topic: str, description: str) -> dict[str, Any]:
        """Insert a task and return it with its store-assigned id."""

    def list(self) -> list[dict[str, Any]]:
        """Return all tasks, most recently created first."""

    def update(self, task_id: int, topic: str, description: str) -> int:
        """Update topic/description of one task; return the affected row count."""

    def delete(self, task_id: int) -> int:
        """Remove one task permanently; return the affected row count."""

    def close(self) -> None:
        """Release pooled connections."""
