"""Dependency providers for the task store and settings."""

from __future__ import annotations

import logging

from fastapi import Request

from taskboard.app.config import Settings
from taskboard.ports.task_store import ITaskStore

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> ITaskStore:
    """Return the task store implementation selected by TASK_STORE_BACKEND."""
    backend = (settings.task_store_backend or "sql").lower()
    logger.info("TaskStore backend=%s", backend)
    if backend == "memory":
        from taskboard.adapters.task_store_memory import InMemoryTaskStore

        return InMemoryTaskStore()
    if backend != "sql":
        raise ValueError(f"Unknown task store backend: {settings.task_store_backend}")

    from taskboard.app.adapters.store_sql import SQLAlchemyTaskStore

    return SQLAlchemyTaskStore.from_settings(settings)


def get_task_store(request: Request) -> ITaskStore:
    return request.app.state.task_store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
