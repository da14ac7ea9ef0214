"""Process logging for the task service.

Every record carries an ``op`` (create/list/update/delete/startup/...) and a
``task`` id so store and service lines can be grepped per task.
"""

import logging
import os
from typing import Any, Dict, Optional

_CONFIGURED = False

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s op=%(op)s task=%(task)s %(message)s"


def task_extra(op: str, task_id: Any = None) -> Dict[str, Any]:
    """``extra=`` mapping for a log call about one operation on one task."""
    return {"op": op, "task": "-" if task_id is None else task_id}


class TaskContextFilter(logging.Filter):
    """Fill ``op``/``task`` on records emitted without ``task_extra``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "op"):
            record.op = "-"
        if not hasattr(record, "task"):
            record.task = getattr(record, "task_id", "-")
        return True


def _resolve_level(level: Optional[str]) -> int:
    level_name = (
        level
        or os.getenv("APP_LOG_LEVEL")
        or os.getenv("UVICORN_LOG_LEVEL")
        or os.getenv("LOG_LEVEL")
        or "INFO"
    ).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(level: Optional[str] = None) -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved_level = _resolve_level(level)

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    for handler in root.handlers:
        if not any(isinstance(f, TaskContextFilter) for f in handler.filters):
            handler.addFilter(TaskContextFilter())

    root.setLevel(resolved_level)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uv_logger = logging.getLogger(name)
        uv_logger.setLevel(resolved_level)
        uv_logger.propagate = False

    # SQL echo only when explicitly debugging
    engine_level = logging.DEBUG if resolved_level <= logging.DEBUG else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(engine_level)

    _CONFIGURED = True
