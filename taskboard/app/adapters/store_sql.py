"""SQLAlchemy-backed task store."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from taskboard.app.core.errors import StoreError
from taskboard.app.core.logging_config import task_extra
from taskboard.app.db import Base, build_engine, build_session_factory
from taskboard.app.config import Settings
from taskboard.app.models import Task
from taskboard.ports.task_store import ITaskStore

logger = logging.getLogger(__name__)


def _error_code(exc: SQLAlchemyError) -> Optional[str]:
    """Best-effort driver error code, None when the failure is not driver-level."""

    if not isinstance(exc, DBAPIError) or exc.orig is None:
        return None
    orig = exc.orig
    for attr in ("sqlite_errorname", "pgcode"):
        value = getattr(orig, attr, None)
        if value:
            return str(value)
    args = getattr(orig, "args", ())
    # MySQL drivers put the server errno first
    if args and isinstance(args[0], int):
        return str(args[0])
    return type(orig).__name__


def to_store_error(exc: SQLAlchemyError) -> StoreError:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        message = str(exc.orig)
    else:
        message = str(exc)
    return StoreError(message, code=_error_code(exc), cause=exc)


class SQLAlchemyTaskStore(ITaskStore):
    def __init__(self, engine: Engine, session_factory: Optional[sessionmaker] = None):
        self.engine = engine
        self._session_factory = session_factory or build_session_factory(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SQLAlchemyTaskStore":
        return cls(build_engine(settings))

    @contextmanager
    def _session(self, op: str) -> Iterator[Session]:
        session: Session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("store failure: %s", exc, extra=task_extra(op))
            raise to_store_error(exc) from exc
        finally:
            session.close()

    def init_schema(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            logger.error("schema setup failed: %s", exc, extra=task_extra("init_schema"))
            raise to_store_error(exc) from exc

    def create(self, topic: str, description: str) -> Dict[str, Any]:
        with self._session("create") as session:
            task = Task(topic=topic, description=description)
            session.add(task)
            session.commit()
            session.refresh(task)
            return task.to_dict()

    def list(self) -> List[Dict[str, Any]]:
        with self._session("list") as session:
            rows = (
                session.query(Task)
                .order_by(Task.created_at.desc(), Task.task_id.desc())
                .all()
            )
            return [row.to_dict() for row in rows]

    def update(self, task_id: int, topic: str, description: str) -> int:
        with self._session("update") as session:
            affected = (
                session.query(Task)
                .filter(Task.task_id == task_id)
                .update(
                    {Task.topic: topic, Task.description: description},
                    synchronize_session=False,
                )
            )
            session.commit()
            return affected

    def delete(self, task_id: int) -> int:
        with self._session("delete") as session:
            affected = (
                session.query(Task)
                .filter(Task.task_id == task_id)
                .delete(synchronize_session=False)
            )
            session.commit()
            return affected

    def close(self) -> None:
        self.engine.dispose()
