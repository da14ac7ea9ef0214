from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.app.config import Settings


Base = declarative_base()


def _is_memory_sqlite(url: str) -> bool:
    return url in {"sqlite://", "sqlite:///:memory:"} or ":memory:" in url


def build_engine(settings: Settings) -> Engine:
    """Create the engine and its bounded connection pool for ``settings``."""

    url = settings.database_url
    engine_kwargs = {}

    if url.startswith("sqlite"):
        # SQLite requires check_same_thread=False for usage across threads
        engine_kwargs["connect_args"] = {"check_same_thread": False}

    if _is_memory_sqlite(url):
        # One shared connection, otherwise every checkout sees an empty database
        engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=0,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=True,
        )

    engine = create_engine(url, **engine_kwargs)
    if settings.db_schema:
        engine = engine.execution_options(
            schema_translate_map={None: settings.db_schema}
        )
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)
