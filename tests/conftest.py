from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskboard.adapters.task_store_memory import InMemoryTaskStore
from taskboard.app.config import Settings
from taskboard.app.main import create_app


@pytest.fixture()
def settings() -> Settings:
    return Settings(database_url="sqlite://")


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def memory_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture()
def memory_client(settings, memory_store):
    with TestClient(create_app(settings, store=memory_store)) as c:
        yield c
