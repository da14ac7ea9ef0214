from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskboard.adapters.task_store_memory import InMemoryTaskStore
from taskboard.app.core.errors import StoreError
from taskboard.app.deps import get_task_store


class FailingStore(InMemoryTaskStore):
    def __init__(self, error: Exception) -> None:
        super().__init__([{"task_id": 1, "topic": "t", "description": "d"}])
        self.error = error

    def create(self, topic, description):
        raise self.error

    def list(self):
        raise self.error

    def update(self, task_id, topic, description):
        raise self.error

    def delete(self, task_id):
        raise self.error


_CALLS = [
    ("post", "/task/create", {"topic": "t", "description": "d"}),
    ("get", "/task/get-all", None),
    ("put", "/task/1/update", {"topic": "t", "description": "d"}),
    ("delete", "/task/1/delete", None),
]


def _call(client, method, path, body):
    if body is None:
        return client.request(method.upper(), path)
    return client.request(method.upper(), path, json=body)


@pytest.mark.parametrize("method,path,body", _CALLS)
def test_store_error_with_code_is_surfaced(app, method, path, body):
    error = StoreError("connect ECONNREFUSED 127.0.0.1:3306", code="ECONNREFUSED")
    app.dependency_overrides[get_task_store] = lambda: FailingStore(error)
    try:
        with TestClient(app) as client:
            resp = _call(client, method, path, body)
        assert resp.status_code == 500
        assert resp.json() == {
            "error": "Database error",
            "code": "ECONNREFUSED",
            "message": "connect ECONNREFUSED 127.0.0.1:3306",
        }
    finally:
        app.dependency_overrides.clear()


@pytest.mark.parametrize("method,path,body", _CALLS)
def test_store_error_without_code_is_generic(app, method, path, body):
    app.dependency_overrides[get_task_store] = lambda: FailingStore(StoreError("pool exhausted"))
    try:
        with TestClient(app) as client:
            resp = _call(client, method, path, body)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Server error: pool exhausted"}
    finally:
        app.dependency_overrides.clear()


def test_unexpected_error_is_internal_server_error(app):
    app.dependency_overrides[get_task_store] = lambda: FailingStore(RuntimeError("boom"))
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            resp = client.delete("/task/1/delete")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error"}
    finally:
        app.dependency_overrides.clear()


def test_validation_runs_before_store(app):
    # A failing store proves no store call happens for invalid input
    app.dependency_overrides[get_task_store] = lambda: FailingStore(StoreError("unreachable"))
    try:
        with TestClient(app) as client:
            resp = client.post("/task/create", json={"topic": "", "description": "d"})
            assert resp.status_code == 400
            resp = client.put("/task/1/update", json={"topic": "t"})
            assert resp.status_code == 400
    finally:
        app.dependency_overrides.clear()


def test_real_sqlite_failure_maps_to_database_error(client, app):
    store = app.state.task_store
    with store.engine.begin() as conn:
        conn.exec_driver_sql("DROP TABLE task")

    resp = client.get("/task/get-all")
    assert resp.status_code == 500
    data = resp.json()
    assert data["error"] == "Database error"
    assert data["code"]
    assert "no such table" in data["message"]


class UnreachableStore(InMemoryTaskStore):
    def init_schema(self):
        raise StoreError("connect ECONNREFUSED 127.0.0.1:3306", code="ECONNREFUSED")


def test_startup_fails_when_database_is_unreachable(settings, caplog):
    from taskboard.app.main import create_app

    app = create_app(settings, store=UnreachableStore())
    with caplog.at_level("ERROR"):
        with pytest.raises(StoreError) as excinfo:
            with TestClient(app):
                pass
    assert excinfo.value.code == "ECONNREFUSED"
    assert any("Database connection failed" in r.getMessage() for r in caplog.records)
