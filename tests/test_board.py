from __future__ import annotations

from taskboard.client.api_client import TaskApiError
from taskboard.client.board import ERROR, IDLE, TaskBoard


class FakeApi:
    def __init__(self) -> None:
        self.rows: list[dict] = []
        self.calls: list[str] = []
        self.fail: set[str] = set()
        self._next_id = 1

    def _maybe_fail(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail:
            raise TaskApiError("Database error", status_code=500, payload={"code": "ECONNREFUSED"})

    def list_tasks(self):
        self._maybe_fail("list")
        return [dict(r) for r in reversed(self.rows)]

    def create_task(self, topic, description):
        self._maybe_fail("create")
        self.rows.append({"task_id": self._next_id, "topic": topic, "description": description})
        self._next_id += 1
        return {"success": "Task added successfully"}

    def update_task(self, task_id, topic, description):
        self._maybe_fail("update")
        for row in self.rows:
            if row["task_id"] == task_id:
                row.update(topic=topic, description=description)
        return {"message": "Task updated successfully"}

    def delete_task(self, task_id):
        self._maybe_fail("delete")
        self.rows = [r for r in self.rows if r["task_id"] != task_id]
        return {"message": "Task deleted successfully", "taskId": str(task_id)}


def _board() -> tuple[TaskBoard, FakeApi]:
    api = FakeApi()
    board = TaskBoard(api)
    board.start()
    return board, api


def test_start_loads_list():
    board, api = _board()
    assert api.calls == ["list"]
    assert board.status == IDLE
    assert board.tasks == []


def test_start_failure_shows_banner():
    api = FakeApi()
    api.fail.add("list")
    board = TaskBoard(api)
    board.start()
    assert board.status == ERROR
    assert board.banner_error == "Failed to load tasks"


def test_create_refetches_and_closes_modal():
    board, api = _board()
    board.open_create()
    board.form.topic = "Write report"
    board.form.description = "Quarterly numbers"

    assert board.submit() is True
    assert api.calls == ["list", "create", "list"]
    assert board.tasks[0]["topic"] == "Write report"
    assert board.modal_open is False
    assert board.form.topic == ""
    assert board.error == ""
    assert board.status == IDLE


def test_whitespace_only_form_never_reaches_service():
    board, api = _board()
    board.open_create()
    board.form.topic = "   "
    board.form.description = "something"

    assert board.submit() is False
    assert "create" not in api.calls
    assert board.modal_open is True
    assert board.modal_error == "Topic and description are required"


def test_create_failure_keeps_modal_open_with_generic_message():
    board, api = _board()
    api.fail.add("create")
    board.open_create()
    board.form.topic = "t"
    board.form.description = "d"

    assert board.submit() is False
    assert board.modal_open is True
    assert board.modal_error == "Failed to create task"
    assert "ECONNREFUSED" not in board.error
    assert api.calls == ["list", "create"]


def test_edit_updates_and_refetches():
    board, api = _board()
    api.create_task("old", "old")
    board.refresh()

    board.open_edit(board.tasks[0])
    assert board.form.topic == "old"
    board.form.topic = "new"

    assert board.submit() is True
    assert api.calls[-2:] == ["update", "list"]
    assert board.tasks[0]["topic"] == "new"
    assert board.editing is None


def test_update_failure_message():
    board, api = _board()
    api.create_task("old", "old")
    board.refresh()
    api.fail.add("update")

    board.open_edit(board.tasks[0])
    assert board.submit() is False
    assert board.modal_error == "Failed to update task"


def test_delete_refetches():
    board, api = _board()
    api.create_task("a", "b")
    board.refresh()

    assert board.delete(board.tasks[0]["task_id"]) is True
    assert api.calls[-2:] == ["delete", "list"]
    assert board.tasks == []


def test_delete_failure_shows_banner():
    board, api = _board()
    api.fail.add("delete")
    assert board.delete(1) is False
    assert board.banner_error == "Failed to delete task"


def test_close_modal_resets_form_and_error():
    board, _ = _board()
    board.open_create()
    board.form.topic = "x"
    board.submit()
    board.close_modal()
    assert board.modal_open is False
    assert board.form.topic == ""
    assert board.error == ""


def test_second_submit_while_in_flight_is_ignored():
    board, api = _board()
    nested_results = []
    original_create = api.create_task

    def create_and_click_again(topic, description):
        # A second click lands while the first request is still running
        nested_results.append(board.submit())
        nested_results.append(board.delete(1))
        return original_create(topic, description)

    api.create_task = create_and_click_again
    board.open_create()
    board.form.topic = "t"
    board.form.description = "d"

    assert board.submit() is True
    assert nested_results == [False, False]
    assert len(api.rows) == 1
    assert board.in_flight is False


def test_non_json_list_reply_becomes_load_error():
    import httpx

    from taskboard.client.api_client import TaskApiClient

    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="oops"))
    with TaskApiClient("http://tasks.test", transport=transport) as api:
        board = TaskBoard(api)
        board.start()
    assert board.status == ERROR
    assert board.banner_error == "Failed to load tasks"
