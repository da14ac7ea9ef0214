from __future__ import annotations

import argparse
from typing import List, Optional

from taskboard.client.api_client import TaskApiClient, TaskApiError
from taskboard.client.board import TaskBoard


def _print_tasks(board: TaskBoard) -> None:
    if not board.tasks:
        print("No tasks yet")
        return
    count = len(board.tasks)
    print(f"{count} task{'s' if count != 1 else ''}")
    for task in board.tasks:
        print(f"[{task['task_id']}] {task['topic']}: {task['description']}")


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="taskboard", description="Manage tasks on a task service.")
    ap.add_argument("--api-url", default=None, help="service root, defaults to TASKBOARD_API_URL")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("health")
    sub.add_parser("list")

    add = sub.add_parser("add")
    add.add_argument("topic")
    add.add_argument("description")

    edit = sub.add_parser("edit")
    edit.add_argument("task_id", type=int)
    edit.add_argument("topic")
    edit.add_argument("description")

    rm = sub.add_parser("rm")
    rm.add_argument("task_id", type=int)
    return ap


def run(args: argparse.Namespace, api: TaskApiClient) -> int:
    if args.command == "health":
        try:
            print(api.health().get("message", ""))
        except TaskApiError as exc:
            print(f"error: {exc.message}")
            return 1
        return 0

    board = TaskBoard(api)
    if args.command == "list":
        ok = board.refresh()
    elif args.command == "add":
        board.open_create()
        board.form.topic = args.topic
        board.form.description = args.description
        ok = board.submit()
    elif args.command == "edit":
        board.open_edit({"task_id": args.task_id, "topic": args.topic, "description": args.description})
        ok = board.submit()
    else:
        ok = board.delete(args.task_id)

    if not ok or board.error:
        print(f"error: {board.error}")
        return 1
    _print_tasks(board)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    with TaskApiClient(args.api_url) as api:
        return run(args, api)


if __name__ == "__main__":
    raise SystemExit(main())
