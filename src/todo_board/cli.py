from __future__ import annotations

import argparse
import sys
from typing import Callable, Optional

from .client import BoardController, TodoClient, render_board
from .logging_config import configure_logging
from .models import TodoStatus
from .settings import get_settings


def _run_board(ns: argparse.Namespace, action: Callable[[BoardController], Optional[int]]) -> int:
    """
    Load the board, apply `action` and print the resulting columns. The
    client is closed whatever happens.
    """
    client = TodoClient(base_url=ns.url)
    try:
        controller = BoardController(client)
        controller.load()
        if controller.degraded:
            print(
                f"warning: could not load todos from {ns.url} ({controller.last_error}), "
                "showing placeholder todos",
                file=sys.stderr,
            )
        status = action(controller)
        if status:
            return status
        print(render_board(controller.state))
        if controller.last_error is not None:
            print(f"error: {controller.last_error}", file=sys.stderr)
            return 1
        return 0
    finally:
        client.close()


def cmd_serve(ns: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    if settings.persistence_backend == "sqlite":
        try:
            db_path = settings.sqlite_db_path
        except ValueError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
        print(f"Using SQLite database at: {db_path}")
    host = ns.host or settings.server_host
    port = ns.port or settings.server_port
    print(f"Todo board API listening on http://{host}:{port}")
    uvicorn.run("todo_board.main:app", host=host, port=port, log_level=settings.log_level.lower())
    return 0


def cmd_board(ns: argparse.Namespace) -> int:
    return _run_board(ns, lambda controller: None)


def cmd_add(ns: argparse.Namespace) -> int:
    def add(controller: BoardController) -> None:
        controller.create(ns.title)

    return _run_board(ns, add)


def cmd_rename(ns: argparse.Namespace) -> int:
    def rename(controller: BoardController) -> Optional[int]:
        if controller.start_editing(ns.id) is None:
            print(f"No todo with id {ns.id}", file=sys.stderr)
            return 1
        controller.save_editing(ns.title)
        return None

    return _run_board(ns, rename)


def cmd_move(ns: argparse.Namespace) -> int:
    def move(controller: BoardController) -> Optional[int]:
        controller.start_drag(ns.id)
        if controller.dragged_id is None:
            print(f"No todo with id {ns.id}", file=sys.stderr)
            return 1
        controller.drop(TodoStatus(ns.status))
        return None

    return _run_board(ns, move)


def cmd_rm(ns: argparse.Namespace) -> int:
    def rm(controller: BoardController) -> None:
        controller.delete(ns.id)

    return _run_board(ns, rm)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    p = argparse.ArgumentParser(prog="todo-board", description="Drag-and-drop todo board")
    sub = p.add_subparsers(dest="cmd", required=True)

    def board_command(name: str, help_text: str) -> argparse.ArgumentParser:
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("--url", default=settings.api_base_url, help="Base URL of the todo board API")
        return sp

    sp = sub.add_parser("serve", help="Run the API server")
    sp.add_argument("--host", default=None)
    sp.add_argument("--port", type=int, default=None)
    sp.set_defaults(func=cmd_serve)

    sp = board_command("board", "Show the three status columns")
    sp.set_defaults(func=cmd_board)

    sp = board_command("add", "Add a todo to the Active column")
    sp.add_argument("title")
    sp.set_defaults(func=cmd_add)

    sp = board_command("rename", "Change a todo's title")
    sp.add_argument("id", type=int)
    sp.add_argument("title")
    sp.set_defaults(func=cmd_rename)

    sp = board_command("move", "Drag a todo onto another column")
    sp.add_argument("id", type=int)
    sp.add_argument("status", choices=[s.value for s in TodoStatus])
    sp.set_defaults(func=cmd_move)

    sp = board_command("rm", "Delete a todo")
    sp.add_argument("id", type=int)
    sp.set_defaults(func=cmd_rm)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    configure_logging(get_settings().log_level)
    parser = build_parser()
    ns = parser.parse_args(argv)
    return int(ns.func(ns))


if __name__ == "__main__":
    raise SystemExit(main())
