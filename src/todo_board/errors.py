from __future__ import annotations

from typing import Optional


class TodoBoardError(Exception):
    """Base class for all todo-board errors."""


# PUBLIC_INTERFACE
class NotFoundError(TodoBoardError):
    """Raised when a mutation references a todo id that does not exist."""

    def __init__(self, todo_id: int) -> None:
        self.todo_id = todo_id
        super().__init__(f"Todo with id {todo_id} not found")


# PUBLIC_INTERFACE
class RemoteCallError(TodoBoardError):
    """
    The server answered a procedure call with an error envelope
    (validation failure, missing todo, internal error).
    """

    def __init__(self, code: str, message: str, http_status: Optional[int] = None) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(f"{code}: {message}")


# PUBLIC_INTERFACE
class TransportError(TodoBoardError):
    """The remote layer could not be reached or its answer could not be decoded."""
