from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from ..errors import RemoteCallError, TransportError
from ..models import TodoStatus
from ..schemas import TodoOut
from .state import BoardState, Err, Ok, Outcome
from .transport import TodoClient

logger = logging.getLogger(__name__)

PLACEHOLDER_TODOS = (
    ("Complete project documentation", TodoStatus.ACTIVE),
    ("Review pull request", TodoStatus.IN_PROGRESS),
    ("Deploy to production", TodoStatus.DONE),
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


# PUBLIC_INTERFACE
class BoardController:
    """
    Drives the board: issues remote calls for user actions and merges their
    results into `state`.

    Transport failures never block the board; the action is applied from
    local values instead. A server rejection (validation, unknown id)
    leaves the state untouched and is kept in `last_error`.
    """

    def __init__(self, client: TodoClient, clock: Callable[[], datetime] = _now) -> None:
        self.client = client
        self.state = BoardState()
        self.degraded = False
        self.last_error: Optional[Exception] = None
        self.dragged_id: Optional[int] = None
        self.editing_id: Optional[int] = None
        self._clock = clock
        # Locally fabricated ids are negative so they never collide with store ids.
        self._next_local_id = -1

    # -- helpers ---------------------------------------------------------

    def _local_id(self) -> int:
        local_id = self._next_local_id
        self._next_local_id -= 1
        return local_id

    def _local_todo(self, title: str, status: TodoStatus) -> TodoOut:
        now = self._clock()
        return TodoOut(id=self._local_id(), title=title, status=status, created_at=now, updated_at=now)

    def _patched(self, todo_id: int, **fields: object) -> Callable[[], Optional[TodoOut]]:
        def build() -> Optional[TodoOut]:
            existing = self.state.get(todo_id)
            if existing is None:
                return None
            return existing.model_copy(update={**fields, "updated_at": self._clock()})

        return build

    def _run(self, action: str, call: Callable[[], object]) -> Optional[Outcome]:
        """
        Perform one remote call. Returns None when the server rejected it,
        otherwise the outcome to merge.
        """
        try:
            outcome: Outcome = Ok(call())
        except RemoteCallError as exc:
            logger.warning("board_action_rejected action=%s code=%s message=%s", action, exc.code, exc.message)
            self.last_error = exc
            return None
        except TransportError as exc:
            logger.warning("board_action_offline action=%s error=%s", action, exc)
            outcome = Err(exc)
        self.last_error = None
        return outcome

    # -- loading ---------------------------------------------------------

    def load(self) -> BoardState:
        """Fetch every todo. If the request fails for any reason, show placeholder todos."""
        try:
            todos: List[TodoOut] = self.client.get_todos()
        except (TransportError, RemoteCallError) as exc:
            logger.warning("board_load_failed error=%s degraded=true", exc)
            self.last_error = exc
            self.degraded = True
            self.state = self.state.replace_all(
                self._local_todo(title, status) for title, status in PLACEHOLDER_TODOS
            )
            return self.state
        self.degraded = False
        self.last_error = None
        self.state = self.state.replace_all(todos)
        return self.state

    # -- actions ---------------------------------------------------------

    def create(self, title: str) -> BoardState:
        title = title.strip()
        if not title:
            return self.state
        outcome = self._run("create", lambda: self.client.create_todo(title))
        if outcome is not None:
            self.state = self.state.apply(
                outcome,
                BoardState.append,
                lambda: self._local_todo(title, TodoStatus.ACTIVE),
            )
        return self.state

    def edit_title(self, todo_id: int, title: str) -> BoardState:
        title = title.strip()
        if not title:
            return self.state
        outcome = self._run("edit_title", lambda: self.client.update_todo_title(todo_id, title))
        if outcome is not None:
            self.state = self.state.apply(outcome, BoardState.replace_by_id, self._patched(todo_id, title=title))
        return self.state

    def change_status(self, todo_id: int, status: TodoStatus) -> BoardState:
        status = TodoStatus(status)
        outcome = self._run("change_status", lambda: self.client.update_todo_status(todo_id, status))
        if outcome is not None:
            self.state = self.state.apply(outcome, BoardState.replace_by_id, self._patched(todo_id, status=status))
        return self.state

    def delete(self, todo_id: int) -> BoardState:
        outcome = self._run("delete", lambda: self.client.delete_todo(todo_id))
        if outcome is not None:
            self.state = self.state.apply(outcome, lambda s, _: s.remove_by_id(todo_id), lambda: None)
        return self.state

    # -- editing session -------------------------------------------------

    def start_editing(self, todo_id: int) -> Optional[str]:
        todo = self.state.get(todo_id)
        if todo is None:
            return None
        self.editing_id = todo_id
        return todo.title

    def save_editing(self, title: str) -> BoardState:
        if self.editing_id is None or not title.strip():
            return self.state
        todo_id = self.editing_id
        self.editing_id = None
        return self.edit_title(todo_id, title)

    def cancel_editing(self) -> None:
        self.editing_id = None

    # -- drag and drop ---------------------------------------------------

    def start_drag(self, todo_id: int) -> None:
        if self.state.get(todo_id) is not None:
            self.dragged_id = todo_id

    def cancel_drag(self) -> None:
        self.dragged_id = None

    def drop(self, status: TodoStatus) -> BoardState:
        """Drop the dragged todo on a column; dropping on its own column does nothing."""
        status = TodoStatus(status)
        dragged = self.state.get(self.dragged_id) if self.dragged_id is not None else None
        self.dragged_id = None
        if dragged is None or dragged.status == status:
            return self.state
        return self.change_status(dragged.id, status)

    def columns(self) -> Dict[TodoStatus, Tuple[TodoOut, ...]]:
        return self.state.columns()
