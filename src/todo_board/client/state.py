"""
Board state container.

`BoardState` is immutable: every transition returns a new state, which keeps
merge and fallback logic testable without any rendering or network.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, Iterable, Optional, Tuple, TypeVar, Union

from ..models import TodoStatus
from ..schemas import TodoOut

V = TypeVar("V")


@dataclass(frozen=True)
class Ok(Generic[V]):
    """The remote call succeeded with `value`."""

    value: V


@dataclass(frozen=True)
class Err:
    """The remote call failed; the mutation is applied from local values instead."""

    error: Exception


Outcome = Union[Ok, Err]


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class BoardState:
    """The client's in-memory list of todos, in display order."""

    todos: Tuple[TodoOut, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.todos)

    def get(self, todo_id: int) -> Optional[TodoOut]:
        for todo in self.todos:
            if todo.id == todo_id:
                return todo
        return None

    def ids(self) -> Tuple[int, ...]:
        return tuple(t.id for t in self.todos)

    def replace_all(self, todos: Iterable[TodoOut]) -> "BoardState":
        return BoardState(tuple(todos))

    def append(self, todo: Optional[TodoOut]) -> "BoardState":
        if todo is None:
            return self
        return BoardState(self.todos + (todo,))

    def replace_by_id(self, todo: Optional[TodoOut]) -> "BoardState":
        if todo is None:
            return self
        return BoardState(tuple(todo if t.id == todo.id else t for t in self.todos))

    def remove_by_id(self, todo_id: int) -> "BoardState":
        return BoardState(tuple(t for t in self.todos if t.id != todo_id))

    def apply(
        self,
        outcome: Outcome,
        transition: Callable[["BoardState", V], "BoardState"],
        fallback: Callable[[], V],
    ) -> "BoardState":
        """
        Merge the result of a mutation.

        Both paths go through `transition`: with the server's value on `Ok`,
        with the locally derived `fallback()` value on `Err`.
        """
        value = outcome.value if isinstance(outcome, Ok) else fallback()
        return transition(self, value)

    def column(self, status: TodoStatus) -> Tuple[TodoOut, ...]:
        status = TodoStatus(status)
        return tuple(t for t in self.todos if t.status == status)

    def columns(self) -> Dict[TodoStatus, Tuple[TodoOut, ...]]:
        """Todos grouped per board column, recomputed on every call."""
        return {status: self.column(status) for status in TodoStatus}
