from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TypedDict


# PUBLIC_INTERFACE
class TodoStatus(str, Enum):
    """The three board columns a Todo can sit in."""

    ACTIVE = "active"
    IN_PROGRESS = "in_progress"
    DONE = "done"


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    Storage-level representation of a Todo row, shared by every repository
    backend.

    Fields:
    - id: Unique integer identifier assigned by the store
    - title: 1..255 characters
    - status: one of TodoStatus values
    - created_at: creation timestamp (UTC), never mutated
    - updated_at: last mutation timestamp (UTC)
    """

    id: int
    title: str
    status: TodoStatus
    created_at: datetime
    updated_at: datetime
