from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .models import TodoStatus

TITLE_MAX_LENGTH = 255


def _title_field() -> Any:
    return Field(
        ...,
        description="Title of the todo item",
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        strict=True,
    )


def _id_field() -> Any:
    return Field(..., description="Identifier of an existing todo item", strict=True)


# PUBLIC_INTERFACE
class CreateTodoInput(BaseModel):
    """
    Input of the createTodo procedure. Status and timestamps are assigned by
    the store.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"title": "Write release notes"}})

    title: str = _title_field()


# PUBLIC_INTERFACE
class UpdateTodoTitleInput(BaseModel):
    """Input of the updateTodoTitle procedure."""

    model_config = ConfigDict(json_schema_extra={"example": {"id": 1, "title": "Write better release notes"}})

    id: int = _id_field()
    title: str = _title_field()


# PUBLIC_INTERFACE
class UpdateTodoStatusInput(BaseModel):
    """Input of the updateTodoStatus procedure, issued when a card is dropped on another column."""

    model_config = ConfigDict(json_schema_extra={"example": {"id": 1, "status": "in_progress"}})

    id: int = _id_field()
    status: TodoStatus = Field(..., description="Target column: active, in_progress or done")


# PUBLIC_INTERFACE
class DeleteTodoInput(BaseModel):
    """Input of the deleteTodo procedure."""

    id: int = _id_field()


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    A Todo as returned by every procedure.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Write release notes",
                "status": "active",
                "created_at": "2025-01-25T10:15:30.123456+00:00",
                "updated_at": "2025-01-25T10:15:30.123456+00:00",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Title of the todo item")
    status: TodoStatus = Field(..., description="Board column the todo sits in")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


# PUBLIC_INTERFACE
class DeleteResult(BaseModel):
    """Outcome of deleteTodo. `success` is False when no row matched."""

    success: bool


# PUBLIC_INTERFACE
class HealthOut(BaseModel):
    """Liveness probe payload."""

    status: Literal["ok"] = "ok"
    timestamp: str = Field(..., description="Server time as an ISO8601 string")
