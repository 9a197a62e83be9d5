from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, TypeVar

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..repositories import Repository, get_repository
from ..schemas import (
    CreateTodoInput,
    DeleteResult,
    DeleteTodoInput,
    HealthOut,
    TodoOut,
    UpdateTodoStatusInput,
    UpdateTodoTitleInput,
)
from ..service import TodoService

PROCEDURE_PREFIX = "/trpc"

router = APIRouter(
    prefix=PROCEDURE_PREFIX,
    tags=["procedures"],
)

T = TypeVar("T")


class ProcedureResult(BaseModel, Generic[T]):
    data: T = Field(..., description="Procedure output")


class Envelope(BaseModel, Generic[T]):
    """
    Success envelope shared by every procedure: {"result": {"data": ...}}.
    """

    result: ProcedureResult[T]


def _ok(data: Any) -> Dict[str, Any]:
    return {"result": {"data": data}}


def get_service(repo: Repository = Depends(get_repository)) -> TodoService:
    """
    Dependency wrapper building the service around the configured repository.
    """
    return TodoService(repo)


# PUBLIC_INTERFACE
@router.get(
    "/healthcheck",
    response_model=Envelope[HealthOut],
    summary="healthcheck",
    description="Liveness probe. Returns status 'ok' and the server time.",
)
def healthcheck() -> Dict[str, Any]:
    return _ok(HealthOut(timestamp=datetime.now(timezone.utc).isoformat()))


# PUBLIC_INTERFACE
@router.post(
    "/createTodo",
    response_model=Envelope[TodoOut],
    summary="createTodo",
    description="Create a todo in the 'active' column and return it with its generated id.",
    responses={400: {"description": "Validation error"}},
)
def create_todo(payload: CreateTodoInput, service: TodoService = Depends(get_service)) -> Dict[str, Any]:
    return _ok(service.create(payload))


# PUBLIC_INTERFACE
@router.get(
    "/getTodos",
    response_model=Envelope[List[TodoOut]],
    summary="getTodos",
    description="Return every todo, most recently created first.",
)
def get_todos(service: TodoService = Depends(get_service)) -> Dict[str, Any]:
    return _ok(service.list())


# PUBLIC_INTERFACE
@router.post(
    "/updateTodoTitle",
    response_model=Envelope[TodoOut],
    summary="updateTodoTitle",
    description="Rename a todo. Fails with NOT_FOUND if the id does not exist.",
    responses={400: {"description": "Validation error"}, 404: {"description": "Todo not found"}},
)
def update_todo_title(
    payload: UpdateTodoTitleInput, service: TodoService = Depends(get_service)
) -> Dict[str, Any]:
    return _ok(service.update_title(payload))


# PUBLIC_INTERFACE
@router.post(
    "/updateTodoStatus",
    response_model=Envelope[TodoOut],
    summary="updateTodoStatus",
    description=(
        "Move a todo to another column (drag-and-drop). Any transition is allowed. "
        "Fails with NOT_FOUND if the id does not exist."
    ),
    responses={400: {"description": "Validation error"}, 404: {"description": "Todo not found"}},
)
def update_todo_status(
    payload: UpdateTodoStatusInput, service: TodoService = Depends(get_service)
) -> Dict[str, Any]:
    return _ok(service.update_status(payload))


# PUBLIC_INTERFACE
@router.post(
    "/deleteTodo",
    response_model=Envelope[DeleteResult],
    summary="deleteTodo",
    description="Hard-delete a todo. Returns success=false when nothing matched.",
    responses={400: {"description": "Validation error"}},
)
def delete_todo(payload: DeleteTodoInput, service: TodoService = Depends(get_service)) -> Dict[str, Any]:
    return _ok(service.delete(payload))
