"""
Todo business operations.

The service turns validated procedure inputs into repository calls and
repository rows into `TodoOut` models. Every store interaction is a single
repository call; nothing here retries.
"""

from __future__ import annotations

import logging
from typing import List

from .errors import NotFoundError
from .repositories import Repository
from .schemas import (
    CreateTodoInput,
    DeleteResult,
    DeleteTodoInput,
    TodoOut,
    UpdateTodoStatusInput,
    UpdateTodoTitleInput,
)

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoService:
    """The five todo operations exposed as remote procedures."""

    def __init__(self, repository: Repository) -> None:
        self._repo = repository

    def create(self, data: CreateTodoInput) -> TodoOut:
        created = self._repo.create(data.title)
        logger.info("todo_created id=%s", created["id"])
        return TodoOut(**created)

    def list(self) -> List[TodoOut]:
        items = self._repo.list()
        logger.debug("todos_listed count=%s", len(items))
        return [TodoOut(**it) for it in items]

    def update_title(self, data: UpdateTodoTitleInput) -> TodoOut:
        updated = self._repo.update_title(data.id, data.title)
        if updated is None:
            logger.warning("todo_title_update_failed id=%s reason=not_found", data.id)
            raise NotFoundError(data.id)
        logger.info("todo_title_updated id=%s", data.id)
        return TodoOut(**updated)

    def update_status(self, data: UpdateTodoStatusInput) -> TodoOut:
        updated = self._repo.update_status(data.id, data.status)
        if updated is None:
            logger.warning("todo_status_update_failed id=%s reason=not_found", data.id)
            raise NotFoundError(data.id)
        logger.info("todo_status_updated id=%s status=%s", data.id, data.status.value)
        return TodoOut(**updated)

    def delete(self, data: DeleteTodoInput) -> DeleteResult:
        removed = self._repo.delete(data.id)
        logger.info("todo_deleted id=%s success=%s", data.id, removed)
        return DeleteResult(success=removed)
