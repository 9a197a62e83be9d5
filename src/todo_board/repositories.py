from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from threading import RLock
from typing import List, Optional

from .models import TodoEntity, TodoStatus
from .settings import Settings, get_settings
from .utils import utcnow

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def create(self, title: str) -> TodoEntity:
        """Insert a new todo in the `active` column and return it with its generated id."""

    @abstractmethod
    def get(self, todo_id: int) -> Optional[TodoEntity]:
        """Return a TodoEntity by id, or None if not found."""

    @abstractmethod
    def update_title(self, todo_id: int, title: str) -> Optional[TodoEntity]:
        """Set the title and refresh updated_at. Return the updated entity or None if not found."""

    @abstractmethod
    def update_status(self, todo_id: int, status: TodoStatus) -> Optional[TodoEntity]:
        """Set the status and refresh updated_at. Return the updated entity or None if not found."""

    @abstractmethod
    def delete(self, todo_id: int) -> bool:
        """Delete a TodoEntity by id. Return True if deleted, False if not found."""

    @abstractmethod
    def list(self) -> List[TodoEntity]:
        """
        Return every TodoEntity, newest first (created_at descending, ties
        broken by id descending).
        """


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[int, TodoEntity] = {}
        # Never decremented, so deleted ids are not handed out again.
        self._next_id = 1

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def create(self, title: str) -> TodoEntity:
        with self._lock:
            now = utcnow()
            entity: TodoEntity = {
                "id": self._allocate_id(),
                "title": title,
                "status": TodoStatus.ACTIVE,
                "created_at": now,
                "updated_at": now,
            }
            self._items[entity["id"]] = entity
            return entity.copy()

    def get(self, todo_id: int) -> Optional[TodoEntity]:
        with self._lock:
            item = self._items.get(todo_id)
            return None if item is None else item.copy()

    def _update(self, todo_id: int, **fields: object) -> Optional[TodoEntity]:
        with self._lock:
            existing = self._items.get(todo_id)
            if existing is None:
                return None
            updated = existing.copy()
            updated.update(fields)  # type: ignore[typeddict-item]
            updated["updated_at"] = utcnow()
            self._items[todo_id] = updated
            return updated.copy()

    def update_title(self, todo_id: int, title: str) -> Optional[TodoEntity]:
        return self._update(todo_id, title=title)

    def update_status(self, todo_id: int, status: TodoStatus) -> Optional[TodoEntity]:
        return self._update(todo_id, status=TodoStatus(status))

    def delete(self, todo_id: int) -> bool:
        with self._lock:
            return self._items.pop(todo_id, None) is not None

    def list(self) -> List[TodoEntity]:
        with self._lock:
            items = sorted(
                self._items.values(),
                key=lambda t: (t["created_at"], t["id"]),
                reverse=True,
            )
            # Return copies to avoid external mutation
            return [t.copy() for t in items]


# PUBLIC_INTERFACE
def build_repository(settings: Settings) -> Repository:
    """
    Return the repository selected by settings.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository at settings.sqlite_db_path
    """
    if settings.persistence_backend == "memory":
        logger.info("repository_selected backend=memory")
        return InMemoryRepository()

    from .db import SQLiteRepository

    logger.info("repository_selected backend=sqlite path=%s", settings.sqlite_db_path)
    return SQLiteRepository(settings.sqlite_db_path)


_repository: Optional[Repository] = None
_repository_lock = RLock()


# PUBLIC_INTERFACE
def get_repository() -> Repository:
    """
    Process-wide repository built from environment settings on first use.
    FastAPI resolves this as a dependency; tests override it.
    """
    global _repository
    with _repository_lock:
        if _repository is None:
            _repository = build_repository(get_settings())
        return _repository


# PUBLIC_INTERFACE
def reset_repository() -> None:
    """Forget the process-wide repository so the next call rebuilds it from settings."""
    global _repository
    with _repository_lock:
        _repository = None
