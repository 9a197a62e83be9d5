import os

import pytest
from fastapi.testclient import TestClient

# Ensure we default to memory backend for tests to avoid filesystem dependencies
os.environ.setdefault("PERSISTENCE_BACKEND", "memory")

from todo_board.db import SQLiteRepository  # noqa: E402
from todo_board.main import app  # noqa: E402
from todo_board.repositories import InMemoryRepository, get_repository  # noqa: E402
from todo_board.service import TodoService  # noqa: E402


@pytest.fixture
def memory_repo():
    return InMemoryRepository()


@pytest.fixture(params=["memory", "sqlite"])
def repo(request, tmp_path):
    if request.param == "sqlite":
        return SQLiteRepository(str(tmp_path / "todos.db"))
    return InMemoryRepository()


@pytest.fixture
def service(repo):
    return TodoService(repo)


@pytest.fixture
def api(memory_repo):
    """TestClient bound to a fresh, empty in-memory store."""
    app.dependency_overrides[get_repository] = lambda: memory_repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
