import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from todo_board.db import SQLiteRepository
from todo_board.models import TodoStatus
from todo_board.repositories import InMemoryRepository, build_repository
from todo_board.settings import get_settings
from todo_board.utils import MonotonicClock, parse_timestamp


class TestSQLiteRepository:
    def test_persists_across_instances(self, tmp_path):
        path = str(tmp_path / "nested" / "todos.db")
        first = SQLiteRepository(path)
        created = first.create("Persist me")
        first.update_status(created["id"], TodoStatus.IN_PROGRESS)

        second = SQLiteRepository(path)
        loaded = second.get(created["id"])
        assert loaded is not None
        assert loaded["title"] == "Persist me"
        assert loaded["status"] == TodoStatus.IN_PROGRESS
        assert loaded["created_at"] == created["created_at"]

    def test_status_default_and_check_constraint(self, tmp_path):
        path = str(tmp_path / "todos.db")
        repo = SQLiteRepository(path)
        assert repo.create("x")["status"] == TodoStatus.ACTIVE

        conn = sqlite3.connect(path)
        try:
            with pytest.raises(sqlite3.IntegrityError):
                conn.execute(
                    "INSERT INTO todos (title, status, created_at, updated_at) VALUES (?, ?, ?, ?)",
                    ("bad", "archived", "2025-01-01T00:00:00", "2025-01-01T00:00:00"),
                )
        finally:
            conn.close()

    def test_returned_row_matches_committed_row(self, tmp_path):
        path = str(tmp_path / "todos.db")
        repo = SQLiteRepository(path)
        created = repo.create("Read back")
        renamed = repo.update_title(created["id"], "Read back again")
        assert renamed is not None
        assert renamed["updated_at"] > created["updated_at"]
        assert SQLiteRepository(path).get(created["id"]) == renamed

    def test_missing_rows(self, tmp_path):
        repo = SQLiteRepository(str(tmp_path / "todos.db"))
        assert repo.get(1) is None
        assert repo.update_title(1, "x") is None
        assert repo.update_status(1, TodoStatus.DONE) is None
        assert repo.delete(1) is False

    def test_timestamps_are_utc(self, tmp_path):
        repo = SQLiteRepository(str(tmp_path / "todos.db"))
        created = repo.create("utc")
        assert created["created_at"].tzinfo is not None
        assert created["created_at"].utcoffset() == timedelta(0)


class TestInMemoryRepository:
    def test_returns_copies(self):
        repo = InMemoryRepository()
        created = repo.create("original")
        created["title"] = "mutated"
        assert repo.get(created["id"])["title"] == "original"


class TestBuildRepository:
    def test_memory(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "memory")
        assert isinstance(build_repository(get_settings()), InMemoryRepository)

    def test_sqlite_from_database_url(self, monkeypatch, tmp_path):
        path = tmp_path / "board.db"
        monkeypatch.setenv("PERSISTENCE_BACKEND", "sqlite")
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{path}")
        repo = build_repository(get_settings())
        assert isinstance(repo, SQLiteRepository)
        repo.create("on disk")
        assert path.exists()


class TestClock:
    def test_strictly_increasing_with_frozen_source(self):
        frozen = datetime(2025, 1, 1, tzinfo=timezone.utc)
        clock = MonotonicClock(source=lambda: frozen)
        a, b, c = clock.now(), clock.now(), clock.now()
        assert a == frozen
        assert a < b < c

    def test_follows_source_when_it_moves_forward(self):
        values = iter(
            [
                datetime(2025, 1, 1, tzinfo=timezone.utc),
                datetime(2025, 1, 2, tzinfo=timezone.utc),
            ]
        )
        clock = MonotonicClock(source=lambda: next(values))
        clock.now()
        assert clock.now() == datetime(2025, 1, 2, tzinfo=timezone.utc)

    def test_parse_naive_timestamp_as_utc(self):
        assert parse_timestamp("2025-01-01T00:00:00").tzinfo == timezone.utc
