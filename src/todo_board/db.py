from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Generator, List, Optional

from .models import TodoEntity, TodoStatus
from .repositories import Repository
from .utils import parse_timestamp, utcnow


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    title: str = "title"
    status: str = "status"
    created_at: str = "created_at"
    updated_at: str = "updated_at"


_COLS = _Cols()

_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in TodoStatus)


def _ts(value: datetime) -> str:
    # Fixed width keeps lexicographic order equal to chronological order.
    return value.isoformat(timespec="microseconds")


class SQLiteRepository(Repository):
    """
    SQLite repository implementing the Repository interface. Every operation
    opens its own connection and runs in one transaction: a single write,
    followed by a read-back of the affected row where a row is returned.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.title} TEXT NOT NULL,
                    {_COLS.status} TEXT NOT NULL DEFAULT '{TodoStatus.ACTIVE.value}'
                        CHECK ({_COLS.status} IN ({_STATUS_VALUES})),
                    {_COLS.created_at} TEXT NOT NULL,
                    {_COLS.updated_at} TEXT NOT NULL
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{_COLS.table}_created_at ON {_COLS.table}({_COLS.created_at})"
            )

    def _row_to_entity(self, row: sqlite3.Row) -> TodoEntity:
        return {
            "id": int(row[_COLS.id]),
            "title": str(row[_COLS.title]),
            "status": TodoStatus(row[_COLS.status]),
            "created_at": parse_timestamp(row[_COLS.created_at]),
            "updated_at": parse_timestamp(row[_COLS.updated_at]),
        }

    def _select_one(self, conn: sqlite3.Connection, todo_id: int) -> Optional[sqlite3.Row]:
        return conn.execute(f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,)).fetchone()

    def create(self, title: str) -> TodoEntity:
        now = _ts(utcnow())
        with self._conn() as conn:
            # status falls back to the column default
            cur = conn.execute(
                f"""
                INSERT INTO {_COLS.table} ({_COLS.title}, {_COLS.created_at}, {_COLS.updated_at})
                VALUES (?, ?, ?)
                """,
                (title, now, now),
            )
            row = self._select_one(conn, int(cur.lastrowid))
            assert row is not None
            return self._row_to_entity(row)

    def get(self, todo_id: int) -> Optional[TodoEntity]:
        with self._conn() as conn:
            row = self._select_one(conn, todo_id)
            return self._row_to_entity(row) if row else None

    def _update_column(self, todo_id: int, column: str, value: str) -> Optional[TodoEntity]:
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                UPDATE {_COLS.table}
                SET {column} = ?, {_COLS.updated_at} = ?
                WHERE {_COLS.id} = ?
                """,
                (value, _ts(utcnow()), todo_id),
            )
            if cur.rowcount == 0:
                return None
            row = self._select_one(conn, todo_id)
            assert row is not None
            return self._row_to_entity(row)

    def update_title(self, todo_id: int, title: str) -> Optional[TodoEntity]:
        return self._update_column(todo_id, _COLS.title, title)

    def update_status(self, todo_id: int, status: TodoStatus) -> Optional[TodoEntity]:
        return self._update_column(todo_id, _COLS.status, TodoStatus(status).value)

    def delete(self, todo_id: int) -> bool:
        with self._conn() as conn:
            cur = conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))
            return cur.rowcount > 0

    def list(self) -> List[TodoEntity]:
        with self._conn() as conn:
            rows = conn.execute(
                f"""
                SELECT * FROM {_COLS.table}
                ORDER BY {_COLS.created_at} DESC, {_COLS.id} DESC
                """
            ).fetchall()
            return [self._row_to_entity(r) for r in rows]
