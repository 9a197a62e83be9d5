from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'sqlite' (default) or 'memory'
    - DATABASE_URL: store connection string, 'sqlite:///<path>'.
      Default 'sqlite:///./data/todos.db'
    - SQLITE_DB_PATH: path to the sqlite db file, used when DATABASE_URL is unset
    - SERVER_HOST / SERVER_PORT: listening address for `todo-board serve` (0.0.0.0:2022)
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: logging level name, INFO by default
    - TODO_BOARD_URL: base URL the CLI client talks to
    """

    persistence_backend: str
    database_url: str
    server_host: str
    server_port: int
    cors_allow_origins: List[str]
    log_level: str
    api_base_url: str

    @property
    def sqlite_db_path(self) -> str:
        """
        Database file named by `database_url`. Resolved on access so that
        client-only commands never trip over a store URL they do not use.

        Raises:
            ValueError if `database_url` is not a 'sqlite:///<path>' URL.
        """
        return sqlite_path_from_url(self.database_url)


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def sqlite_path_from_url(url: str) -> str:
    """
    Extract the database file path from a 'sqlite:///<path>' connection string.

    'sqlite:///./data/todos.db' -> './data/todos.db'
    'sqlite:////var/lib/todos.db' -> '/var/lib/todos.db'
    """
    prefix = "sqlite:///"
    value = url.strip()
    if not value.startswith(prefix):
        raise ValueError(f"Unsupported DATABASE_URL {value!r}; expected 'sqlite:///<path>'")
    path = value[len(prefix):]
    if not path:
        raise ValueError("DATABASE_URL does not name a database file")
    return path


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "sqlite").strip().lower()
    if backend not in {"memory", "sqlite"}:
        # Fallback to sqlite if unsupported
        backend = "sqlite"

    database_url = os.getenv("DATABASE_URL", "").strip()
    if not database_url:
        database_url = "sqlite:///" + _get_env("SQLITE_DB_PATH", "./data/todos.db").strip()

    port = _parse_int(_get_env("SERVER_PORT", "2022"), 2022)

    return Settings(
        persistence_backend=backend,
        database_url=database_url,
        server_host=_get_env("SERVER_HOST", "0.0.0.0").strip(),
        server_port=port,
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
        api_base_url=_get_env("TODO_BOARD_URL", f"http://localhost:{port}").strip().rstrip("/"),
    )
