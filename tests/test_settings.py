import pytest

from todo_board.settings import get_settings, sqlite_path_from_url

ENV_VARS = [
    "PERSISTENCE_BACKEND",
    "DATABASE_URL",
    "SQLITE_DB_PATH",
    "SERVER_HOST",
    "SERVER_PORT",
    "CORS_ALLOW_ORIGINS",
    "LOG_LEVEL",
    "TODO_BOARD_URL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env):
        s = get_settings()
        assert s.persistence_backend == "sqlite"
        assert s.sqlite_db_path == "./data/todos.db"
        assert s.server_host == "0.0.0.0"
        assert s.server_port == 2022
        assert s.cors_allow_origins == ["*"]
        assert s.log_level == "INFO"
        assert s.api_base_url == "http://localhost:2022"

    def test_overrides(self, clean_env):
        clean_env.setenv("PERSISTENCE_BACKEND", "MEMORY")
        clean_env.setenv("SERVER_PORT", "8080")
        clean_env.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("TODO_BOARD_URL", "http://board.test/")
        s = get_settings()
        assert s.persistence_backend == "memory"
        assert s.server_port == 8080
        assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
        assert s.log_level == "DEBUG"
        assert s.api_base_url == "http://board.test"

    def test_unsupported_backend_falls_back_to_sqlite(self, clean_env):
        clean_env.setenv("PERSISTENCE_BACKEND", "postgres")
        assert get_settings().persistence_backend == "sqlite"

    def test_bad_port_uses_default(self, clean_env):
        clean_env.setenv("SERVER_PORT", "not-a-port")
        assert get_settings().server_port == 2022

    def test_database_url_wins_over_sqlite_path(self, clean_env):
        clean_env.setenv("SQLITE_DB_PATH", "/tmp/ignored.db")
        clean_env.setenv("DATABASE_URL", "sqlite:///./board.db")
        assert get_settings().sqlite_db_path == "./board.db"

    def test_non_sqlite_url_fails_only_when_path_is_read(self, clean_env):
        clean_env.setenv("DATABASE_URL", "postgresql://board@db.example/todos")
        s = get_settings()
        assert s.database_url == "postgresql://board@db.example/todos"
        with pytest.raises(ValueError):
            s.sqlite_db_path


class TestDatabaseUrl:
    def test_relative_and_absolute(self):
        assert sqlite_path_from_url("sqlite:///./data/todos.db") == "./data/todos.db"
        assert sqlite_path_from_url("sqlite:////var/lib/todos.db") == "/var/lib/todos.db"

    def test_rejects_other_schemes(self):
        with pytest.raises(ValueError):
            sqlite_path_from_url("postgres://localhost/todos")

    def test_rejects_missing_path(self):
        with pytest.raises(ValueError):
            sqlite_path_from_url("sqlite:///")
