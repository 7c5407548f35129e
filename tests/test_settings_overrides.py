from __future__ import annotations

from datastore.sql_store import build_default_store
from settings import get_settings


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    database_path = tmp_path / "custom" / "tracker.sqlite"

    monkeypatch.setenv("TRACKER_DATABASE_PATH", str(database_path))
    monkeypatch.setenv("TRACKER_CORS_ORIGINS", "http://localhost:3000, http://example.test")
    monkeypatch.setenv("TRACKER_SQL_ECHO", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    get_settings.cache_clear()
    build_default_store.cache_clear()

    settings = get_settings()
    store = build_default_store()

    try:
        assert settings.database_path == str(database_path)
        assert settings.cors_origins == ("http://localhost:3000", "http://example.test")
        assert settings.sql_echo is True
        assert settings.log_level == "DEBUG"
        assert store.database_path == database_path
        assert database_path.exists()
    finally:
        store.dispose()
        build_default_store.cache_clear()
        get_settings.cache_clear()


def test_blank_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("TRACKER_CORS_ORIGINS", " , ")
    monkeypatch.setenv("TRACKER_SQL_ECHO", "")
    monkeypatch.setenv("LOG_LEVEL", "  ")
    monkeypatch.delenv("TRACKER_DATABASE_PATH", raising=False)

    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.database_path == "./tmp/smart_power_tracker.sqlite"
        assert settings.cors_origins == ("*",)
        assert settings.sql_echo is False
        assert settings.log_level == "INFO"
    finally:
        get_settings.cache_clear()


def test_blank_database_path_selects_in_memory_store(monkeypatch) -> None:
    monkeypatch.setenv("TRACKER_DATABASE_PATH", "")

    get_settings.cache_clear()
    build_default_store.cache_clear()
    try:
        store = build_default_store()
        assert store.database_path is None
        assert store.list_devices() == []
        store.dispose()
    finally:
        build_default_store.cache_clear()
        get_settings.cache_clear()
