from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple


_DATABASE_PATH_ENV = "TRACKER_DATABASE_PATH"
_CORS_ORIGINS_ENV = "TRACKER_CORS_ORIGINS"
_SQL_ECHO_ENV = "TRACKER_SQL_ECHO"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_path: Optional[str]
    cors_origins: Tuple[str, ...]
    sql_echo: bool
    log_level: str


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_cors_origins(default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = os.getenv(_CORS_ORIGINS_ENV)
    if value is None:
        return default
    origins = tuple(part.strip() for part in value.split(",") if part.strip())
    return origins or default


def _read_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if not candidate:
        return default
    return candidate in _TRUTHY


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        database_path=_read_optional_env(
            _DATABASE_PATH_ENV, "./tmp/smart_power_tracker.sqlite"
        ),
        cors_origins=_read_cors_origins(("*",)),
        sql_echo=_read_bool(_SQL_ECHO_ENV, False),
        log_level=_read_log_level("INFO"),
    )
