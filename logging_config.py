from __future__ import annotations

import logging
import time
from logging.config import dictConfig
from typing import Any, Iterable, Sequence

from settings import get_settings

_DEFAULT_EXTRA_KEYS = (
    "entity",
    "device_id",
    "consumption_id",
    "count",
    "status",
    "reason",
    "database",
)

_configured = False


class ContextualFormatter(logging.Formatter):
    """Append known ``extra`` attributes as key=value pairs, timestamps in UTC."""

    converter = time.gmtime

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        extra_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._extra_keys: Sequence[str] = tuple(extra_keys or _DEFAULT_EXTRA_KEYS)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = " ".join(
            f"{key}={getattr(record, key)}"
            for key in self._extra_keys
            if getattr(record, key, None) is not None
        )
        return f"{message} | {context}" if context else message


LOG_FORMAT = "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s"


def build_logging_config(level: str | int, sql_echo: bool = False) -> dict[str, Any]:
    """Return the dictConfig payload; SQL statements surface only when echo is on."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "contextual": {
                "()": ContextualFormatter,
                "fmt": LOG_FORMAT,
                "datefmt": "%Y-%m-%dT%H:%M:%S",
                "extra_keys": list(_DEFAULT_EXTRA_KEYS),
            }
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "contextual",
            }
        },
        "loggers": {
            "sqlalchemy.engine": {"level": "INFO" if sql_echo else "WARNING"},
            "httpx": {"level": "WARNING"},
        },
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(level: str | int | None = None) -> None:
    """Configure process-wide logging once; later calls are no-ops."""
    global _configured
    if _configured:
        return

    settings = get_settings()
    dictConfig(
        build_logging_config(
            level if level is not None else settings.log_level,
            sql_echo=settings.sql_echo,
        )
    )
    _configured = True
