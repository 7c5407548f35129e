from __future__ import annotations

import logging

from logging_config import ContextualFormatter, build_logging_config


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("tracker", logging.INFO, __file__, 1, "Device created", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_known_extras_are_appended_in_order() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    message = formatter.format(_record(device_id="d1", entity="device", unrelated="x"))

    assert message == "Device created | entity=device device_id=d1"


def test_none_extras_are_skipped() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["device_id"])

    assert formatter.format(_record(device_id=None)) == "Device created"


def test_build_logging_config_switches_sql_echo() -> None:
    quiet = build_logging_config("INFO")
    echoing = build_logging_config("DEBUG", sql_echo=True)

    assert quiet["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    assert echoing["loggers"]["sqlalchemy.engine"]["level"] == "INFO"
    assert echoing["root"]["level"] == "DEBUG"
    assert quiet["formatters"]["contextual"]["()"] is ContextualFormatter
