"""Tests for doorsign/core/logging.py - JSON log formatting."""

import json
import logging
import uuid

from doorsign.core.logging import JsonFormatter, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "doorsign.status.service", logging.INFO, __file__, 1, "Status of %s", ("bob",), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_known_extras():
    user_id = uuid.uuid4()

    payload = json.loads(
        JsonFormatter().format(
            _record(user_id=user_id, outcome="sent", updated_count=2, secret="x")
        )
    )

    assert payload["msg"] == "Status of bob"
    assert payload["level"] == "INFO"
    assert payload["user_id"] == str(user_id)
    assert payload["outcome"] == "sent"
    assert payload["updated_count"] == 2
    assert "secret" not in payload


def test_configure_logging_json(monkeypatch):
    monkeypatch.setenv("LOG_JSON", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    configure_logging()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)

    monkeypatch.delenv("LOG_JSON")
    monkeypatch.delenv("LOG_LEVEL")
    configure_logging()
