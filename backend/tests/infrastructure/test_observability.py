"""Structured Logging: JSON formatter output and idempotent setup."""

import json
import logging

from taskboard.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "taskboard.http", logging.INFO, __file__, 1, "GET /health 200", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_core_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "taskboard.http"
    assert payload["message"] == "GET /health 200"
    assert "timestamp" in payload


def test_json_formatter_surfaces_extra_fields():
    payload = json.loads(JSONFormatter().format(
        _record(method="GET", status_code=200, duration_ms=1.5),
    ))
    assert payload["method"] == "GET"
    assert payload["status_code"] == 200
    assert payload["duration_ms"] == 1.5
    assert "error_code" not in payload


def test_setup_logging_does_not_stack_handlers():
    previous_level = logging.root.level
    setup_logging("DEBUG", "text")
    handler = setup_logging("INFO", "json")
    try:
        named = [h for h in logging.root.handlers if h.get_name() == "taskboard"]
        assert named == [handler]
        assert logging.root.level == logging.INFO
    finally:
        logging.root.removeHandler(handler)
        logging.root.setLevel(previous_level)
