"""Structured Logging — JSON formatter fields and idempotent setup."""

import json
import logging

from villa_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("villa_api.test", logging.INFO, __file__, 1, "created %s", (7,), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extras_when_present():
    line = json.loads(JSONFormatter().format(_record(villa_no=7, operation="create")))
    assert line["message"] == "created 7"
    assert line["level"] == "INFO"
    assert line["villa_no"] == 7
    assert line["operation"] == "create"
    assert "error_code" not in line


def test_setup_logging_does_not_stack_handlers():
    before = len(logging.root.handlers)
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    ours = [h for h in logging.root.handlers if h.get_name() == "villa_api"]
    assert len(ours) == 1
    assert len(logging.root.handlers) <= before + 1
    assert logging.root.level == logging.INFO
    logging.root.removeHandler(ours[0])
