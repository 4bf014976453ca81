"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (villa_no, operation, error_code, path, username, api_version)
      surfaced when present
    - The timestamp is when the record was created, not when it was formatted
    - setup_logging is idempotent: repeated app startups do not stack handlers

Design Decisions:
    - stdlib logging + json, no logging library: handlers pass context through extra=
    - SQLAlchemy engine and uvicorn access logs held at WARNING unless LOG_LEVEL=DEBUG
"""

import json
import logging
from datetime import datetime, timezone

HANDLER_NAME = "villa_api"

CONTEXT_FIELDS = (
    "villa_no", "operation", "error_code", "path", "username", "api_version",
)

_NOISY_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s — %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(
            (key, record.__dict__[key]) for key in CONTEXT_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Install the single application handler on the root logger."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == HANDLER_NAME:
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    logging.root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    logging.root.setLevel(root_level)
    quiet = logging.DEBUG if root_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet)
