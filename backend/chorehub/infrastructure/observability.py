"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (household_id, stream_key, event_type, version, error_code,
      activity_count) surfaced when present
    - JSON format in production, human-readable in development
    - setup_logging is idempotent: repeated calls replace its own handler

Design Decisions:
    - stdlib logging with a small formatter; setup_logging called once from lifespan
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "household_id", "stream_key", "event_type", "version",
    "error_code", "activity_count", "path",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = str(val) if key == "household_id" else val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class _ChoreHubHandler(logging.StreamHandler):
    pass


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure root logging for the application."""
    handler = _ChoreHubHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    for existing in list(logging.root.handlers):
        if isinstance(existing, _ChoreHubHandler):
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
