"""Logging configuration.

- Development/test: human-readable format
- Other environments: one JSON object per line
- Level: LOG_LEVEL setting
"""

import json
import logging
import sys
from datetime import UTC, datetime

from src.core.config import get_settings


class JSONFormatter(logging.Formatter):
    """JSON log formatter for log aggregation."""

    EXTRA_FIELDS = ("caller_id", "method", "path", "status_code", "duration_ms")

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in self.EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_entry[key] = value
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False, default=str)


READABLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging() -> None:
    """Install a single stream handler on the root logger."""
    settings = get_settings()

    handler = logging.StreamHandler(sys.stderr)
    if settings.ENVIRONMENT in ("development", "test"):
        handler.setFormatter(logging.Formatter(READABLE_FORMAT))
    else:
        handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.LOG_LEVEL.upper())

    # SQL echo is controlled by DB_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
