"""
Log output for the health BMI API.

Each request, analysis and save is written as one line to stdout. Outside
development that line is a JSON object so the platform's log collector can
index fields such as ``path``, ``status_code`` or ``record_id``.

Call sites attach those fields with ``extra={"extra_fields": {...}}``.
"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict
from core.config import settings

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# SQL echo and HTTP client chatter drown out request logs at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "urllib3")


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON object, merged with its extra_fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # Request and record context from the call site
        if hasattr(record, "extra_fields"):
            entry.update(record.extra_fields)

        # Decimal, datetime etc. fall back to str
        return json.dumps(entry, default=str)


def setup_logging():
    """
    Point the root logger at stdout.

    JSON when LOG_FORMAT is "json" or the service runs in production,
    plain text otherwise. Handlers installed earlier (uvicorn, pytest) are
    replaced so every line goes through the same formatter.
    """
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    if settings.LOG_FORMAT == "json" or settings.ENVIRONMENT == "production":
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger
