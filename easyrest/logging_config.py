"""Structured JSON logging configuration.

Configures Python logging to emit one JSON object per record with the
fields: timestamp, level, logger, message. Adapter-specific fields are
attached through ``extra`` on the log call (path and parameter for discarded
query values, handler for failed handler calls, target_type for decode
failures, content_type for serialization defects).
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

# Fields copied from ``extra`` onto the JSON entry when present
_STRUCTURED_FIELDS = ("path", "parameter", "handler", "target_type", "content_type")


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON with structured fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in _STRUCTURED_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    json_logs:
        Emit JSON entries when true, plain text otherwise.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    root.handlers.clear()

    handler = logging.StreamHandler()
    if json_logs:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
    root.addHandler(handler)
