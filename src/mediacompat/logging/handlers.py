"""JSON log formatting."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes present on every LogRecord; anything else came from `extra=`
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

# Injected by WorkerContextFilter and emitted explicitly
_CONTEXT_ATTRS = ("worker_id", "file_id", "file_path")


class JSONFormatter(logging.Formatter):
    """Format each record as one JSON object per line.

    Keys: timestamp (ISO-8601 UTC), level, logger, message, and optionally
    context (extra attributes and worker context) and exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
            and key not in _CONTEXT_ATTRS
            and key != "worker_tag"
            and not key.startswith("_")
        }
        for name in _CONTEXT_ATTRS:
            value = getattr(record, name, None)
            if value:
                context[name] = value
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
