"""Log formatters.

Provides JSONFormatter for machine-readable build logs.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "restore_tag"}


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Keys:
    - timestamp: ISO-8601 UTC time of the record
    - level: level name
    - logger: logger name (omitted for the root logger)
    - message: formatted message
    - context: values passed via ``extra=`` plus the restore target
    - exception: formatted traceback, when present
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name and record.name != "root":
            entry["logger"] = record.name

        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if context.get("target_file") is None:
            context.pop("target_file", None)
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
