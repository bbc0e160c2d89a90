"""Logging setup for the Tutorials server.

Both output formats carry the request/tutorial context that the middleware
and route handlers attach to records through ``extra`` or a
:class:`logging.LoggerAdapter`.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

ACCESS_LOGGER = "tutorials.server.access"

# Record attributes copied into the output when present
CONTEXT_FIELDS = ("request_id", "tutorial_id", "method", "path", "status", "latency_ms")

_HANDLER_NAME = "tutorials-stderr"


def _context(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: getattr(record, key)
        for key in CONTEXT_FIELDS
        if getattr(record, key, None) is not None
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ContextFormatter(logging.Formatter):
    """Human-readable lines with the context appended as ``key=value`` pairs."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s [%(name)s] %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = " ".join(f"{k}={v}" for k, v in _context(record).items())
        return f"{line} {pairs}" if pairs else line


def setup_logging(log_format: Optional[str] = None, log_level: Optional[str] = None) -> logging.Handler:
    """Install the server's stderr handler on the root logger.

    Arguments default to ``settings.log_format`` / ``settings.log_level``.
    Calling it again replaces the handler installed by the previous call and
    leaves any other handlers alone.
    """
    from tutorials.server.config import settings

    log_format = log_format or settings.log_format
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JsonFormatter() if log_format == "json" else ContextFormatter())

    root.addHandler(handler)
    root.setLevel(level)
    return handler
