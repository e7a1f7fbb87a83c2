"""Structured logging for the geoitaly service and CLI.

The HTTP service emits one JSON object per line. Lines written while a
request is being served carry that request's correlation_id, taken from
the X-Request-ID header or generated by the API middleware.
"""

import json
import logging
from collections.abc import Iterable
from contextvars import ContextVar
from datetime import datetime, timezone

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Populated per request by CorrelationIDMiddleware
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

# Attributes lifted from ``extra={...}`` into the JSON line
EXTRA_FIELDS = ("dataset", "query", "result_count", "path", "duration_ms")

NOISY_LOGGERS = ("uvicorn.access",)

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_correlation_id() -> str:
    """Correlation ID of the request being served, or "" outside a request."""
    return correlation_id.get()


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON line."""

    def __init__(self, extra_fields: Iterable[str] = EXTRA_FIELDS) -> None:
        super().__init__()
        self.extra_fields = tuple(extra_fields)

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_correlation_id()
        if request_id:
            entry["correlation_id"] = request_id

        entry.update(
            (name, getattr(record, name))
            for name in self.extra_fields
            if getattr(record, name, None) is not None
        )

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(json_format: bool = True, level: str = "INFO") -> None:
    """Install a single stderr handler on the root logger.

    Args:
        json_format: JSON lines for the service, TEXT_FORMAT for the CLI.
        level: Level name; unknown names fall back to INFO.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_LEVELS.get(level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
