"""Structured JSON logging with correlation-id context.

Domain events are logged with a snake_case message (``application_submitted``)
and identifiers passed through ``extra``; only whitelisted keys reach the
output so request payloads never end up in logs by accident.
"""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Iterable

CORRELATION_ID_CTX: ContextVar[str] = ContextVar("correlation_id", default="")

DOMAIN_EXTRA_KEYS = ("user_id", "pet_id", "application_id", "from_status", "to_status")
REQUEST_EXTRA_KEYS = ("path", "method", "status_code")


class JsonLogFormatter(logging.Formatter):
    """Serialize log records into compact JSON lines."""

    def __init__(
        self, extra_keys: Iterable[str] = DOMAIN_EXTRA_KEYS + REQUEST_EXTRA_KEYS
    ) -> None:
        super().__init__()
        self._extra_keys = tuple(extra_keys)

    def format(self, record: logging.LogRecord) -> str:
        """Return JSON string for the given log record."""
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": CORRELATION_ID_CTX.get(),
        }

        for key in self._extra_keys:
            value = getattr(record, key, None)
            if value not in (None, ""):
                payload[key] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO") -> None:
    """Configure root logger to emit structured JSON logs."""
    normalized_level = getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonLogFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(normalized_level)
    root_logger.addHandler(handler)


def set_correlation_id(correlation_id: str) -> None:
    """Store correlation id in request-local context."""
    CORRELATION_ID_CTX.set(correlation_id)
