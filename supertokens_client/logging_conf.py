"""JSON-line logging shared by the client, the mock core and the smoke runner.

Idempotent: calling setup_logging() multiple times won't duplicate handlers.
The client itself only emits DEBUG events; applications decide the level.
Structured extras named like credentials are masked before they are written.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from logging import Handler, LogRecord
from typing import Any

_DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RECORD_ATTRS = frozenset(vars(LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

SECRET_KEYS = frozenset({"api_key", "api-key", "password", "jwt", "token", "authorization"})
MASK = "***"


def _mask(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: MASK if str(k).lower() in SECRET_KEYS else _mask(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_mask(v) for v in value]
    return value


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, message, then the extras."""

    def format(self, record: LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
        }

        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            payload["message"] = record.getMessage()

        extras = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        for key, value in extras.items():
            payload.setdefault(key, value)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(_mask(payload), ensure_ascii=False, default=str)


def _make_stream_handler(level: int) -> Handler:
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    return handler


def setup_logging(level: str | int = _DEFAULT_LEVEL) -> int:
    """Attach a JSON handler to the root logger and return the effective level.

    Only attaches handlers if none are present, so a host application that
    configured logging first keeps its own setup.
    """
    root = logging.getLogger()

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if root.handlers:  # already configured (reload, pytest, host app)
        return root.level

    root.setLevel(level)
    root.addHandler(_make_stream_handler(level))
    return level


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger.

    Usage: logger = get_logger(__name__)
    """
    return logging.getLogger(name if name else __name__)
