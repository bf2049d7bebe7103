"""
JSON logging for the bookstore API and CLI tools.

One JSON object per line on the root logger. Values passed through `extra`
(ids, role names, prices, timestamps) are written as JSON scalars.

Usage:
    from bookstore.core.logging import init_logging, get_logger
    init_logging()
    log = get_logger(__name__)
    log.info("book_created", extra={"book_id": 1, "isbn": "978-0261103344"})

CLI tools call init_logging(stream=sys.stderr) so stdout carries only their result.
"""

from __future__ import annotations

import enum
import json
import logging
import sys
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional, TextIO

from bookstore.core.config import get_settings

__all__ = ["init_logging", "get_logger", "JsonFormatter"]

# Every LogRecord has these; anything else arrived through `extra`
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def _jsonable(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return _jsonable(value.value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    return str(value)


class JsonFormatter(logging.Formatter):
    """Fixed keys first (time, level, logger, message, location), then `extra` fields."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (shadow builtin)
        payload: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and key not in payload:
                payload[key] = _jsonable(value)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


_configured: bool = False


def init_logging(level: Optional[str] = None, *, stream: Optional[TextIO] = None) -> None:
    """
    Install the JSON handler on the root logger.

    `level` defaults to settings.log_level; unknown names fall back to INFO.
    Only the first call has an effect.
    """
    global _configured
    if _configured:
        return

    name = (level or get_settings().log_level or "INFO").upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        resolved = logging.INFO

    root = logging.getLogger()
    root.setLevel(resolved)

    # Replace whatever handlers were installed before (uvicorn, basicConfig)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setLevel(resolved)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    _configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name if name else "bookstore")
