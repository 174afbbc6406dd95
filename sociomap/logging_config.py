"""Logging setup: one stderr handler, text or single-line JSON output."""

from __future__ import annotations

import json
import logging
import sys
import traceback
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

# Bound by the request middleware; every formatted line picks it up.
request_id_var: ContextVar[str] = ContextVar("sociomap_request_id", default="")

# Attributes every LogRecord carries; anything else was passed via ``extra=``.
_RESERVED_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}

# Client libraries that log every outbound request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic")


def new_request_id() -> str:
    return uuid.uuid4().hex


def get_request_id() -> str:
    return request_id_var.get()


def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


def _format_exc(record: logging.LogRecord) -> str | None:
    if record.exc_info and record.exc_info[0] is not None:
        return "".join(traceback.format_exception(*record.exc_info))
    return None


class JSONFormatter(logging.Formatter):
    """Single-line JSON log output for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        entry: dict = {
            "timestamp": _timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.message,
        }

        request_id = get_request_id()
        if request_id:
            entry["request_id"] = request_id

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                entry[key] = value

        exc_text = _format_exc(record)
        if exc_text:
            entry["exception"] = exc_text

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """``<ts> LEVEL [rid] logger - message`` lines for local development."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        ts = _timestamp(record).strftime("%Y-%m-%d %H:%M:%S")

        request_id = get_request_id()
        rid_prefix = f"[{request_id[:12]}] " if request_id else ""

        line = f"{ts} {record.levelname:<8} {rid_prefix}{record.name} - {record.message}"

        exc_text = _format_exc(record)
        if exc_text:
            line += "\n" + exc_text

        return line


def setup_logging(log_level: str = "INFO", log_format: str = "text") -> None:
    """Configure the root logger. Safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Replace rather than stack handlers across reloads
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())
    root.addHandler(handler)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
