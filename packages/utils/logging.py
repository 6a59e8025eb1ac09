"""Minimal structured logger.

Provides get_logger(name, level=None) that returns a stdlib logger which emits
a JSON-like single-line dictionary per record on stderr. Structured fields go
through the `data` key of the `extra` kwarg. The handler and level sit on the
top-level logger of the dotted name; the level defaults to LOG_LEVEL.
"""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Optional


def _parse_level(value: Optional[str]) -> int:
    level = logging.getLevelName((value or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z")
        base = {
            "ts": ts,
            "logger": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
        }
        data = record.__dict__.get("data")
        if data is not None:
            base["data"] = data
        try:
            return json.dumps(base, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            return str(base)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    # Handler and level live on the top-level logger; module loggers propagate to it
    top = logging.getLogger(name.split(".", 1)[0])
    if not top.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        top.addHandler(handler)
        top.setLevel(_parse_level(os.getenv("LOG_LEVEL")))
    if level:
        top.setLevel(_parse_level(level))
    return logger


__all__ = ["get_logger", "JSONFormatter"]
