# src/logging/logger.py
"""Logger setup for plagscan.

Every record emitted under the ``plagscan`` namespace passes through
``ContextFilter``, which stamps it with the submission / pair / step
currently set in ``plagscan.logging.context``. Formatters only read record
attributes, so records handed to another thread or handler keep the context
they were created with.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from plagscan.logging.context import get_context

if TYPE_CHECKING:
    from pathlib import Path

    from plagscan.config.settings import Settings

ROOT_LOGGER = "plagscan"

_CONTEXT_ATTRS = ("project_id", "comparison", "step")


class ContextFilter(logging.Filter):
    """Copy the current logging context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = get_context()
        for attr in _CONTEXT_ATTRS:
            if not hasattr(record, attr):
                setattr(record, attr, getattr(ctx, attr))
        return True


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    ctx = get_context()
    values = {
        attr: getattr(record, attr, getattr(ctx, attr)) for attr in _CONTEXT_ATTRS
    }
    return {k: v for k, v in values.items() if v is not None}


def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, context, data."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": _timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = _record_context(record)
        if context:
            entry["context"] = context

        data = getattr(record, "data", None)
        if data:
            entry["data"] = data

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Single-line console format.

    2024-05-01 10:00:00 [INFO    ] plagscan.batch.scanner [alice] (normalize) - message
    """

    def format(self, record: logging.LogRecord) -> str:
        context = _record_context(record)
        parts = [
            _timestamp(record).strftime("%Y-%m-%d %H:%M:%S"),
            f"[{record.levelname:8s}]",
            record.name,
        ]
        for key in ("project_id", "comparison"):
            if key in context:
                parts.append(f"[{context[key]}]")
        if "step" in context:
            parts.append(f"({context['step']})")
        parts.append(f"- {record.getMessage()}")

        line = " ".join(parts)
        if record.exc_info and record.exc_info[1] is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | Path | None = None,
    rotation: str = "10MB",
    retention: int = 30,
) -> logging.Logger:
    """Configure the plagscan logger and return it.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: "json" or "text".
        log_file: Optional log file; stderr only when None.
        rotation: Max log file size before rotation (e.g. "10MB").
        retention: Number of rotated files to keep.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Re-init replaces handlers
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    formatter: logging.Formatter = JsonFormatter() if log_format == "json" else TextFormatter()
    context_filter = ContextFilter()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    console.addFilter(context_filter)
    logger.addHandler(console)

    if log_file:
        from plagscan.logging.handlers import create_rotating_handler

        file_handler = create_rotating_handler(log_file, rotation=rotation, retention=retention)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        logger.addHandler(file_handler)

    return logger


def setup_logging_from_settings(settings: Settings, level: str | None = None) -> logging.Logger:
    """setup_logging() driven by the LOG_* settings; ``level`` overrides LOG_LEVEL."""
    return setup_logging(
        level=level or settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
