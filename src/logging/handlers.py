# src/logging/handlers.py
"""Size-based rotating file handler for LOG_FILE."""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_SIZE_RE = re.compile(r"^(\d+)\s*(B|KB|MB|GB)$", re.IGNORECASE)
_SIZE_UNITS = {"B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}


def parse_size(size_str: str) -> int:
    """'10MB' -> 10485760. Units B/KB/MB/GB, case-insensitive, binary multiples.

    Raises:
        ValueError: On an unknown format or a zero size.
    """
    match = _SIZE_RE.match(size_str.strip())
    if match is None:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    amount, unit = int(match.group(1)), match.group(2).upper()
    if amount == 0:
        raise ValueError("Rotation size must be > 0")
    return amount * _SIZE_UNITS[unit]


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "10MB",
    retention: int = 30,
) -> RotatingFileHandler:
    """RotatingFileHandler writing UTF-8 to log_file; parent directories are created.

    ``retention`` is the number of rotated backups kept next to the file.
    """
    max_bytes = parse_size(rotation)
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=retention, encoding="utf-8",
    )
