"""Structured JSON logging for websearch.

Logs registry changes, dispatched searches, and errors in JSON format.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        # Merge extra structured data
        if hasattr(record, "data"):
            entry["data"] = record.data  # type: ignore[attr-defined]
        if record.exc_info and record.exc_info[1]:
            entry["error"] = str(record.exc_info[1])
        return json.dumps(entry, ensure_ascii=False, default=str)


def parse_level(value: str | int | None, default: int = logging.INFO) -> int:
    """Turn "debug"/"INFO"/10 into a logging level, falling back to default."""
    if isinstance(value, int):
        return value
    if not value:
        return default
    level = logging.getLevelName(str(value).upper())
    return level if isinstance(level, int) else default


def setup_logging(
    log_dir: Path | None = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Configure structured logging for websearch.

    Args:
        log_dir: Directory for log files. If None, logs to stderr only.
        level: Logging level.

    Returns:
        The root 'websearch' logger.
    """
    logger = logging.getLogger("websearch")
    logger.setLevel(level)

    # Avoid duplicate handlers on repeated calls
    if logger.handlers:
        return logger

    fmt = JSONFormatter()

    # File handler (JSON lines)
    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / "websearch.jsonl", encoding="utf-8")
        fh.setFormatter(fmt)
        fh.setLevel(level)
        logger.addHandler(fh)

    # Stderr handler (only warnings+)
    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    sh.setLevel(logging.WARNING)
    logger.addHandler(sh)

    return logger


def log_search(engine_id: str, url: str, filtered: bool = False):
    """Log a dispatched search."""
    logger = logging.getLogger("websearch.dispatch")
    logger.info(
        "search",
        extra={"data": {
            "engine": engine_id,
            "url": url,
            "filtered": filtered,
        }},
    )
