"""
Logging configuration.

One JSON object per line in production; readable text in development.
Structured fields are passed as extra={"context": {...}}.
"""

import json
import logging
import sys
from typing import Any

PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

NOISY_LOGGERS = ("asyncio", "httpx", "httpcore", "websockets", "web3")


class JSONFormatter(logging.Formatter):
    """Formats records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
        }

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            entry.update(context)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Install a single stderr handler on the root logger.

    Args:
        level: Root log level name
        json_logs: JSON lines (True) or plain text (False)
    """
    numeric_level = logging.getLevelName(level.upper())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        JSONFormatter(datefmt="%Y-%m-%dT%H:%M:%S")
        if json_logs
        else logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
