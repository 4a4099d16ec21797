"""
Logging configuration for the storefront.

Console output on stderr, optional rotating JSON log file, and per-task
structured context carried in a context variable.
"""

from __future__ import annotations

import contextvars
import json
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(filename)s:%(lineno)d] %(message)s"

# Each thread starts from an empty context, so context set on the UI
# thread never leaks into records from the catalog worker.
_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "storefront_log_context", default={}
)


def current_context() -> Dict[str, Any]:
    """Fields bound by the innermost active LogContext."""
    return _context.get()


class ContextFilter(logging.Filter):
    """Copies the active LogContext fields onto each record as extra_data."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = _context.get()
        if context:
            record.extra_data = dict(context)
        return True


class LogContext:
    """
    Binds structured fields to log records emitted inside the block.

    Nested contexts merge, inner keys win.

    Example:
        with LogContext(app_id=42, uri=url):
            logger.info("Dispatching install")
    """

    def __init__(self, **fields):
        self.fields = fields
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> "LogContext":
        self._token = _context.set({**_context.get(), **self.fields})
        return self

    def __exit__(self, *exc_info) -> None:
        _context.reset(self._token)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, context fields under "context"."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.lineno}",
        }
        context = getattr(record, "extra_data", None)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Plain console format, level names colored when writing to a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: "36",
        logging.WARNING: "33",
        logging.ERROR: "31",
        logging.CRITICAL: "35",
    }

    def __init__(self, color: bool):
        super().__init__(CONSOLE_FORMAT)
        self.color = color

    def formatMessage(self, record: logging.LogRecord) -> str:
        text = super().formatMessage(record)
        code = self.LEVEL_COLORS.get(record.levelno)
        if self.color and code:
            text = text.replace(record.levelname, f"\033[{code}m{record.levelname}\033[0m", 1)
        return text


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    json_logs: bool = False,
) -> None:
    """
    Configure the root logger for a storefront process.

    Args:
        level: Console logging level
        log_file: Rotating log file receiving DEBUG and above (optional)
        json_logs: Write the log file as JSON lines
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if log_file else level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(ConsoleFormatter(color=sys.stderr.isatty()))
    console.addFilter(ContextFilter())
    root.addHandler(console)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=1024 * 1024, backupCount=2, encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter() if json_logs else logging.Formatter(FILE_FORMAT))
        file_handler.addFilter(ContextFilter())
        root.addHandler(file_handler)

    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
