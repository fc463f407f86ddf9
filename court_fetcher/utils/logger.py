"""Logging setup for the fetcher

Console output is human-readable in development and JSON lines in
production. Debug mode adds a daily log file under ``logs/``.
"""
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from court_fetcher.config.settings import settings

# Extra record attributes promoted into log output
CONTEXT_FIELDS = ("query_id", "request_id", "case_number", "duration_ms")

NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "asyncio", "sqlalchemy.engine", "multipart")

LOG_DIR = Path("logs")


def _context_of(record: logging.LogRecord) -> Dict[str, Any]:
    return {field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)}


class StructuredFormatter(logging.Formatter):
    """Formats records as ``[time] [LEVEL] [logger] (context) message`` or as JSON"""

    def __init__(self, include_json: bool = False):
        super().__init__()
        self.include_json = include_json

    def _timestamp(self, record: logging.LogRecord) -> str:
        return datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]

    def _format_json(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self._timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            **_context_of(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)

    def _format_text(self, record: logging.LogRecord) -> str:
        context = _context_of(record)
        parts: List[str] = []
        if "query_id" in context:
            parts.append(f"query={context['query_id']}")
        if "request_id" in context:
            parts.append(f"request={context['request_id']}")
        if "duration_ms" in context:
            parts.append(f"{context['duration_ms']}ms")

        line = f"[{self._timestamp(record)}] [{record.levelname}] [{record.name}]"
        if parts:
            line += f" ({', '.join(parts)})"
        line += f" {record.getMessage()}"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line

    def format(self, record: logging.LogRecord) -> str:
        if self.include_json:
            return self._format_json(record)
        return self._format_text(record)


class DebugLogger:
    """
    Thin wrapper over ``logging.Logger``.

    Keyword arguments become record attributes, so ``query_id=...`` shows up
    in both output formats. ``debug()`` is dropped unless settings.debug is on.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self._context: Dict[str, Any] = {}

    def set_context(self, **kwargs):
        self._context.update(kwargs)

    def clear_context(self):
        self._context.clear()

    def _log(self, level: int, msg: str, **kwargs):
        exc_info = kwargs.pop('exc_info', False)
        self.logger.log(level, msg, extra={**self._context, **kwargs}, exc_info=exc_info)

    def debug(self, msg: str, **kwargs):
        if settings.debug:
            self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs):
        self._log(logging.ERROR, msg, **kwargs)

    def critical(self, msg: str, **kwargs):
        self._log(logging.CRITICAL, msg, **kwargs)


def _resolve_level() -> str:
    if settings.debug:
        return 'DEBUG'
    return settings.log_level.upper()


def _debug_file_handler() -> logging.Handler:
    LOG_DIR.mkdir(exist_ok=True)
    handler = logging.FileHandler(
        LOG_DIR / f"debug_{datetime.now().strftime('%Y%m%d')}.log",
        encoding='utf-8'
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(StructuredFormatter())
    return handler


def setup_logging():
    """Install console (and optional file) handlers on the root logger"""
    level_name = _resolve_level()
    level = getattr(logging, level_name, logging.INFO)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(StructuredFormatter(include_json=settings.environment == "production"))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(console)

    if settings.debug and settings.log_to_file:
        root.addHandler(_debug_file_handler())

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("court_fetcher").setLevel(level)

    get_logger(__name__).info(
        f"Logging configured: level={level_name}, debug={settings.debug}, env={settings.environment}"
    )


def get_logger(name: str) -> DebugLogger:
    """Get a context-aware logger (name is typically __name__)"""
    return DebugLogger(name)
