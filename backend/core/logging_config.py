"""
Central logging configuration.
Console + file handlers with a TRACE level below DEBUG and an allow-list
filter driven by ``settings.LOG_LEVELS``.
"""
from __future__ import annotations

import functools
import logging
import os
import time
from typing import Any, Callable, Optional, TypeVar

from backend.core.config import settings

F = TypeVar("F", bound=Callable[..., Any])

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LEVEL_NAMES = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def trace(self: logging.Logger, message: str, *args, **kwargs) -> None:
    """Emit a TRACE-level message on the logger instance."""
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


logging.Logger.trace = trace  # type: ignore[attr-defined]


class LogLevelFilter(logging.Filter):
    """Only let through records whose level is in the allowed set."""

    def __init__(self, allowed_levels: set[int]) -> None:
        super().__init__()
        self._allowed_levels = allowed_levels

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno in self._allowed_levels


def _parse_allowed_levels(raw: Optional[str]) -> set[int]:
    """Turn a comma separated list such as ``"INFO,ERROR"`` into level numbers."""
    default_levels = {TRACE_LEVEL, logging.INFO, logging.WARNING, logging.ERROR}
    if not raw:
        return default_levels

    levels = {
        _LEVEL_NAMES[name.strip().upper()]
        for name in raw.split(",")
        if name.strip().upper() in _LEVEL_NAMES
    }
    return levels or default_levels


def _resolve_level(level_name: Optional[str]) -> int:
    if not level_name:
        return logging.INFO
    return _LEVEL_NAMES.get(level_name.strip().upper(), logging.INFO)


def configure_logging() -> None:
    """Configure root logger with console + file handlers."""
    log_dir = os.path.dirname(settings.LOG_FILE_PATH)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(settings.LOG_LEVEL))
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)
    level_filter = LogLevelFilter(_parse_allowed_levels(settings.LOG_LEVELS))

    console_handler = logging.StreamHandler()
    file_handler = logging.FileHandler(settings.LOG_FILE_PATH)
    for handler in (console_handler, file_handler):
        handler.setFormatter(formatter)
        handler.addFilter(level_filter)
        root_logger.addHandler(handler)


def log_db_timing(func: F) -> F:
    """
    Decorator for repository methods: logs the query name, its arguments
    (``self`` excluded) and the duration in milliseconds. Failures are logged
    at ERROR and re-raised untouched.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)
        arg_parts = [str(arg) for arg in args[1:]]
        arg_parts.extend(f"{key}={value}" for key, value in kwargs.items())
        args_str = ", ".join(arg_parts)

        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "DB_OP | %s | duration=%.3fms | args=(%s) | error=%s",
                func.__qualname__,
                elapsed_ms,
                args_str,
                exc,
            )
            raise
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "DB_OP | %s | duration=%.3fms | args=(%s)",
            func.__qualname__,
            elapsed_ms,
            args_str,
        )
        return result
    return wrapper  # type: ignore[return-value]
