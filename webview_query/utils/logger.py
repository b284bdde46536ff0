"""Logging for WebViewQuery: structlog over stdlib logging, gated by verbosity."""

import logging
import os
import sys
from contextlib import contextmanager
from enum import IntEnum
from typing import Any, Dict, Iterator, List, Optional

import structlog

LOGGER_NAME = "webview_query"


class LogLevel(IntEnum):
    """Verbosity thresholds. A line is logged when its level <= the logger's verbosity."""
    ERROR = 0
    WARN = 1
    INFO = 2
    DEBUG = 3


_STDLIB_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}

_METHOD_NAMES = {
    LogLevel.ERROR: "error",
    LogLevel.WARN: "warning",
    LogLevel.INFO: "info",
    LogLevel.DEBUG: "debug",
}


def _clamp(verbose: int) -> LogLevel:
    return LogLevel(min(max(int(verbose), LogLevel.ERROR), LogLevel.DEBUG))


def configure_logging(verbose: int = 0, renderer: Optional[str] = None) -> structlog.BoundLogger:
    """
    Install structlog processors and the stdlib handler once per process.

    Args:
        verbose: Verbosity level (0-3)
        renderer: "console", "json", or None to pick console on a TTY
            (unless NO_COLOR is set) and JSON otherwise

    Returns:
        Logger bound to the package name
    """
    level = _clamp(verbose)
    if renderer is None:
        renderer = "console" if sys.stderr.isatty() and os.getenv("NO_COLOR") is None else "json"

    processors: List[Any] = [
        # request-scoped fields bound by request_scope()
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if renderer == "console":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger(LOGGER_NAME).setLevel(_STDLIB_LEVELS[level])

    return structlog.get_logger(LOGGER_NAME).bind(verbose=int(level))


@contextmanager
def request_scope(**bindings: Any) -> Iterator[None]:
    """Attach fields to every line logged while one engine request runs."""
    with structlog.contextvars.bound_contextvars(**bindings):
        yield


class LogLine:
    """A single categorized log entry."""

    def __init__(
        self,
        category: str,
        message: str,
        level: LogLevel = LogLevel.INFO,
        auxiliary: Optional[Dict[str, Any]] = None,
    ):
        self.category = category
        self.message = message
        self.level = level
        self.auxiliary = auxiliary or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, **self.auxiliary}


class WebViewQueryLogger:
    """Category-aware wrapper around a structlog logger."""

    def __init__(self, logger: Any, verbose: int = 0):
        self.logger = logger
        self.verbose = verbose

    def enabled(self, level: LogLevel) -> bool:
        return level <= self.verbose

    def log(self, log_line: LogLine) -> None:
        if not self.enabled(log_line.level):
            return
        method = getattr(self.logger, _METHOD_NAMES[log_line.level])
        method(log_line.message, **log_line.to_dict())

    def error(self, category: str, message: str, **kwargs: Any) -> None:
        self.log(LogLine(category, message, LogLevel.ERROR, kwargs))

    def warn(self, category: str, message: str, **kwargs: Any) -> None:
        self.log(LogLine(category, message, LogLevel.WARN, kwargs))

    def info(self, category: str, message: str, **kwargs: Any) -> None:
        self.log(LogLine(category, message, LogLevel.INFO, kwargs))

    def debug(self, category: str, message: str, **kwargs: Any) -> None:
        self.log(LogLine(category, message, LogLevel.DEBUG, kwargs))

    def child(self, **bindings: Any) -> 'WebViewQueryLogger':
        """Create a child logger with additional context."""
        return WebViewQueryLogger(self.logger.bind(**bindings), self.verbose)


def get_logger(verbose: int = 0, **bindings: Any) -> WebViewQueryLogger:
    """
    Build a WebViewQueryLogger without reconfiguring structlog.

    Call configure_logging() once at process start to install processors;
    this only binds a named logger.
    """
    return WebViewQueryLogger(structlog.get_logger(LOGGER_NAME).bind(**bindings), verbose)
