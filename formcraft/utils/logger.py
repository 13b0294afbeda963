"""
Formcraft Logger
================

Structured logging with pluggable handlers.
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, List, Optional, Union

from formcraft.core.config import get_config


class LogLevel(IntEnum):
    """Log levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, value: Union[str, int, "LogLevel"]) -> "LogLevel":
        """Accept a level name ("debug", "INFO") or number."""
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                raise ValueError(f"Unknown log level: {value!r}") from None
        return cls(value)


@dataclass
class LogRecord:
    """
    Structured log record.

    Attributes:
        level: Log level
        message: Log message
        timestamp: Record timestamp
        context: Additional context
        exception: Exception info
    """

    level: LogLevel
    message: str
    timestamp: datetime = field(default_factory=datetime.now)
    context: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[BaseException] = None
    logger_name: str = "formcraft"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.name,
            "message": self.message,
            "logger": self.logger_name,
        }

        if self.context:
            data["context"] = self.context

        if self.exception:
            data["exception"] = {
                "type": type(self.exception).__name__,
                "message": str(self.exception),
            }

        return data

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), default=str, ensure_ascii=False)


class LogFormatter:
    """Base log formatter."""

    def format(self, record: LogRecord) -> str:
        raise NotImplementedError


class TextFormatter(LogFormatter):
    """
    Plain text formatter.

    Example output:
        2024-01-15 10:30:45 [DEBUG] Rule failed field=email rule=email
    """

    def __init__(
        self,
        format_string: Optional[str] = None,
        date_format: str = "%Y-%m-%d %H:%M:%S",
    ):
        self.format_string = format_string or "{timestamp} [{level}] {message}"
        self.date_format = date_format

    def format(self, record: LogRecord) -> str:
        message = record.message

        if record.context:
            context_str = " ".join(
                f"{k}={v}" for k, v in record.context.items()
            )
            message = f"{message} {context_str}"

        output = self.format_string.format(
            timestamp=record.timestamp.strftime(self.date_format),
            level=record.level.name,
            message=message,
            logger=record.logger_name,
        )

        if record.exception:
            output += "\n" + "".join(
                traceback.format_exception(
                    type(record.exception),
                    record.exception,
                    record.exception.__traceback__,
                )
            )

        return output


class JsonFormatter(LogFormatter):
    """JSON formatter for structured logging."""

    def format(self, record: LogRecord) -> str:
        return record.to_json()


class LogHandler:
    """Base log handler."""

    def __init__(
        self,
        formatter: Optional[LogFormatter] = None,
        level: LogLevel = LogLevel.DEBUG,
    ):
        self.formatter = formatter or TextFormatter()
        self.level = level

    def handle(self, record: LogRecord) -> None:
        """Handle log record."""
        if record.level >= self.level:
            self.emit(record)

    def emit(self, record: LogRecord) -> None:
        raise NotImplementedError


class StreamHandler(LogHandler):
    """Stream output handler."""

    def __init__(
        self,
        stream: Any = None,
        formatter: Optional[LogFormatter] = None,
        level: LogLevel = LogLevel.DEBUG,
    ):
        super().__init__(formatter, level)
        self.stream = stream or sys.stderr

    def emit(self, record: LogRecord) -> None:
        self.stream.write(self.formatter.format(record) + "\n")
        self.stream.flush()


class MemoryHandler(LogHandler):
    """Keeps records in a list. Useful for tests and debugging."""

    def __init__(self, level: LogLevel = LogLevel.DEBUG):
        super().__init__(level=level)
        self.records: List[LogRecord] = []

    def emit(self, record: LogRecord) -> None:
        self.records.append(record)


class Logger:
    """
    Structured logger.

    Example:
        logger = get_logger("formcraft.validation")

        logger.debug("Rule failed", field="email", rule="email")

        # With context
        logger = logger.with_context(form="signup")
        logger.info("Form validated")
    """

    def __init__(
        self,
        name: str = "formcraft",
        level: LogLevel = LogLevel.INFO,
        handlers: Optional[List[LogHandler]] = None,
    ):
        self.name = name
        self.level = level
        self._handlers = handlers if handlers is not None else []
        self._context: Dict[str, Any] = {}

    @property
    def handlers(self) -> List[LogHandler]:
        return self._handlers

    def add_handler(self, handler: LogHandler) -> "Logger":
        self._handlers.append(handler)
        return self

    def remove_handler(self, handler: LogHandler) -> "Logger":
        self._handlers.remove(handler)
        return self

    def with_context(self, **context: Any) -> "Logger":
        """
        Create logger with additional context.

        The new logger shares handlers with its parent.
        """
        new_logger = Logger(
            name=self.name,
            level=self.level,
            handlers=self._handlers,
        )
        new_logger._context = {**self._context, **context}
        return new_logger

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(
        self,
        level: LogLevel,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        if level < self.level:
            return

        record = LogRecord(
            level=level,
            message=message,
            context={**self._context, **context},
            exception=exception,
            logger_name=self.name,
        )

        for handler in self._handlers:
            try:
                handler.handle(record)
            except Exception:
                # A broken handler must not break form handling
                traceback.print_exc(file=sys.stderr)

    def debug(self, message: str, **context: Any) -> None:
        self._log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self._log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(LogLevel.WARNING, message, **context)

    def error(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        **context: Any,
    ) -> None:
        self._log(LogLevel.ERROR, message, exception, **context)

    def exception(self, message: str, **context: Any) -> None:
        """Log current exception."""
        self._log(LogLevel.ERROR, message, sys.exc_info()[1], **context)


# Global logger registry
_loggers: Dict[str, Logger] = {}


def _make_formatter(format: str) -> LogFormatter:
    return JsonFormatter() if format == "json" else TextFormatter()


def get_logger(
    name: str = "formcraft",
    level: Optional[LogLevel] = None,
) -> Logger:
    """
    Get or create logger.

    New loggers take their level and format from the
    ``logging.level`` / ``logging.format`` configuration keys.
    """
    if name not in _loggers:
        cfg = get_config()
        if level is None:
            level = LogLevel.parse(cfg.get_str("logging.level", "INFO"))
        formatter = _make_formatter(cfg.get_str("logging.format", "text"))

        logger = Logger(name=name, level=level)
        logger.add_handler(StreamHandler(formatter=formatter))
        _loggers[name] = logger

    return _loggers[name]


def configure_logging(
    level: Union[LogLevel, str] = LogLevel.INFO,
    format: str = "text",
    handlers: Optional[List[LogHandler]] = None,
) -> Logger:
    """
    Configure default logging.

    Replaces the handlers and level of every registered logger.

    Args:
        level: Log level
        format: Output format ("text" or "json")
        handlers: Explicit handlers; defaults to a stderr stream handler

    Returns:
        The root "formcraft" logger
    """
    level = LogLevel.parse(level)
    if handlers is None:
        handlers = [StreamHandler(formatter=_make_formatter(format), level=level)]

    root = _loggers.get("formcraft") or Logger(name="formcraft")
    _loggers["formcraft"] = root

    for logger in _loggers.values():
        logger.level = level
        logger._handlers[:] = handlers

    return root
