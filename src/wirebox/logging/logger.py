# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""
Logger implementation for wirebox.

This module provides the default logger implementation based on Python's
standard logging module, enhanced with structured logging capabilities.
"""

from __future__ import annotations

import contextlib
import datetime
import enum
import json
import logging
import sys
from contextvars import ContextVar
from logging import StreamHandler
from typing import TYPE_CHECKING, Any

from wirebox.logging.config import LoggingSettings
from wirebox.logging.level import LogLevel

if TYPE_CHECKING:
    from collections.abc import Generator

# Context variable for storing log context data
_log_context: ContextVar[dict[str, Any]] = ContextVar("wirebox_log_context", default={})

_CONTEXT_ATTR = "wirebox_context"


class StructuredFormatter(logging.Formatter):
    """Formatter that supports structured logging with context data."""

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
    ) -> None:
        """Initialize a structured formatter.

        Args:
            json_format: Whether to format logs as JSON
            include_timestamp: Whether to include timestamps in logs
        """
        self.json_format = json_format
        self.include_timestamp = include_timestamp

        fmt = "%(message)s [%(levelname)s] %(name)s"
        if include_timestamp:
            fmt = "%(asctime)s " + fmt

        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        extra: dict[str, Any] = dict(_log_context.get())
        extra.update(getattr(record, _CONTEXT_ATTR, None) or {})

        if self.json_format:
            return self._format_json(record, extra)
        return self._format_text(super().format(record), extra)

    def _format_json(self, record: logging.LogRecord, extra: dict[str, Any]) -> str:
        log_data: dict[str, Any] = {
            "message": record.getMessage(),
            "level": record.levelname,
            "logger": record.name,
        }
        if self.include_timestamp:
            log_data["timestamp"] = self.formatTime(record, self.datefmt)
        log_data.update(extra)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=_json_default)

    def _format_text(self, message: str, extra: dict[str, Any]) -> str:
        if not extra:
            return message
        ctx_str = " ".join(f"{k}={self._format_value(v)}" for k, v in extra.items())
        return f"{message} {ctx_str}"

    def _format_value(self, value: Any) -> str:
        if isinstance(value, str):
            # Quote strings that contain spaces
            if " " in value:
                return f'"{value}"'
            return value
        if isinstance(value, enum.Enum):
            return str(value.value)
        if isinstance(value, datetime.datetime | datetime.date):
            return value.isoformat()
        try:
            return json.dumps(value, default=_json_default)
        except (TypeError, ValueError):
            return str(value)


def _json_default(obj: Any) -> Any:
    if isinstance(obj, datetime.datetime | datetime.date):
        return obj.isoformat()
    if isinstance(obj, enum.Enum):
        return obj.value
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    return str(obj)


class WireboxLogger:
    """Default logger for wirebox.

    Wraps a standard library logger and attaches keyword context to each
    record so the ``StructuredFormatter`` can render it.
    """

    def __init__(
        self,
        name: str,
        settings: LoggingSettings | None = None,
        level: LogLevel | str | None = None,
    ) -> None:
        self.name = name
        self._settings = settings or LoggingSettings.load()
        self._logger = logging.getLogger(name)
        self._bound_context: dict[str, Any] = {}
        self._configure(level or self._settings.level)

    def _configure(self, level: LogLevel | str) -> None:
        self.set_level(level)

        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)

        formatter = StructuredFormatter(
            json_format=self._settings.json_format,
            include_timestamp=self._settings.include_timestamp,
        )

        if self._settings.console_enabled:
            console = StreamHandler(sys.stderr)
            console.setFormatter(formatter)
            self._logger.addHandler(console)

        if self._settings.file_enabled and self._settings.file_path:
            file_handler = logging.FileHandler(self._settings.file_path)
            file_handler.setFormatter(formatter)
            self._logger.addHandler(file_handler)

        self._logger.propagate = False

    @property
    def stdlib_logger(self) -> logging.Logger:
        """The wrapped standard library logger."""
        return self._logger

    def set_level(self, level: LogLevel | str) -> None:
        if isinstance(level, str):
            level = LogLevel.from_string(level)
        self._logger.setLevel(level.to_stdlib_level())

    def is_enabled_for(self, level: LogLevel) -> bool:
        return self._logger.isEnabledFor(level.to_stdlib_level())

    def _log(self, level: int, msg: str, exc_info: bool = False, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        context = {**self._bound_context, **kwargs}
        self._logger.log(level, msg, exc_info=exc_info, extra={_CONTEXT_ATTR: context})

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def critical(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, exc_info=exc_info, **kwargs)

    @contextlib.contextmanager
    def context(self, **kwargs: Any) -> Generator[None]:
        """Add context information to all logs emitted within this block.

        Args:
            **kwargs: Context key-value pairs
        """
        current = _log_context.get()
        token = _log_context.set({**current, **kwargs})
        try:
            yield
        finally:
            _log_context.reset(token)

    def bind(self, **kwargs: Any) -> WireboxLogger:
        """Create a new logger with bound context values.

        The bound logger shares the underlying standard library logger and
        its handlers.
        """
        logger = WireboxLogger.__new__(WireboxLogger)
        logger.name = self.name
        logger._settings = self._settings
        logger._logger = self._logger
        logger._bound_context = {**self._bound_context, **kwargs}
        return logger


def get_logger(name: str, level: LogLevel | str | None = None) -> WireboxLogger:
    """Get a logger for the specified name.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override

    Returns:
        Configured logger instance
    """
    return WireboxLogger(name, settings=LoggingSettings.load(), level=level)
