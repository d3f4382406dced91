"""Diagnostic logging infrastructure for validationlog.

Components that emit diagnostics take a Logger by dependency injection, so
output can go to a rich console, be captured in tests, or be discarded.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Any

__all__ = ["LogLevel", "Logger", "NullLogger"]


class LogLevel(enum.Enum):
    """Diagnostic verbosity levels.

    Lower numeric values represent higher severity / less verbosity.
    """

    FATAL = 0  # Unrecoverable errors
    ERROR = 1  # Validation errors echoed from a ValidationLogger
    WARN = 2  # Warnings, including invalid configuration that was ignored
    INFO = 3  # Normal progress (default)
    DEBUG = 4  # Configuration sources, resolved levels
    TRACE = 5  # Scope entry and exit


class Logger(ABC):
    """Abstract diagnostic logger with a stack of active levels."""

    @abstractmethod
    def log(self, level: LogLevel = LogLevel.INFO, *args: Any, **kwargs: Any) -> None:
        """Log a message if level passes the current threshold."""

    @abstractmethod
    def push_level(self, level: LogLevel) -> None:
        """Temporarily switch to a new threshold."""

    @abstractmethod
    def pop_level(self) -> LogLevel:
        """Restore the previous threshold and return the one removed."""

    def fatal(self, *args: Any, **kwargs: Any) -> None:
        self.log(LogLevel.FATAL, *args, **kwargs)

    def error(self, *args: Any, **kwargs: Any) -> None:
        self.log(LogLevel.ERROR, *args, **kwargs)

    def warn(self, *args: Any, **kwargs: Any) -> None:
        self.log(LogLevel.WARN, *args, **kwargs)

    def info(self, *args: Any, **kwargs: Any) -> None:
        self.log(LogLevel.INFO, *args, **kwargs)

    def debug(self, *args: Any, **kwargs: Any) -> None:
        self.log(LogLevel.DEBUG, *args, **kwargs)

    def trace(self, *args: Any, **kwargs: Any) -> None:
        self.log(LogLevel.TRACE, *args, **kwargs)


class NullLogger(Logger):
    """Logger that discards everything."""

    def log(self, level: LogLevel = LogLevel.INFO, *args: Any, **kwargs: Any) -> None:
        pass

    def push_level(self, level: LogLevel) -> None:
        pass

    def pop_level(self) -> LogLevel:
        return LogLevel.INFO
