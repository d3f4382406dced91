"""Scoped, level-filtered accumulation of validation messages.

A ValidationLogger collects messages while a validator walks a nested
structure. Each message remembers the scopes that were open when it was
logged, so the finished log can be rendered as an indented report:

    Scope1 {
      Information: InScope: At the information level.
      Scope2 {
        Error: CPU: CPU Failure imminent.
      }
    }
"""

from __future__ import annotations

import types
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from rich.markup import escape

from validationlog.config import load_enabled_levels
from validationlog.levels import (
    DEFAULT_LEVELS,
    InvalidLevelError,
    ValidationLevel,
    is_single_level,
    level_name,
)
from validationlog.logging import Logger, LogLevel, NullLogger

__all__ = [
    "LogMessage",
    "ScopeContext",
    "ValidationLogger",
    "ValidationLoggerBase",
    "common_prefix_length",
]

_INDENT = "  "

_ECHO_LEVELS = {
    ValidationLevel.TRACE: LogLevel.TRACE,
    ValidationLevel.DEBUG: LogLevel.DEBUG,
    ValidationLevel.INFORMATION: LogLevel.INFO,
    ValidationLevel.WARNING: LogLevel.WARN,
    ValidationLevel.ERROR: LogLevel.ERROR,
}


@dataclass(frozen=True)
class LogMessage:
    """A single recorded validation message."""

    scope: tuple[str, ...]
    level: ValidationLevel
    property_name: str
    message: str

    def format(self) -> str:
        """Format as "<Level>: <PropertyName>: <Message>"."""
        return f"{level_name(self.level)}: {self.property_name}: {self.message}"


class ScopeContext:
    """
    Handle for a scope opened by ValidationLogger.begin_scope.

    Closing truncates the logger's scope stack back to where it was before the
    scope was opened, which also closes any nested scopes left open. Closing
    more than once has no further effect. Use it as a context manager so the
    scope is closed however the block exits:

        with logger.begin_scope("address"):
            logger.error("zip", "Missing postal code")
    """

    def __init__(self, owner: ValidationLogger, depth: int):
        self._owner = owner
        self._depth = depth

    @property
    def closed(self) -> bool:
        return self._depth <= 0

    def close(self) -> None:
        if self._depth <= 0:
            return
        self._owner._end_scope(self._depth)
        self._depth = 0

    def __enter__(self) -> ScopeContext:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        self.close()


class ValidationLoggerBase(ABC):
    """Interface validators write against."""

    @abstractmethod
    def begin_scope(self, scope_name: str) -> ScopeContext:
        """Open a nested scope; close the returned handle to leave it."""

    @abstractmethod
    def log(self, level: ValidationLevel, property_name: str, message: str) -> None:
        """Record a message about property_name at a single severity level."""

    @property
    @abstractmethod
    def enabled_levels(self) -> ValidationLevel:
        """Levels that are currently recorded."""

    @abstractmethod
    def is_enabled(self, level: ValidationLevel) -> bool:
        """Return True if messages at level would be recorded."""


class ValidationLogger(ValidationLoggerBase):
    """
    Accumulates validation messages, scope by scope.

    Counters for errors and warnings are maintained for every call, whether
    or not the level is enabled; the messages themselves are only kept when
    their level is enabled.
    """

    def __init__(
        self,
        enabled_levels: ValidationLevel = DEFAULT_LEVELS,
        logger: Optional[Logger] = None,
    ):
        """
        Initialize an empty validation log.

        Args:
            enabled_levels: Levels to record (default: Information, Warning, Error)
            logger: Optional diagnostic logger; recorded messages are echoed to it
        """
        self._enabled_levels = ValidationLevel(enabled_levels)
        self._logger = logger if logger is not None else NullLogger()
        self._scope: list[str] = []
        self._log: list[LogMessage] = []
        self._logged_levels = ValidationLevel.NONE
        self._errors = 0
        self._warnings = 0

    @classmethod
    def from_config(
        cls, start_dir: Optional[Path] = None, logger: Optional[Logger] = None
    ) -> ValidationLogger:
        """
        Create a logger whose enabled levels come from configuration.

        See validationlog.config.load_enabled_levels for the lookup order.

        Raises:
            ConfigError: If a configuration source is invalid
        """
        return cls(load_enabled_levels(start_dir, logger=logger), logger=logger)

    def begin_scope(self, scope_name: str) -> ScopeContext:
        self._scope.append(scope_name)
        self._logger.trace(f"Entered scope {escape(self._scope_path())}")
        return ScopeContext(self, len(self._scope))

    def _end_scope(self, depth: int) -> None:
        if depth > 0 and len(self._scope) >= depth:
            self._logger.trace(f"Leaving scope {escape(self._scope_path())}")
            del self._scope[depth - 1:]

    def log(self, level: ValidationLevel, property_name: str, message: str) -> None:
        """
        Record a message.

        Args:
            level: Exactly one of TRACE, DEBUG, INFORMATION, WARNING or ERROR
            property_name: Name of the property the message is about
            message: Human-readable message

        Raises:
            InvalidLevelError: If level is NONE, a combination of levels, or
                not a validation level at all. Nothing is recorded or counted.
        """
        if not is_single_level(level):
            raise InvalidLevelError(
                f"Must be Trace, Debug, Information, Warning, or Error (got {level!r})"
            )
        level = ValidationLevel(level)

        if level == ValidationLevel.WARNING:
            self._warnings += 1
        elif level == ValidationLevel.ERROR:
            self._errors += 1

        if not level & self._enabled_levels:
            return
        self._logged_levels |= level

        entry = LogMessage(tuple(self._scope), level, property_name, message)
        self._log.append(entry)
        self._echo(entry)

    def _echo(self, entry: LogMessage) -> None:
        text = entry.format()
        if entry.scope:
            text = f"{'/'.join(entry.scope)}: {text}"
        self._logger.log(_ECHO_LEVELS[entry.level], escape(text))

    def _scope_path(self) -> str:
        return "/".join(self._scope)

    def trace(self, property_name: str, message: str) -> None:
        self.log(ValidationLevel.TRACE, property_name, message)

    def debug(self, property_name: str, message: str) -> None:
        self.log(ValidationLevel.DEBUG, property_name, message)

    def information(self, property_name: str, message: str) -> None:
        self.log(ValidationLevel.INFORMATION, property_name, message)

    def warning(self, property_name: str, message: str) -> None:
        self.log(ValidationLevel.WARNING, property_name, message)

    def error(self, property_name: str, message: str) -> None:
        self.log(ValidationLevel.ERROR, property_name, message)

    @property
    def enabled_levels(self) -> ValidationLevel:
        return self._enabled_levels

    @enabled_levels.setter
    def enabled_levels(self, value: ValidationLevel) -> None:
        self._enabled_levels = ValidationLevel(value)

    def is_enabled(self, level: ValidationLevel) -> bool:
        return (level & self._enabled_levels) != 0

    @property
    def logged_levels(self) -> ValidationLevel:
        """Union of the levels of every recorded message."""
        return self._logged_levels

    @property
    def errors(self) -> int:
        """Number of ERROR calls, including ones that were not recorded."""
        return self._errors

    @property
    def warnings(self) -> int:
        """Number of WARNING calls, including ones that were not recorded."""
        return self._warnings

    @property
    def passed_validation(self) -> bool:
        return not self._logged_levels & ValidationLevel.ERROR

    @property
    def has_warning(self) -> bool:
        return bool(self._logged_levels & ValidationLevel.WARNING)

    def has_flag(self, level: ValidationLevel) -> bool:
        return (self._logged_levels & level) != 0

    @property
    def scope(self) -> tuple[str, ...]:
        """Names of the currently open scopes, outermost first."""
        return tuple(self._scope)

    @property
    def log_messages(self) -> Sequence[LogMessage]:
        """Recorded messages in the order they were logged."""
        return tuple(self._log)

    def render(self) -> str:
        """
        Render the log as indented text with a brace block per scope.

        Scopes are reconstructed by comparing each message's scope with the
        previous message's: scopes past the common prefix are closed, then the
        new message's remaining scopes are opened. Each level of nesting
        indents by two spaces. An empty log renders as an empty string.
        """
        lines: list[str] = []
        previous: tuple[str, ...] = ()

        for entry in self._log:
            match = common_prefix_length(previous, entry.scope)

            for depth in range(len(previous), match, -1):
                lines.append(_INDENT * (depth - 1) + "}")

            previous = entry.scope
            for index in range(match, len(previous)):
                lines.append(_INDENT * index + previous[index] + " {")

            lines.append(_INDENT * len(previous) + entry.format())

        for depth in range(len(previous), 0, -1):
            lines.append(_INDENT * (depth - 1) + "}")

        return "".join(line + "\n" for line in lines)

    def __str__(self) -> str:
        return self.render()


def common_prefix_length(a: Sequence[str], b: Sequence[str]) -> int:
    """Length of the longest common prefix of two scope paths (exact string match)."""
    length = 0
    for left, right in zip(a, b):
        if left != right:
            break
        length += 1
    return length
