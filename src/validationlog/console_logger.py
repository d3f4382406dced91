from __future__ import annotations

from typing import Any

from rich.console import Console

from validationlog.logging import Logger, LogLevel

_LEVEL_STYLES = {
    LogLevel.FATAL: "bold red",
    LogLevel.ERROR: "red",
    LogLevel.WARN: "yellow",
    LogLevel.DEBUG: "dim",
    LogLevel.TRACE: "dim",
}


class ConsoleLogger(Logger):
    """Console-based logger implementation using Rich for formatting.

    Messages less severe than the current level are suppressed. The current
    level is the top of a stack, so callers can raise verbosity temporarily
    (e.g. while validating one suspicious element) and restore it afterwards.
    """

    def __init__(self, console: Console, level: LogLevel = LogLevel.INFO) -> None:
        """Initialize the console logger.

        Args:
            console: Rich Console instance to use for output
            level: Initial log level (default: INFO)
        """
        self._console = console
        self._levels = [level]

    @property
    def level(self) -> LogLevel:
        return self._levels[-1]

    def log(self, level: LogLevel = LogLevel.INFO, *args: Any, **kwargs: Any) -> None:
        """Print to the console if level meets the current threshold.

        Fatal, error, warning, debug and trace messages get a default style
        unless the caller supplies one.

        Args:
            level: The severity level of this message (default: INFO)
            *args: Positional arguments passed to Rich Console.print()
            **kwargs: Keyword arguments passed to Rich Console.print()
        """
        if self._levels[-1].value < level.value:
            return
        if args and "style" not in kwargs and level in _LEVEL_STYLES:
            kwargs["style"] = _LEVEL_STYLES[level]
        self._console.print(*args, **kwargs)

    def push_level(self, level: LogLevel) -> None:
        self._levels.append(level)

    def pop_level(self) -> LogLevel:
        """Pop the current log level and return to the previous level.

        Raises:
            RuntimeError: If attempting to pop the base (initial) log level
        """
        if len(self._levels) <= 1:
            raise RuntimeError("Cannot pop the base log level")
        return self._levels.pop()
