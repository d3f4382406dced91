"""Severity levels for validation messages."""

from __future__ import annotations

import enum
import re

__all__ = [
    "ValidationLevel",
    "DEFAULT_LEVELS",
    "SINGLE_LEVELS",
    "InvalidLevelError",
    "is_single_level",
    "level_name",
    "parse_levels",
]


class ValidationLevel(enum.IntFlag):
    """Bitmask of validation message severities.

    A logger is enabled for an arbitrary combination of these flags, while
    every logged message carries exactly one of the five single levels.
    """

    NONE = 0
    TRACE = 1  # Verbose tracing of the validation system
    DEBUG = 2  # Debugging the validation system itself
    INFORMATION = 4  # Facts about the element that do not affect its validity
    WARNING = 8  # Tolerable problem, or one the validator corrected unambiguously
    ERROR = 16  # The element failed validation
    ALL = 31


DEFAULT_LEVELS = ValidationLevel.INFORMATION | ValidationLevel.WARNING | ValidationLevel.ERROR

SINGLE_LEVELS = (
    ValidationLevel.TRACE,
    ValidationLevel.DEBUG,
    ValidationLevel.INFORMATION,
    ValidationLevel.WARNING,
    ValidationLevel.ERROR,
)

_DISPLAY_NAMES = {
    ValidationLevel.NONE: "None",
    ValidationLevel.TRACE: "Trace",
    ValidationLevel.DEBUG: "Debug",
    ValidationLevel.INFORMATION: "Information",
    ValidationLevel.WARNING: "Warning",
    ValidationLevel.ERROR: "Error",
    ValidationLevel.ALL: "All",
}

_NAME_ALIASES = {
    "none": ValidationLevel.NONE,
    "trace": ValidationLevel.TRACE,
    "debug": ValidationLevel.DEBUG,
    "information": ValidationLevel.INFORMATION,
    "info": ValidationLevel.INFORMATION,
    "warning": ValidationLevel.WARNING,
    "warn": ValidationLevel.WARNING,
    "error": ValidationLevel.ERROR,
    "all": ValidationLevel.ALL,
}

_SEPARATORS = re.compile(r"[|,\s]+")


class InvalidLevelError(ValueError):
    """Raised when a message is logged with something other than a single level."""

    pass


def is_single_level(level: object) -> bool:
    """Return True if level is exactly one of Trace, Debug, Information, Warning or Error."""
    return level in SINGLE_LEVELS


def level_name(level: ValidationLevel | int) -> str:
    """Return the textual name of a level or combination of levels.

    Single levels use their display name ("Warning"); combinations are listed
    from least to most severe, separated by ", ".

    Example:
        >>> level_name(ValidationLevel.WARNING | ValidationLevel.ERROR)
        'Warning, Error'
    """
    level = ValidationLevel(level)
    if level in _DISPLAY_NAMES:
        return _DISPLAY_NAMES[level]
    return ", ".join(_DISPLAY_NAMES[single] for single in SINGLE_LEVELS if level & single)


def parse_levels(text: str) -> ValidationLevel:
    """Parse a textual level list such as "Warning|Error" into a bitmask.

    Names are case-insensitive and may be separated by '|', ',' or whitespace.
    "Info" and "Warn" are accepted as short forms. An empty string means NONE.

    Args:
        text: Level names to combine

    Returns:
        The union of all named levels

    Raises:
        ValueError: If any name is not a known level
    """
    result = ValidationLevel.NONE
    for token in _SEPARATORS.split(text.strip()):
        if not token:
            continue
        try:
            result |= _NAME_ALIASES[token.lower()]
        except KeyError:
            raise ValueError(f"Unknown validation level: {token!r}") from None
    return result
