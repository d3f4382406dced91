"""validationlog - scoped, level-filtered accumulation of validation messages."""

__version__ = "0.1.0"

from validationlog.config import ConfigError, load_enabled_levels
from validationlog.console_logger import ConsoleLogger
from validationlog.levels import (
    DEFAULT_LEVELS,
    InvalidLevelError,
    ValidationLevel,
    level_name,
    parse_levels,
)
from validationlog.logging import Logger, LogLevel, NullLogger
from validationlog.report import build_report_tree, format_summary, print_report
from validationlog.validation_logger import (
    LogMessage,
    ScopeContext,
    ValidationLogger,
    ValidationLoggerBase,
)

__all__ = [
    "__version__",
    "ConfigError",
    "load_enabled_levels",
    "ConsoleLogger",
    "DEFAULT_LEVELS",
    "InvalidLevelError",
    "ValidationLevel",
    "level_name",
    "parse_levels",
    "Logger",
    "LogLevel",
    "NullLogger",
    "build_report_tree",
    "format_summary",
    "print_report",
    "LogMessage",
    "ScopeContext",
    "ValidationLogger",
    "ValidationLoggerBase",
]
