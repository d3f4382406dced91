"""Rich rendering of a finished validation log."""

from __future__ import annotations

import os
import sys
from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from validationlog.levels import ValidationLevel, level_name
from validationlog.validation_logger import LogMessage, ValidationLogger, common_prefix_length

__all__ = [
    "build_report_tree",
    "format_summary",
    "get_failure_string",
    "get_pass_string",
    "print_report",
]

_LEVEL_COLORS = {
    ValidationLevel.TRACE: "dim",
    ValidationLevel.DEBUG: "blue",
    ValidationLevel.INFORMATION: "white",
    ValidationLevel.WARNING: "yellow",
    ValidationLevel.ERROR: "red",
}


def _supports_unicode() -> bool:
    """
    Check if the terminal supports Unicode characters.

    Returns:
    True if terminal supports UTF-8, False otherwise
    """
    # Classic Windows console (conhost)
    if os.name == "nt" and "WT_SESSION" not in os.environ:
        return False

    encoding = sys.stdout.encoding
    if not encoding:
        return False

    try:
        "✓✗".encode(encoding)
        return True
    except UnicodeEncodeError:
        return False


def build_report_tree(messages: Iterable[LogMessage], title: str = "Validation report") -> Tree:
    """Build a Rich Tree with a branch per scope and a leaf per message.

    Scopes are reconstructed the same way as ValidationLogger.render: only
    the part of a message's scope that differs from the previous message's
    scope opens new branches.

    Args:
        messages: Recorded messages in logging order
        title: Label of the root node

    Returns:
        Rich Tree for display
    """
    root = Tree(f"[bold]{escape(title)}[/bold]")
    branches = [root]
    previous: tuple[str, ...] = ()

    for message in messages:
        match = common_prefix_length(previous, message.scope)
        del branches[match + 1:]

        previous = message.scope
        for name in previous[match:]:
            branches.append(branches[-1].add(f"[cyan]{escape(name)}[/cyan]"))

        color = _LEVEL_COLORS[message.level]
        branches[-1].add(
            f"[{color}]{level_name(message.level)}[/{color}]: "
            f"[bold]{escape(message.property_name)}[/bold]: {escape(message.message)}"
        )

    return root


def get_pass_string() -> str:
    return "✓" if _supports_unicode() else "[ OK ]"


def get_failure_string() -> str:
    return "✗" if _supports_unicode() else "[ FAIL ]"


def format_summary(validation_logger: ValidationLogger) -> str:
    """Summarize the outcome, e.g. "✗ Failed validation (2 errors, 1 warning)"."""
    errors = validation_logger.errors
    warnings = validation_logger.warnings
    counts = (
        f"{errors} error{'s' if errors != 1 else ''}, "
        f"{warnings} warning{'s' if warnings != 1 else ''}"
    )

    if validation_logger.passed_validation:
        return f"[green]{get_pass_string()} Passed validation ({counts})[/green]"
    return f"[red]{get_failure_string()} Failed validation ({counts})[/red]"


def print_report(
    console: Console, validation_logger: ValidationLogger, title: str = "Validation report"
) -> None:
    """Print the log as a tree followed by the pass/fail summary."""
    messages = validation_logger.log_messages
    if messages:
        console.print(build_report_tree(messages, title))
    else:
        console.print(f"[bold]{escape(title)}[/bold]: No messages logged")
    console.print(format_summary(validation_logger))
