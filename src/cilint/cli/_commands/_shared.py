"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes
- Console utilities for error handling
"""

from enum import IntEnum
from typing import Never

from rich.console import Console
from rich.markup import escape

__all__ = [
    "ExitCode",
    "exit_with_error",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Exit codes of the cilint commands."""

    SUCCESS = 0
    USAGE_ERROR = 1
    HOOK_CONFLICT = 4
    OPERATIONAL_ERROR = 5
    INVALID = 10


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr.

    Returns:
        Console instance writing to stderr.
    """
    return Console(stderr=True, highlight=False)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.OPERATIONAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display. Rich markup is escaped.
        code: The exit code to use (defaults to OPERATIONAL_ERROR).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(code)
