"""CLI context for global state management.

The CLIContext is set once by the meta entry point, after settings are loaded,
and read by every command through a contextvar.
"""

import contextvars
from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape
from structlog.typing import FilteringBoundLogger

from cilint.config import Settings
from cilint.utils import create_cli_logger

_current_cli_context: contextvars.ContextVar["CLIContext | None"] = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Settings, logger and consoles shared by the commands.

    Attributes:
        settings: Settings built from defaults, files, environment and flags.
        logger: Structured logger for diagnostics.
        console: Console for regular output.
        error_console: Console for errors, writing to stderr.
    """

    settings: Settings
    logger: FilteringBoundLogger = field(repr=False)
    console: Console = field(repr=False)
    error_console: Console = field(repr=False)

    def detail(self, message: str) -> None:
        """Print a message only in verbose mode."""
        if self.settings.verbose:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def warn(self, message: str) -> None:
        """Print a warning in yellow."""
        self.console.print(f"[yellow]{escape(message)}[/yellow]")

    @classmethod
    def get_current(cls) -> "CLIContext":
        """Get current active CLIContext, or create a default if not set."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx

        return cls(
            settings=Settings(),
            logger=create_cli_logger(),
            console=Console(highlight=False),
            error_console=Console(stderr=True, highlight=False),
        )

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:
        """Set the current active CLIContext."""
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to default context.

        This is primarily useful for testing to ensure a clean state between tests.
        """
        _current_cli_context.set(None)
