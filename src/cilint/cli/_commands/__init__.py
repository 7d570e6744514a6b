"""cilint CLI commands."""

from cyclopts import App

from cilint import APP_NAME, __version__

from ._check import check
from ._hooks import install, uninstall
from ._shared import ExitCode, exit_with_error, get_error_console

__all__ = [
    "ExitCode",
    "check",
    "exit_with_error",
    "get_error_console",
    "install",
    "register_commands",
    "uninstall",
]


def register_commands(app: App) -> None:
    app.default(check)
    app.command(check, name="check")
    app.command(install, name="install")
    app.command(uninstall, name="uninstall")

    @app.command(name="version")
    def _version() -> None:  # pyright: ignore[reportUnusedFunction]
        """Print the version information."""
        print(f"{APP_NAME} version={__version__}")  # noqa: T201
