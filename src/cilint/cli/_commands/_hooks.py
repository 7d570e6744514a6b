"""The install and uninstall commands: manage the git pre-commit hook link."""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter
from rich.markup import escape

from cilint.cli._context import CLIContext
from cilint.enums import HookState
from cilint.exceptions import ConfigError, ResolutionError, TransportFailureError
from cilint.git import PRE_COMMIT_HOOK, install_hook, uninstall_hook
from cilint.gitlab import determine_target, read_remote

from ._check import PATH_HELP
from ._helpers import connect, locate_repository
from ._shared import ExitCode, exit_with_error


def install(
    path: Annotated[Path | None, Parameter(help=PATH_HELP)] = None,
) -> None:
    """Install as git pre-commit hook.

    The hook is a symbolic link to the cilint executable. An existing hook
    is never replaced.
    """
    ctx = CLIContext.get_current()
    settings = ctx.settings if path is None else ctx.settings.with_path_argument(path)
    logger = ctx.logger.bind(command="install")
    console = ctx.console
    error_console = ctx.error_console

    git_dir = locate_repository(settings, settings.ci_file)
    if git_dir is None:
        exit_with_error(
            "No git repository found, can't install a hook", console=error_console
        )
    ctx.detail(f"Git repository found: {git_dir}")

    try:
        remote = read_remote(git_dir)
    except ConfigError as e:
        exit_with_error(
            f"Failed to find origin remote url in repository: {e}",
            console=error_console,
        )

    if remote is None:
        if settings.verbose:
            ctx.warn("No origin remote found in repository")
    else:
        try:
            target = determine_target(settings, git_dir, logger=logger)
            client, endpoint = connect(settings, target, logger=logger)
        except (ConfigError, ResolutionError, TransportFailureError) as e:
            exit_with_error(
                "No valid and responding GitLab API URL found from repository's "
                f"origin remote, can't install a hook: {e}",
                console=error_console,
            )
        client.close()
        ctx.detail(f"API url found: {endpoint.url}")

    result = install_hook(git_dir, PRE_COMMIT_HOOK, logger=logger)
    match result.state:
        case HookState.CREATED:
            console.print(
                f"[green]Git pre-commit hook installed in "
                f"{escape(str(git_dir.parent))}[/green]"
            )
        case HookState.ALREADY_CREATED:
            console.print("[cyan]Already installed.[/cyan]")
        case HookState.ALREADY_EXISTS:
            error_console.print(
                "[yellow]A pre-commit hook already exists\n"
                "Please install manually by adding a call to me in your "
                "pre-commit script.[/yellow]"
            )
            raise SystemExit(ExitCode.HOOK_CONFLICT)
        case HookState.ERROR:
            exit_with_error(
                f"Unable to install hook '{result.path}': {result.error}",
                console=error_console,
            )
        case HookState.DELETED | HookState.NOT_EXISTING | HookState.NOT_MATCHING:
            exit_with_error(
                f"Unexpected hook state: {result.state}", console=error_console
            )


def uninstall(
    path: Annotated[Path | None, Parameter(help=PATH_HELP)] = None,
) -> None:
    """Uninstall the git pre-commit hook.

    Only a link to the cilint executable is removed.
    """
    ctx = CLIContext.get_current()
    settings = ctx.settings if path is None else ctx.settings.with_path_argument(path)
    logger = ctx.logger.bind(command="uninstall")
    console = ctx.console
    error_console = ctx.error_console

    git_dir = locate_repository(settings, settings.ci_file)
    if git_dir is None:
        exit_with_error(
            "No git repository found, can't uninstall a hook", console=error_console
        )
    ctx.detail(f"Git repository found: {git_dir}")

    result = uninstall_hook(git_dir, PRE_COMMIT_HOOK, logger=logger)
    match result.state:
        case HookState.DELETED:
            console.print("[green]Git pre-commit hook uninstalled.[/green]")
        case HookState.NOT_EXISTING:
            console.print("[yellow]No pre-commit hook found.[/yellow]")
        case HookState.NOT_MATCHING:
            error_console.print(
                "[red]Unknown pre-commit hook\nPlease uninstall manually.[/red]"
            )
            raise SystemExit(ExitCode.HOOK_CONFLICT)
        case HookState.ERROR:
            exit_with_error(
                f"Unable to uninstall hook '{result.path}': {result.error}",
                console=error_console,
            )
        case HookState.CREATED | HookState.ALREADY_CREATED | HookState.ALREADY_EXISTS:
            exit_with_error(
                f"Unexpected hook state: {result.state}", console=error_console
            )
