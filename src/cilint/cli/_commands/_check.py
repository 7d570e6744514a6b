"""The check command: validate the CI definition file."""

from pathlib import Path
from typing import Annotated, assert_never

from cyclopts import Parameter
from rich.markup import escape

from cilint.cli._context import CLIContext
from cilint.enums import ValidationStatus
from cilint.exceptions import ConfigError, ResolutionError, TransportFailureError
from cilint.git import find_ci_file
from cilint.gitlab import LintOptions, determine_target, lint

from ._helpers import connect, display_path, locate_repository
from ._shared import ExitCode, exit_with_error

PATH_HELP = (
    "A file is used as the gitlab-ci file to check, a directory as the place "
    "to search for the gitlab-ci file and git repository. "
    "Takes precedence over --ci-file and --directory."
)


def check(
    path: Annotated[Path | None, Parameter(help=PATH_HELP)] = None,
) -> None:
    """Check the .gitlab-ci.yml (default command if none is given).

    Finds the gitlab-ci file and the git repository, derives the GitLab
    instance and project from the origin remote unless they are configured,
    then sends the file to the project's CI Lint API.
    """
    ctx = CLIContext.get_current()
    settings = ctx.settings if path is None else ctx.settings.with_path_argument(path)
    logger = ctx.logger.bind(command="check")
    console = ctx.console
    error_console = ctx.error_console

    ctx.detail(
        f"Settings:\n  directory: {settings.directory}\n  ci file: {settings.ci_file}"
    )

    ci_file = settings.ci_file or find_ci_file(settings.directory)
    if ci_file is None:
        console.print("No gitlab-ci file found")
        return
    shown = display_path(ci_file)

    git_dir = locate_repository(settings, ci_file)
    if git_dir is None:
        ctx.warn("No git repository found")
    else:
        ctx.detail(f"Git repository found: {git_dir}")

    try:
        target = determine_target(settings, git_dir, logger=logger)
    except (ConfigError, ResolutionError) as e:
        exit_with_error(str(e), console=error_console)

    if target.default_root:
        ctx.warn(f"No GitLab URL configured nor detected, using '{target.root_url}'")

    try:
        content = ci_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        exit_with_error(
            f"Error while reading '{shown}' file content: {e}", console=error_console
        )

    try:
        client, endpoint = connect(settings, target, logger=logger)
    except (ResolutionError, TransportFailureError) as e:
        exit_with_error(
            f"No valid and responding GitLab API URL found: {e}",
            console=error_console,
        )

    ctx.detail(f"API url found: {endpoint.url}")
    console.print(f"Validating {escape(shown)}... ", end="")

    with client:
        outcome = lint(
            client,
            endpoint,
            content,
            LintOptions(
                include_merged_yaml=settings.merged_yaml,
                dry_run=settings.dry_run,
                ref=settings.dry_run_ref,
            ),
            logger=logger,
        )

    match outcome.status:
        case ValidationStatus.VALID:
            console.print("[green]OK[/green]")
        case ValidationStatus.INVALID:
            console.print("[red]KO[/red]")
        case ValidationStatus.FAILED:
            console.print("[red]ERROR[/red]")
            exit_with_error(
                f"Error querying GitLab API '{endpoint.url}' for CI lint: "
                f"{outcome.error}",
                console=error_console,
            )
        case _:
            assert_never(outcome.status)

    for warning in outcome.warnings:
        ctx.warn(warning)

    if settings.merged_yaml and outcome.merged_yaml:
        console.print("Merged yaml:")
        console.print(outcome.merged_yaml, markup=False)

    if outcome.status is ValidationStatus.INVALID:
        for message in outcome.messages:
            error_console.print(f"[red]{escape(message)}[/red]")
        raise SystemExit(ExitCode.INVALID)
