"""The command-line interface for cilint."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from cilint import APP_NAME, __version__
from cilint.config import ConfigError, load_settings
from cilint.utils import create_cli_logger, open_log_file

from ._commands import ExitCode, exit_with_error, register_commands
from ._context import CLIContext

HELP = """Lint your .gitlab-ci.yml using the GitLab CI Lint API.

The CI Lint API is tied to a GitLab project. By default the GitLab root URL
and the project path are detected from the 'origin' remote of the git
repository (http or ssh remotes). Use --gitlab-url, --project-path or
--project-id to target another instance or project; --project-id has
precedence over --project-path.

If the instance or project needs authentication, give a personal access
token with --personal-access-token, or use --netrc to read it from the
'account' field of the host's .netrc entry (the 'default' entry is ignored).
"""


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the cilint application.

    Run it through ``app.meta`` so global options are parsed before the
    command.

    Args:
        console: Console for regular output. Defaults to stdout.
        error_console: Console for errors. Defaults to stderr.
        exit_on_error: Whether cyclopts exits on parsing errors.

    Returns:
        The configured application.
    """
    app = App(
        name=APP_NAME,
        help=HELP,
        version=__version__,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        gitlab_url: Annotated[
            str | None,
            Parameter(
                name=["--gitlab-url", "-u"],
                env_var="GCL_GITLAB_URL",
                help="Root URL of the GitLab instance "
                "(default: auto-detect from remote origin, else https://gitlab.com)",
            ),
        ] = None,
        ci_file: Annotated[
            Path | None,
            Parameter(
                name=["--ci-file", "-f"],
                env_var="GCL_GITLAB_CI_FILE",
                help="Path to the gitlab-ci file",
            ),
        ] = None,
        directory: Annotated[
            Path | None,
            Parameter(
                name=["--directory", "-d"],
                env_var="GCL_DIRECTORY",
                help="Directory from where to search for the gitlab-ci file "
                "and git repository (default: current directory)",
            ),
        ] = None,
        token: Annotated[
            str | None,
            Parameter(
                name=["--personal-access-token", "-p"],
                env_var="GCL_PERSONAL_ACCESS_TOKEN",
                help="Personal access token. Has precedence over .netrc",
            ),
        ] = None,
        netrc: Annotated[
            bool,
            Parameter(
                name=["--netrc", "-n"],
                env_var="GCL_NETRC",
                help="Read the personal access token as 'account' from .netrc",
            ),
        ] = False,
        netrc_file: Annotated[
            Path | None,
            Parameter(
                name="--netrc-file",
                env_var="GCL_NETRC_FILE",
                help="Path of the .netrc file (default: $NETRC, then ~/.netrc)",
            ),
        ] = None,
        project_path: Annotated[
            str | None,
            Parameter(
                name=["--project-path", "-P"],
                env_var=["CI_PROJECT_PATH", "GCL_PROJECT_PATH"],
                help="Path of the GitLab project. Has precedence over the "
                "path guessed from the remote",
            ),
        ] = None,
        project_id: Annotated[
            str | None,
            Parameter(
                name=["--project-id", "-I"],
                env_var=["CI_PROJECT_ID", "GCL_PROJECT_ID"],
                help="ID of the GitLab project. Has precedence over --project-path",
            ),
        ] = None,
        timeout: Annotated[
            float | None,
            Parameter(
                name=["--timeout", "-t"],
                env_var="GCL_TIMEOUT",
                help="Seconds after which requests to the GitLab API fail "
                "(default: 15)",
            ),
        ] = None,
        no_color: Annotated[
            bool,
            Parameter(
                name="--no-color",
                env_var="GCL_NOCOLOR",
                help="Disable colored output",
            ),
        ] = False,
        verbose: Annotated[
            bool,
            Parameter(
                name=["--verbose", "-v"], env_var="GCL_VERBOSE", help="Verbose mode"
            ),
        ] = False,
        merged_yaml: Annotated[
            bool,
            Parameter(
                name=["--merged-yaml", "-m"],
                env_var="GCL_INCLUDE_MERGED_YAML",
                help="Include the merged yaml in the output",
            ),
        ] = False,
        dry_run: Annotated[
            bool,
            Parameter(
                name=["--dry-run", "-s"],
                env_var="GCL_DRY_RUN",
                help="Run a pipeline creation simulation",
            ),
        ] = False,
        dry_run_ref: Annotated[
            str | None,
            Parameter(
                name="--dry-run-ref",
                env_var="GCL_DRY_RUN_REF",
                help="Branch or tag used by the pipeline creation simulation",
            ),
        ] = None,
        config: Annotated[
            Path | None,
            Parameter(
                name="--config", env_var="GCL_CONFIG", help="Path to a TOML config file"
            ),
        ] = None,
        log_file: Annotated[
            str | None,
            Parameter(
                name="--log-file",
                env_var="GCL_LOG_FILE",
                help="Write logs to this file instead of stderr",
            ),
        ] = None,
    ) -> None:
        """Launch cilint with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
        """
        # Build CLI overrides from flags and environment
        values: dict[str, object | None] = {
            "gitlab_url": gitlab_url,
            "ci_file": ci_file,
            "directory": directory,
            "token": token,
            "netrc_file": netrc_file,
            "project_path": project_path,
            "project_id": project_id,
            "timeout": timeout,
            "dry_run_ref": dry_run_ref,
        }
        cli_overrides: dict[str, object] = {
            key: value for key, value in values.items() if value is not None
        }
        flags = {
            "use_netrc": netrc,
            "no_color": no_color,
            "verbose": verbose,
            "merged_yaml": merged_yaml,
            "dry_run": dry_run,
        }
        cli_overrides.update({key: True for key, value in flags.items() if value})
        if log_file is not None:
            cli_overrides["logging"] = {"file": log_file}

        out = console or Console(no_color=no_color, highlight=False)
        err = error_console or Console(stderr=True, no_color=no_color, highlight=False)

        try:
            settings = load_settings(config_path=config, cli_overrides=cli_overrides)
        except ConfigError as e:
            exit_with_error(str(e), ExitCode.USAGE_ERROR, console=err)

        if settings.no_color and console is None:
            out = Console(no_color=True, highlight=False)
            err = Console(stderr=True, no_color=True, highlight=False)

        log_stream = None
        if settings.logging.file:
            try:
                log_stream = open_log_file(settings.logging.file)
            except OSError as e:
                exit_with_error(
                    f"Unable to open log file '{settings.logging.file}': {e}",
                    ExitCode.USAGE_ERROR,
                    console=err,
                )

        cli_logger = create_cli_logger(
            level=settings.logging.level.value,
            log_format=settings.logging.format.value,  # type: ignore[arg-type]
            log_stream=log_stream,
            verbose=settings.verbose,
        )

        ctx = CLIContext(
            settings=settings,
            logger=cli_logger,
            console=out,
            error_console=err,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()
            if log_stream is not None:
                log_stream.close()

    register_commands(app)
    return app


def main() -> None:
    """Default entrypoint for the `cilint` CLI."""
    app = create_app()
    app.meta()
