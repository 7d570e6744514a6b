"""Settings model shared by every cilint component."""

from pathlib import Path
from typing import ClassVar, Self
from urllib.parse import urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cilint.config._models._logging import LoggingConfig

DEFAULT_GITLAB_URL = "https://gitlab.com"
"""Root URL used when none is configured and none can be detected."""

DEFAULT_TIMEOUT = 15.0
"""Seconds after which a request to the GitLab API fails."""


def normalize_root_url(value: str) -> str:
    """Normalize a GitLab root URL given by the user.

    Surrounding whitespace and trailing slashes are dropped, and a URL given
    without a scheme is assumed to be HTTPS.

    Args:
        value: Raw URL string.

    Returns:
        Normalized URL, or an empty string for empty input.
    """
    value = value.strip()
    if not value:
        return ""
    if "://" not in value:
        value = f"https://{value}"
    parts = urlsplit(value)
    return urlunsplit(parts._replace(path=parts.path.rstrip("/")))


class Settings(BaseModel):
    """Immutable run settings.

    Built once at startup from defaults, TOML files, environment and
    command-line flags, then handed to each component explicitly.

    Attributes:
        gitlab_url: GitLab root URL override. Empty means auto-detect.
        ci_file: Explicit CI definition file.
        directory: Directory from where files and repositories are searched.
        project_path: Project path override (``group/project``).
        project_id: Project ID override, takes precedence over project_path.
        token: Personal access token.
        use_netrc: Read the token from the ``account`` field of .netrc.
        netrc_file: Explicit .netrc path.
        timeout: HTTP request timeout in seconds.
        verbose: Print details about each step.
        no_color: Disable colored output.
        merged_yaml: Print the merged YAML returned by the API.
        dry_run: Ask the API to simulate pipeline creation.
        dry_run_ref: Branch or tag used by the simulation.
        logging: Logging section.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    gitlab_url: str = ""
    ci_file: Path | None = None
    directory: Path = Field(default_factory=Path.cwd)
    project_path: str = ""
    project_id: str = ""
    token: str = Field(default="", repr=False)
    use_netrc: bool = False
    netrc_file: Path | None = None
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    verbose: bool = False
    no_color: bool = False
    merged_yaml: bool = False
    dry_run: bool = False
    dry_run_ref: str = ""
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("gitlab_url")
    @classmethod
    def _normalize_gitlab_url(cls, value: str) -> str:
        return normalize_root_url(value)

    @field_validator("project_path", "project_id", "token", "dry_run_ref")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    @field_validator("ci_file", "directory", "netrc_file")
    @classmethod
    def _absolute(cls, value: Path | None) -> Path | None:
        if value is None:
            return None
        return value.expanduser().absolute()

    def with_path_argument(self, path: Path) -> Self:
        """Apply a positional PATH argument.

        A directory replaces ``directory`` and a file replaces ``ci_file``.
        A path that does not exist is ignored.

        Args:
            path: The PATH given on the command line.

        Returns:
            Updated settings (or self when nothing changes).
        """
        path = path.expanduser().absolute()
        if path.is_dir():
            return self.model_copy(update={"directory": path})
        if path.exists():
            return self.model_copy(update={"ci_file": path})
        return self
