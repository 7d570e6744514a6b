"""Git remote URL parsing and origin lookup."""

import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

from dulwich.config import ConfigFile

from cilint.exceptions import GitConfigError

from ._locator import GIT_CONFIG_NAME

_HTTP_REMOTE = re.compile(r"^(https?://[^/]*)(?:/(.*))?$")
_SSH_URL_REMOTE = re.compile(
    r"^(?:ssh|git\+ssh|git)://(?:[^@/]*@)?([^/:]+)(?::\d+)?(?:/(.*))?$"
)
_SCP_REMOTE = re.compile(r"^(?:[^@/]*@)?([^:/]+)(?::(.*))?$")

_ORIGIN_SECTION = (b"remote", b"origin")


@dataclass(frozen=True, slots=True)
class RemoteDescriptor:
    """Root URL and project path extracted from a git remote.

    Attributes:
        root_url: Scheme and host (and port for HTTP remotes), e.g.
            ``https://gitlab.com``. Empty when the remote is empty.
        project_path: Slash-separated project path without ``.git``.
    """

    root_url: str
    project_path: str


def _clean_path(path: str | None) -> str:
    if not path:
        return ""
    return path.strip("/").removesuffix(".git")


def _http_root(remote_url: str) -> str:
    """Scheme, host and port of an HTTP remote, credentials dropped."""
    parts = urlsplit(remote_url)
    host = parts.netloc.rpartition("@")[2]
    return f"{parts.scheme}://{host}"


def parse_remote_url(remote_url: str) -> RemoteDescriptor:
    """Parse an HTTP(S) or SSH git remote into a root URL and project path.

    - ``https://[user[:password]@]host[:port]/group/project.git`` gives
      (``https://host[:port]``, ``group/project``); credentials are dropped
    - ``[user@]host[:group/project.git]`` gives
      (``https://host``, ``group/project``)
    - ``ssh://[user@]host[:port]/group/project.git`` gives
      (``https://host``, ``group/project``)

    Anything else is taken as a bare host with an empty path.

    Args:
        remote_url: Raw remote URL from the git configuration.

    Returns:
        The parsed remote descriptor; both fields empty for empty input.
    """
    remote_url = remote_url.strip()
    if not remote_url:
        return RemoteDescriptor(root_url="", project_path="")

    if match := _HTTP_REMOTE.match(remote_url):
        return RemoteDescriptor(
            root_url=_http_root(match.group(1)),
            project_path=_clean_path(match.group(2)),
        )

    if match := _SSH_URL_REMOTE.match(remote_url):
        return RemoteDescriptor(
            root_url=f"https://{match.group(1)}",
            project_path=_clean_path(match.group(2)),
        )

    if match := _SCP_REMOTE.match(remote_url):
        return RemoteDescriptor(
            root_url=f"https://{match.group(1)}",
            project_path=_clean_path(match.group(2)),
        )

    return RemoteDescriptor(root_url=f"https://{remote_url}", project_path="")


def read_origin_url(git_dir: Path) -> str | None:
    """Read the URL of the ``origin`` remote from a repository config.

    Args:
        git_dir: The git metadata directory.

    Returns:
        The configured URL, or None if there is no origin remote or no url key.

    Raises:
        GitConfigError: If the config file cannot be read or parsed.
    """
    config_path = git_dir / GIT_CONFIG_NAME
    try:
        config = ConfigFile.from_path(str(config_path))
    except (OSError, ValueError) as e:
        msg = f"Unable to read git configuration '{config_path}': {e}"
        raise GitConfigError(msg, repository=git_dir) from e

    try:
        url = config.get(_ORIGIN_SECTION, b"url")
    except KeyError:
        return None

    return url.decode() if isinstance(url, bytes) else url
