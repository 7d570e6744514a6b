"""Resolve and confirm the CI Lint endpoint of a GitLab project.

The lint request is a POST, and HTTP clients do not replay a POST on a
redirect. The endpoint is therefore probed first with a GET that follows
redirects (HTTP to HTTPS upgrades, canonical host rewrites...), and the root
URL reached by the probe is used to build the URL the POST is sent to.
"""

from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

import httpx
from structlog.typing import FilteringBoundLogger

from cilint.config import DEFAULT_GITLAB_URL, Settings
from cilint.enums import ProjectSource
from cilint.exceptions import (
    EndpointUnreachableError,
    GitConfigError,
    ResolutionError,
    TransportFailureError,
)
from cilint.git import RemoteDescriptor, parse_remote_url, read_origin_url

API_PREFIX = "/api/v4"
LINT_ROUTE = "ci/lint"


@dataclass(frozen=True, slots=True)
class EndpointTarget:
    """Root URL and project to lint against, before the probe.

    Attributes:
        root_url: GitLab root URL, without trailing slash.
        project: Project ID or path, unescaped.
        project_source: Where ``project`` comes from.
        default_root: True when no root URL was configured nor detected.
    """

    root_url: str
    project: str
    project_source: ProjectSource
    default_root: bool = False


@dataclass(frozen=True, slots=True)
class ResolvedEndpoint:
    """A lint URL confirmed to answer.

    Attributes:
        url: Full CI Lint URL to POST to.
        root_url: Root URL the URL was built from, after redirects.
        project: Project ID or path, unescaped.
        redirected: True when the probe was redirected to another root.
    """

    url: str
    root_url: str
    project: str
    redirected: bool = False


def lint_route(project: str) -> str:
    """Path of the CI Lint route of a project, the identifier fully escaped."""
    return f"{API_PREFIX}/projects/{quote(project, safe='')}/{LINT_ROUTE}"


def build_lint_url(root_url: str, project: str) -> str:
    """Join a root URL and the lint route of a project.

    >>> build_lint_url("https://gitlab.com/", "group/project")
    'https://gitlab.com/api/v4/projects/group%2Fproject/ci/lint'
    """
    return root_url.rstrip("/") + lint_route(project)


def select_project(
    settings: Settings, remote: RemoteDescriptor | None
) -> tuple[str, ProjectSource]:
    """Pick the project identifier: ID, then path override, then remote path.

    Raises:
        ResolutionError: If no source gives an identifier.
    """
    if settings.project_id:
        return settings.project_id, ProjectSource.PROJECT_ID
    if settings.project_path:
        return settings.project_path, ProjectSource.PROJECT_PATH
    if remote is not None and remote.project_path:
        return remote.project_path, ProjectSource.REMOTE

    msg = (
        "No GitLab project found: set a project ID or path, "
        "or use a repository with an origin remote"
    )
    raise ResolutionError(msg)


def read_remote(git_dir: Path) -> RemoteDescriptor | None:
    """Parse the origin remote of a repository, or None if it has none.

    Raises:
        GitConfigError: If the repository configuration cannot be read.
    """
    url = read_origin_url(git_dir)
    if not url:
        return None
    return parse_remote_url(url)


def determine_target(
    settings: Settings,
    git_dir: Path | None,
    *,
    logger: FilteringBoundLogger | None = None,
) -> EndpointTarget:
    """Work out the root URL and project to lint against.

    The root URL is the configured one, else the origin remote's, else
    ``https://gitlab.com``. An origin remote is required unless a project ID
    or path is configured.

    Args:
        settings: Run settings.
        git_dir: The git metadata directory, or None without a repository.
        logger: Optional logger.

    Returns:
        The target to probe.

    Raises:
        GitConfigError: If the repository config is unreadable, or has no
            origin remote and no project is configured.
        ResolutionError: If there is no repository and no project configured.
    """
    remote = read_remote(git_dir) if git_dir is not None else None
    explicit_project = bool(settings.project_id or settings.project_path)

    if remote is None and not explicit_project:
        if git_dir is not None:
            msg = f"No origin remote url found in repository '{git_dir}'"
            raise GitConfigError(msg, repository=git_dir)
        msg = "No git repository found and no GitLab project configured"
        raise ResolutionError(msg)

    project, source = select_project(settings, remote)

    root_url = settings.gitlab_url or (remote.root_url if remote else "")
    default_root = not root_url
    if default_root:
        root_url = DEFAULT_GITLAB_URL

    target = EndpointTarget(
        root_url=root_url.rstrip("/"),
        project=project,
        project_source=source,
        default_root=default_root,
    )
    if logger is not None:
        logger.debug(
            "endpoint_target",
            root_url=target.root_url,
            project=target.project,
            project_source=str(source),
            default_root=default_root,
        )
    return target


def probe_endpoint(
    client: httpx.Client,
    target: EndpointTarget,
    *,
    logger: FilteringBoundLogger | None = None,
) -> ResolvedEndpoint:
    """Confirm the lint endpoint answers, absorbing redirects.

    Sends a GET to the candidate URL, following redirects. When the final URL
    still ends with the lint route but under another root, the endpoint is
    rebuilt on that root.

    Args:
        client: HTTP client carrying the authentication headers.
        target: Root URL and project to probe.
        logger: Optional logger.

    Returns:
        The confirmed endpoint.

    Raises:
        TransportFailureError: On network, TLS or timeout failures.
        EndpointUnreachableError: If the final response is not a success.
    """
    candidate = build_lint_url(target.root_url, target.project)
    route = lint_route(target.project)

    if logger is not None:
        logger.debug("endpoint_probe", url=candidate)

    try:
        response = client.get(candidate, follow_redirects=True)
    except httpx.RequestError as e:
        msg = f"HTTP request to '{candidate}' failed: {e}"
        raise TransportFailureError(msg, url=candidate) from e

    if not response.is_success:
        msg = f"'{candidate}' answered with HTTP {response.status_code}"
        raise EndpointUnreachableError(
            msg, url=candidate, status_code=response.status_code
        )

    if response.history:
        final_url = str(response.url).split("#", 1)[0].split("?", 1)[0]
        corrected_root = final_url.removesuffix(route)
        if final_url != corrected_root and corrected_root != target.root_url:
            if logger is not None:
                logger.info(
                    "endpoint_redirected",
                    from_root=target.root_url,
                    to_root=corrected_root,
                )
            return ResolvedEndpoint(
                url=build_lint_url(corrected_root, target.project),
                root_url=corrected_root,
                project=target.project,
                redirected=True,
            )
        if logger is not None:
            logger.debug("endpoint_redirect_ignored", final_url=final_url)

    return ResolvedEndpoint(
        url=candidate, root_url=target.root_url, project=target.project
    )
