"""Steps shared by the check and install commands."""

import os
from pathlib import Path

import httpx
from structlog.typing import FilteringBoundLogger

from cilint.config import Settings
from cilint.exceptions import RepositoryNotFoundError
from cilint.git import find_repository
from cilint.gitlab import (
    EndpointTarget,
    ResolvedEndpoint,
    create_http_client,
    probe_endpoint,
    resolve_token,
)


def display_path(path: Path) -> str:
    """Path relative to the working directory when possible."""
    try:
        return os.path.relpath(path)
    except ValueError:
        return str(path)


def locate_repository(settings: Settings, ci_file: Path | None = None) -> Path | None:
    """Find the git metadata directory.

    The search starts from the CI file's directory, then from the configured
    directory.

    Returns:
        The ``.git`` directory, or None if there is no repository.
    """
    starts = [ci_file.parent] if ci_file is not None else []
    starts.append(settings.directory)

    for start in starts:
        try:
            return find_repository(start)
        except RepositoryNotFoundError:
            continue
    return None


def connect(
    settings: Settings,
    target: EndpointTarget,
    *,
    logger: FilteringBoundLogger,
) -> tuple[httpx.Client, ResolvedEndpoint]:
    """Open an authenticated client and confirm the lint endpoint.

    Returns:
        The client, which the caller closes, and the confirmed endpoint.

    Raises:
        ResolutionError: If the probe gets a non-success answer.
        TransportFailureError: If the probe cannot reach the server.
    """
    token = resolve_token(
        token=settings.token,
        use_netrc=settings.use_netrc,
        root_url=target.root_url,
        netrc_file=settings.netrc_file,
        logger=logger,
    )
    client = create_http_client(token=token, timeout=settings.timeout)
    try:
        endpoint = probe_endpoint(client, target, logger=logger)
    except BaseException:
        client.close()
        raise
    return client, endpoint
