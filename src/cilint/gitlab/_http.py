"""HTTP client shared by the endpoint probe and the lint request."""

import httpx

from cilint import APP_NAME, __version__

TOKEN_HEADER = "PRIVATE-TOKEN"


def build_headers(token: str = "") -> dict[str, str]:
    """Headers sent with every GitLab API request.

    The probe carries the same headers as the lint request since some
    instances require authentication for read access too.
    """
    headers = {
        "Accept": "*/*",
        "Content-Type": "application/json",
        "User-Agent": f"{APP_NAME}/{__version__}",
    }
    if token:
        headers[TOKEN_HEADER] = token
    return headers


def create_http_client(
    *,
    token: str = "",
    timeout: float,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create the HTTP client used to talk to the GitLab API.

    Redirects are not followed unless a request asks for it, and proxies are
    taken from the environment.

    Args:
        token: Personal access token, sent as PRIVATE-TOKEN when not empty.
        timeout: Seconds allowed for each phase of a request (connect, read,
            write, pool). It bounds every wait separately, not the whole
            call: a server that keeps sending data slowly can take longer.
        transport: Optional transport (tests use ``httpx.MockTransport``).

    Returns:
        A configured client. The caller closes it.
    """
    return httpx.Client(
        headers=build_headers(token),
        timeout=httpx.Timeout(timeout),
        follow_redirects=False,
        trust_env=True,
        transport=transport,
    )
