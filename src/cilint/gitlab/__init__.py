"""GitLab CI Lint API access: endpoint resolution and validation requests."""

from ._client import LintOptions, interpret_payload, lint
from ._endpoint import (
    API_PREFIX,
    LINT_ROUTE,
    EndpointTarget,
    ResolvedEndpoint,
    build_lint_url,
    determine_target,
    lint_route,
    probe_endpoint,
    read_remote,
    select_project,
)
from ._http import TOKEN_HEADER, build_headers, create_http_client
from ._models import (
    LegacyLintResponse,
    LintRequest,
    LintResponse,
    ValidationOutcome,
)
from ._netrc import get_netrc_path, resolve_token, token_from_netrc

__all__ = [
    "API_PREFIX",
    "LINT_ROUTE",
    "TOKEN_HEADER",
    "EndpointTarget",
    "LegacyLintResponse",
    "LintOptions",
    "LintRequest",
    "LintResponse",
    "ResolvedEndpoint",
    "ValidationOutcome",
    "build_headers",
    "build_lint_url",
    "create_http_client",
    "determine_target",
    "get_netrc_path",
    "interpret_payload",
    "lint",
    "lint_route",
    "probe_endpoint",
    "read_remote",
    "resolve_token",
    "select_project",
    "token_from_netrc",
]
