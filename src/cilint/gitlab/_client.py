"""Send a CI definition to the GitLab CI Lint API."""

from dataclasses import dataclass
from typing import Any

import httpx
import orjson
from pydantic import ValidationError
from structlog.typing import FilteringBoundLogger

from cilint.exceptions import ProtocolError, TransportFailureError

from ._endpoint import ResolvedEndpoint
from ._models import (
    LegacyLintResponse,
    LintRequest,
    LintResponse,
    ValidationOutcome,
)


@dataclass(frozen=True, slots=True)
class LintOptions:
    """Query options of a lint request.

    Attributes:
        include_merged_yaml: Ask for the merged configuration.
        dry_run: Simulate a pipeline creation.
        ref: Branch or tag used by the simulation.
    """

    include_merged_yaml: bool = False
    dry_run: bool = False
    ref: str = ""

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.include_merged_yaml:
            params["include_merged_yaml"] = "true"
        if self.dry_run:
            params["dry_run"] = "true"
            if self.ref:
                params["ref"] = self.ref
        return params


def interpret_payload(payload: Any, *, url: str) -> ValidationOutcome:
    """Turn a decoded lint response into a validation outcome.

    Responses carrying a ``valid`` flag (GitLab 13.6+) and responses carrying
    a ``status`` string (older versions) are both understood.

    Args:
        payload: Decoded JSON body.
        url: Requested URL, for error context.

    Returns:
        VALID or INVALID for a recognized answer, FAILED otherwise.
    """
    if not isinstance(payload, dict):
        return ValidationOutcome.failed(
            ProtocolError("Unexpected JSON response: not an object", url=url)
        )

    try:
        if "valid" in payload:
            response = LintResponse.model_validate(payload)
            if response.valid:
                return ValidationOutcome.valid(
                    warnings=tuple(response.warnings),
                    merged_yaml=response.merged_yaml,
                )
            return ValidationOutcome.invalid(
                response.errors,
                warnings=tuple(response.warnings),
                merged_yaml=response.merged_yaml,
            )

        if "status" in payload:
            legacy = LegacyLintResponse.model_validate(payload)
            if legacy.error:
                return ValidationOutcome.failed(
                    ProtocolError(f"API responded: {legacy.error}", url=url)
                )
            if legacy.status == "valid":
                return ValidationOutcome.valid(merged_yaml=legacy.merged_yaml)
            if legacy.status == "invalid":
                return ValidationOutcome.invalid(
                    legacy.errors, merged_yaml=legacy.merged_yaml
                )
            return ValidationOutcome.failed(
                ProtocolError(f"Unknown lint status '{legacy.status}'", url=url)
            )
    except ValidationError as e:
        return ValidationOutcome.failed(
            ProtocolError(f"Unable to parse JSON response: {e}", url=url)
        )

    return ValidationOutcome.failed(
        ProtocolError("Unrecognized lint response: no 'valid' nor 'status'", url=url)
    )


def lint(
    client: httpx.Client,
    endpoint: ResolvedEndpoint,
    content: str,
    options: LintOptions | None = None,
    *,
    logger: FilteringBoundLogger | None = None,
) -> ValidationOutcome:
    """Validate CI definition content against a confirmed endpoint.

    The request is sent once; failures are reported, never retried.

    Args:
        client: HTTP client carrying the authentication headers.
        endpoint: Endpoint confirmed by the probe.
        content: Raw text of the CI definition file.
        options: Query options.
        logger: Optional logger.

    Returns:
        The validation outcome. Transport failures, non-200 statuses and
        unreadable bodies are FAILED outcomes, never INVALID ones.
    """
    options = options or LintOptions()
    body = LintRequest(content=content).model_dump_json()

    if logger is not None:
        logger.debug("lint_request", url=endpoint.url, params=options.to_params())

    try:
        response = client.post(endpoint.url, content=body, params=options.to_params())
    except httpx.RequestError as e:
        return ValidationOutcome.failed(
            TransportFailureError(
                f"HTTP request to '{endpoint.url}' failed: {e}", url=endpoint.url
            )
        )

    if response.status_code != httpx.codes.OK:
        return ValidationOutcome.failed(
            ProtocolError(
                f"'{endpoint.url}' answered with HTTP {response.status_code}",
                url=endpoint.url,
                status_code=response.status_code,
            )
        )

    try:
        payload = orjson.loads(response.content)
    except orjson.JSONDecodeError as e:
        return ValidationOutcome.failed(
            ProtocolError(
                f"Unable to parse JSON response: {e}",
                url=endpoint.url,
                status_code=response.status_code,
            )
        )

    outcome = interpret_payload(payload, url=endpoint.url)
    if logger is not None:
        logger.debug("lint_response", status=str(outcome.status))
    return outcome
