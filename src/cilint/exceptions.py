"""cilint exceptions."""

from pathlib import Path


class CilintError(Exception):
    """Base exception for cilint errors."""


# =============================================================================
# Lookup Exceptions
# =============================================================================


class NotFoundError(CilintError):
    """Base exception for missing files and directories."""


class RepositoryNotFoundError(NotFoundError):
    """Raised when no git repository is found above a directory.

    Attributes:
        start: Directory the search started from.
    """

    def __init__(self, message: str, *, start: Path | None = None) -> None:
        super().__init__(message)
        self.start: Path | None = start


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(CilintError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when a configuration value is rejected."""

    def __init__(self, message: str, *, key: str, value: object) -> None:
        super().__init__(message)
        self.key: str = key
        self.value: object = value


class GitConfigError(ConfigError):
    """Raised when a repository configuration is unreadable or incomplete.

    Attributes:
        repository: The git metadata directory whose config was read.
    """

    def __init__(self, message: str, *, repository: Path) -> None:
        super().__init__(message)
        self.repository: Path = repository


# =============================================================================
# Endpoint Exceptions
# =============================================================================


class ResolutionError(CilintError):
    """Raised when no working lint endpoint can be established."""


class EndpointUnreachableError(ResolutionError):
    """Raised when the endpoint probe answers with a non-success status.

    Attributes:
        url: The probed URL.
        status_code: HTTP status code of the probe response.
    """

    def __init__(self, message: str, *, url: str, status_code: int) -> None:
        super().__init__(message)
        self.url: str = url
        self.status_code: int = status_code


class TransportFailureError(CilintError):
    """Raised on network level failures (DNS, refused connection, TLS, timeout).

    Attributes:
        url: The requested URL.
    """

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url: str = url


class ProtocolError(CilintError):
    """Raised when the API answers with an unexpected status or body.

    Attributes:
        url: The requested URL.
        status_code: HTTP status code, if a response was received.
    """

    def __init__(
        self, message: str, *, url: str, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.url: str = url
        self.status_code: int | None = status_code
