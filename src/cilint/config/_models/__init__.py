"""Configuration models."""

from ._common import LogFormat, LogLevel
from ._logging import LoggingConfig
from ._settings import (
    DEFAULT_GITLAB_URL,
    DEFAULT_TIMEOUT,
    Settings,
    normalize_root_url,
)

__all__ = [
    "DEFAULT_GITLAB_URL",
    "DEFAULT_TIMEOUT",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "Settings",
    "normalize_root_url",
]
