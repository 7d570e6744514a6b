"""cilint configuration.

Example:
    >>> from cilint.config import load_settings
    >>> settings = load_settings(cli_overrides={"project_path": "group/project"})
    >>> settings.project_path
    'group/project'
"""

from cilint.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._discovery import get_user_config_path
from ._load import load_settings
from ._loader import copy_value, deep_merge, read_toml_file
from ._models import (
    DEFAULT_GITLAB_URL,
    DEFAULT_TIMEOUT,
    LogFormat,
    LoggingConfig,
    LogLevel,
    Settings,
    normalize_root_url,
)

__all__ = [
    "DEFAULT_GITLAB_URL",
    "DEFAULT_TIMEOUT",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "Settings",
    "copy_value",
    "deep_merge",
    "get_user_config_path",
    "load_settings",
    "normalize_root_url",
    "read_toml_file",
]
