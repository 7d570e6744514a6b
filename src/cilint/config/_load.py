"""Build Settings from every configuration source."""

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cilint.exceptions import ConfigLoadError, ConfigValidationError

from ._discovery import get_user_config_path
from ._loader import deep_merge, read_toml_file
from ._models import Settings


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def _check_paths(settings: Settings) -> None:
    directory = settings.directory
    if not directory.exists():
        msg = f"'{directory}' does not exist"
        raise ConfigValidationError(msg, key="directory", value=directory)
    if not directory.is_dir():
        msg = f"'{directory}' is not a directory"
        raise ConfigValidationError(msg, key="directory", value=directory)

    ci_file = settings.ci_file
    if ci_file is not None:
        if not ci_file.exists():
            msg = f"'{ci_file}' does not exist"
            raise ConfigValidationError(msg, key="ci_file", value=ci_file)
        if ci_file.is_dir():
            msg = f"'{ci_file}' is a directory, not a file"
            raise ConfigValidationError(msg, key="ci_file", value=ci_file)


def load_settings(
    *,
    config_path: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
    include_user: bool = True,
) -> Settings:
    """Load settings from all sources.

    Sources, from lowest to highest precedence: built-in defaults, the user
    config file, the explicit config file, then command-line and environment
    overrides (already merged by the CLI parser).

    Args:
        config_path: Explicit TOML file (--config flag). Must exist.
        cli_overrides: Values given on the command line or in the environment.
        include_user: Whether to read the user config file.

    Returns:
        Validated, immutable settings.

    Raises:
        ConfigLoadError: If a config file is missing or malformed.
        ConfigValidationError: If a value is invalid.
    """
    data: dict[str, Any] = {}

    if include_user:
        user_path = get_user_config_path()
        if _is_file(user_path):
            data = deep_merge(data, read_toml_file(user_path))

    if config_path is not None:
        if not _is_file(config_path):
            msg = f"Config file not found: {config_path}"
            raise ConfigLoadError(msg, path=config_path)
        data = deep_merge(data, read_toml_file(config_path))

    if cli_overrides:
        data = deep_merge(data, dict(cli_overrides))

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        msg = f"Invalid configuration value for '{key}': {first['msg']}"
        raise ConfigValidationError(msg, key=key, value=first.get("input")) from e

    _check_paths(settings)
    return settings
