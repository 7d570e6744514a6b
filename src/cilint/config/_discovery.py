"""Configuration file discovery."""

from pathlib import Path

import platformdirs

from cilint import APP_NAME


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/cilint/config.toml``
    - macOS: ``~/Library/Application Support/cilint/config.toml``
    - Windows: ``%APPDATA%\cilint\config.toml``

    The path is returned regardless of whether the file exists.

    Returns:
        Path to the user config file for the current platform.
    """
    return platformdirs.user_config_path(APP_NAME) / "config.toml"
