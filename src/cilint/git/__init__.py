"""Local git repository helpers: discovery, origin remote and hook links."""

from ._hooks import (
    PRE_COMMIT_HOOK,
    HookLinkResult,
    current_executable,
    hook_path,
    install_hook,
    uninstall_hook,
)
from ._locator import (
    CI_FILE_NAME,
    GIT_CONFIG_NAME,
    GIT_DIR_NAME,
    find_ci_file,
    find_repository,
    find_upward,
    iter_ancestors,
)
from ._remote import RemoteDescriptor, parse_remote_url, read_origin_url

__all__ = [
    "CI_FILE_NAME",
    "GIT_CONFIG_NAME",
    "GIT_DIR_NAME",
    "PRE_COMMIT_HOOK",
    "HookLinkResult",
    "RemoteDescriptor",
    "current_executable",
    "find_ci_file",
    "find_repository",
    "find_upward",
    "hook_path",
    "install_hook",
    "iter_ancestors",
    "parse_remote_url",
    "read_origin_url",
    "uninstall_hook",
]
