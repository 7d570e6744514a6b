"""Install and remove the git hook link pointing at the cilint executable.

The hook is a symbolic link from ``<git dir>/hooks/<name>`` to the running
executable. A hook path is only ever removed when it is a link whose target
is that executable, so hooks written by someone else are never touched.
"""

import os
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

from structlog.typing import FilteringBoundLogger

from cilint import APP_NAME
from cilint.enums import HookState

HOOKS_DIR_NAME = "hooks"
PRE_COMMIT_HOOK = "pre-commit"


@dataclass(frozen=True, slots=True)
class HookLinkResult:
    """Outcome of a hook link operation.

    Attributes:
        state: Classification of the hook path.
        path: The hook path that was inspected.
        error: The filesystem error when state is ERROR.
    """

    state: HookState
    path: Path
    error: OSError | None = None


def current_executable() -> Path:
    """Return the absolute, symlink-free path of the running executable.

    When running as a module (``python -m cilint``) the program is a Python
    source file git cannot run, so the installed console script is used.

    Raises:
        FileNotFoundError: If no runnable executable is found.
    """
    program = sys.argv[0] if sys.argv and sys.argv[0] else ""
    if program and not program.endswith(".py") and Path(program).is_file():
        return Path(program).resolve()

    found = shutil.which(APP_NAME)
    if found is None:
        msg = f"No '{APP_NAME}' executable found on PATH to link the hook to"
        raise FileNotFoundError(msg)
    return Path(found).resolve()


def hook_path(git_dir: Path, hook_name: str = PRE_COMMIT_HOOK) -> Path:
    """Return the path of a hook inside a git metadata directory."""
    return git_dir / HOOKS_DIR_NAME / hook_name


def _link_target(path: Path) -> Path:
    """Absolute target of a symbolic link, relative targets taken from its directory."""
    target = Path(os.readlink(path))
    if not target.is_absolute():
        target = path.parent / target
    return Path(os.path.abspath(target))


def _points_to(path: Path, executable: Path) -> bool:
    return _link_target(path) == executable


def install_hook(
    git_dir: Path,
    hook_name: str = PRE_COMMIT_HOOK,
    *,
    executable: Path | None = None,
    logger: FilteringBoundLogger | None = None,
) -> HookLinkResult:
    """Link a git hook to the cilint executable.

    Args:
        git_dir: The git metadata directory.
        hook_name: Name of the hook.
        executable: Link target. Defaults to the running executable.
        logger: Optional logger.

    Returns:
        CREATED when the link was made, ALREADY_CREATED when it already points
        at the executable, ALREADY_EXISTS when another hook is in place, or
        ERROR with the filesystem error.
    """
    path = hook_path(git_dir, hook_name)
    try:
        target = Path(os.path.abspath(executable or current_executable()))
        path.parent.mkdir(parents=True, exist_ok=True)

        if not os.path.lexists(path):
            path.symlink_to(target)
            if logger is not None:
                logger.info("hook_created", path=str(path), target=str(target))
            return HookLinkResult(state=HookState.CREATED, path=path)

        if not path.is_symlink():
            return HookLinkResult(state=HookState.ALREADY_EXISTS, path=path)

        if _points_to(path, target):
            return HookLinkResult(state=HookState.ALREADY_CREATED, path=path)
        return HookLinkResult(state=HookState.ALREADY_EXISTS, path=path)
    except OSError as e:
        if logger is not None:
            logger.error("hook_install_failed", path=str(path), error=str(e))
        return HookLinkResult(state=HookState.ERROR, path=path, error=e)


def uninstall_hook(
    git_dir: Path,
    hook_name: str = PRE_COMMIT_HOOK,
    *,
    executable: Path | None = None,
    logger: FilteringBoundLogger | None = None,
) -> HookLinkResult:
    """Remove a git hook link made by :func:`install_hook`.

    Args:
        git_dir: The git metadata directory.
        hook_name: Name of the hook.
        executable: Expected link target. Defaults to the running executable.
        logger: Optional logger.

    Returns:
        DELETED when the link was removed, NOT_EXISTING when there is no hook,
        NOT_MATCHING when the hook is not our link, or ERROR with the
        filesystem error.
    """
    path = hook_path(git_dir, hook_name)
    try:
        if not os.path.lexists(path):
            return HookLinkResult(state=HookState.NOT_EXISTING, path=path)

        if not path.is_symlink():
            return HookLinkResult(state=HookState.NOT_MATCHING, path=path)

        target = Path(os.path.abspath(executable or current_executable()))
        if not _points_to(path, target):
            if logger is not None:
                logger.debug(
                    "hook_not_matching",
                    path=str(path),
                    target=str(_link_target(path)),
                )
            return HookLinkResult(state=HookState.NOT_MATCHING, path=path)

        path.unlink()
        if logger is not None:
            logger.info("hook_deleted", path=str(path))
        return HookLinkResult(state=HookState.DELETED, path=path)
    except OSError as e:
        if logger is not None:
            logger.error("hook_uninstall_failed", path=str(path), error=str(e))
        return HookLinkResult(state=HookState.ERROR, path=path, error=e)
