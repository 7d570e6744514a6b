"""Upward filesystem searches for the git metadata and CI definition files."""

from collections.abc import Callable, Iterator
from pathlib import Path

from cilint.exceptions import RepositoryNotFoundError

GIT_DIR_NAME = ".git"
"""Name of the git metadata directory."""

GIT_CONFIG_NAME = "config"
"""Name of the configuration file inside the git metadata directory."""

CI_FILE_NAME = ".gitlab-ci.yml"
"""Name of the GitLab CI definition file."""


def iter_ancestors(start: Path) -> Iterator[Path]:
    """Yield ``start`` and each of its ancestors, closest first.

    The walk stops after the filesystem root, detected when a directory is
    its own parent.

    Args:
        start: Directory to start from. Made absolute, symlinks are kept.

    Yields:
        Absolute directory paths.
    """
    current = start.absolute()
    while True:
        yield current
        parent = current.parent
        if parent == current:
            return
        current = parent


def find_upward(start: Path, predicate: Callable[[Path], Path | None]) -> Path | None:
    """Return the first non-None result of ``predicate`` over the ancestors.

    Args:
        start: Directory to start searching from.
        predicate: Called with each directory; returns a match or None.

    Returns:
        The first match, or None if the root is reached without one.
    """
    for directory in iter_ancestors(start):
        found = predicate(directory)
        if found is not None:
            return found
    return None


def _git_dir_in(directory: Path) -> Path | None:
    candidate = directory / GIT_DIR_NAME
    # A symlinked metadata directory is accepted like a real one.
    if candidate.is_dir() and (candidate / GIT_CONFIG_NAME).is_file():
        return candidate
    return None


def _ci_file_in(directory: Path) -> Path | None:
    candidate = directory / CI_FILE_NAME
    if candidate.is_file():
        return candidate
    return None


def find_repository(start: Path) -> Path:
    """Find the git metadata directory of the repository containing ``start``.

    A metadata directory is a ``.git`` directory holding a ``config`` file;
    one without the file is skipped and the search goes on upward.

    Args:
        start: Directory to start searching from.

    Returns:
        Absolute path to the ``.git`` directory.

    Raises:
        RepositoryNotFoundError: If the filesystem root is reached.
    """
    found = find_upward(start, _git_dir_in)
    if found is None:
        msg = f"No git repository found from '{start}'"
        raise RepositoryNotFoundError(msg, start=start)
    return found


def find_ci_file(start: Path) -> Path | None:
    """Find the nearest ``.gitlab-ci.yml`` in ``start`` or its ancestors.

    Args:
        start: Directory to start searching from.

    Returns:
        Absolute path to the file, or None if none is found.
    """
    return find_upward(start, _ci_file_in)
