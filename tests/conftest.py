"""Shared test fixtures for cilint tests."""

from collections.abc import Callable
from dataclasses import dataclass
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

_ENV_VARS = (
    "GCL_GITLAB_URL",
    "GCL_GITLAB_CI_FILE",
    "GCL_DIRECTORY",
    "GCL_PERSONAL_ACCESS_TOKEN",
    "GCL_NETRC",
    "GCL_NETRC_FILE",
    "GCL_PROJECT_PATH",
    "GCL_PROJECT_ID",
    "CI_PROJECT_PATH",
    "CI_PROJECT_ID",
    "GCL_TIMEOUT",
    "GCL_NOCOLOR",
    "GCL_VERBOSE",
    "GCL_INCLUDE_MERGED_YAML",
    "GCL_DRY_RUN",
    "GCL_DRY_RUN_REF",
    "GCL_CONFIG",
    "GCL_LOG_FILE",
    "GCL_DEBUG",
    "NETRC",
)

GIT_CONFIG_TEMPLATE = """[core]
\trepositoryformatversion = 0
\tbare = false
"""

ORIGIN_TEMPLATE = """[remote "origin"]
\turl = {url}
\tfetch = +refs/heads/*:refs/remotes/origin/*
"""


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Keep the host's GCL_* variables and user config out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    missing = tmp_path_factory.mktemp("user-config") / "config.toml"
    monkeypatch.setattr("cilint.config._load.get_user_config_path", lambda: missing)


@dataclass(frozen=True, slots=True)
class GitRepo:
    """Paths of a test repository."""

    root: Path
    git_dir: Path
    ci_file: Path


MakeRepo = Callable[..., GitRepo]


@pytest.fixture
def make_repo(tmp_path: Path) -> MakeRepo:
    """Return a factory creating a repository with an optional origin remote.

    Structure:
        tmp_path/<name>/
            .git/config
            .gitlab-ci.yml
    """

    def _make(
        origin: str | None = "git@example.com:team/proj.git",
        *,
        name: str = "repo",
        ci_content: str | None = "stages:\n  - build\n",
    ) -> GitRepo:
        root = tmp_path / name
        git_dir = root / ".git"
        git_dir.mkdir(parents=True)
        config = GIT_CONFIG_TEMPLATE
        if origin is not None:
            config += ORIGIN_TEMPLATE.format(url=origin)
        (git_dir / "config").write_text(config)

        ci_file = root / ".gitlab-ci.yml"
        if ci_content is not None:
            ci_file.write_text(ci_content)
        return GitRepo(root=root, git_dir=git_dir, ci_file=ci_file)

    return _make


def _make_console(*, stderr: bool = False) -> Console:
    return Console(
        file=StringIO(),
        width=200,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
        stderr=stderr,
    )


@pytest.fixture
def console() -> Console:
    return _make_console()


@pytest.fixture
def error_console() -> Console:
    return _make_console(stderr=True)


def output_of(console: Console) -> str:
    """Text written to a StringIO backed console."""
    file = console.file
    assert isinstance(file, StringIO)
    return file.getvalue()
