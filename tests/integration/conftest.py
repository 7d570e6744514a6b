from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from rich.console import Console

from cilint.cli import create_app
from cilint.gitlab import create_http_client


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


class FakeGitLab:
    """In-memory GitLab answering the endpoint probe and the lint request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.probe_status = 200
        self.lint_status = 200
        self.lint_payload: object = {"valid": True, "errors": [], "warnings": []}

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET":
            return httpx.Response(self.probe_status)
        return httpx.Response(self.lint_status, json=self.lint_payload)

    @property
    def probes(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "GET"]

    @property
    def lint_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]


@pytest.fixture
def gitlab(monkeypatch: pytest.MonkeyPatch) -> FakeGitLab:
    """Route every HTTP client built by the commands to a FakeGitLab."""
    fake = FakeGitLab()

    def _create(**kwargs: Any) -> httpx.Client:
        return create_http_client(**kwargs, transport=httpx.MockTransport(fake.handle))

    monkeypatch.setattr("cilint.cli._commands._helpers.create_http_client", _create)
    return fake


@pytest.fixture
def fake_executable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Pretend the running executable is a file under tmp_path."""
    path = tmp_path / "bin" / "cilint"
    path.parent.mkdir()
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    monkeypatch.setattr("cilint.git._hooks.current_executable", lambda: path)
    return path


@pytest.fixture
def run_cli(console: Console, error_console: Console) -> Callable[..., int]:
    """Run cilint with the given arguments and return the exit code."""

    def _run(*args: str) -> int:
        app = create_app(console=console, error_console=error_console)
        try:
            app.meta(list(args))
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        return 0

    return _run
