"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import io
import tempfile
import zipfile
from pathlib import Path
from typing import Callable, Generator

import httpx
import pytest


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def build_zip(files: dict[str, str], dirs: tuple[str, ...] = ()) -> bytes:
    """Build an in-memory ZIP from ``{path: text}`` plus explicit directory entries."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for directory in dirs:
            zf.writestr(directory.rstrip("/") + "/", "")
        for path, text in files.items():
            zf.writestr(path, text)
    return buffer.getvalue()


@pytest.fixture
def zip_builder() -> Callable[..., bytes]:
    return build_zip


@pytest.fixture
def fixture_zip() -> bytes:
    """A GitHub-style archive: everything wrapped in one root folder."""
    return build_zip(
        {
            "download-git-repo-fixture-master/README.md": "# fixture\n",
            "download-git-repo-fixture-master/src/index.js": "module.exports = {}\n",
            "download-git-repo-fixture-master/docs/guide.md": "guide\n",
        },
        dirs=(
            "download-git-repo-fixture-master",
            "download-git-repo-fixture-master/src",
            "download-git-repo-fixture-master/docs",
        ),
    )


class RecordingTransport:
    """Serves fixed responses and records the requests it saw."""

    def __init__(self, content: bytes = b"", status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.content)


@pytest.fixture
def make_client() -> Callable[..., tuple[httpx.AsyncClient, RecordingTransport]]:
    """Factory for an httpx client backed by a RecordingTransport."""

    def _make(content: bytes = b"", status_code: int = 200):
        transport = RecordingTransport(content, status_code)
        client = httpx.AsyncClient(transport=httpx.MockTransport(transport))
        return client, transport

    return _make


class FakeRunner:
    """ProcessRunner double that simulates git on the filesystem.

    ``git clone`` creates the destination with a README.md and a .git
    directory; exit codes can be scripted per subcommand.
    """

    def __init__(self, returncodes: dict[str, int] | None = None) -> None:
        self.returncodes = returncodes or {}
        self.calls: list[tuple[str, list[str], Path | None]] = []

    async def run(self, command: str, args: list[str], cwd: Path | None = None) -> int:
        self.calls.append((command, list(args), cwd))
        returncode = self.returncodes.get(args[0], 0)
        if args[0] == "clone" and returncode == 0:
            dest = Path(args[-1])
            (dest / ".git" / "objects").mkdir(parents=True)
            (dest / ".git" / "HEAD").write_text("ref: refs/heads/master\n")
            (dest / "README.md").write_text("# fixture\n")
        return returncode


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def runner_factory() -> type[FakeRunner]:
    return FakeRunner


# Markers for test categories
def pytest_configure(config):
    config.addinivalue_line("markers", "integration: tests requiring network access and git")
    config.addinivalue_line("markers", "slow: slow running tests")
