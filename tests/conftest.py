"""Shared fixtures for Filecast tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from filecast.config import Config, SearchConfig
from filecast.data.db import Database
from filecast.data.tools import ToolError, ToolOutput


class FakeRunner:
    """Tool runner returning canned output; unknown programs are 'not installed'."""

    def __init__(self, responses: dict[str, ToolOutput | OSError] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[str, list[str], Path]] = []

    def run(self, program: str, args: list[str], cwd: Path) -> ToolOutput:
        self.calls.append((program, list(args), cwd))
        response = self.responses.get(program)
        if response is None:
            raise ToolError(f"{program}: command not found")
        if isinstance(response, OSError):
            raise response
        return response

    @property
    def programs(self) -> list[str]:
        return [program for program, _, _ in self.calls]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """A small directory tree used by listing, search and completion tests."""
    root = tmp_path / "work"
    root.mkdir()
    (root / "docs").mkdir()
    (root / "downloads").mkdir()
    (root / "src").mkdir()
    (root / "src" / "main.c").write_text("int main() {\n    return 0;\n}\n", encoding="utf-8")
    (root / "notes.txt").write_text("hello", encoding="utf-8")
    (root / "report.pdf").write_bytes(b"%PDF")
    (root / ".hidden").write_text("secret", encoding="utf-8")
    return root


@pytest.fixture
def test_config(workdir: Path, tmp_path: Path) -> Config:
    return Config(
        start_dir=workdir,
        cache_dir=tmp_path / "cache",
        search=SearchConfig(exclude_dirs=("node_modules", ".git")),
    )


@pytest.fixture
async def in_memory_db() -> AsyncGenerator[Database]:
    """SQLite in-memory database for history tests."""
    db = Database(Path(":memory:"))
    await db.__aenter__()
    yield db  # type: ignore[misc]
    await db.__aexit__(None, None, None)
