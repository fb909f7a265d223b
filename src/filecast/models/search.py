"""Search result models."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from filecast.models.entries import DesktopApp, DirEntry, RecentAccess
from filecast.models.icons import (
    APPLICATION_ICON,
    COMMAND_ICON,
    GREP_ICON,
    entry_icon,
    is_directory,
)

COMMAND_SCORE = 10
GREP_SCORE = 30
FOUND_PATH_SCORE = 50
GREP_DESCRIPTION_CHARS = 80


class FileKind(BaseModel):
    type: Literal["file"] = "file"
    path: Path


class RecentFileKind(BaseModel):
    type: Literal["recent_file"] = "recent_file"
    path: Path


class ApplicationKind(BaseModel):
    type: Literal["application"] = "application"
    app: DesktopApp


class CommandKind(BaseModel):
    type: Literal["command"] = "command"
    text: str


class GrepKind(BaseModel):
    type: Literal["grep"] = "grep"
    path: Path
    line: int = Field(ge=0)
    content: str


ResultKind = Annotated[
    FileKind | RecentFileKind | ApplicationKind | CommandKind | GrepKind,
    Field(discriminator="type"),
]


def _display_name(path: Path) -> str:
    return path.name or str(path)


class SearchResult(BaseModel):
    """A single ranked match from any source."""

    name: str
    description: str = ""
    icon: str = ""
    score: int = Field(default=0, ge=0)
    kind: ResultKind

    @classmethod
    def file(cls, entry: DirEntry, score: int) -> SearchResult:
        return cls(
            name=entry.name,
            description=str(entry.path),
            icon=entry_icon(entry.name, is_dir=entry.is_dir),
            score=score,
            kind=FileKind(path=entry.path),
        )

    @classmethod
    def found_path(cls, path: Path, *, is_dir: bool) -> SearchResult:
        """A path reported by the external name search."""
        name = _display_name(path)
        return cls(
            name=name,
            description=str(path),
            icon=entry_icon(name, is_dir=is_dir),
            score=FOUND_PATH_SCORE,
            kind=FileKind(path=path),
        )

    @classmethod
    def recent_file(cls, recent: RecentAccess, score: int) -> SearchResult:
        name = _display_name(recent.path)
        return cls(
            name=name,
            description=f"Recent • {recent.path}",
            icon=entry_icon(name, is_dir=is_directory(recent.path)),
            score=score,
            kind=RecentFileKind(path=recent.path),
        )

    @classmethod
    def application(cls, app: DesktopApp, score: int) -> SearchResult:
        return cls(
            name=app.name,
            description=app.description or "Application",
            icon=APPLICATION_ICON,
            score=score,
            kind=ApplicationKind(app=app),
        )

    @classmethod
    def command(cls, command: str) -> SearchResult:
        return cls(
            name=f"Run: {command}",
            description="Execute shell command",
            icon=COMMAND_ICON,
            score=COMMAND_SCORE,
            kind=CommandKind(text=command),
        )

    @classmethod
    def grep(cls, path: Path, line: int, content: str) -> SearchResult:
        return cls(
            name=f"{_display_name(path)}:{line}",
            description=content.strip()[:GREP_DESCRIPTION_CHARS],
            icon=GREP_ICON,
            score=GREP_SCORE,
            kind=GrepKind(path=path, line=line, content=content),
        )

    @property
    def target_path(self) -> Path | None:
        """Filesystem path this result opens, if any."""
        match self.kind:
            case FileKind(path=path) | RecentFileKind(path=path) | GrepKind(path=path):
                return path
            case ApplicationKind(app=app):
                return app.path
            case CommandKind():
                return None
