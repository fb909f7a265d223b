"""Directory, recent-access and application models."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

PARENT_ENTRY_NAME = ".."


class DirEntry(BaseModel):
    """One row of a directory listing."""

    path: Path
    name: str
    is_dir: bool = False
    size: int = 0
    modified: datetime | None = None

    @property
    def is_parent(self) -> bool:
        """True for the synthetic ``..`` row."""
        return self.name == PARENT_ENTRY_NAME

    @property
    def completion_text(self) -> str:
        return f"{self.name}/" if self.is_dir else self.name


class RecentAccess(BaseModel):
    """A path from the persistent access history."""

    path: Path
    last_accessed: datetime
    access_count: int = 1

    @property
    def file_name(self) -> str:
        return self.path.name


class CommandRecord(BaseModel):
    """A shell command run from the launcher."""

    command: str
    cwd: Path
    last_run: datetime
    run_count: int = 1


class DesktopApp(BaseModel):
    """An installed application as reported by the app provider."""

    name: str
    exec: str = ""
    icon: str | None = None
    description: str | None = None
    categories: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    terminal: bool = False
    path: Path | None = None
