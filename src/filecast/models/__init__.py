"""Pydantic models for Filecast."""

from filecast.models.completion import CompletionOutcome
from filecast.models.entries import (
    PARENT_ENTRY_NAME,
    CommandRecord,
    DesktopApp,
    DirEntry,
    RecentAccess,
)
from filecast.models.icons import file_icon
from filecast.models.search import (
    ApplicationKind,
    CommandKind,
    FileKind,
    GrepKind,
    RecentFileKind,
    ResultKind,
    SearchResult,
)

__all__ = [
    "ApplicationKind",
    "CommandKind",
    "CommandRecord",
    "CompletionOutcome",
    "DesktopApp",
    "DirEntry",
    "FileKind",
    "GrepKind",
    "PARENT_ENTRY_NAME",
    "RecentAccess",
    "RecentFileKind",
    "ResultKind",
    "SearchResult",
    "file_icon",
]
