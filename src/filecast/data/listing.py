"""Filesystem directory listing."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from filecast.models.entries import PARENT_ENTRY_NAME, DirEntry

logger = logging.getLogger(__name__)


def entry_from_path(path: Path) -> DirEntry:
    """Build a DirEntry from a path, raising OSError if it cannot be stat'ed."""
    stat = path.stat()
    is_dir = path.is_dir()
    return DirEntry(
        path=path,
        name=path.name,
        is_dir=is_dir,
        size=stat.st_size,
        modified=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
    )


def read_directory(path: Path, show_hidden: bool = False) -> list[DirEntry]:
    """List a directory with a leading ``..`` row, directories first then by name.

    Raises:
        OSError: if the directory itself cannot be read.
    """
    entries: list[DirEntry] = []
    for child in path.iterdir():
        if not show_hidden and child.name.startswith("."):
            continue
        try:
            entries.append(entry_from_path(child))
        except OSError:
            logger.debug("Skipping unreadable entry %s", child)

    entries.sort(key=lambda e: (not e.is_dir, e.name))

    if path.parent != path:
        parent = DirEntry(path=path.parent, name=PARENT_ENTRY_NAME, is_dir=True)
        entries.insert(0, parent)
    return entries
