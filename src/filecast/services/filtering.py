"""Live substring filter over a directory listing."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from filecast.models.entries import DirEntry


class DirectoryFilter:
    """Keeps the active filter query and its matches for the current listing."""

    def __init__(self) -> None:
        self._query = ""
        self._matches: list[DirEntry] = []

    @property
    def query(self) -> str:
        return self._query

    @property
    def active(self) -> bool:
        return bool(self._query)

    @property
    def matches(self) -> list[DirEntry]:
        return list(self._matches)

    def apply(self, query: str, listing: Sequence[DirEntry]) -> list[DirEntry]:
        """Filter ``listing`` by case-insensitive substring of the entry name.

        An empty query clears the filter and returns the listing unchanged.
        """
        if not query:
            self.clear()
            return list(listing)
        self._query = query
        needle = query.lower()
        self._matches = [entry for entry in listing if needle in entry.name.lower()]
        return list(self._matches)

    def refresh(self, listing: Sequence[DirEntry]) -> list[DirEntry]:
        """Re-run the active query against a new listing."""
        return self.apply(self._query, listing)

    def clear(self) -> None:
        self._query = ""
        self._matches = []
