"""Launcher state, the single owner of listing, history, filter and completion state."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from result import Err, Ok, Result

from filecast.data.listing import read_directory
from filecast.data.tools import SubprocessRunner
from filecast.services.completion import TabCompletionCycler
from filecast.services.filtering import DirectoryFilter
from filecast.services.navigation import NavigationHistory
from filecast.services.search_service import SearchAggregator

if TYPE_CHECKING:
    from filecast.config import Config
    from filecast.data.protocols import ToolRunner
    from filecast.models.completion import CompletionOutcome
    from filecast.models.entries import DesktopApp, DirEntry, RecentAccess
    from filecast.models.search import SearchResult

logger = logging.getLogger(__name__)

Direction = Literal["back", "forward"]


class LauncherState:
    """Application state mutated synchronously by the UI event loop.

    Components hold no copy of the listing, recents or config; the state
    passes them in on every call.
    """

    def __init__(
        self,
        config: Config,
        listing: list[DirEntry],
        *,
        runner: ToolRunner | None = None,
        apps: Sequence[DesktopApp] = (),
        recents: Sequence[RecentAccess] = (),
    ) -> None:
        self._config = config
        self._current_path = config.start_dir
        self._listing = listing
        self._show_hidden = config.show_hidden
        self._apps = list(apps)
        self._recents = list(recents)

        self._history = NavigationHistory(config.start_dir)
        self._filter = DirectoryFilter()
        self._completion = TabCompletionCycler()
        self._aggregator = SearchAggregator(runner or SubprocessRunner(), config.result_limit)

        self.selected_index = 0
        self.status_message = ""

    @classmethod
    def create(
        cls,
        config: Config,
        *,
        runner: ToolRunner | None = None,
        apps: Sequence[DesktopApp] = (),
        recents: Sequence[RecentAccess] = (),
    ) -> LauncherState:
        """Read the starting directory and build the state.

        Raises:
            OSError: if the starting directory cannot be listed.
        """
        listing = read_directory(config.start_dir, config.show_hidden)
        return cls(config, listing, runner=runner, apps=apps, recents=recents)

    @property
    def current_path(self) -> Path:
        return self._current_path

    @property
    def listing(self) -> list[DirEntry]:
        return list(self._listing)

    @property
    def history(self) -> NavigationHistory:
        return self._history

    @property
    def is_filtering(self) -> bool:
        return self._filter.active

    @property
    def display_list(self) -> list[DirEntry]:
        if self._filter.active:
            return self._filter.matches
        return list(self._listing)

    @property
    def selected(self) -> DirEntry | None:
        entries = self.display_list
        if not entries:
            return None
        return entries[min(self.selected_index, len(entries) - 1)]

    def set_recents(self, recents: Sequence[RecentAccess]) -> None:
        self._recents = list(recents)

    def set_apps(self, apps: Sequence[DesktopApp]) -> None:
        self._apps = list(apps)

    # ── Search ──

    def search(self, query: str) -> list[SearchResult]:
        return self._aggregator.search(
            query,
            self._apps,
            self._recents,
            self._listing,
            self._config.search,
            self._current_path,
        )

    async def search_async(self, query: str) -> list[SearchResult]:
        """Run :meth:`search` in a worker thread so tool calls don't block the loop."""
        return await asyncio.to_thread(self.search, query)

    def filter(self, query: str) -> list[DirEntry]:
        matches = self._filter.apply(query, self._listing)
        self.selected_index = 0
        return matches

    def move_selection(self, delta: int) -> None:
        count = len(self.display_list)
        if count == 0:
            return
        self.selected_index = (self.selected_index + delta) % count

    # ── Navigation ──

    def push_directory(self, path: Path) -> Result[list[DirEntry], str]:
        """Change into ``path`` and record it in the navigation history."""
        entries = self._read(path)
        if isinstance(entries, Err):
            return entries
        self._history.push(path)
        self._filter.clear()
        self._load(path, entries.ok_value)
        self.status_message = f"Changed directory to: {path}"
        return Ok(self.display_list)

    def navigate(self, direction: Direction) -> Result[list[DirEntry], str]:
        """Move back or forward in history; a no-op at either end."""
        target = self._history.back() if direction == "back" else self._history.forward()
        if target is None:
            return Ok(self.display_list)

        entries = self._read(target)
        if isinstance(entries, Err):
            # Keep the index on the directory that is actually shown.
            if direction == "back":
                self._history.forward()
            else:
                self._history.back()
            return entries

        self._filter.clear()
        self._load(target, entries.ok_value)
        self.status_message = f"Navigated history to: {target}"
        return Ok(self.display_list)

    def refresh(self) -> Result[list[DirEntry], str]:
        """Re-read the current directory, keeping any active filter."""
        entries = self._read(self._current_path)
        if isinstance(entries, Err):
            return entries
        self._load(self._current_path, entries.ok_value)
        return Ok(self.display_list)

    def toggle_hidden(self) -> Result[list[DirEntry], str]:
        self._show_hidden = not self._show_hidden
        result = self.refresh()
        if isinstance(result, Ok):
            state = "shown" if self._show_hidden else "hidden"
            self.status_message = f"Hidden files: {state}"
        return result

    # ── Command input ──

    def tab_complete(self, buffer: str) -> str:
        outcome = self.complete(buffer)
        return outcome.buffer

    def complete(self, buffer: str) -> CompletionOutcome:
        outcome = self._completion.complete(buffer, self._listing)
        if outcome.message:
            self.status_message = outcome.message
        return outcome

    def edit_buffer(self) -> None:
        """Called on any non-completion edit of the command buffer."""
        self._completion.invalidate()

    # ── Internals ──

    def _read(self, path: Path) -> Result[list[DirEntry], str]:
        try:
            return Ok(read_directory(path, self._show_hidden))
        except OSError as exc:
            logger.warning("Failed to read directory %s: %s", path, exc)
            return Err(f"Failed to read {path}: {exc}")

    def _load(self, path: Path, entries: list[DirEntry]) -> None:
        self._current_path = path
        self._listing = entries
        self._filter.refresh(entries)
        self._completion.invalidate()
        self.selected_index = 0
