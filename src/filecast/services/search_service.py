"""Unified search across applications, recent paths, the listing and external tools."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from filecast.data.tools import ExternalToolInvoker
from filecast.models.search import SearchResult
from filecast.services.scoring import fuzzy_score

if TYPE_CHECKING:
    from filecast.config import SearchConfig
    from filecast.data.protocols import ToolRunner
    from filecast.models.entries import DesktopApp, DirEntry, RecentAccess

logger = logging.getLogger(__name__)

RESULT_LIMIT = 20
RECENCY_BONUS = 10
DESCRIPTION_MIN_SCORE = 30

COMMAND_PREFIX = ":"
CONTENT_PREFIX = "@"
NAME_PREFIX = "/"


class SearchAggregator:
    """Dispatches a query by prefix and ranks the merged matches.

    ``:cmd`` yields a command result, ``@text`` searches file contents,
    ``/name`` searches file names; anything else is fuzzy-matched against
    apps, recents and the current listing, in that order.
    """

    def __init__(self, runner: ToolRunner, limit: int = RESULT_LIMIT) -> None:
        self._runner = runner
        self._limit = limit

    def search(
        self,
        query: str,
        apps: Sequence[DesktopApp],
        recents: Sequence[RecentAccess],
        listing: Sequence[DirEntry],
        config: SearchConfig,
        cwd: Path,
    ) -> list[SearchResult]:
        if not query:
            return []

        if query.startswith(COMMAND_PREFIX):
            command = query.lstrip(COMMAND_PREFIX).strip()
            return [SearchResult.command(command)] if command else []

        if query.startswith(CONTENT_PREFIX):
            pattern = query.lstrip(CONTENT_PREFIX).strip()
            if not pattern:
                return []
            logger.debug("Content search for %r in %s", pattern, cwd)
            return ExternalToolInvoker(self._runner, config, cwd).content_search(pattern)

        if query.startswith(NAME_PREFIX):
            pattern = query.lstrip(NAME_PREFIX).strip()
            if not pattern:
                return []
            logger.debug("Name search for %r in %s", pattern, cwd)
            return ExternalToolInvoker(self._runner, config, cwd).name_search(pattern)

        results = [
            *_match_apps(query, apps),
            *_match_recents(query, recents),
            *_match_listing(query, listing),
        ]
        # sorted() is stable: equal scores keep apps -> recents -> listing order.
        results = sorted(results, key=lambda r: r.score, reverse=True)
        return results[: self._limit]


def _match_apps(query: str, apps: Sequence[DesktopApp]) -> list[SearchResult]:
    results: list[SearchResult] = []
    for app in apps:
        score = fuzzy_score(query, app.name)
        if score > 0:
            results.append(SearchResult.application(app, score))
            continue
        if app.description:
            description_score = fuzzy_score(query, app.description)
            if description_score > DESCRIPTION_MIN_SCORE:
                results.append(SearchResult.application(app, description_score // 2))
    return results


def _match_recents(query: str, recents: Sequence[RecentAccess]) -> list[SearchResult]:
    results: list[SearchResult] = []
    for recent in recents:
        score = fuzzy_score(query, recent.file_name)
        if score > 0:
            results.append(SearchResult.recent_file(recent, score + RECENCY_BONUS))
    return results


def _match_listing(query: str, listing: Sequence[DirEntry]) -> list[SearchResult]:
    results: list[SearchResult] = []
    for entry in listing:
        if entry.is_parent:
            continue
        score = fuzzy_score(query, entry.name)
        if score > 0:
            results.append(SearchResult.file(entry, score))
    return results
