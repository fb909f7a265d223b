"""Filename tab completion for the command input."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from filecast.models.completion import CompletionOutcome

if TYPE_CHECKING:
    from filecast.models.entries import DirEntry

logger = logging.getLogger(__name__)


def split_completion_target(buffer: str) -> tuple[str, str]:
    """Split a buffer into (fixed prefix incl. trailing space, word to complete)."""
    last_space = buffer.rfind(" ")
    if last_space == -1:
        return "", buffer
    return buffer[: last_space + 1], buffer[last_space + 1 :]


class TabCompletionCycler:
    """Completes the last word of a buffer against the current listing.

    Repeated Tab presses cycle through the cached candidates until
    :meth:`invalidate` is called on any other edit.
    """

    def __init__(self) -> None:
        self._candidates: list[str] = []
        self._cursor = 0
        self._prefix = ""

    @property
    def candidates(self) -> list[str]:
        return list(self._candidates)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def active(self) -> bool:
        return bool(self._candidates)

    def invalidate(self) -> None:
        self._candidates = []
        self._cursor = 0
        self._prefix = ""

    def complete(self, buffer: str, listing: Sequence[DirEntry]) -> CompletionOutcome:
        if self._candidates:
            self._cursor = (self._cursor + 1) % len(self._candidates)
            return self._cycling_outcome()

        prefix, word = split_completion_target(buffer)
        if not word:
            return CompletionOutcome(buffer=buffer)

        matches = sorted(
            entry.completion_text
            for entry in listing
            if not entry.is_parent and entry.name.startswith(word)
        )
        logger.debug("Completion for %r: %d candidates", word, len(matches))

        if not matches:
            return CompletionOutcome(buffer=buffer, message="No matches found")

        if len(matches) == 1:
            self.invalidate()
            return CompletionOutcome(
                buffer=prefix + matches[0],
                message="Completed",
                candidate_count=1,
            )

        self._candidates = matches
        self._cursor = 0
        self._prefix = prefix
        return self._cycling_outcome()

    def _cycling_outcome(self) -> CompletionOutcome:
        total = len(self._candidates)
        return CompletionOutcome(
            buffer=self._prefix + self._candidates[self._cursor],
            message=f"Match {self._cursor + 1}/{total} (Tab to cycle)",
            candidate_count=total,
            cursor=self._cursor,
        )
