"""Back/forward history of visited directories."""

from __future__ import annotations

from pathlib import Path


class NavigationHistory:
    """Browser-style navigation stack.

    Always holds at least the starting directory; ``index`` points at the
    current one. Pushing from the middle of the stack discards forward entries.
    """

    def __init__(self, start: Path) -> None:
        self._entries: list[Path] = [start]
        self._index = 0

    @property
    def entries(self) -> tuple[Path, ...]:
        return tuple(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Path:
        return self._entries[self._index]

    @property
    def can_go_back(self) -> bool:
        return self._index > 0

    @property
    def can_go_forward(self) -> bool:
        return self._index < len(self._entries) - 1

    def push(self, path: Path) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(path)
        self._index = len(self._entries) - 1

    def back(self) -> Path | None:
        """Step back; returns the new current path, or None at the oldest entry."""
        if not self.can_go_back:
            return None
        self._index -= 1
        return self.current

    def forward(self) -> Path | None:
        """Step forward; returns the new current path, or None at the newest entry."""
        if not self.can_go_forward:
            return None
        self._index += 1
        return self.current
