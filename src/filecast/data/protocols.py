"""Protocol definitions for data access."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from filecast.data.tools import ToolOutput


class ToolRunner(Protocol):
    """Runs one external program and captures its output.

    Implementations raise ``OSError`` when the program cannot be started.
    """

    def run(self, program: str, args: list[str], cwd: Path) -> ToolOutput: ...
