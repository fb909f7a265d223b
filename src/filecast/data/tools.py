"""External name/content search tools (fd/find, rg/grep)."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from filecast.models.icons import is_directory
from filecast.models.search import SearchResult

if TYPE_CHECKING:
    from filecast.config import SearchConfig
    from filecast.data.protocols import ToolRunner

logger = logging.getLogger(__name__)

TOOL_MATCH_LIMIT = 20
MAX_TOOL_RESULTS = 15
FIND_MAX_DEPTH = 5
_MAX_LINE_NUMBER = 2**32 - 1


class ToolError(OSError):
    """An external tool could not be started."""


@dataclass(frozen=True, slots=True)
class ToolOutput:
    """Captured result of one external process run."""

    stdout: str
    stderr: str = ""
    returncode: int = 0


class SubprocessRunner:
    """Runs tools synchronously with ``subprocess.run``."""

    def run(self, program: str, args: list[str], cwd: Path) -> ToolOutput:
        try:
            completed = subprocess.run(
                [program, *args],
                cwd=cwd,
                capture_output=True,
                check=False,
            )
        except OSError as exc:
            raise ToolError(f"Failed to start {program}: {exc}") from exc
        return ToolOutput(
            stdout=completed.stdout.decode("utf-8", errors="replace"),
            stderr=completed.stderr.decode("utf-8", errors="replace"),
            returncode=completed.returncode,
        )


@dataclass(frozen=True, slots=True)
class _ToolCall:
    program: str
    args: list[str]
    # Exit codes that still mean "the tool worked" (rg exits 1 on no match).
    ok_codes: frozenset[int] = frozenset({0})


def parse_grep_line(line: str) -> tuple[Path, int, str] | None:
    """Split ``path:line:content`` output; None when malformed."""
    parts = line.split(":", 2)
    if len(parts) < 3:
        return None
    path, line_field, content = parts
    if not (line_field.isascii() and line_field.isdigit()):
        return None
    line_number = int(line_field)
    if line_number > _MAX_LINE_NUMBER:
        return None
    return Path(path), line_number, content


class ExternalToolInvoker:
    """Content and name search through external tools with fallbacks.

    Failures never propagate: a missing or failing primary tool falls back to
    the secondary one, and a failing secondary yields no results.
    """

    def __init__(self, runner: ToolRunner, config: SearchConfig, cwd: Path) -> None:
        self._runner = runner
        self._config = config
        self._cwd = cwd

    def content_search(self, pattern: str) -> list[SearchResult]:
        """Search file contents (rg, falling back to grep)."""
        primary = _ToolCall(
            "rg",
            [
                "-n",
                "-i",
                "--max-count",
                str(TOOL_MATCH_LIMIT),
                *self._config.rg_exclude_args(),
                "-e",
                pattern,
                ".",
            ],
            ok_codes=frozenset({0, 1}),
        )
        fallback = _ToolCall(
            "grep",
            [
                "-r",
                "-n",
                "-i",
                "-m",
                str(TOOL_MATCH_LIMIT),
                *self._config.grep_exclude_args(),
                "-e",
                pattern,
                ".",
            ],
        )
        stdout = self._run_with_fallback(primary, fallback)

        results: list[SearchResult] = []
        for line in stdout.splitlines():
            parsed = parse_grep_line(line)
            if parsed is None:
                logger.debug("Dropping malformed content-search line: %r", line)
                continue
            results.append(SearchResult.grep(*parsed))
            if len(results) >= MAX_TOOL_RESULTS:
                break
        return results

    def name_search(self, pattern: str) -> list[SearchResult]:
        """Search file names (fd, falling back to find)."""
        primary = _ToolCall(
            "fd",
            [
                "-i",
                "--max-results",
                str(TOOL_MATCH_LIMIT),
                *self._config.fd_exclude_args(),
                "--",
                pattern,
            ],
        )
        fallback = _ToolCall(
            "find",
            [
                ".",
                "-maxdepth",
                str(FIND_MAX_DEPTH),
                *self._config.find_exclude_args(),
                "-iname",
                f"*{pattern}*",
            ],
        )
        stdout = self._run_with_fallback(primary, fallback)

        results: list[SearchResult] = []
        for line in stdout.splitlines():
            raw = line.strip()
            if not raw:
                continue
            path = Path(raw)
            on_disk = path if path.is_absolute() else self._cwd / path
            try:
                found = on_disk.exists()
            except OSError:
                found = False
            if not found:
                logger.debug("Dropping missing name-search path: %s", raw)
                continue
            results.append(SearchResult.found_path(path, is_dir=is_directory(on_disk)))
            if len(results) >= MAX_TOOL_RESULTS:
                break
        return results

    def _run_with_fallback(self, primary: _ToolCall, fallback: _ToolCall) -> str:
        try:
            output = self._runner.run(primary.program, primary.args, self._cwd)
        except OSError as exc:
            logger.info(
                "%s unavailable, falling back to %s: %s",
                primary.program,
                fallback.program,
                exc,
            )
        else:
            if output.returncode in primary.ok_codes:
                return output.stdout
            logger.info(
                "%s exited with %d, falling back to %s",
                primary.program,
                output.returncode,
                fallback.program,
            )

        try:
            output = self._runner.run(fallback.program, fallback.args, self._cwd)
        except OSError as exc:
            logger.warning("%s unavailable, no results: %s", fallback.program, exc)
            return ""
        return output.stdout
