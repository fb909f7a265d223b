"""Persistent access history for recently opened paths and commands."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from filecast.models.entries import CommandRecord, RecentAccess

if TYPE_CHECKING:
    from filecast.data.db import Database


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _from_timestamp(value: object) -> datetime:
    return datetime.fromtimestamp(int(value), tz=UTC)  # type: ignore[call-overload]


class AccessHistory:
    """SQL-backed log of opened paths and executed commands."""

    def __init__(self, db: Database, clock: Callable[[], datetime] = _utc_now) -> None:
        self._db = db
        self._clock = clock

    async def log_access(self, path: Path) -> None:
        """Record one access to ``path``, bumping its counter."""
        await self._db.execute(
            """INSERT INTO recent_access (path, last_accessed, access_count)
               VALUES (?, ?, 1)
               ON CONFLICT(path) DO UPDATE SET
                   last_accessed = excluded.last_accessed,
                   access_count = access_count + 1""",
            (str(path), int(self._clock().timestamp())),
        )
        await self._db.commit()

    async def recent(self, limit: int = 10) -> list[RecentAccess]:
        """Most recently accessed paths, newest first."""
        rows = await self._db.fetch_all(
            """SELECT path, last_accessed, access_count FROM recent_access
               ORDER BY last_accessed DESC, rowid DESC
               LIMIT ?""",
            (limit,),
        )
        return [
            RecentAccess(
                path=Path(row["path"]),
                last_accessed=_from_timestamp(row["last_accessed"]),
                access_count=int(row["access_count"]),
            )
            for row in rows
        ]

    async def log_command(self, command: str, cwd: Path) -> None:
        await self._db.execute(
            """INSERT INTO command_history (command, path, last_run, run_count)
               VALUES (?, ?, ?, 1)
               ON CONFLICT(command, path) DO UPDATE SET
                   last_run = excluded.last_run,
                   run_count = run_count + 1""",
            (command, str(cwd), int(self._clock().timestamp())),
        )
        await self._db.commit()

    async def recent_commands(self, limit: int = 10) -> list[CommandRecord]:
        rows = await self._db.fetch_all(
            """SELECT command, path, last_run, run_count FROM command_history
               ORDER BY last_run DESC, rowid DESC
               LIMIT ?""",
            (limit,),
        )
        return [
            CommandRecord(
                command=row["command"],
                cwd=Path(row["path"]),
                last_run=_from_timestamp(row["last_run"]),
                run_count=int(row["run_count"]),
            )
            for row in rows
        ]
