"""Async SQLite connection manager using aiosqlite."""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType
from typing import Any

import aiosqlite

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS recent_access (
    path TEXT PRIMARY KEY,
    last_accessed INTEGER NOT NULL,
    access_count INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS command_history (
    command TEXT NOT NULL,
    path TEXT NOT NULL,
    last_run INTEGER NOT NULL,
    run_count INTEGER NOT NULL,
    PRIMARY KEY (command, path)
);

CREATE INDEX IF NOT EXISTS idx_recent_access_last ON recent_access(last_accessed);
CREATE INDEX IF NOT EXISTS idx_command_history_last ON command_history(last_run);
"""


class Database:
    """History database handle, opened with ``async with Database(path) as db``.

    Raises ``OSError`` when the cache directory cannot be created and
    ``sqlite3.Error`` when the file cannot be opened or migrated.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._conn: aiosqlite.Connection | None = None

    @property
    def in_memory(self) -> bool:
        return str(self._db_path) == ":memory:"

    async def __aenter__(self) -> Database:
        if not self.in_memory:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = await aiosqlite.connect(str(self._db_path))
        self._conn.row_factory = aiosqlite.Row
        if not self.in_memory:
            await self._conn.execute("PRAGMA journal_mode=WAL")
        await self._ensure_schema()
        await self._conn.commit()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError("History database is not open")
        return self._conn

    async def execute(self, sql: str, params: tuple[Any, ...] = ()) -> None:
        await self._connection().execute(sql, params)

    async def fetch_all(self, sql: str, params: tuple[Any, ...] = ()) -> list[aiosqlite.Row]:
        cursor = await self._connection().execute(sql, params)
        return list(await cursor.fetchall())

    async def commit(self) -> None:
        await self._connection().commit()

    async def _ensure_schema(self) -> None:
        conn = self._connection()
        await conn.execute(
            "CREATE TABLE IF NOT EXISTS app_meta (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
        )
        rows = await self.fetch_all("SELECT value FROM app_meta WHERE key = 'schema_version'")
        stored = str(rows[0]["value"]) if rows else ""
        current_version = int(stored) if stored.isdigit() else 0
        await conn.executescript(SCHEMA_SQL)
        if current_version != SCHEMA_VERSION:
            logger.info("Initialising history schema version %s", SCHEMA_VERSION)
            await conn.execute(
                "INSERT OR REPLACE INTO app_meta (key, value) VALUES ('schema_version', ?)",
                (str(SCHEMA_VERSION),),
            )
