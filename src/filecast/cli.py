"""Typer CLI for Filecast: search, list, complete and history commands."""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from filecast.config import DEFAULT_EXCLUDE_DIRS, Config, SearchConfig

if TYPE_CHECKING:
    from filecast.models.entries import CommandRecord, RecentAccess
    from filecast.services.launcher import LauncherState

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="filecast",
    help="Filecast: fuzzy launcher search and directory navigation.",
    no_args_is_help=True,
)

CwdOption = Annotated[
    Path | None,
    typer.Option("--cwd", help="Directory to search and list (defaults to the current one)"),
]
CacheDirOption = Annotated[
    Path | None,
    typer.Option("--cache-dir", help="Directory holding the access-history database"),
]


def _build_config(
    cwd: Path | None,
    cache_dir: Path | None = None,
    exclude: list[str] | None = None,
    show_hidden: bool = False,
) -> Config:
    base = Config()
    return Config(
        start_dir=(cwd or Path.cwd()).resolve(),
        cache_dir=cache_dir or base.cache_dir,
        search=SearchConfig(exclude_dirs=tuple(exclude) if exclude else DEFAULT_EXCLUDE_DIRS),
        show_hidden=show_hidden,
    )


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Filecast command line."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Query; prefix ':' command, '@' content, '/' name")],
    cwd: CwdOption = None,
    cache_dir: CacheDirOption = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", help="Directory name to skip in @ and / searches"),
    ] = None,
    apps_file: Annotated[
        Path | None,
        typer.Option("--apps", help="JSON manifest of installed applications"),
    ] = None,
) -> None:
    """Search apps, recent paths and the current directory."""
    from filecast.data.apps import load_apps

    config = _build_config(cwd, cache_dir, exclude)
    try:
        recents = asyncio.run(_load_recents(config))
    except (OSError, sqlite3.Error) as exc:
        logger.warning("Access history unavailable, searching without recents: %s", exc)
        recents = []
    state = _create_state(config)
    state.set_apps(load_apps(apps_file))
    state.set_recents(recents)

    results = state.search(query)
    if not results:
        typer.echo("No results")
        return
    for result in results:
        typer.echo(f"{result.icon} {result.name}  [{result.score}]  {result.description}")


@app.command("ls")
def list_directory(
    path: Annotated[Path | None, typer.Argument(help="Directory to list")] = None,
    filter_query: Annotated[
        str, typer.Option("--filter", "-f", help="Case-insensitive name filter")
    ] = "",
    show_hidden: Annotated[bool, typer.Option("--all", "-a", help="Show dot-files")] = False,
) -> None:
    """List a directory, optionally filtered."""
    config = _build_config(path, show_hidden=show_hidden)
    state = _create_state(config)
    for entry in state.filter(filter_query):
        suffix = "/" if entry.is_dir and not entry.is_parent else ""
        typer.echo(f"{entry.name}{suffix}")


@app.command()
def complete(
    buffer: Annotated[str, typer.Argument(help="Command-line buffer to complete")],
    cwd: CwdOption = None,
    presses: Annotated[int, typer.Option("--presses", "-n", min=1, help="Tab presses")] = 1,
) -> None:
    """Tab-complete the last word of BUFFER against the directory."""
    state = _create_state(_build_config(cwd))
    for _ in range(presses):
        buffer = state.tab_complete(buffer)
    typer.echo(buffer)
    if state.status_message:
        typer.echo(state.status_message, err=True)


@app.command()
def record(
    path: Annotated[
        Path | None, typer.Argument(help="Path that was opened, or the cwd of --command")
    ] = None,
    cache_dir: CacheDirOption = None,
    command: Annotated[
        str | None, typer.Option("--command", "-c", help="Record a shell command run in PATH")
    ] = None,
) -> None:
    """Record an access to PATH (or a command run there) in the history."""
    config = _build_config(None, cache_dir)
    if command is None and path is None:
        typer.echo("Nothing to record: pass a PATH or --command", err=True)
        raise typer.Exit(code=2)
    target = (path or Path.cwd()).resolve()
    if command is not None:
        asyncio.run(_record_command(config, command, target))
    else:
        asyncio.run(_record_access(config, target))


@app.command()
def recent(
    cache_dir: CacheDirOption = None,
    limit: Annotated[int, typer.Option("--limit", min=1, help="Entries to show")] = 10,
    commands: Annotated[
        bool, typer.Option("--commands", help="Show recent shell commands instead of paths")
    ] = False,
) -> None:
    """Show recently accessed paths (or commands), newest first."""
    config = _build_config(None, cache_dir)
    if commands:
        for cmd in asyncio.run(_load_commands(config, limit)):
            stamp = f"{cmd.last_run:%Y-%m-%d %H:%M}"
            typer.echo(f"{stamp}  x{cmd.run_count}  {cmd.command}  ({cmd.cwd})")
        return
    for entry in asyncio.run(_load_recents(config, limit)):
        typer.echo(f"{entry.last_accessed:%Y-%m-%d %H:%M}  x{entry.access_count}  {entry.path}")


def _create_state(config: Config) -> LauncherState:
    from filecast.services.launcher import LauncherState

    try:
        return LauncherState.create(config)
    except OSError as exc:
        typer.echo(f"Cannot read {config.start_dir}: {exc}", err=True)
        raise typer.Exit(code=1) from exc


async def _load_recents(config: Config, limit: int | None = None) -> list[RecentAccess]:
    from filecast.data.db import Database
    from filecast.data.history import AccessHistory

    async with Database(config.db_path) as db:
        return await AccessHistory(db).recent(limit or config.recent_limit)


async def _record_access(config: Config, path: Path) -> None:
    from filecast.data.db import Database
    from filecast.data.history import AccessHistory

    async with Database(config.db_path) as db:
        await AccessHistory(db).log_access(path)
    typer.echo(f"Recorded {path}")


async def _record_command(config: Config, command: str, cwd: Path) -> None:
    from filecast.data.db import Database
    from filecast.data.history import AccessHistory

    async with Database(config.db_path) as db:
        await AccessHistory(db).log_command(command, cwd)
    typer.echo(f"Recorded command {command!r} in {cwd}")


async def _load_commands(config: Config, limit: int) -> list[CommandRecord]:
    from filecast.data.db import Database
    from filecast.data.history import AccessHistory

    async with Database(config.db_path) as db:
        return await AccessHistory(db).recent_commands(limit)
