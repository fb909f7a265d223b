"""Load the installed-application list from a JSON manifest."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from filecast.models.entries import DesktopApp

logger = logging.getLogger(__name__)

_APPS_ADAPTER = TypeAdapter(list[DesktopApp])


def load_apps(manifest_path: Path | None) -> list[DesktopApp]:
    """Read apps from a JSON list, dropping duplicate names, sorted case-insensitively.

    A missing or invalid manifest yields an empty list.
    """
    if manifest_path is None:
        return []
    if not manifest_path.is_file():
        logger.info("App manifest not found: %s", manifest_path)
        return []
    try:
        apps = _APPS_ADAPTER.validate_json(manifest_path.read_bytes())
    except (OSError, ValidationError) as exc:
        logger.warning("Failed to load app manifest %s: %s", manifest_path, exc)
        return []

    seen: set[str] = set()
    unique: list[DesktopApp] = []
    for app in apps:
        if app.name in seen:
            continue
        seen.add(app.name)
        unique.append(app)
    unique.sort(key=lambda a: a.name.lower())
    return unique
