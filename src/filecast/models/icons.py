"""Glyphs shown next to results, chosen by entry kind and file extension."""

from __future__ import annotations

from pathlib import Path, PurePath

DIRECTORY_ICON = "📁"
APPLICATION_ICON = "🚀"
COMMAND_ICON = "⚡"
GREP_ICON = "🔎"
DEFAULT_FILE_ICON = "📄"

_ICON_GROUPS: tuple[tuple[str, frozenset[str]], ...] = (
    ("🖼️", frozenset({"png", "jpg", "jpeg", "gif", "bmp", "svg", "webp", "ico", "tiff"})),
    ("🎬", frozenset({"mp4", "avi", "mkv", "mov", "wmv", "flv", "webm", "m4v", "mpeg", "mpg"})),
    ("🎵", frozenset({"mp3", "wav", "flac", "aac", "ogg", "wma", "m4a", "opus"})),
    ("📝", frozenset({"pdf", "doc", "docx", "txt", "rtf", "odt"})),
    ("📊", frozenset({"xls", "xlsx", "csv", "ods", "ppt", "pptx", "odp"})),
    ("📦", frozenset({"zip", "tar", "gz", "bz2", "7z", "rar", "xz", "tgz"})),
    (
        "💻",
        frozenset(
            {"rs", "py", "js", "ts", "java", "c", "cpp", "h", "hpp", "go", "rb", "php", "tsx", "jsx"}
        ),
    ),
    ("📋", frozenset({"html", "css", "json", "xml", "yaml", "yml", "toml"})),
    ("⚙️", frozenset({"exe", "bin", "sh", "bat", "cmd"})),
)
ICON_BY_EXTENSION: dict[str, str] = {
    ext: icon for icon, extensions in _ICON_GROUPS for ext in extensions
}


def file_icon(name: str) -> str:
    """Return the glyph for a file name based on its last extension."""
    suffix = PurePath(name).suffix.lower().lstrip(".")
    return ICON_BY_EXTENSION.get(suffix, DEFAULT_FILE_ICON)


def entry_icon(name: str, *, is_dir: bool) -> str:
    return DIRECTORY_ICON if is_dir else file_icon(name)


def is_directory(path: Path) -> bool:
    """``Path.is_dir`` that treats any stat failure as "not a directory"."""
    try:
        return path.is_dir()
    except OSError:
        return False
