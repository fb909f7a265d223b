"""Configuration for Filecast."""

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (
    "node_modules",
    ".next",
    ".git",
    "target",
    "dist",
    "build",
    "__pycache__",
    ".venv",
    "venv",
    ".cache",
)


@dataclass(frozen=True)
class SearchConfig:
    """Directories skipped by the external name/content search tools."""

    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS

    def rg_exclude_args(self) -> list[str]:
        """Glob-negation pairs for ripgrep."""
        args: list[str] = []
        for name in self.exclude_dirs:
            args.extend(["--glob", f"!{name}/**"])
        return args

    def fd_exclude_args(self) -> list[str]:
        args: list[str] = []
        for name in self.exclude_dirs:
            args.extend(["--exclude", name])
        return args

    def grep_exclude_args(self) -> list[str]:
        return [f"--exclude-dir={name}" for name in self.exclude_dirs]

    def find_exclude_args(self) -> list[str]:
        args: list[str] = []
        for name in self.exclude_dirs:
            args.extend(["-not", "-path", f"*{name}*"])
        return args


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    start_dir: Path = field(default_factory=Path.cwd)
    cache_dir: Path = field(default_factory=lambda: Path.home() / ".cache" / "filecast")
    search: SearchConfig = field(default_factory=SearchConfig)
    show_hidden: bool = False
    recent_limit: int = 10
    result_limit: int = 20

    @property
    def db_path(self) -> Path:
        return self.cache_dir / "history.db"
