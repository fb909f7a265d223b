"""Tests for directory listing."""

from __future__ import annotations

from pathlib import Path

import pytest

from filecast.data.listing import entry_from_path, read_directory


class TestReadDirectory:
    def test_parent_first_then_dirs_then_files(self, workdir: Path) -> None:
        entries = read_directory(workdir)
        assert [e.name for e in entries] == [
            "..",
            "docs",
            "downloads",
            "src",
            "notes.txt",
            "report.pdf",
        ]

    def test_parent_entry_shape(self, workdir: Path) -> None:
        parent = read_directory(workdir)[0]
        assert parent.is_parent
        assert parent.is_dir
        assert parent.size == 0
        assert parent.modified is None
        assert parent.path == workdir.parent

    def test_show_hidden(self, workdir: Path) -> None:
        names = [e.name for e in read_directory(workdir, show_hidden=True)]
        assert ".hidden" in names

    def test_file_metadata(self, workdir: Path) -> None:
        entry = entry_from_path(workdir / "notes.txt")
        assert not entry.is_dir
        assert entry.size == 5
        assert entry.modified is not None

    def test_root_has_no_parent_entry(self) -> None:
        entries = read_directory(Path("/"))
        assert all(not e.is_parent for e in entries)

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            read_directory(tmp_path / "missing")
