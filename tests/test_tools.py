"""Tests for external search tool invocation."""

from __future__ import annotations

from pathlib import Path

import pytest

from filecast.config import SearchConfig
from filecast.data.tools import (
    ExternalToolInvoker,
    SubprocessRunner,
    ToolError,
    ToolOutput,
    parse_grep_line,
)
from filecast.models import FileKind, GrepKind
from tests.conftest import FakeRunner

CONFIG = SearchConfig(exclude_dirs=("node_modules", ".git"))


class TestSearchConfigArgs:
    def test_rg_args(self) -> None:
        assert CONFIG.rg_exclude_args() == [
            "--glob",
            "!node_modules/**",
            "--glob",
            "!.git/**",
        ]

    def test_fd_args(self) -> None:
        assert CONFIG.fd_exclude_args() == ["--exclude", "node_modules", "--exclude", ".git"]

    def test_grep_args(self) -> None:
        assert CONFIG.grep_exclude_args() == ["--exclude-dir=node_modules", "--exclude-dir=.git"]

    def test_find_args(self) -> None:
        assert CONFIG.find_exclude_args() == [
            "-not",
            "-path",
            "*node_modules*",
            "-not",
            "-path",
            "*.git*",
        ]

    def test_default_excludes(self) -> None:
        assert "node_modules" in SearchConfig().exclude_dirs
        assert "__pycache__" in SearchConfig().exclude_dirs


class TestParseGrepLine:
    def test_basic(self) -> None:
        assert parse_grep_line("src/main.c:42:return 0;") == (
            Path("src/main.c"),
            42,
            "return 0;",
        )

    def test_content_keeps_extra_colons(self) -> None:
        assert parse_grep_line("a.py:3:x = {'k': 1}") == (Path("a.py"), 3, "x = {'k': 1}")

    @pytest.mark.parametrize(
        "line",
        ["src/main.c:notanumber:x", "src/main.c:42", "no colons", "a:-1:x", "a: 4:x", ""],
    )
    def test_malformed_dropped(self, line: str) -> None:
        assert parse_grep_line(line) is None


class TestContentSearch:
    def test_primary_rg(self, tmp_path: Path) -> None:
        runner = FakeRunner(
            {
                "rg": ToolOutput(
                    stdout="src/main.c:42:return 0;\nsrc/main.c:notanumber:x\nbad line\n",
                    returncode=0,
                )
            }
        )
        results = ExternalToolInvoker(runner, CONFIG, tmp_path).content_search("return")

        assert runner.programs == ["rg"]
        _, args, cwd = runner.calls[0]
        assert args[:4] == ["-n", "-i", "--max-count", "20"]
        assert "!node_modules/**" in args
        assert args[-3:] == ["-e", "return", "."]
        assert cwd == tmp_path

        assert len(results) == 1
        kind = results[0].kind
        assert isinstance(kind, GrepKind)
        assert (kind.path, kind.line, kind.content) == (Path("src/main.c"), 42, "return 0;")
        assert results[0].name == "main.c:42"
        assert results[0].score == 30
        assert results[0].icon == "🔎"

    def test_rg_no_match_exit_does_not_fall_back(self, tmp_path: Path) -> None:
        runner = FakeRunner({"rg": ToolOutput(stdout="", returncode=1), "grep": ToolOutput("")})
        assert ExternalToolInvoker(runner, CONFIG, tmp_path).content_search("zzz") == []
        assert runner.programs == ["rg"]

    def test_falls_back_to_grep_when_rg_missing(self, tmp_path: Path) -> None:
        runner = FakeRunner({"grep": ToolOutput(stdout="./a.txt:1:hello\n")})
        results = ExternalToolInvoker(runner, CONFIG, tmp_path).content_search("hello")

        assert runner.programs == ["rg", "grep"]
        _, args, _ = runner.calls[1]
        assert args[:5] == ["-r", "-n", "-i", "-m", "20"]
        assert "--exclude-dir=node_modules" in args
        assert len(results) == 1

    def test_falls_back_on_rg_error_exit(self, tmp_path: Path) -> None:
        runner = FakeRunner(
            {"rg": ToolOutput(stdout="", returncode=2), "grep": ToolOutput(stdout="b:2:x\n")}
        )
        results = ExternalToolInvoker(runner, CONFIG, tmp_path).content_search("x")
        assert runner.programs == ["rg", "grep"]
        assert len(results) == 1

    def test_total_failure_is_empty(self, tmp_path: Path) -> None:
        runner = FakeRunner()
        assert ExternalToolInvoker(runner, CONFIG, tmp_path).content_search("x") == []
        assert runner.programs == ["rg", "grep"]

    def test_caps_at_fifteen(self, tmp_path: Path) -> None:
        stdout = "".join(f"f.txt:{i}:line {i}\n" for i in range(1, 41))
        runner = FakeRunner({"rg": ToolOutput(stdout=stdout)})
        results = ExternalToolInvoker(runner, CONFIG, tmp_path).content_search("line")
        assert len(results) == 15
        assert isinstance(results[-1].kind, GrepKind)
        assert results[-1].kind.line == 15

    def test_description_truncated(self, tmp_path: Path) -> None:
        content = "   " + "x" * 200
        runner = FakeRunner({"rg": ToolOutput(stdout=f"f.txt:1:{content}\n")})
        result = ExternalToolInvoker(runner, CONFIG, tmp_path).content_search("x")[0]
        assert result.description == "x" * 80
        assert isinstance(result.kind, GrepKind)
        assert result.kind.content == content


class TestNameSearch:
    def test_primary_fd_filters_missing_paths(self, tmp_path: Path) -> None:
        (tmp_path / "docs").mkdir()
        (tmp_path / "notes.py").write_text("", encoding="utf-8")
        runner = FakeRunner({"fd": ToolOutput(stdout="docs\n  notes.py  \nghost.txt\n\n")})

        results = ExternalToolInvoker(runner, CONFIG, tmp_path).name_search("o")

        _, args, _ = runner.calls[0]
        assert args[:3] == ["-i", "--max-results", "20"]
        assert ["--exclude", "node_modules"] == args[3:5]
        assert args[-1] == "o"
        assert [r.name for r in results] == ["docs", "notes.py"]
        assert [r.icon for r in results] == ["📁", "💻"]
        assert all(r.score == 50 for r in results)
        assert all(isinstance(r.kind, FileKind) for r in results)

    def test_falls_back_to_find(self, tmp_path: Path) -> None:
        (tmp_path / "Report.PDF").write_text("", encoding="utf-8")
        runner = FakeRunner({"find": ToolOutput(stdout="./Report.PDF\n", returncode=1)})

        results = ExternalToolInvoker(runner, CONFIG, tmp_path).name_search("report")

        assert runner.programs == ["fd", "find"]
        _, args, _ = runner.calls[1]
        assert args[:3] == [".", "-maxdepth", "5"]
        assert args[3:6] == ["-not", "-path", "*node_modules*"]
        assert args[-2:] == ["-iname", "*report*"]
        assert [r.name for r in results] == ["Report.PDF"]
        assert results[0].icon == "📝"

    def test_absolute_paths(self, tmp_path: Path) -> None:
        target = tmp_path / "abs.txt"
        target.write_text("", encoding="utf-8")
        runner = FakeRunner({"fd": ToolOutput(stdout=f"{target}\n")})
        results = ExternalToolInvoker(runner, CONFIG, Path("/")).name_search("abs")
        assert results[0].description == str(target)

    def test_caps_at_fifteen(self, tmp_path: Path) -> None:
        names = [f"f{i}.txt" for i in range(20)]
        for name in names:
            (tmp_path / name).write_text("", encoding="utf-8")
        runner = FakeRunner({"fd": ToolOutput(stdout="\n".join(names))})
        assert len(ExternalToolInvoker(runner, CONFIG, tmp_path).name_search("f")) == 15

    def test_unstatable_paths_dropped(self, tmp_path: Path) -> None:
        (tmp_path / "ok.txt").write_text("", encoding="utf-8")
        too_long = "x" * 300
        runner = FakeRunner({"fd": ToolOutput(stdout=f"{too_long}/ok.txt\nok.txt\n")})
        results = ExternalToolInvoker(runner, CONFIG, tmp_path).name_search("ok")
        assert [r.name for r in results] == ["ok.txt"]

    def test_total_failure_is_empty(self, tmp_path: Path) -> None:
        runner = FakeRunner({"fd": ToolError("boom"), "find": ToolError("boom")})
        assert ExternalToolInvoker(runner, CONFIG, tmp_path).name_search("x") == []


class TestSubprocessRunner:
    def test_missing_program_raises_tool_error(self, tmp_path: Path) -> None:
        with pytest.raises(ToolError):
            SubprocessRunner().run("filecast-definitely-missing-tool", [], tmp_path)

    def test_missing_tools_degrade_to_no_results(self, tmp_path: Path, monkeypatch) -> None:
        def fake_run(*_args, **_kwargs):  # type: ignore[no-untyped-def]
            raise FileNotFoundError("not installed")

        monkeypatch.setattr("filecast.data.tools.subprocess.run", fake_run)
        invoker = ExternalToolInvoker(SubprocessRunner(), CONFIG, tmp_path)
        assert invoker.content_search("x") == []
        assert invoker.name_search("x") == []
