"""Tests for CLI argument parsing and the grade command."""

from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

import repograde
from repograde import __version__
from repograde.cli import _build_parser, main
from tests.helpers import FakeProcess, FakeTools, words, write_rubric


class TestArgParser:
    def test_version_flag(self) -> None:
        args = _build_parser().parse_args(["--version"])
        assert args.version is True

    def test_grade_defaults(self) -> None:
        args = _build_parser().parse_args(["grade"])
        assert args.command == "grade"
        assert args.repo_path == "."
        assert args.rubric is None
        assert args.output is None
        assert args.verbose is False

    def test_grade_with_options(self) -> None:
        args = _build_parser().parse_args(
            [
                "grade",
                "/tmp/submission",
                "--rubric",
                "course.json",
                "--output",
                "result.json",
                "--verbose",
            ]
        )
        assert args.repo_path == "/tmp/submission"
        assert args.rubric == "course.json"
        assert args.output == "result.json"
        assert args.verbose is True

    def test_no_command(self) -> None:
        assert _build_parser().parse_args([]).command is None


class TestMain:
    @pytest.fixture(autouse=True)
    def _isolate(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> Iterator[None]:
        monkeypatch.chdir(tmp_path)
        root = logging.getLogger()
        level = root.level
        yield
        root.setLevel(level)

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command_prints_help(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([]) == 0
        assert "repograde" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "argv",
        [
            ["grade", "a", "b"],
            ["grade", "--bogus"],
            ["frobnicate"],
            ["--help"],
        ],
    )
    def test_usage_errors_exit_zero(
        self, argv: list[str], capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(argv) == 0
        capsys.readouterr()

    def test_missing_rubric_exits_zero_without_artifact(
        self, tmp_path: Path, fake_tools: FakeTools
    ) -> None:
        assert main(["grade", str(tmp_path)]) == 0
        assert not (tmp_path / "grading.json").exists()
        assert fake_tools.calls == []

    def test_grade_writes_report(
        self,
        tmp_path: Path,
        fake_tools: FakeTools,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        fake_tools.outcomes["git"] = FakeProcess(stdout="3\n")
        write_rubric(tmp_path)
        (tmp_path / "articles").mkdir()
        (tmp_path / "articles" / "post.md").write_text(words(500))

        assert main(["grade", str(tmp_path)]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert "Grading completed. Output: grading.json" in lines
        assert "Total score: 68" in lines
        data = json.loads((tmp_path / "grading.json").read_text())
        assert data["summary"]["total_score"] == 68

    def test_output_and_verbose(
        self,
        tmp_path: Path,
        fake_tools: FakeTools,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_rubric(tmp_path, name="course.json")

        code = main(
            [
                "grade",
                str(tmp_path),
                "-r",
                "course.json",
                "-o",
                "result.json",
                "-v",
            ]
        )

        assert code == 0
        assert (tmp_path / "result.json").exists()
        out = capsys.readouterr().out
        assert "git_collaboration: 5" in out
        assert "Grading completed. Output: result.json" in out.splitlines()


def test_import_leaves_no_litellm_handlers() -> None:
    code = (
        "import logging, repograde.cli; "
        "print(sum(len(logging.getLogger(n).handlers) "
        "for n in ('LiteLLM', 'LiteLLM Router', 'LiteLLM Proxy')))"
    )
    out = subprocess.run(
        [sys.executable, "-c", code],
        env={
            **os.environ,
            "PYTHONPATH": str(Path(repograde.__file__).parents[1]),
        },
        capture_output=True,
        text=True,
        check=True,
    ).stdout
    assert out.strip() == "0"
