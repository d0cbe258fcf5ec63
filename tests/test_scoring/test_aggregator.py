"""Tests for report assembly from collector signals."""

from __future__ import annotations

from typing import Any

from repograde.collectors.schemas import LintSummary, RawSignal
from repograde.constants import AnalysisSource, SignalStatus
from repograde.rubric import parse_rubric
from repograde.rubric.schemas import Rubric
from repograde.scoring import aggregate, build_report, total_score
from repograde.scoring.aggregator import text_signals
from repograde.text.heuristic import heuristic_text_score
from repograde.text.schemas import (
    FileTextAnalysis,
    TextAnalysis,
    TextAnalysisError,
)
from tests.helpers import DEFAULT_TASKS, analysis_json, words


def _rubric(tasks: dict[str, Any] | None = None) -> Rubric:
    return parse_rubric({"tasks": tasks or DEFAULT_TASKS}, source="test")


def _defaults() -> dict[str, RawSignal]:
    return {
        "web_structure": RawSignal(
            name="web_structure",
            score=20,
            native_max=25,
            details="none",
            status=SignalStatus.DEFAULTED,
        ),
        "accessibility": RawSignal(
            name="accessibility",
            score=20,
            native_max=20,
            details="none",
            status=SignalStatus.DEFAULTED,
        ),
        "git_collaboration": RawSignal(
            name="git_collaboration",
            score=5,
            native_max=10,
            details="unknown",
            status=SignalStatus.DEFAULTED,
        ),
    }


def test_all_defaults_stay_within_bounds() -> None:
    rubric = _rubric()
    report = build_report(rubric, _defaults())

    assert report.breakdown == {
        "web_structure": 20,
        "accessibility": 20,
        "writing_quality": 0,
        "originality": 0,
        "git_collaboration": 5,
    }
    assert report.total == 45
    assert 0 <= report.total <= rubric.total_weight
    assert set(report.defaulted) == set(rubric.names)


def test_total_is_sum_of_breakdown() -> None:
    report = build_report(
        _rubric(),
        _defaults(),
        [
            FileTextAnalysis(
                file="a.md", analysis=heuristic_text_score(words(500))
            )
        ],
    )
    assert report.total == total_score(report.breakdown)
    assert report.breakdown["writing_quality"] == 18
    assert report.breakdown["originality"] == 6


def test_breakdown_follows_rubric_order() -> None:
    tasks = dict(reversed(list(DEFAULT_TASKS.items())))
    report = build_report(_rubric(tasks), _defaults())
    assert list(report.breakdown) == list(tasks)


def test_extra_rubric_tasks_left_out() -> None:
    tasks = {**DEFAULT_TASKS, "presentation": {"weight": 5, "max": 10}}
    rubric = _rubric(tasks)
    breakdown = aggregate(rubric, {"presentation": 5, "web_structure": 3})
    assert "presentation" not in breakdown
    assert breakdown["web_structure"] == 3
    assert breakdown["accessibility"] == 0


def test_details_carry_status_and_lint() -> None:
    lint = LintSummary(
        name="markdownlint", findings=2, files=1, details="2 findings."
    )
    report = build_report(_rubric(), _defaults(), lint=[lint])
    assert report.details["git_collaboration"] == "unknown (defaulted)"
    assert report.details["markdownlint"] == "2 findings. (measured)"
    assert "markdownlint" not in report.breakdown


class TestTextSignals:
    def test_no_files(self) -> None:
        writing, originality = text_signals([])
        assert writing.score == 0
        assert writing.status == SignalStatus.DEFAULTED
        assert "No text files found." in writing.details
        assert originality.score == 0

    def test_counts_by_source(self) -> None:
        ai = TextAnalysis.model_validate_json(analysis_json())
        files = [
            FileTextAnalysis(file="a.md", analysis=ai),
            FileTextAnalysis(file="b.md", analysis=heuristic_text_score("x")),
            FileTextAnalysis(
                file="c.md",
                analysis=TextAnalysisError(
                    error="AI response parse error", raw=""
                ),
            ),
        ]
        writing, _ = text_signals(files)
        assert ai.source == AnalysisSource.LLM
        assert writing.status == SignalStatus.MEASURED
        assert (
            "3 text file(s) evaluated: 1 by AI, 1 by heuristic fallback, "
            "1 unparseable." in writing.details
        )

    def test_only_unparseable_is_defaulted(self) -> None:
        files = [
            FileTextAnalysis(
                file="c.md",
                analysis=TextAnalysisError(
                    error="AI response parse error", raw=""
                ),
            )
        ]
        writing, originality = text_signals(files)
        assert writing.status == SignalStatus.DEFAULTED
        assert writing.score == 0
        assert originality.score == 0
