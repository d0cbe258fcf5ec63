"""Grading run orchestration.

rubric → discovery → collectors (concurrent) → normalize/aggregate →
``grading.json``. Only a rubric :class:`ConfigError` stops the run
before collection; a failed write surfaces as :class:`PersistError`.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from repograde.collectors import (
    AccessibilityCollector,
    GitHistoryCollector,
    HtmlStructureCollector,
    LintSummary,
    MarkdownLintCollector,
    RawSignal,
    SignalCollector,
    TextQualityCollector,
)
from repograde.config import Settings, TextScoringConfig
from repograde.ingestion import RepoTree, discover
from repograde.pipeline import PipelineStage, StageGroup, StageResult
from repograde.report import GradeReport, emit_report
from repograde.rubric import Rubric, load_rubric
from repograde.scoring import build_report
from repograde.text import FileTextAnalysis

logger = logging.getLogger(__name__)


@dataclass
class CollectorSet:
    """Every collector a run uses, built once from settings."""

    scored: list[SignalCollector]
    text: TextQualityCollector
    lint: MarkdownLintCollector

    @classmethod
    def from_settings(cls, settings: Settings) -> CollectorSet:
        return cls(
            scored=[
                HtmlStructureCollector(
                    settings.htmlhint_command,
                    timeout=settings.tool_timeout_seconds,
                ),
                AccessibilityCollector(),
                GitHistoryCollector(
                    timeout=settings.git_timeout_seconds
                ),
            ],
            text=TextQualityCollector(
                TextScoringConfig.from_settings(settings)
            ),
            lint=MarkdownLintCollector(
                settings.markdownlint_command,
                timeout=settings.tool_timeout_seconds,
            ),
        )


@dataclass
class CollectedSignals:
    """Collector outputs, each already degraded where needed."""

    signals: dict[str, RawSignal] = field(
        default_factory=lambda: dict[str, RawSignal]()
    )
    text_files: list[FileTextAnalysis] = field(
        default_factory=lambda: list[FileTextAnalysis]()
    )
    lint: list[LintSummary] = field(
        default_factory=lambda: list[LintSummary]()
    )
    stages: list[StageResult[Any]] = field(
        default_factory=lambda: list[StageResult[Any]]()
    )


@dataclass
class GradingResult:
    """What a finished run produced."""

    report: GradeReport
    output_path: Path
    stages: list[StageResult[Any]]
    total_duration_ms: float


def resolve_rubric_path(repo_root: Path, rubric_path: Path) -> Path:
    """Relative rubric paths are taken from the repository root."""
    if rubric_path.is_absolute():
        return rubric_path
    return repo_root / rubric_path


async def collect_signals(
    tree: RepoTree,
    collectors: CollectorSet,
    timeout: float | None = None,
) -> CollectedSignals:
    """Run all collectors concurrently under one deadline.

    A collector that fails or misses the deadline is replaced by its
    documented default; the others are unaffected.
    """
    stages: list[PipelineStage[RepoTree, Any]] = [
        PipelineStage(name=c.name, execute=c.safe_collect)
        for c in collectors.scored
    ]
    stages.append(
        PipelineStage(
            name=collectors.text.name,
            execute=collectors.text.collect,
        )
    )
    stages.append(
        PipelineStage(
            name=collectors.lint.name,
            execute=collectors.lint.safe_collect,
        )
    )

    group: StageGroup[RepoTree] = StageGroup(
        name="collectors", stages=stages, deadline=timeout
    )
    results = await group.execute(tree)

    collected = CollectedSignals(stages=results)
    n_scored = len(collectors.scored)

    for collector, result in zip(
        collectors.scored, results[:n_scored], strict=True
    ):
        if result.ok and isinstance(result.output, RawSignal):
            signal = result.output
        else:
            reason = result.error or str(result.status)
            logger.warning(
                "event=collector_degraded collector=%s reason=%s",
                collector.name,
                reason,
            )
            signal = collector.degraded(
                f"Collector {result.status}: {reason}"
            )
        collected.signals[signal.name] = signal

    text_result = results[n_scored]
    if text_result.ok and text_result.output is not None:
        collected.text_files = list(text_result.output)
    else:
        logger.warning(
            "event=collector_degraded collector=%s reason=%s",
            collectors.text.name,
            text_result.error or text_result.status,
        )
        collected.text_files = await asyncio.to_thread(
            collectors.text.complete_offline, tree
        )

    lint_result = results[n_scored + 1]
    if lint_result.ok and isinstance(lint_result.output, LintSummary):
        collected.lint.append(lint_result.output)
    else:
        collected.lint.append(
            collectors.lint.not_measured(
                f"Collector {lint_result.status}: "
                f"{lint_result.error or 'no result'}"
            )
        )

    return collected


async def discover_or_empty(root: Path, settings: Settings) -> RepoTree:
    """Discovery that never aborts a run; failure means nothing found."""
    try:
        return await asyncio.to_thread(discover, root, settings)
    except Exception:
        logger.exception("event=discovery_failed root=%s", root)
        return RepoTree(root=root)


async def run_grading(
    repo_root: Path,
    settings: Settings | None = None,
    *,
    rubric_path: Path | None = None,
    collectors: CollectorSet | None = None,
) -> GradingResult:
    """Grade the repository at ``repo_root`` and write its report."""
    if settings is None:
        settings = Settings()
    start = time.monotonic()
    root = repo_root.resolve()

    rubric: Rubric = load_rubric(
        resolve_rubric_path(root, rubric_path or settings.rubric_path)
    )

    tree = await discover_or_empty(root, settings)
    if collectors is None:
        collectors = CollectorSet.from_settings(settings)

    collected = await collect_signals(
        tree, collectors, timeout=settings.collector_timeout_seconds
    )
    report = build_report(
        rubric,
        collected.signals,
        collected.text_files,
        collected.lint,
    )
    output_path = emit_report(report, root, settings.output_filename)

    return GradingResult(
        report=report,
        output_path=output_path,
        stages=collected.stages,
        total_duration_ms=(time.monotonic() - start) * 1000,
    )
