"""Sum normalized sub-scores and assemble the grade report."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from repograde.collectors.schemas import LintSummary, RawSignal
from repograde.constants import (
    ORIGINALITY_NATIVE_MAX,
    REQUIRED_TASKS,
    WRITING_NATIVE_MAX,
    AnalysisSource,
    SignalName,
    SignalStatus,
)
from repograde.report.schemas import GradeReport, ScoreBreakdown
from repograde.rubric.schemas import Rubric
from repograde.scoring.normalizer import (
    normalize_signal,
    originality_average,
    scored_analyses,
    writing_quality_percent,
)
from repograde.text.schemas import FileTextAnalysis

logger = logging.getLogger(__name__)


def aggregate(
    rubric: Rubric, normalized: Mapping[str, int]
) -> ScoreBreakdown:
    """Breakdown in rubric declaration order; absent signals count 0.

    Rubric tasks that no collector measures are left out.
    """
    return {
        w.name: int(normalized.get(w.name, 0))
        for w in rubric.weights
        if w.name in REQUIRED_TASKS
    }


def total_score(breakdown: Mapping[str, int]) -> int:
    """Plain integer sum; no re-rounding."""
    return sum(breakdown.values())


def text_signals(
    files: Sequence[FileTextAnalysis],
) -> tuple[RawSignal, RawSignal]:
    """Writing-quality percentage and originality average as signals."""
    analyses = scored_analyses(files)
    status = (
        SignalStatus.MEASURED if analyses else SignalStatus.DEFAULTED
    )
    by_ai = sum(1 for a in analyses if a.source == AnalysisSource.LLM)
    by_heuristic = len(analyses) - by_ai
    unparseable = len(files) - len(analyses)

    percent = writing_quality_percent(analyses)
    originality = originality_average(analyses)

    if files:
        summary = (
            f"{len(files)} text file(s) evaluated: {by_ai} by AI, "
            f"{by_heuristic} by heuristic fallback, "
            f"{unparseable} unparseable."
        )
    else:
        summary = "No text files found."

    writing = RawSignal(
        name=SignalName.WRITING_QUALITY.value,
        score=percent,
        native_max=WRITING_NATIVE_MAX,
        details=f"{summary} Writing quality {percent}%.",
        status=status,
    )
    originality_signal = RawSignal(
        name=SignalName.ORIGINALITY.value,
        score=originality,
        native_max=ORIGINALITY_NATIVE_MAX,
        details=(
            f"Average originality {originality}/"
            f"{ORIGINALITY_NATIVE_MAX} over {len(analyses)} file(s)."
        ),
        status=status,
    )
    return writing, originality_signal


def build_report(
    rubric: Rubric,
    signals: Mapping[str, RawSignal],
    text_files: Sequence[FileTextAnalysis] = (),
    lint: Sequence[LintSummary] = (),
) -> GradeReport:
    """Normalize each signal against its weight and assemble the report.

    ``signals`` holds the four scored collectors' results keyed by
    rubric name; writing quality and originality are derived here
    from ``text_files``.
    """
    writing, originality = text_signals(text_files)
    all_signals: dict[str, RawSignal] = {
        **signals,
        writing.name: writing,
        originality.name: originality,
    }

    normalized: dict[str, int] = {}
    details: dict[str, str] = {}
    statuses: dict[str, SignalStatus] = {}
    for weight in rubric.weights:
        signal = all_signals.get(weight.name)
        if signal is None:
            continue
        normalized[weight.name] = normalize_signal(signal, weight)
        details[weight.name] = f"{signal.details} ({signal.status})"
        statuses[weight.name] = signal.status

    for summary in lint:
        details[summary.name] = f"{summary.details} ({summary.status})"

    breakdown = aggregate(rubric, normalized)
    total = total_score(breakdown)
    logger.info(
        "event=grade_aggregated total=%d defaulted=%s",
        total,
        ",".join(
            n for n, s in statuses.items() if s == SignalStatus.DEFAULTED
        )
        or "none",
    )
    return GradeReport(
        total=total,
        breakdown=breakdown,
        details=details,
        statuses=statuses,
        per_file_text=list(text_files),
    )
