"""Rescale native-scale signals into rubric points."""

from __future__ import annotations

import math
from collections.abc import Sequence

from repograde.collectors.schemas import RawSignal
from repograde.constants import TEXT_TOTAL_MAX, round_half_up
from repograde.rubric.schemas import RubricWeight
from repograde.text.schemas import FileTextAnalysis, TextAnalysis


def normalize(score: float, native_max: float, weight: float) -> int:
    """``round(score / native_max * weight)`` clamped to ``[0, weight]``.

    Monotone in ``score`` for a fixed ``native_max``. A non-positive
    native max or weight yields 0.
    """
    if native_max <= 0 or weight <= 0:
        return 0
    points = round_half_up(score / native_max * weight)
    return min(max(points, 0), math.floor(weight))


def normalize_signal(signal: RawSignal, weight: RubricWeight) -> int:
    """Rescale against the scale the collector measured on."""
    return normalize(signal.score, signal.native_max, weight.weight)


def scored_analyses(
    files: Sequence[FileTextAnalysis],
) -> list[TextAnalysis]:
    """Analyses that parsed; error variants carry no scores."""
    return [f.analysis for f in files if isinstance(f.analysis, TextAnalysis)]


def writing_quality_percent(analyses: Sequence[TextAnalysis]) -> int:
    """Composite of all files as a percentage of their summed maxima.

    ``round(sum(composite) / (n * 100) * 100)``; 0 with no files.
    """
    if not analyses:
        return 0
    total = sum(a.composite for a in analyses)
    return round_half_up(total / (len(analyses) * TEXT_TOTAL_MAX) * 100)


def originality_average(analyses: Sequence[TextAnalysis]) -> int:
    """Plain rounded mean of each file's originality; 0 with no files."""
    if not analyses:
        return 0
    return round_half_up(
        sum(a.originality for a in analyses) / len(analyses)
    )
