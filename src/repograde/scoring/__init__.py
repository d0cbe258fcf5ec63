"""Scoring: normalization and aggregation into a composite grade."""

from repograde.scoring.aggregator import (
    aggregate,
    build_report,
    text_signals,
    total_score,
)
from repograde.scoring.normalizer import (
    normalize,
    normalize_signal,
    originality_average,
    writing_quality_percent,
)

__all__ = [
    "aggregate",
    "build_report",
    "normalize",
    "normalize_signal",
    "originality_average",
    "text_signals",
    "total_score",
    "writing_quality_percent",
]
