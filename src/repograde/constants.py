"""Shared constants: single source of truth for cross-module values.

Native scales, documented defaults, and the knobs of the external
call guards all live here. StrEnum members are str-compatible, so the
JSON report and log lines take them unchanged.
"""

from __future__ import annotations

import math
from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class SignalName(StrEnum):
    """Rubric sub-score identifiers, in canonical declaration order."""

    WEB_STRUCTURE = "web_structure"
    ACCESSIBILITY = "accessibility"
    WRITING_QUALITY = "writing_quality"
    ORIGINALITY = "originality"
    GIT_COLLABORATION = "git_collaboration"


class SignalStatus(StrEnum):
    """Whether a signal was actually measured or fell back to its default."""

    MEASURED = "measured"
    DEFAULTED = "defaulted"


class StageOutcome(StrEnum):
    """Outcome of an individual pipeline stage execution."""

    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class AnalysisSource(StrEnum):
    """Which path produced a text analysis."""

    LLM = "llm"
    HEURISTIC = "heuristic"


REQUIRED_TASKS: tuple[str, ...] = tuple(SignalName)

# ── Native Scales ────────────────────────────────────────

HTML_NATIVE_MAX = 25
ACCESSIBILITY_NATIVE_MAX = 20
WRITING_NATIVE_MAX = 100  # writing-quality percentage
ORIGINALITY_NATIVE_MAX = 10
GIT_NATIVE_MAX = 10

NATIVE_MAXIMA: dict[str, int] = {
    SignalName.WEB_STRUCTURE: HTML_NATIVE_MAX,
    SignalName.ACCESSIBILITY: ACCESSIBILITY_NATIVE_MAX,
    SignalName.WRITING_QUALITY: WRITING_NATIVE_MAX,
    SignalName.ORIGINALITY: ORIGINALITY_NATIVE_MAX,
    SignalName.GIT_COLLABORATION: GIT_NATIVE_MAX,
}

# ── Documented Defaults ──────────────────────────────────

HTML_DEFAULT_SCORE = 20  # no evidence of problems, not evidence of quality
HTML_ISSUE_PENALTY = 2
ACCESSIBILITY_DEFAULT_SCORE = ACCESSIBILITY_NATIVE_MAX
GIT_DEFAULT_SCORE = 5  # neutral midpoint
GIT_LOG_FACTOR = 3
GIT_RECENT_CAP = 5

# ── Text Analysis Maxima ─────────────────────────────────

TEXT_FACTUAL_MAX = 30
TEXT_STRUCTURE_MAX = 25
TEXT_REFERENCES_MAX = 20
TEXT_LANGUAGE_MAX = 15
TEXT_ORIGINALITY_MAX = 10
TEXT_TOTAL_MAX = (
    TEXT_FACTUAL_MAX
    + TEXT_STRUCTURE_MAX
    + TEXT_REFERENCES_MAX
    + TEXT_LANGUAGE_MAX
    + TEXT_ORIGINALITY_MAX
)

# Heuristic fallback divisors / flat awards
HEURISTIC_FACTUAL_WORDS = 20
HEURISTIC_STRUCTURE_WORDS = 30
HEURISTIC_LANGUAGE_WORDS = 100
HEURISTIC_REFS_PRESENT = 18
HEURISTIC_REFS_ABSENT = 6
HEURISTIC_ORIGINALITY_REFS = 8
HEURISTIC_ORIGINALITY_NO_REFS = 6

REFERENCE_MARKERS: tuple[str, ...] = (
    "references",
    "daftar pustaka",
    "sumber",
)

DEFAULT_ROLE_HINT = "article"

# ── Circuit Breaker Configuration ────────────────────────

CB_LLM_FAILURE_THRESHOLD = 5
CB_LLM_RECOVERY_TIMEOUT = 30

# ── Retry Strategy ───────────────────────────────────────

RETRY_MAX_ATTEMPTS = 3
RETRY_INITIAL_WAIT = 2
RETRY_MAX_WAIT = 30

# ── Misc ─────────────────────────────────────────────────

ERROR_TRUNCATION_CHARS = 200
REPORT_INDENT = 2


def round_half_up(value: float) -> int:
    """Round .5 away from the floor, like the grading formulas expect.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``),
    which would shift scores on exact halves.
    """
    return math.floor(value + 0.5)
