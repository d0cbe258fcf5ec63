"""Deterministic offline text score.

A monotone, length-biased proxy used when no AI analysis is available.
It does not judge quality; the feedback string says so.
"""

from __future__ import annotations

import re

from repograde.constants import (
    HEURISTIC_FACTUAL_WORDS,
    HEURISTIC_LANGUAGE_WORDS,
    HEURISTIC_ORIGINALITY_NO_REFS,
    HEURISTIC_ORIGINALITY_REFS,
    HEURISTIC_REFS_ABSENT,
    HEURISTIC_REFS_PRESENT,
    HEURISTIC_STRUCTURE_WORDS,
    REFERENCE_MARKERS,
    TEXT_FACTUAL_MAX,
    TEXT_LANGUAGE_MAX,
    TEXT_ORIGINALITY_MAX,
    TEXT_REFERENCES_MAX,
    TEXT_STRUCTURE_MAX,
    AnalysisSource,
    round_half_up,
)
from repograde.text.schemas import TextAnalysis

FALLBACK_FEEDBACK = (
    "Fallback auto-score (no AI analysis available): based on length "
    "and the presence of a references section, not on content. Add "
    "more references and structure for a higher score."
)

_REFERENCE_RE = re.compile(
    "|".join(re.escape(m) for m in REFERENCE_MARKERS), re.IGNORECASE
)


def count_words(text: str) -> int:
    return len(text.split())


def has_references(text: str) -> bool:
    return _REFERENCE_RE.search(text) is not None


def heuristic_text_score(text: str) -> TextAnalysis:
    """Score ``text`` from word count and a references marker."""
    words = count_words(text)
    refs = has_references(text)

    return TextAnalysis(
        factual=min(
            TEXT_FACTUAL_MAX,
            round_half_up(words / HEURISTIC_FACTUAL_WORDS),
        ),
        structure=min(
            TEXT_STRUCTURE_MAX,
            round_half_up(words / HEURISTIC_STRUCTURE_WORDS),
        ),
        references=min(
            TEXT_REFERENCES_MAX,
            HEURISTIC_REFS_PRESENT if refs else HEURISTIC_REFS_ABSENT,
        ),
        language=min(
            TEXT_LANGUAGE_MAX,
            round_half_up(words / HEURISTIC_LANGUAGE_WORDS),
        ),
        originality=min(
            TEXT_ORIGINALITY_MAX,
            HEURISTIC_ORIGINALITY_REFS
            if refs
            else HEURISTIC_ORIGINALITY_NO_REFS,
        ),
        feedback=FALLBACK_FEEDBACK,
        source=AnalysisSource.HEURISTIC,
    )
