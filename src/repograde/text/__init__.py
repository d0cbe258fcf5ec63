"""Text-quality analysis: AI grading with an offline heuristic fallback."""

from repograde.text.analyzer import analyze_text
from repograde.text.heuristic import heuristic_text_score
from repograde.text.parsing import parse_text_analysis
from repograde.text.schemas import (
    FileTextAnalysis,
    TextAnalysis,
    TextAnalysisError,
)

__all__ = [
    "FileTextAnalysis",
    "TextAnalysis",
    "TextAnalysisError",
    "analyze_text",
    "heuristic_text_score",
    "parse_text_analysis",
]
