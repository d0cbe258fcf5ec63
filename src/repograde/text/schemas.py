"""Pydantic models for per-file text analysis."""

from pydantic import BaseModel, ConfigDict, Field

from repograde.constants import (
    TEXT_FACTUAL_MAX,
    TEXT_LANGUAGE_MAX,
    TEXT_ORIGINALITY_MAX,
    TEXT_REFERENCES_MAX,
    TEXT_STRUCTURE_MAX,
    AnalysisSource,
)


class TextAnalysis(BaseModel):
    """Five bounded sub-scores plus free-text feedback for one file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    factual: int = Field(ge=0, le=TEXT_FACTUAL_MAX)
    structure: int = Field(ge=0, le=TEXT_STRUCTURE_MAX)
    references: int = Field(ge=0, le=TEXT_REFERENCES_MAX)
    language: int = Field(ge=0, le=TEXT_LANGUAGE_MAX)
    originality: int = Field(ge=0, le=TEXT_ORIGINALITY_MAX)
    feedback: str
    source: AnalysisSource = Field(
        default=AnalysisSource.LLM, exclude=True
    )

    @property
    def composite(self) -> int:
        """Sum of the five sub-scores (0..100)."""
        return (
            self.factual
            + self.structure
            + self.references
            + self.language
            + self.originality
        )


class TextAnalysisError(BaseModel):
    """AI response that could not be read; ``raw`` is kept verbatim."""

    model_config = ConfigDict(frozen=True)

    error: str
    raw: str


class FileTextAnalysis(BaseModel):
    """Analysis outcome paired with its repository-relative file."""

    model_config = ConfigDict(frozen=True)

    file: str
    analysis: TextAnalysis | TextAnalysisError

    @property
    def ok(self) -> bool:
        return isinstance(self.analysis, TextAnalysis)
