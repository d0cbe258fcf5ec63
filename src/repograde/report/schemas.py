"""Pydantic model for the final grade report."""

from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from repograde.constants import SignalStatus
from repograde.text.schemas import FileTextAnalysis

ScoreBreakdown: TypeAlias = dict[str, int]


class GradeReport(BaseModel):
    """Composite grade, per-signal points, and reviewer-facing detail.

    Built once at the end of a run and never modified afterwards.
    """

    model_config = ConfigDict(frozen=True)

    total: int
    breakdown: dict[str, int] = Field(default_factory=lambda: dict[str, int]())
    details: dict[str, str] = Field(default_factory=lambda: dict[str, str]())
    statuses: dict[str, SignalStatus] = Field(
        default_factory=lambda: dict[str, SignalStatus]()
    )
    per_file_text: list[FileTextAnalysis] = Field(
        default_factory=lambda: list[FileTextAnalysis]()
    )

    @property
    def defaulted(self) -> list[str]:
        return [
            name
            for name, status in self.statuses.items()
            if status == SignalStatus.DEFAULTED
        ]
