"""Pydantic models for the discovered repository tree."""

from pathlib import Path

from pydantic import BaseModel, Field


class RepoTree(BaseModel):
    """Artifacts found under a repository root, in discovery order."""

    root: Path
    html_files: list[Path] = Field(default_factory=lambda: list[Path]())
    text_files: list[Path] = Field(default_factory=lambda: list[Path]())

    def relative(self, path: Path) -> str:
        """Repository-relative POSIX path for reports."""
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()
