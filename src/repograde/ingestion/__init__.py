"""Repository discovery: locate HTML and text artifacts."""

from repograde.ingestion.discovery import (
    discover,
    discover_html_files,
    discover_text_files,
)
from repograde.ingestion.schemas import RepoTree

__all__ = [
    "RepoTree",
    "discover",
    "discover_html_files",
    "discover_text_files",
]
