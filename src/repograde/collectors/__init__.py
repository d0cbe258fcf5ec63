"""Signal collectors: one raw measurement per rubric signal."""

from repograde.collectors.accessibility import AccessibilityCollector
from repograde.collectors.base import BaseCollector, SignalCollector
from repograde.collectors.git_history import GitHistoryCollector
from repograde.collectors.html_structure import HtmlStructureCollector
from repograde.collectors.markdown_lint import MarkdownLintCollector
from repograde.collectors.schemas import LintSummary, RawSignal
from repograde.collectors.text_quality import TextQualityCollector

__all__ = [
    "AccessibilityCollector",
    "BaseCollector",
    "GitHistoryCollector",
    "HtmlStructureCollector",
    "LintSummary",
    "MarkdownLintCollector",
    "RawSignal",
    "SignalCollector",
    "TextQualityCollector",
]
