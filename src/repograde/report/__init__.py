"""Grade report model and its JSON artifact."""

from repograde.report.emitter import emit_report, export_json, report_to_dict
from repograde.report.schemas import GradeReport, ScoreBreakdown

__all__ = [
    "GradeReport",
    "ScoreBreakdown",
    "emit_report",
    "export_json",
    "report_to_dict",
]
