"""Serialize a :class:`GradeReport` to ``grading.json``."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from repograde.constants import REPORT_INDENT
from repograde.report.schemas import GradeReport
from repograde.resilience.errors import PersistError
from repograde.text.schemas import FileTextAnalysis

logger = logging.getLogger(__name__)

DEFAULT_REPORT_NAME = "grading.json"


def report_to_dict(report: GradeReport) -> dict[str, Any]:
    """Wrap the report under ``summary`` in the published shape."""
    details: dict[str, Any] = dict(report.details)
    details["signal_status"] = {
        name: str(status) for name, status in report.statuses.items()
    }
    details["text_files_evaluated"] = [
        _file_to_dict(f) for f in report.per_file_text
    ]
    return {
        "summary": {
            "total_score": report.total,
            "breakdown": dict(report.breakdown),
            "details": details,
        }
    }


def export_json(report: GradeReport) -> str:
    return json.dumps(
        report_to_dict(report), indent=REPORT_INDENT, ensure_ascii=False
    )


def emit_report(
    report: GradeReport,
    repo_root: Path,
    filename: str = DEFAULT_REPORT_NAME,
) -> Path:
    """Write the report at ``repo_root / filename``, replacing any old one.

    Raises :class:`PersistError` if the file cannot be written.
    """
    target = repo_root / filename
    try:
        target.write_text(export_json(report) + "\n", encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot write {target}: {exc}"
        raise PersistError(msg) from exc
    logger.info(
        "event=report_written path=%s total=%d", target, report.total
    )
    return target


def _file_to_dict(entry: FileTextAnalysis) -> dict[str, Any]:
    return {
        "file": entry.file,
        "score": entry.analysis.model_dump(mode="json"),
    }
