"""HTML structure signal from htmlhint findings."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, cast

from repograde.collectors._subprocess import run_tool
from repograde.collectors.base import BaseCollector
from repograde.collectors.schemas import RawSignal
from repograde.constants import (
    HTML_DEFAULT_SCORE,
    HTML_ISSUE_PENALTY,
    HTML_NATIVE_MAX,
    SignalName,
)
from repograde.ingestion.schemas import RepoTree
from repograde.resilience.errors import CollectorDegraded

logger = logging.getLogger(__name__)

NO_FINDINGS_DETAILS = "No HTML files detected or no issues found."


def compute_html_score(issues: int) -> int:
    """``25 - 2*issues``, floored at 0."""
    return min(
        HTML_NATIVE_MAX,
        max(0, HTML_NATIVE_MAX - issues * HTML_ISSUE_PENALTY),
    )


def parse_htmlhint_output(raw: str) -> dict[str, int] | None:
    """Map file → finding count from ``htmlhint --format json`` output.

    Accepts the array form (``[{"file": ..., "messages": [...]}]``)
    and the keyed form (``{"file.html": [...]}``). Returns ``None``
    when the output is not structured data at all.
    """
    text = raw.strip()
    if not text:
        return None
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError:
        return None

    counts: dict[str, int] = {}
    if isinstance(data, list):
        for raw_entry in cast(list[Any], data):
            if not isinstance(raw_entry, dict):
                continue
            entry = cast(dict[str, Any], raw_entry)
            messages: Any = entry.get("messages", [])
            name = str(entry.get("file", f"<file {len(counts)}>"))
            counts[name] = (
                len(cast(list[Any], messages))
                if isinstance(messages, list)
                else 0
            )
        return counts
    if isinstance(data, dict):
        for name, issues in cast(dict[str, Any], data).items():
            counts[str(name)] = (
                len(cast(list[Any], issues))
                if isinstance(issues, list)
                else 0
            )
        return counts
    return None


class HtmlStructureCollector(BaseCollector):
    """Lints every HTML file; fewer findings score higher."""

    name = SignalName.WEB_STRUCTURE
    native_max = HTML_NATIVE_MAX
    default_score = HTML_DEFAULT_SCORE

    def __init__(
        self,
        command: Sequence[str] = ("npx", "htmlhint"),
        timeout: float = 60,
    ) -> None:
        self._command = tuple(command)
        self._timeout = timeout

    async def collect(self, tree: RepoTree) -> RawSignal:
        if not tree.html_files:
            return self.degraded(NO_FINDINGS_DETAILS)

        files = [tree.relative(p) for p in tree.html_files]
        output = await run_tool(
            self.name,
            [*self._command, *files, "--format", "json"],
            cwd=tree.root,
            timeout=self._timeout,
        )
        results = parse_htmlhint_output(output.stdout)
        if results is None:
            raise CollectorDegraded(
                self.name,
                "htmlhint produced no structured result "
                f"(exit {output.returncode})",
            )
        if not results:
            return self.degraded(NO_FINDINGS_DETAILS)

        issues = sum(results.values())
        logger.info(
            "event=htmlhint_done files=%d issues=%d",
            len(results),
            issues,
        )
        return self.measured(
            compute_html_score(issues),
            f"{issues} htmlhint issues across {len(results)} file(s).",
        )
