"""Informational markdownlint summary over the text artifacts."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, cast

from repograde.collectors._subprocess import run_tool
from repograde.collectors.schemas import LintSummary
from repograde.constants import SignalStatus
from repograde.ingestion.schemas import RepoTree
from repograde.resilience.errors import CollectorDegraded

logger = logging.getLogger(__name__)

MARKDOWNLINT = "markdownlint"


def parse_markdownlint_output(raw: str) -> dict[str, int] | None:
    """Map file → finding count from ``markdownlint --json`` output.

    Handles the flat array form (one object per finding with a
    ``fileName``) and the keyed form (``{"file.md": [...]}``).
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
            name = str(entry.get("fileName", "<unknown>"))
            counts[name] = counts.get(name, 0) + 1
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


class MarkdownLintCollector:
    """Runs markdownlint; the result is reported but never scored."""

    name = MARKDOWNLINT

    def __init__(
        self,
        command: Sequence[str] = ("npx", "markdownlint"),
        timeout: float = 60,
    ) -> None:
        self._command = tuple(command)
        self._timeout = timeout

    def not_measured(self, reason: str) -> LintSummary:
        return LintSummary(
            name=self.name,
            details=reason,
            status=SignalStatus.DEFAULTED,
        )

    async def collect(self, tree: RepoTree) -> LintSummary:
        if not tree.text_files:
            return self.not_measured("No markdown files to lint.")

        files = [tree.relative(p) for p in tree.text_files]
        output = await run_tool(
            self.name,
            [*self._command, *files, "--json"],
            cwd=tree.root,
            timeout=self._timeout,
        )
        # markdownlint-cli prints its JSON on stderr
        results = parse_markdownlint_output(output.stderr)
        if results is None:
            results = parse_markdownlint_output(output.stdout)
        if results is None:
            if output.returncode == 0:
                results = {}
            else:
                raise CollectorDegraded(
                    self.name,
                    "markdownlint produced no structured result "
                    f"(exit {output.returncode})",
                )

        findings = sum(results.values())
        return LintSummary(
            name=self.name,
            findings=findings,
            files=len(files),
            details=(
                f"{findings} markdownlint findings across "
                f"{len(files)} file(s)."
            ),
        )

    async def safe_collect(self, tree: RepoTree) -> LintSummary:
        try:
            return await self.collect(tree)
        except CollectorDegraded as exc:
            logger.warning(
                "event=collector_degraded collector=%s reason=%s",
                self.name,
                exc.reason,
            )
            return self.not_measured(exc.reason)
        except Exception as exc:
            logger.warning(
                "event=collector_failed collector=%s error=%s",
                self.name,
                exc,
                exc_info=True,
            )
            return self.not_measured(f"Collector error: {exc}")
