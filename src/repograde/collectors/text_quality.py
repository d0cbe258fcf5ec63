"""Text-quality collector: one analysis per markdown artifact."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from repograde.config import TextScoringConfig
from repograde.ingestion.schemas import RepoTree
from repograde.text.analyzer import analyze_text
from repograde.text.heuristic import heuristic_text_score
from repograde.text.schemas import (
    FileTextAnalysis,
    TextAnalysis,
    TextAnalysisError,
)

logger = logging.getLogger(__name__)

TEXT_QUALITY = "text_quality"


class TextQualityCollector:
    """AI analysis first, heuristic fallback, independently per file.

    The AI-or-heuristic choice is fixed by ``config`` at construction.
    Files are analysed concurrently, at most ``config.max_concurrency``
    at a time, and come back in discovery order.
    """

    name = TEXT_QUALITY

    def __init__(self, config: TextScoringConfig | None = None) -> None:
        self._config = config or TextScoringConfig()
        self._finished: dict[Path, FileTextAnalysis] = {}

    @property
    def config(self) -> TextScoringConfig:
        return self._config

    async def analyze(
        self, text: str, file_label: str = ""
    ) -> TextAnalysis | TextAnalysisError:
        """Grade one text; never raises."""
        result: TextAnalysis | TextAnalysisError | None = None
        if self._config.use_llm:
            try:
                result = await analyze_text(
                    text, self._config, file_label=file_label
                )
            except Exception:
                logger.warning(
                    "event=text_analysis_crashed file=%s",
                    file_label,
                    exc_info=True,
                )
                result = None
        if result is None:
            result = heuristic_text_score(text)
        return result

    async def collect(self, tree: RepoTree) -> list[FileTextAnalysis]:
        self._finished = {}
        semaphore = asyncio.Semaphore(self._config.max_concurrency)

        async def process(path: Path) -> FileTextAnalysis | None:
            label = tree.relative(path)
            try:
                text = await asyncio.to_thread(
                    path.read_text, encoding="utf-8", errors="replace"
                )
            except OSError:
                logger.warning("event=text_unreadable file=%s", label)
                return None
            async with semaphore:
                analysis = await self.analyze(text, label)
            entry = FileTextAnalysis(file=label, analysis=analysis)
            self._finished[path] = entry
            return entry

        results = await asyncio.gather(
            *(process(p) for p in tree.text_files)
        )
        analyses = [r for r in results if r is not None]
        failed = sum(1 for a in analyses if not a.ok)
        logger.info(
            "event=text_quality_done files=%d parse_errors=%d mode=%s",
            len(analyses),
            failed,
            "llm" if self._config.use_llm else "heuristic",
        )
        return analyses

    def complete_offline(self, tree: RepoTree) -> list[FileTextAnalysis]:
        """Results for a :meth:`collect` that was cut short.

        Files analysed before the interruption keep their result; the
        rest get the heuristic score. Discovery order is preserved.
        """
        entries: list[FileTextAnalysis] = []
        for path in tree.text_files:
            entry = self._finished.get(path)
            if entry is None:
                try:
                    text = path.read_text(encoding="utf-8", errors="replace")
                except OSError:
                    logger.warning(
                        "event=text_unreadable file=%s", tree.relative(path)
                    )
                    continue
                entry = FileTextAnalysis(
                    file=tree.relative(path),
                    analysis=heuristic_text_score(text),
                )
            entries.append(entry)
        logger.warning(
            "event=text_quality_interrupted files=%d kept=%d",
            len(entries),
            sum(1 for p in tree.text_files if p in self._finished),
        )
        return entries
