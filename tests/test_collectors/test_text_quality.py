"""Tests for the per-file text quality collector."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

from repograde.collectors.text_quality import TextQualityCollector
from repograde.config import TextScoringConfig
from repograde.constants import AnalysisSource
from repograde.ingestion.schemas import RepoTree
from repograde.text.schemas import TextAnalysis, TextAnalysisError
from tests.helpers import analysis_json, mock_llm_response, words

_LLM_CONFIG = TextScoringConfig(models=(("openai/gpt-4o-mini", "sk-test"),))


def _tree(tmp_path: Path, count: int) -> RepoTree:
    articles = tmp_path / "articles"
    articles.mkdir()
    paths = []
    for i in range(count):
        path = articles / f"post-{i}.md"
        path.write_text(words(100 * (i + 1)), encoding="utf-8")
        paths.append(path)
    return RepoTree(root=tmp_path, text_files=paths)


async def test_heuristic_without_credentials(tmp_path: Path) -> None:
    with patch(
        "repograde.text._llm_call._acompletion", new_callable=AsyncMock
    ) as mock_llm:
        results = await TextQualityCollector(TextScoringConfig()).collect(
            _tree(tmp_path, 2)
        )

    mock_llm.assert_not_called()
    assert [r.file for r in results] == [
        "articles/post-0.md",
        "articles/post-1.md",
    ]
    for entry in results:
        assert isinstance(entry.analysis, TextAnalysis)
        assert entry.analysis.source == AnalysisSource.HEURISTIC


async def test_one_malformed_reply_does_not_block_others(
    tmp_path: Path,
) -> None:
    replies = {
        100: analysis_json(factual=21),
        200: "Sorry, I can't produce JSON today.",
        300: analysis_json(factual=29),
    }

    async def fake_completion(**kwargs: object) -> object:
        messages = kwargs["messages"]
        assert isinstance(messages, list)
        body = str(messages[-1]["content"])  # type: ignore[index]
        n = body.count("lorem")
        return mock_llm_response(replies[n])

    with patch(
        "repograde.text._llm_call._acompletion",
        AsyncMock(side_effect=fake_completion),
    ):
        results = await TextQualityCollector(_LLM_CONFIG).collect(
            _tree(tmp_path, 3)
        )

    assert len(results) == 3
    first, second, third = (r.analysis for r in results)
    assert isinstance(first, TextAnalysis)
    assert first.factual == 21
    assert isinstance(second, TextAnalysisError)
    assert second.raw == replies[200]
    assert isinstance(third, TextAnalysis)
    assert third.factual == 29


async def test_provider_failure_falls_back_to_heuristic(
    tmp_path: Path,
) -> None:
    with patch(
        "repograde.text._llm_call._acompletion",
        AsyncMock(side_effect=RuntimeError("500 upstream")),
    ):
        results = await TextQualityCollector(_LLM_CONFIG).collect(
            _tree(tmp_path, 1)
        )

    analysis = results[0].analysis
    assert isinstance(analysis, TextAnalysis)
    assert analysis.source == AnalysisSource.HEURISTIC


async def test_unexpected_analyzer_crash_falls_back(tmp_path: Path) -> None:
    with patch(
        "repograde.collectors.text_quality.analyze_text",
        AsyncMock(side_effect=KeyError("boom")),
    ):
        result = await TextQualityCollector(_LLM_CONFIG).analyze(words(40))

    assert isinstance(result, TextAnalysis)
    assert result.source == AnalysisSource.HEURISTIC


async def test_no_text_files(tmp_path: Path) -> None:
    results = await TextQualityCollector().collect(RepoTree(root=tmp_path))
    assert results == []


async def test_unreadable_file_skipped(tmp_path: Path) -> None:
    tree = _tree(tmp_path, 1)
    tree.text_files.append(tmp_path / "articles" / "gone.md")
    results = await TextQualityCollector().collect(tree)
    assert [r.file for r in results] == ["articles/post-0.md"]
