"""Shared test fixtures: settings, rubric files, fake external tools."""

import os

# No real LLM calls: drop credentials before any Settings() is built.
# Tests that exercise the AI path pass keys explicitly.
for _key in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY"):
    os.environ.pop(_key, None)

from pathlib import Path
from typing import Any

import pytest
from circuitbreaker import CircuitBreakerMonitor
from tenacity import wait_none

from repograde.config import Settings
from repograde.text._llm_call import _breaker_registry, guarded_llm_call
from tests.helpers import FakeTools, write_rubric


@pytest.fixture
def fake_tools(monkeypatch: pytest.MonkeyPatch) -> FakeTools:
    """Replace subprocess creation for every collector."""
    tools = FakeTools()
    monkeypatch.setattr(
        "repograde.collectors._subprocess.asyncio.create_subprocess_exec",
        tools.exec,
    )
    return tools


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from .env files and without credentials."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        openai_api_key="",
        anthropic_api_key="",
    )


@pytest.fixture
def rubric_path(tmp_path: Path) -> Path:
    return write_rubric(tmp_path)


@pytest.fixture(autouse=True)
def _reset_breakers() -> None:
    """Reset circuit breakers between tests."""
    _breaker_registry.clear()
    for cb in CircuitBreakerMonitor.get_circuits():
        cb.reset()  # type: ignore[union-attr]


@pytest.fixture(autouse=True)
def _disable_retry_wait() -> Any:
    """Disable tenacity wait time for fast tests."""
    original_wait = guarded_llm_call.retry.wait  # type: ignore[attr-defined]
    guarded_llm_call.retry.wait = wait_none()  # type: ignore[attr-defined]
    yield
    guarded_llm_call.retry.wait = original_wait  # type: ignore[attr-defined]
