"""Test helpers shared across test packages."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_TASKS: dict[str, dict[str, Any]] = {
    "web_structure": {"weight": 25},
    "accessibility": {"weight": 20},
    "writing_quality": {"weight": 30},
    "originality": {"weight": 10},
    "git_collaboration": {"weight": 10},
}


def write_rubric(
    directory: Path,
    tasks: dict[str, Any] | None = None,
    name: str = "rubric.json",
) -> Path:
    """Write a JSON rubric and return its path."""
    path = directory / name
    path.write_text(
        json.dumps({"tasks": DEFAULT_TASKS if tasks is None else tasks}),
        encoding="utf-8",
    )
    return path


def words(n: int, word: str = "lorem") -> str:
    """A text of exactly ``n`` whitespace-separated words."""
    return " ".join([word] * n)


class FakeProcess:
    """Stands in for ``asyncio.subprocess.Process``."""

    def __init__(
        self,
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
        *,
        hang: bool = False,
    ) -> None:
        self._stdout = stdout.encode()
        self._stderr = stderr.encode()
        self.returncode = returncode
        self._hang = hang
        self.killed = False

    async def communicate(self) -> tuple[bytes, bytes]:
        if self._hang:
            await asyncio.sleep(60)
        return self._stdout, self._stderr

    def kill(self) -> None:
        self.killed = True

    async def wait(self) -> int:
        return self.returncode


def tool_key(argv: list[str]) -> str:
    """``npx <tool>`` is keyed by ``<tool>``, anything else by argv[0]."""
    if argv and argv[0] == "npx" and len(argv) > 1:
        return argv[1]
    return argv[0] if argv else ""


@dataclass
class FakeTools:
    """Registry of fake tool outcomes keyed by :func:`tool_key`.

    Unregistered tools behave as if the executable is not installed.
    """

    outcomes: dict[str, FakeProcess | BaseException] = field(
        default_factory=lambda: dict[str, FakeProcess | BaseException]()
    )
    calls: list[list[str]] = field(
        default_factory=lambda: list[list[str]]()
    )

    def called(self, tool: str) -> bool:
        return any(tool_key(c) == tool for c in self.calls)

    async def exec(self, *argv: str, **_kwargs: Any) -> FakeProcess:
        cmd = [str(a) for a in argv]
        self.calls.append(cmd)
        outcome = self.outcomes.get(tool_key(cmd))
        if outcome is None:
            msg = f"No such file or directory: {cmd[0]!r}"
            raise FileNotFoundError(msg)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def mock_llm_response(content: str) -> Any:
    """Build a mock litellm response with usage metadata."""
    msg = type("Msg", (), {"content": content})()
    choice = type("Choice", (), {"message": msg})()
    usage = type(
        "Usage",
        (),
        {"prompt_tokens": 100, "completion_tokens": 50},
    )()
    return type(
        "Response", (), {"choices": [choice], "usage": usage}
    )()


def analysis_json(
    factual: int = 20,
    structure: int = 20,
    references: int = 15,
    language: int = 10,
    originality: int = 7,
    feedback: str = "Solid work.",
) -> str:
    return json.dumps({
        "factual": factual,
        "structure": structure,
        "references": references,
        "language": language,
        "originality": originality,
        "feedback": feedback,
    })
