"""Bounded invocation of external command-line tools."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from repograde.collectors.schemas import ToolOutput
from repograde.resilience.errors import CollectorDegraded

logger = logging.getLogger(__name__)


async def run_tool(
    collector: str,
    argv: Sequence[str],
    *,
    cwd: Path | None = None,
    timeout: float,
) -> ToolOutput:
    """Run ``argv`` and capture its output.

    A missing executable or a run past ``timeout`` raises
    :class:`CollectorDegraded`; a non-zero exit code does not, since
    linters exit non-zero whenever they report findings.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            cwd=str(cwd) if cwd is not None else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise CollectorDegraded(
            collector, f"{argv[0]} unavailable: {exc}"
        ) from exc

    try:
        stdout, stderr = await asyncio.wait_for(
            proc.communicate(), timeout=timeout
        )
    except asyncio.CancelledError:
        # collector deadline: the tool must not outlive the run
        await _terminate(proc)
        raise
    except TimeoutError as exc:
        await _terminate(proc)
        logger.warning(
            "event=tool_timeout collector=%s tool=%s timeout_s=%s",
            collector,
            argv[0],
            timeout,
        )
        raise CollectorDegraded(
            collector, f"{argv[0]} timed out after {timeout}s"
        ) from exc

    return ToolOutput(
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=(stdout or b"").decode("utf-8", errors="replace"),
        stderr=(stderr or b"").decode("utf-8", errors="replace"),
    )


async def _terminate(proc: asyncio.subprocess.Process) -> None:
    """Kill ``proc`` and reap it."""
    try:
        proc.kill()
    except ProcessLookupError:
        return
    await proc.wait()
