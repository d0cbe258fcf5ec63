"""Git collaboration signal from the commit count."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from repograde.collectors._subprocess import run_tool
from repograde.collectors.base import BaseCollector
from repograde.collectors.schemas import RawSignal
from repograde.constants import (
    GIT_DEFAULT_SCORE,
    GIT_LOG_FACTOR,
    GIT_NATIVE_MAX,
    GIT_RECENT_CAP,
    SignalName,
    round_half_up,
)
from repograde.ingestion.schemas import RepoTree
from repograde.resilience.errors import CollectorDegraded

logger = logging.getLogger(__name__)

UNKNOWN_HISTORY = "Could not determine commit count."


def compute_git_score(commits: int) -> int:
    """``min(10, round(log10(max(1, n))*3 + min(n, 5)))``.

    The log term rewards having history at all, with diminishing
    returns; the linear term is capped at 5.
    """
    raw = (
        math.log10(max(1, commits)) * GIT_LOG_FACTOR
        + min(commits, GIT_RECENT_CAP)
    )
    return min(GIT_NATIVE_MAX, max(0, round_half_up(raw)))


class GitHistoryCollector(BaseCollector):
    """Counts commits reachable from HEAD."""

    name = SignalName.GIT_COLLABORATION
    native_max = GIT_NATIVE_MAX
    default_score = GIT_DEFAULT_SCORE

    def __init__(
        self,
        command: Sequence[str] = ("git",),
        timeout: float = 10,
    ) -> None:
        self._command = tuple(command)
        self._timeout = timeout

    async def count_commits(self, tree: RepoTree) -> int:
        output = await run_tool(
            self.name,
            [
                *self._command,
                "-C",
                str(tree.root),
                "rev-list",
                "--count",
                "HEAD",
            ],
            timeout=self._timeout,
        )
        if output.returncode != 0:
            raise CollectorDegraded(self.name, UNKNOWN_HISTORY)
        try:
            return int(output.stdout.strip() or "0")
        except ValueError as exc:
            raise CollectorDegraded(self.name, UNKNOWN_HISTORY) from exc

    async def collect(self, tree: RepoTree) -> RawSignal:
        commits = await self.count_commits(tree)
        if commits <= 0:
            # an empty history is missing information, not zero effort
            return self.degraded(UNKNOWN_HISTORY)
        logger.info("event=git_history commits=%d", commits)
        return self.measured(
            compute_git_score(commits),
            f"{commits} commit(s) in history.",
        )
