"""Common shape of a rubric signal collector."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from repograde.collectors.schemas import RawSignal
from repograde.constants import SignalStatus
from repograde.ingestion.schemas import RepoTree
from repograde.resilience.errors import CollectorDegraded

logger = logging.getLogger(__name__)


@runtime_checkable
class SignalCollector(Protocol):
    """Produces one scored :class:`RawSignal` per run.

    ``safe_collect`` never raises; ``degraded`` is the documented default
    used when the collector did not finish at all.
    """

    name: str

    async def safe_collect(self, tree: RepoTree) -> RawSignal: ...

    def degraded(self, reason: str) -> RawSignal: ...


class BaseCollector:
    """Native scale, documented default, and failure containment.

    Subclasses implement :meth:`collect` and raise
    :class:`CollectorDegraded` when their source is unavailable.
    """

    name: str = ""
    native_max: float = 0
    default_score: float = 0

    async def collect(self, tree: RepoTree) -> RawSignal:
        raise NotImplementedError

    def measured(self, score: float, details: str) -> RawSignal:
        return RawSignal(
            name=str(self.name),
            score=min(max(score, 0), self.native_max),
            native_max=self.native_max,
            details=details,
        )

    def degraded(self, reason: str) -> RawSignal:
        return RawSignal(
            name=str(self.name),
            score=self.default_score,
            native_max=self.native_max,
            details=reason,
            status=SignalStatus.DEFAULTED,
        )

    async def safe_collect(self, tree: RepoTree) -> RawSignal:
        """Run :meth:`collect`; any failure yields the default."""
        try:
            return await self.collect(tree)
        except CollectorDegraded as exc:
            logger.warning(
                "event=collector_degraded collector=%s reason=%s",
                self.name,
                exc.reason,
            )
            return self.degraded(exc.reason)
        except Exception as exc:
            logger.warning(
                "event=collector_failed collector=%s error=%s",
                self.name,
                exc,
                exc_info=True,
            )
            return self.degraded(f"Collector error: {exc}")
