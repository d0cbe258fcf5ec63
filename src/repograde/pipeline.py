"""Named async stages run side by side under one deadline."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from repograde.constants import StageOutcome

logger = logging.getLogger(__name__)

UNFINISHED = "not completed before deadline"

TInput = TypeVar("TInput")
TOutput = TypeVar("TOutput")


@dataclass
class StageResult(Generic[TOutput]):
    """Outcome of a single stage."""

    stage_name: str
    output: TOutput | None
    duration_ms: float
    status: StageOutcome
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == StageOutcome.COMPLETED


@dataclass
class PipelineStage(Generic[TInput, TOutput]):
    """A named async stage; exceptions become a FAILED result."""

    name: str
    execute: Callable[[TInput], Awaitable[TOutput]]

    async def run(self, input_data: TInput) -> StageResult[TOutput]:
        start = time.monotonic()
        try:
            output = await self.execute(input_data)
        except Exception as exc:
            logger.warning(
                "event=stage_failed stage=%s error=%s", self.name, exc
            )
            return StageResult(
                stage_name=self.name,
                output=None,
                duration_ms=(time.monotonic() - start) * 1000,
                status=StageOutcome.FAILED,
                error=str(exc),
            )
        return StageResult(
            stage_name=self.name,
            output=output,
            duration_ms=(time.monotonic() - start) * 1000,
            status=StageOutcome.COMPLETED,
        )


@dataclass
class StageGroup(Generic[TInput]):
    """Stages sharing one input and one deadline.

    Results come back in stage order. A failing stage does not affect
    its siblings. Stages still running at the deadline are cancelled,
    awaited until their cleanup has run, and reported SKIPPED.
    """

    name: str
    stages: list[PipelineStage[TInput, Any]] = field(
        default_factory=lambda: list[PipelineStage[Any, Any]]()
    )
    deadline: float | None = None  # seconds; None waits for all

    async def execute(self, input_data: TInput) -> list[StageResult[Any]]:
        if not self.stages:
            return []

        results: list[StageResult[Any]] = [
            StageResult(
                stage_name=s.name,
                output=None,
                duration_ms=0.0,
                status=StageOutcome.SKIPPED,
                error=UNFINISHED,
            )
            for s in self.stages
        ]

        async def _record(
            idx: int, stage: PipelineStage[TInput, Any]
        ) -> None:
            results[idx] = await stage.run(input_data)

        tasks = [
            asyncio.create_task(_record(i, s))
            for i, s in enumerate(self.stages)
        ]
        _done, pending = await asyncio.wait(tasks, timeout=self.deadline)
        if pending:
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            logger.error(
                "event=stage_group_deadline group=%s deadline_s=%s"
                " unfinished=%s",
                self.name,
                self.deadline,
                ",".join(r.stage_name for r in results if not r.ok),
            )
        return results
