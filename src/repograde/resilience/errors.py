"""Grading error taxonomy and external-failure classification.

Only :class:`ConfigError` is allowed to stop a run. Every other error
is caught at the collector or file it came from and turned into a
degraded-but-valid value.
"""

from __future__ import annotations

import asyncio
from enum import Enum


class GradingError(Exception):
    """Base class for all repograde errors."""


class ConfigError(GradingError):
    """Rubric resource is missing or malformed. Fatal."""


class CollectorDegraded(GradingError):  # noqa: N818
    """A collector could not measure its signal and fell back."""

    def __init__(self, collector: str, reason: str) -> None:
        super().__init__(f"{collector}: {reason}")
        self.collector = collector
        self.reason = reason


class TextAnalysisParseError(GradingError):
    """AI response could not be read as a text analysis."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw


class PersistError(GradingError):
    """The grading artifact could not be written."""


class ErrorClass(Enum):
    TRANSIENT = "transient"  # 429, network errors
    SERVER = "server"  # 500, 502, 503
    TIMEOUT = "timeout"
    CLIENT = "client"  # 400, 401, 403
    UNKNOWN = "unknown"


def classify_error(error: BaseException) -> ErrorClass:
    """Label an external failure for logging.

    Structured ``status_code`` attributes win; untyped exceptions
    fall back to message matching.
    """
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        if status_code == 429:
            return ErrorClass.TRANSIENT
        if 400 <= status_code < 500:
            return ErrorClass.CLIENT
        if 500 <= status_code < 600:
            return ErrorClass.SERVER

    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return ErrorClass.TIMEOUT

    msg = str(error).lower()

    if "timeout" in msg or "timed out" in msg:
        return ErrorClass.TIMEOUT
    if "429" in msg or "rate limit" in msg or "rate_limit" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("500", "502", "503", "504")):
        return ErrorClass.SERVER
    if "econnrefused" in msg or "connection" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("400", "401", "403", "404")):
        return ErrorClass.CLIENT

    return ErrorClass.UNKNOWN
