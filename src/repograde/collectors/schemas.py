"""Pydantic models produced by the signal collectors."""

from pydantic import BaseModel, ConfigDict

from repograde.constants import SignalStatus


class RawSignal(BaseModel):
    """One measurement on its collector's native scale."""

    model_config = ConfigDict(frozen=True)

    name: str
    score: float
    native_max: float
    details: str
    status: SignalStatus = SignalStatus.MEASURED

    @property
    def measured(self) -> bool:
        return self.status == SignalStatus.MEASURED


class LintSummary(BaseModel):
    """Informational lint result that does not feed the rubric."""

    model_config = ConfigDict(frozen=True)

    name: str
    findings: int | None = None
    files: int = 0
    details: str
    status: SignalStatus = SignalStatus.MEASURED


class ToolOutput(BaseModel):
    """Captured result of one external tool invocation."""

    model_config = ConfigDict(frozen=True)

    returncode: int
    stdout: str = ""
    stderr: str = ""
