from dataclasses import dataclass
from enum import Enum

from schemas.code import ExecutionResult

GENERIC_FAILURE = "Execution failed"


class FailureKind(str, Enum):
    WRITE = "write"
    SPAWN = "spawn"
    COMPILE = "compile"
    RUNTIME = "runtime"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class Outcome:
    """Terminal state of an execution, before it is exposed to callers."""

    succeeded: bool
    output: str | None = None
    error: str | None = None
    failure: FailureKind | None = None

    @classmethod
    def success(cls, output: str) -> "Outcome":
        return cls(succeeded=True, output=output)

    @classmethod
    def failed(cls, failure: FailureKind, error: str) -> "Outcome":
        return cls(succeeded=False, error=error, failure=failure)


def normalize(outcome: Outcome) -> ExecutionResult:
    """Keep exactly one of output/error, whatever the outcome carried."""
    if outcome.succeeded:
        return ExecutionResult(success=True, output=outcome.output or "", error=None)
    return ExecutionResult(success=False, output=None, error=outcome.error or GENERIC_FAILURE)
