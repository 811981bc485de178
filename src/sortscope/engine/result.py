"""Terminal outcome of a run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

__all__ = ["RunStatus", "ExecutionResult"]


class RunStatus(Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class ExecutionResult:
    """
    Exactly one ExecutionResult is produced per run.

    `cause` is set only for FAILED and holds the exception that ended the run:
    InvalidInputError / ConcurrentRunError for rejected starts, or whatever
    the algorithm raised.
    """

    status: RunStatus
    cause: Optional[BaseException] = None

    @classmethod
    def completed(cls) -> "ExecutionResult":
        return cls(RunStatus.COMPLETED)

    @classmethod
    def cancelled(cls) -> "ExecutionResult":
        return cls(RunStatus.CANCELLED)

    @classmethod
    def failed(cls, cause: BaseException) -> "ExecutionResult":
        return cls(RunStatus.FAILED, cause)

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.COMPLETED

    def raise_for_status(self) -> None:
        """Re-raise the failure cause; no-op for completed or cancelled runs."""
        if self.status is RunStatus.FAILED and self.cause is not None:
            raise self.cause
