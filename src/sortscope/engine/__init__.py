"""
Execution adapter public API.

Re-exports so callers can write:
    from sortscope.engine import SortEngine, ExecutionResult, RunStatus
"""

from .adapter import RunHandle, SortEngine, default_engine, run, start
from .result import ExecutionResult, RunStatus
from .cancellation import CancellationSignal

__all__ = [
    "SortEngine",
    "RunHandle",
    "ExecutionResult",
    "RunStatus",
    "CancellationSignal",
    "default_engine",
    "start",
    "run",
]
