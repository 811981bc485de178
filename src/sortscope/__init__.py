"""
sortscope: an instrumented sorting engine.

Ten in-place integer sorting algorithms, each reporting every write as a
MutationEvent, cancellable at bounded granularity, and runnable on a
background thread through the SortEngine. A synchronous facade runs the same
algorithms with no instrumentation.

Typical use:
    from sortscope import SortEngine, Algorithm

    seq = [5, 3, 5, 1]
    handle = SortEngine().start(seq, Algorithm.BUBBLE, on_event=print)
    result = handle.wait()
"""

from sortscope.algorithms import INSTRUMENTED, PLAIN, Algorithm, resolve
from sortscope.config import EngineConfig, load_config
from sortscope.engine import (
    CancellationSignal,
    ExecutionResult,
    RunHandle,
    RunStatus,
    SortEngine,
)
from sortscope.errors import ConcurrentRunError, InvalidInputError, SortscopeError
from sortscope.events import HOLD, MutationEvent, replay
from sortscope.facade import sort_in_place, sorted_copy

__version__ = "0.1.0"

__all__ = [
    "Algorithm",
    "INSTRUMENTED",
    "PLAIN",
    "resolve",
    "EngineConfig",
    "load_config",
    "SortEngine",
    "RunHandle",
    "RunStatus",
    "ExecutionResult",
    "CancellationSignal",
    "SortscopeError",
    "InvalidInputError",
    "ConcurrentRunError",
    "HOLD",
    "MutationEvent",
    "replay",
    "sort_in_place",
    "sorted_copy",
]
