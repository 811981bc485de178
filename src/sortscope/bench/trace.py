"""
Trace one instrumented run through the engine and audit it.

Public API (stable):
    trace_run(engine, algorithm, a, timeout_seconds) -> dict

Returned dict schema:
    {
        "status": "completed" | "cancelled" | "failed" | "timeout",
        "error": str | None,
        "elapsed_ns": int,
        "events": int, "holds": int, "writes": int, "exchanges": int,
        "replay_ok": bool,       # events replayed over the input give the output
        "trace_ok": bool,        # every HOLD triple / lifted value is well formed
        "output": list[int],
    }

On timeout the run is cancelled and waited for, so the sequence is never left
held by a live worker.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Sequence

from sortscope.algorithms import Algorithm
from sortscope.engine import SortEngine
from sortscope.events import MutationEvent, exchanged_pairs
from sortscope.validate import count_events, first_malformed_exchange, replays_to

__all__ = ["trace_run"]


def trace_run(
    engine: SortEngine,
    algorithm: Algorithm,
    a: Sequence[int],
    timeout_seconds: float,
) -> Dict[str, Any]:
    initial = [int(x) for x in a]
    seq = list(initial)
    events: List[MutationEvent] = []

    t0 = time.perf_counter_ns()
    handle = engine.start(seq, algorithm, on_event=events.append)
    res = handle.wait(timeout_seconds)
    if res is None:
        handle.cancel()
        res = handle.wait()
        status, error = "timeout", None
    else:
        status = res.status.value
        error = repr(res.cause) if res.cause is not None else None
    elapsed = time.perf_counter_ns() - t0

    out: Dict[str, Any] = {"status": status, "error": error, "elapsed_ns": int(elapsed)}
    out.update(count_events(events))
    out["exchanges"] = len(exchanged_pairs(events)) if algorithm is not Algorithm.INSERTION else 0
    out["replay_ok"] = replays_to(initial, events, seq)
    out["trace_ok"] = first_malformed_exchange(initial, events) is None
    out["output"] = seq
    return out
