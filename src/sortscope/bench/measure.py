"""
Timing harness for the synchronous facade.

One sample is exactly one in-place call `sort_plain(arr)`, timed with a
monotonic high-resolution clock. Copying the input, GC handling and warmup all
happen outside the timed block.

Public API (stable):
    time_sort_call(...) -> dict

Returned dict schema:
    {
        "algo": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns per successful sample
        "status": "ok" | "timeout" | "error",
        "error": str | None,
        "timed_out_on_repeat": int | None,  # 0-based repeat index
        "output": list[int] | None,         # contents after the last sample
    }
"""

from __future__ import annotations

import gc
import time
from typing import Any, Callable, Dict, List, MutableSequence, Sequence

__all__ = ["time_sort_call"]


def time_sort_call(
    *,
    algo_name: str,
    sort_fn: Callable[[MutableSequence[int]], None],
    a: Sequence[int],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
) -> Dict[str, Any]:
    """
    Time repeated in-place calls of `sort_fn` on fresh copies of `a`.

    Parameters
    ----------
    algo_name : str
        Logical name of the algorithm (for records).
    sort_fn : Callable[[list[int]], None]
        A plain in-place sort from `sortscope.algorithms.PLAIN`.
    a : Sequence[int]
        Input; never mutated (each sample gets its own copy).
    repeats : int
        Number of timed samples.
    warmup : bool
        Make one untimed call first.
    disable_gc : bool
        Collect, then disable GC around the timed loop; restored afterwards.
    timeout_seconds : float
        A sample slower than this marks status="timeout" and stops sampling.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result: Dict[str, Any] = {
        "algo": algo_name,
        "repeats": repeats,
        "samples_ns": [],
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
        "output": None,
    }
    samples: List[int] = result["samples_ns"]

    if warmup and repeats > 0:
        try:
            sort_fn(list(a))
        except Exception as e:
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    prev_gc_enabled = gc.isenabled()
    threshold_ns = int(timeout_seconds * 1e9)
    try:
        if disable_gc:
            gc.collect()
            gc.disable()
        for r in range(repeats):
            arr = list(a)
            try:
                t0 = time.perf_counter_ns()
                sort_fn(arr)
                t1 = time.perf_counter_ns()
            except Exception as e:
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break
            samples.append(t1 - t0)
            result["output"] = arr
            if t1 - t0 > threshold_ns:
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break
    finally:
        # leave GC disabled if the caller had it disabled
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result
