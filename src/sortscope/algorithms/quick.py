"""
Quicksort with Hoare-style partitioning around the middle element's value.

The pivot is a value, not an index: after the first exchange the pivot value
may no longer sit at the middle slot. Partitioning scans from both ends and
exchanges values that straddle the pivot until the scanning pointers cross;
the two sub-ranges [low, hi] and [lo, high] are then sorted left first.

Partitions are kept on an explicit stack that pops them in the same order as
the recursive formulation would visit them.
"""

from __future__ import annotations

from typing import List, MutableSequence, Optional, Tuple

from sortscope.events import Emit, ShouldCancel, exchange

__all__ = ["sort", "sort_plain"]


def _partition(
    seq: MutableSequence[int],
    low: int,
    high: int,
    should_cancel: Optional[ShouldCancel],
    emit: Optional[Emit],
) -> Optional[Tuple[int, int]]:
    """Partition seq[low..high]; return the crossed (lo, hi) or None if cancelled."""
    lo, hi = low, high
    pivot = seq[(lo + hi) // 2]
    while True:
        while seq[lo] < pivot:
            lo += 1
        while seq[hi] > pivot:
            hi -= 1
        if lo <= hi:
            if should_cancel is not None and should_cancel():
                return None
            if lo < hi:
                if emit is None:
                    seq[lo], seq[hi] = seq[hi], seq[lo]
                else:
                    exchange(seq, lo, hi, emit)
            lo += 1
            hi -= 1
        if lo > hi:
            return lo, hi


def _run(
    seq: MutableSequence[int],
    should_cancel: Optional[ShouldCancel],
    emit: Optional[Emit],
) -> None:
    if len(seq) < 2:
        return
    stack: List[Tuple[int, int]] = [(0, len(seq) - 1)]
    while stack:
        low, high = stack.pop()
        crossed = _partition(seq, low, high, should_cancel, emit)
        if crossed is None:
            return
        lo, hi = crossed
        # right pushed first so the left range is handled first
        if lo < high:
            stack.append((lo, high))
        if hi > low:
            stack.append((low, hi))


def sort(seq: MutableSequence[int], should_cancel: ShouldCancel, emit: Emit) -> None:
    _run(seq, should_cancel, emit)


def sort_plain(seq: MutableSequence[int]) -> None:
    _run(seq, None, None)
