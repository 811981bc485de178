"""
Comb sort: bubble sort over a gap that shrinks by 1.3 each pass.

The loop keeps going while the gap is above 1 or the last pass exchanged
anything, so the final passes are plain bubble passes with gap 1.
"""

from __future__ import annotations

from typing import MutableSequence

from sortscope.events import Emit, ShouldCancel, exchange

__all__ = ["SHRINK", "sort", "sort_plain"]

SHRINK: float = 1.3


def _next_gap(gap: int) -> int:
    return max(int(gap / SHRINK), 1)


def sort(seq: MutableSequence[int], should_cancel: ShouldCancel, emit: Emit) -> None:
    n = len(seq)
    gap = n
    swapped = True
    while gap > 1 or swapped:
        gap = _next_gap(gap)
        swapped = False
        for j in range(n - gap):
            if should_cancel():
                return
            if seq[j] > seq[j + gap]:
                exchange(seq, j, j + gap, emit)
                swapped = True


def sort_plain(seq: MutableSequence[int]) -> None:
    n = len(seq)
    gap = n
    swapped = True
    while gap > 1 or swapped:
        gap = _next_gap(gap)
        swapped = False
        for j in range(n - gap):
            if seq[j] > seq[j + gap]:
                seq[j], seq[j + gap] = seq[j + gap], seq[j]
                swapped = True
