"""
Opposite exchange sort.

Slot i is compared against every later slot, walking j down from the end, and
the pair is exchanged on inversion. No early exit.
"""

from __future__ import annotations

from typing import MutableSequence

from sortscope.events import Emit, ShouldCancel, exchange

__all__ = ["sort", "sort_plain"]


def sort(seq: MutableSequence[int], should_cancel: ShouldCancel, emit: Emit) -> None:
    n = len(seq)
    for i in range(n - 1):
        for j in range(n - 1, i, -1):
            if should_cancel():
                return
            if seq[i] > seq[j]:
                exchange(seq, i, j, emit)


def sort_plain(seq: MutableSequence[int]) -> None:
    n = len(seq)
    for i in range(n - 1):
        for j in range(n - 1, i, -1):
            if seq[i] > seq[j]:
                seq[i], seq[j] = seq[j], seq[i]
