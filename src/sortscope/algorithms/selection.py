"""
Selection sort by maximum.

The largest value of the unsorted prefix is exchanged into the last unsorted
slot, so the sorted suffix grows from the right.
"""

from __future__ import annotations

from typing import MutableSequence

from sortscope.events import Emit, ShouldCancel, exchange

__all__ = ["sort", "sort_plain"]


def sort(seq: MutableSequence[int], should_cancel: ShouldCancel, emit: Emit) -> None:
    for i in range(len(seq) - 1, 0, -1):
        index_of_max = 0
        for j in range(1, i + 1):
            if should_cancel():
                return
            if seq[j] > seq[index_of_max]:
                index_of_max = j
        if index_of_max != i:
            exchange(seq, i, index_of_max, emit)


def sort_plain(seq: MutableSequence[int]) -> None:
    for i in range(len(seq) - 1, 0, -1):
        index_of_max = 0
        for j in range(1, i + 1):
            if seq[j] > seq[index_of_max]:
                index_of_max = j
        if index_of_max != i:
            seq[i], seq[index_of_max] = seq[index_of_max], seq[i]
