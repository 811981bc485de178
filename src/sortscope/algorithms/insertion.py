"""
Straight insertion sort.

The value to insert is reported as lifted into the holding register before
the sorted prefix is scanned, even though lifting it does not write the
sequence. Larger prefix values are shifted right one slot at a time and the
lifted value is placed in the gap.
"""

from __future__ import annotations

from typing import MutableSequence

from sortscope.events import Emit, ShouldCancel, lift, place

__all__ = ["sort", "sort_plain"]


def sort(seq: MutableSequence[int], should_cancel: ShouldCancel, emit: Emit) -> None:
    for i in range(1, len(seq)):
        if should_cancel():
            return
        value = seq[i]
        lift(value, emit)
        j = i - 1
        while j >= 0 and seq[j] > value:
            if should_cancel():
                # the gap at j + 1 holds a stale copy; put the lifted value back
                place(seq, j + 1, value, emit)
                return
            place(seq, j + 1, seq[j], emit)
            j -= 1
        place(seq, j + 1, value, emit)


def sort_plain(seq: MutableSequence[int]) -> None:
    for i in range(1, len(seq)):
        value = seq[i]
        j = i - 1
        while j >= 0 and seq[j] > value:
            seq[j + 1] = seq[j]
            j -= 1
        seq[j + 1] = value
