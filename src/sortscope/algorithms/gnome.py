"""
Gnome sort.

The gnome walks forward while neighbours are in order; on an inversion it
exchanges the pair and steps back one place. The index never goes below 0.
"""

from __future__ import annotations

from typing import MutableSequence

from sortscope.events import Emit, ShouldCancel, exchange

__all__ = ["sort", "sort_plain"]


def sort(seq: MutableSequence[int], should_cancel: ShouldCancel, emit: Emit) -> None:
    n = len(seq)
    i = 0
    while i < n:
        if should_cancel():
            return
        if i == 0 or seq[i - 1] <= seq[i]:
            i += 1
        else:
            # right element is lifted first
            exchange(seq, i, i - 1, emit)
            i -= 1


def sort_plain(seq: MutableSequence[int]) -> None:
    n = len(seq)
    i = 0
    while i < n:
        if i == 0 or seq[i - 1] <= seq[i]:
            i += 1
        else:
            seq[i], seq[i - 1] = seq[i - 1], seq[i]
            i -= 1
