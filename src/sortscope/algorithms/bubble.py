"""Bubble sort: adjacent compare-exchange with a shrinking upper bound."""

from __future__ import annotations

from typing import MutableSequence

from sortscope.events import Emit, ShouldCancel, exchange

__all__ = ["sort", "sort_plain"]


def sort(seq: MutableSequence[int], should_cancel: ShouldCancel, emit: Emit) -> None:
    for i in range(len(seq) - 1, 0, -1):
        for j in range(i):
            if should_cancel():
                return
            if seq[j] > seq[j + 1]:
                exchange(seq, j, j + 1, emit)


def sort_plain(seq: MutableSequence[int]) -> None:
    for i in range(len(seq) - 1, 0, -1):
        for j in range(i):
            if seq[j] > seq[j + 1]:
                seq[j], seq[j + 1] = seq[j + 1], seq[j]
