"""
Batcher's odd-even merge sort (Knuth's Algorithm M).

The compare-exchange schedule depends only on the length of the sequence:
`pairs(n)` yields the same slot pairs, in the same order, for any input of
length n. Values only decide whether a compared pair is exchanged.

Public API (stable):
    pairs(n) -> Iterator[tuple[int, int]]
    sort(seq, should_cancel, emit) -> None
    sort_plain(seq) -> None
"""

from __future__ import annotations

from typing import Iterator, MutableSequence, Tuple

from sortscope.events import Emit, ShouldCancel, exchange

__all__ = ["pairs", "sort", "sort_plain"]


def pairs(n: int) -> Iterator[Tuple[int, int]]:
    """
    Yield the (i, i + d) compare slots for a sequence of length n.

    t is the largest power of two below the smallest power of two >= n; the
    p, q, r, d parameters walk the merge network from there.
    """
    t = 1
    while t < n:
        t <<= 1
    t >>= 1
    p = t
    while p > 0:
        q, r, d = t, 0, p
        while True:
            for i in range(n - d):
                if i & p == r:
                    yield i, i + d
            d = q - p
            q >>= 1
            r = p
            if d == 0:
                break
        p >>= 1


def sort(seq: MutableSequence[int], should_cancel: ShouldCancel, emit: Emit) -> None:
    for i, j in pairs(len(seq)):
        if should_cancel():
            return
        if seq[i] > seq[j]:
            exchange(seq, i, j, emit)


def sort_plain(seq: MutableSequence[int]) -> None:
    for i, j in pairs(len(seq)):
        if seq[i] > seq[j]:
            seq[i], seq[j] = seq[j], seq[i]
