"""
In-place heap sort.

The heap links slot f to children 2f and 2f + 1, so slot 0 sits above slot 1
and every other slot k has parent k // 2. A max-heap is built by sifting down
from the midpoint towards slot 0, then the root is repeatedly exchanged with
the last unsorted slot and the reduced heap is sifted down again. Sift-down is
recursive with one exchange per level that has a larger child.
"""

from __future__ import annotations

from typing import MutableSequence

from sortscope.events import Emit, ShouldCancel, exchange

__all__ = ["sort", "sort_plain"]


def _larger_child(seq: MutableSequence[int], f: int, last: int) -> int:
    max_son = f
    if 2 * f <= last and seq[max_son] < seq[2 * f]:
        max_son = 2 * f
    if 2 * f + 1 <= last and seq[max_son] < seq[2 * f + 1]:
        max_son = 2 * f + 1
    return max_son


def _sift_down(
    seq: MutableSequence[int], f: int, last: int, should_cancel: ShouldCancel, emit: Emit
) -> bool:
    """Restore the heap below f within seq[0..last]; False if cancelled."""
    if should_cancel():
        return False
    max_son = _larger_child(seq, f, last)
    if max_son == f:
        return True
    exchange(seq, f, max_son, emit)
    return _sift_down(seq, max_son, last, should_cancel, emit)


def sort(seq: MutableSequence[int], should_cancel: ShouldCancel, emit: Emit) -> None:
    n = len(seq)
    if n < 2:
        return
    for j in range(n // 2, -1, -1):
        if not _sift_down(seq, j, n - 1, should_cancel, emit):
            return
    for j in range(n - 1, 0, -1):
        if should_cancel():
            return
        exchange(seq, 0, j, emit)
        if not _sift_down(seq, 0, j - 1, should_cancel, emit):
            return


def _sift_down_plain(seq: MutableSequence[int], f: int, last: int) -> None:
    max_son = _larger_child(seq, f, last)
    if max_son != f:
        seq[f], seq[max_son] = seq[max_son], seq[f]
        _sift_down_plain(seq, max_son, last)


def sort_plain(seq: MutableSequence[int]) -> None:
    n = len(seq)
    if n < 2:
        return
    for j in range(n // 2, -1, -1):
        _sift_down_plain(seq, j, n - 1)
    for j in range(n - 1, 0, -1):
        seq[0], seq[j] = seq[j], seq[0]
        _sift_down_plain(seq, 0, j - 1)
