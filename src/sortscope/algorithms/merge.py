"""
Bottom-up merge sort between the sequence and one auxiliary buffer.

Each pass merges neighbouring runs of length `step` from the source buffer
into the destination buffer, then the two buffers swap roles and `step`
doubles. Writes into either buffer are reported with the destination slot.
When the newest pass landed in the auxiliary buffer, its contents are copied
back into the caller's storage (one event per slot), so the caller always
sees the merged result.

Cancellation is polled once per pass. A pass is never abandoned midway
because it may be overwriting the caller's storage.
"""

from __future__ import annotations

from typing import Callable, List, MutableSequence, Sequence

from sortscope.events import Emit, MutationEvent, ShouldCancel

__all__ = ["sort", "sort_plain"]


def _merge_pass(
    src: Sequence[int],
    dst: MutableSequence[int],
    step: int,
    report: Callable[[int, int], None],
) -> None:
    n = len(src)
    dest = 0
    first, second = 0, step
    first_stop, second_stop = min(step, n), min(2 * step, n)
    while dest < n:
        while first < first_stop and second < second_stop:
            if src[first] <= src[second]:
                dst[dest] = src[first]
                first += 1
            else:
                dst[dest] = src[second]
                second += 1
            report(dest, dst[dest])
            dest += 1
        while first < first_stop:
            dst[dest] = src[first]
            first += 1
            report(dest, dst[dest])
            dest += 1
        while second < second_stop:
            dst[dest] = src[second]
            second += 1
            report(dest, dst[dest])
            dest += 1
        first = second
        second += step
        first_stop = min(first + step, n)
        second_stop = min(second + step, n)


def _ignore(slot: int, value: int) -> None:
    pass


def sort(seq: MutableSequence[int], should_cancel: ShouldCancel, emit: Emit) -> None:
    n = len(seq)
    if n < 2:
        return

    def report(slot: int, value: int) -> None:
        emit(MutationEvent(slot, int(value)))

    aux: List[int] = [0] * n
    src, dst = seq, aux
    step = 1
    while step < n:
        if should_cancel():
            break
        _merge_pass(src, dst, step, report)
        src, dst = dst, src
        step *= 2
    if src is aux:
        for k in range(n):
            seq[k] = aux[k]
            report(k, aux[k])


def sort_plain(seq: MutableSequence[int]) -> None:
    n = len(seq)
    if n < 2:
        return
    aux: List[int] = [0] * n
    src, dst = seq, aux
    step = 1
    while step < n:
        _merge_pass(src, dst, step, _ignore)
        src, dst = dst, src
        step *= 2
    if src is aux:
        for k in range(n):
            seq[k] = aux[k]
