"""
Audits of an emitted MutationEvent trace.

Public API (stable):
    replays_to(initial, events, final) -> bool
    first_malformed_exchange(initial, events) -> int | None
    count_events(events) -> dict[str, int]

`first_malformed_exchange` walks the trace against a shadow copy of the
array. Every HOLD event must open a triple (HOLD, v), (a, w), (b, v) where v
was the value at slot a and w the value at slot b just before the triple.
A HOLD event followed by a shift run and a placement of the held value
(insertion sort's lifted value) is accepted as well.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from sortscope.events import MutationEvent, replay

__all__ = ["replays_to", "first_malformed_exchange", "count_events"]


def replays_to(initial: Sequence[int], events: Iterable[MutationEvent], final: Sequence[int]) -> bool:
    """True iff replaying `events` over `initial` (HOLD skipped) yields `final`."""
    try:
        return replay(initial, events) == [int(x) for x in final]
    except IndexError:
        return False


def first_malformed_exchange(initial: Sequence[int], events: Sequence[MutationEvent]) -> Optional[int]:
    """Return the event index where the trace stops being well formed, or None."""
    state: List[int] = [int(x) for x in initial]
    n = len(state)
    k = 0
    while k < len(events):
        ev = events[k]
        if not ev.is_hold:
            if not 0 <= ev.slot < n:
                return k
            state[ev.slot] = ev.value
            k += 1
            continue
        if _is_exchange_at(state, events, k):
            a, b = events[k + 1].slot, events[k + 2].slot
            state[a], state[b] = state[b], state[a]
            k += 3
            continue
        # lifted value: shifts follow until the held value is placed
        held = ev.value
        if held not in state:
            return k
        j = k + 1
        placed = False
        while j < len(events) and not events[j].is_hold:
            e = events[j]
            if not 0 <= e.slot < n:
                return j
            state[e.slot] = e.value
            j += 1
            if e.value == held:
                placed = True
                break
        if not placed:
            return k
        k = j
    return None


def _is_exchange_at(state: List[int], events: Sequence[MutationEvent], k: int) -> bool:
    if k + 2 >= len(events):
        return False
    hold, first, second = events[k], events[k + 1], events[k + 2]
    if first.is_hold or second.is_hold or first.slot == second.slot:
        return False
    n = len(state)
    if not (0 <= first.slot < n and 0 <= second.slot < n):
        return False
    return (
        state[first.slot] == hold.value
        and state[second.slot] == first.value
        and second.value == hold.value
    )


def count_events(events: Iterable[MutationEvent]) -> Dict[str, int]:
    """Totals of all events, HOLD events, and plain slot writes."""
    total = holds = 0
    for ev in events:
        total += 1
        if ev.is_hold:
            holds += 1
    return {"events": total, "holds": holds, "writes": total - holds}
