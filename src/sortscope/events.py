"""
Mutation event protocol shared by every instrumented algorithm.

Each write an algorithm performs on the sequence is reported as one
`MutationEvent(slot, value)`. A two-slot exchange is always reported as exactly
three events, in this order:

    (HOLD, a_old)     # value at slot a lifted into the holding register
    (a, b_old)        # slot a receives the value from slot b
    (b, a_old)        # slot b receives the lifted value

A plain overwrite (insertion shift, merge placement, copy-back) is one event
with the real destination slot.

Public API (stable):
    HOLD
    MutationEvent
    exchange(seq, a, b, emit) -> None
    place(seq, slot, value, emit) -> None
    lift(value, emit) -> None
    replay(initial, events) -> list[int]
    exchanged_pairs(events) -> list[tuple[int, int]]

Conventions:
- HOLD is -1. It is never a valid slot (valid slots are 0 <= slot < len(seq)),
  but it *is* a valid Python index, so replayers must skip it explicitly.
- Read-only comparisons never produce events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, MutableSequence, Sequence, Tuple

HOLD: int = -1

__all__ = [
    "HOLD",
    "MutationEvent",
    "Emit",
    "ShouldCancel",
    "exchange",
    "place",
    "lift",
    "replay",
    "exchanged_pairs",
]


@dataclass(frozen=True)
class MutationEvent:
    slot: int
    value: int

    @property
    def is_hold(self) -> bool:
        return self.slot == HOLD


Emit = Callable[[MutationEvent], None]
ShouldCancel = Callable[[], bool]


def exchange(seq: MutableSequence[int], a: int, b: int, emit: Emit) -> None:
    """Swap seq[a] and seq[b], reporting the move as a HOLD triple."""
    t = seq[a]
    emit(MutationEvent(HOLD, int(t)))
    seq[a] = seq[b]
    emit(MutationEvent(a, int(seq[a])))
    seq[b] = t
    emit(MutationEvent(b, int(t)))


def place(seq: MutableSequence[int], slot: int, value: int, emit: Emit) -> None:
    """Overwrite a single slot and report it."""
    seq[slot] = value
    emit(MutationEvent(slot, int(value)))


def lift(value: int, emit: Emit) -> None:
    """Report a value taken into the holding register without writing the sequence."""
    emit(MutationEvent(HOLD, int(value)))


def replay(initial: Sequence[int], events: Iterable[MutationEvent]) -> List[int]:
    """
    Rebuild array contents from a pre-run copy and the emitted events.

    HOLD events carry no addressable slot and are skipped.

    Raises
    ------
    IndexError
        If an event addresses a slot outside the sequence.
    """
    out = list(initial)
    n = len(out)
    for ev in events:
        if ev.is_hold:
            continue
        if not 0 <= ev.slot < n:
            raise IndexError(f"event slot {ev.slot} outside sequence of length {n}")
        out[ev.slot] = ev.value
    return out


def exchanged_pairs(events: Iterable[MutationEvent]) -> List[Tuple[int, int]]:
    """
    Return the (a, b) slot pairs of every exchange triple, in emission order.

    A HOLD event followed by a single overwrite (insertion sort's lifted value)
    is not an exchange and is not reported.
    """
    evs = list(events)
    pairs: List[Tuple[int, int]] = []
    i = 0
    while i < len(evs):
        if (
            evs[i].is_hold
            and i + 2 < len(evs)
            and not evs[i + 1].is_hold
            and not evs[i + 2].is_hold
            and evs[i + 2].value == evs[i].value
            and evs[i + 1].slot != evs[i + 2].slot
        ):
            pairs.append((evs[i + 1].slot, evs[i + 2].slot))
            i += 3
        else:
            i += 1
    return pairs
