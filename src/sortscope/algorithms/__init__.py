"""
Algorithm library and registry.

Every algorithm module defines two routines over a mutable integer sequence:

    sort(seq, should_cancel, emit) -> None   # instrumented, cancellable
    sort_plain(seq) -> None                  # no events, no cancellation

Both sort in place into nondecreasing order and leave identical contents for
the same input. The registry maps a stable `Algorithm` identifier to each
variant; the mappings are built once at import and are read-only.

Public API (stable):
    Algorithm
    INSTRUMENTED
    PLAIN
    resolve(key) -> Algorithm
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, MutableSequence, Union

from sortscope.errors import InvalidInputError
from sortscope.events import Emit, ShouldCancel

from . import batcher, bubble, comb, gnome, heap, insertion, merge, opposite, quick, selection

__all__ = [
    "Algorithm",
    "InstrumentedSort",
    "PlainSort",
    "INSTRUMENTED",
    "PLAIN",
    "resolve",
]

InstrumentedSort = Callable[[MutableSequence[int], ShouldCancel, Emit], None]
PlainSort = Callable[[MutableSequence[int]], None]


class Algorithm(Enum):
    BUBBLE = "bubble"
    COMB = "comb"
    GNOME = "gnome"
    OPPOSITE = "opposite"
    QUICK = "quick"
    SELECTION = "selection"
    BATCHER = "batcher"
    INSERTION = "insertion"
    HEAP = "heap"
    MERGE = "merge"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    Algorithm.BUBBLE: "Bubble sort",
    Algorithm.COMB: "Comb sort",
    Algorithm.GNOME: "Gnome sort",
    Algorithm.OPPOSITE: "Opposite exchange",
    Algorithm.QUICK: "Quick sort",
    Algorithm.SELECTION: "Selection sort",
    Algorithm.BATCHER: "Batcher's sort",
    Algorithm.INSERTION: "Simple insertion",
    Algorithm.HEAP: "Heap sort (in place)",
    Algorithm.MERGE: "Merge sort",
}

_MODULES = {
    Algorithm.BUBBLE: bubble,
    Algorithm.COMB: comb,
    Algorithm.GNOME: gnome,
    Algorithm.OPPOSITE: opposite,
    Algorithm.QUICK: quick,
    Algorithm.SELECTION: selection,
    Algorithm.BATCHER: batcher,
    Algorithm.INSERTION: insertion,
    Algorithm.HEAP: heap,
    Algorithm.MERGE: merge,
}

INSTRUMENTED: Mapping[Algorithm, InstrumentedSort] = MappingProxyType(
    {algo: mod.sort for algo, mod in _MODULES.items()}
)
PLAIN: Mapping[Algorithm, PlainSort] = MappingProxyType(
    {algo: mod.sort_plain for algo, mod in _MODULES.items()}
)


def resolve(key: Union[Algorithm, str, None]) -> Algorithm:
    """
    Map an Algorithm or its string value (case-insensitive) to an Algorithm.

    Raises
    ------
    InvalidInputError
        If `key` is None or names no registered algorithm.
    """
    if isinstance(key, Algorithm):
        return key
    if key is None:
        raise InvalidInputError("algorithm must not be None")
    known = ", ".join(a.value for a in Algorithm)
    if isinstance(key, str):
        try:
            return Algorithm(key.strip().lower())
        except ValueError:
            raise InvalidInputError(f"Unknown algorithm {key!r}. Known: {known}") from None
    raise InvalidInputError(f"Algorithm must be an Algorithm or a name; got {key!r}")
