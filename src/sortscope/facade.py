"""
Synchronous facade: every registered algorithm with no events and no cancellation.

Public API (stable):
    sort_in_place(seq, algorithm) -> seq
    sorted_copy(a, algorithm) -> list[int]
"""

from __future__ import annotations

from typing import Iterable, List, MutableSequence, TypeVar, Union

from sortscope.algorithms import PLAIN, Algorithm, resolve
from sortscope.errors import InvalidInputError

__all__ = ["sort_in_place", "sorted_copy"]

S = TypeVar("S", bound=MutableSequence[int])


def sort_in_place(seq: S, algorithm: Union[Algorithm, str]) -> S:
    """
    Sort `seq` in place with the plain variant of `algorithm` and return it.

    Raises
    ------
    InvalidInputError
        If `seq` is None or `algorithm` is not registered.
    """
    if seq is None:
        raise InvalidInputError("sequence must not be None")
    PLAIN[resolve(algorithm)](seq)
    return seq


def sorted_copy(a: Iterable[int], algorithm: Union[Algorithm, str]) -> List[int]:
    """Return a new sorted list; `a` is never mutated."""
    out = [int(x) for x in a]
    PLAIN[resolve(algorithm)](out)
    return out
