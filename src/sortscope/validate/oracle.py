"""
Ground-truth ordering for sortscope runs.

Python's built-in `sorted()` is the oracle: every algorithm, instrumented or
plain, must end with exactly `oracle_sort(input)`.

Public API (stable):
    ORACLE_NAME
    oracle_sort(a) -> list[int]
    equals_oracle(a, out) -> bool
"""

from __future__ import annotations

from typing import List, Sequence

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "equals_oracle"]


def oracle_sort(a: Sequence[int]) -> List[int]:
    """Return a new nondecreasing list of the values in `a`; `a` is not touched."""
    return sorted(int(x) for x in a)


def equals_oracle(a: Sequence[int], out: Sequence[int]) -> bool:
    """True iff `out` (the post-run contents) equals the oracle ordering of the input `a`."""
    return [int(x) for x in out] == oracle_sort(a)
