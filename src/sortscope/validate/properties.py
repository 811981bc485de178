"""
Property checks on final sequence contents.

Public API (stable):
    is_nondecreasing(xs) -> bool
    first_nondecreasing_violation_index(xs) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict[int, int]

Stability is not checked: equal integers are indistinguishable.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Optional, Sequence

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
]


def first_nondecreasing_violation_index(xs: Sequence[int]) -> Optional[int]:
    """
    Return the first i with xs[i] > xs[i+1], or None.

        i = first_nondecreasing_violation_index(out)
        assert i is None, f"not sorted at i={i}: {out[i]} > {out[i+1]}"
    """
    for i in range(len(xs) - 1):
        if xs[i] > xs[i + 1]:
            return i
    return None


def is_nondecreasing(xs: Sequence[int]) -> bool:
    return first_nondecreasing_violation_index(xs) is None


def is_permutation(a: Sequence[int], b: Sequence[int]) -> bool:
    """True iff `a` and `b` hold the same multiset of values."""
    return len(a) == len(b) and Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[int], b: Sequence[int]) -> Dict[int, int]:
    """
    Return value -> (count in a - count in b) for every value whose counts differ.

    An empty dict means the multisets are equal; a cancelled run that corrupted
    its sequence shows up here as a lost and a duplicated value.
    """
    diff = Counter(a)
    diff.subtract(Counter(b))
    return {k: v for k, v in diff.items() if v != 0}
