"""
Correctness of the synchronous facade against the oracle (Python's built-in sorted).

What we check, for every registered algorithm:
- In-place result exactly matches the oracle
- Nondecreasing order and permutation preservation (diagnostics)
- sorted_copy never mutates its input
- Determinism (same input -> same output)
"""

from __future__ import annotations

from typing import List

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from conftest import ALL_ALGORITHMS
from sortscope.algorithms import Algorithm
from sortscope.errors import InvalidInputError
from sortscope.facade import sort_in_place, sorted_copy
from sortscope.validate import is_nondecreasing, is_permutation, oracle_sort


# ------------------------- helpers ------------------------- #

def _check_one(a: List[int], algo: Algorithm) -> None:
    """Common assertion bundle for one input."""
    a_before = list(a)

    out = sorted_copy(a, algo)
    assert a == a_before, "sorted_copy must not mutate its input"

    assert out == oracle_sort(a), f"{algo.value}: output must exactly match the oracle"
    assert is_nondecreasing(out)
    assert is_permutation(a, out)

    in_place = list(a)
    returned = sort_in_place(in_place, algo)
    assert returned is in_place
    assert in_place == out, "in-place and copy variants must agree"

    assert sorted_copy(a, algo) == out, "algorithm must be deterministic"


# ------------------------- unit tests (deterministic) ------------------------- #

@pytest.mark.parametrize("algo", ALL_ALGORITHMS, ids=lambda a: a.value)
@pytest.mark.parametrize(
    "a",
    [
        [],
        [5],
        [2, 1],
        [1, 2, 3, 4],
        [4, 3, 2, 1],
        [7, 7, 7, 7],
        [5, 3, 5, 1],
        [1, 3, 2, 3, 1, 2],
        list(range(20)),
        list(range(20))[::-1],
        [0, -1, 5, -10, 3, 3, 2],
        list(range(17))[::-1],  # one past a power of two
    ],
)
def test_unit_cases(a: List[int], algo: Algorithm) -> None:
    _check_one(a, algo)


@pytest.mark.parametrize("algo", ALL_ALGORITHMS, ids=lambda a: a.value)
def test_numpy_array_sorted_in_place(algo: Algorithm) -> None:
    arr = np.array([9, -2, 7, 7, 0, 3, 255, 1], dtype=np.int64)
    expected = np.sort(arr)
    sort_in_place(arr, algo)
    assert arr.tolist() == expected.tolist()


@pytest.mark.parametrize("n", [2, 3, 4, 5, 8, 9, 16, 33])
def test_merge_result_lands_in_caller_storage(n: int) -> None:
    # the number of ping-pong passes is ceil(log2(n)); odd counts end in the aux buffer
    seq = list(range(n))[::-1]
    sort_in_place(seq, Algorithm.MERGE)
    assert seq == list(range(n))


def test_names_resolve_case_insensitively() -> None:
    assert sorted_copy([3, 1, 2], " Heap ") == [1, 2, 3]


def test_unknown_name_or_missing_sequence_rejected() -> None:
    with pytest.raises(InvalidInputError):
        sorted_copy([1], "bogo")
    with pytest.raises(InvalidInputError):
        sort_in_place(None, Algorithm.BUBBLE)  # type: ignore[arg-type]


# ------------------------- property-based tests (randomized) ------------------------- #

small_ints = st.integers(min_value=-10_000, max_value=10_000)


@pytest.mark.parametrize("algo", ALL_ALGORITHMS, ids=lambda a: a.value)
@settings(deadline=None, max_examples=40)
@given(a=st.lists(small_ints, min_size=0, max_size=120))
def test_property_random_small_range(algo: Algorithm, a: List[int]) -> None:
    _check_one(a, algo)


@pytest.mark.parametrize("algo", ALL_ALGORITHMS, ids=lambda a: a.value)
@settings(deadline=None, max_examples=30)
@given(a=st.lists(st.integers(min_value=0, max_value=255), min_size=0, max_size=200))
def test_property_many_duplicates(algo: Algorithm, a: List[int]) -> None:
    _check_one(a, algo)
