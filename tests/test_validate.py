"""Tests for the oracle, property checks and trace audits."""

from __future__ import annotations

from sortscope.events import HOLD, MutationEvent
from sortscope.validate import (
    count_events,
    equals_oracle,
    first_malformed_exchange,
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_permutation,
    oracle_sort,
    permutation_counter_diff,
    replays_to,
)


def test_oracle_does_not_mutate() -> None:
    a = [3, 1, 2]
    assert oracle_sort(a) == [1, 2, 3]
    assert a == [3, 1, 2]
    assert equals_oracle(a, [1, 2, 3])
    assert not equals_oracle(a, [1, 3, 2])


def test_nondecreasing_helpers() -> None:
    assert is_nondecreasing([]) and is_nondecreasing([1, 1, 2])
    assert first_nondecreasing_violation_index([1, 3, 2, 4]) == 1
    assert first_nondecreasing_violation_index([1, 2]) is None


def test_permutation_helpers() -> None:
    assert is_permutation([1, 2, 2], [2, 1, 2])
    assert not is_permutation([1, 2], [1, 2, 2])
    assert permutation_counter_diff([1, 2, 2], [1, 1, 2]) == {2: 1, 1: -1}
    assert permutation_counter_diff([5], [5]) == {}


def test_replays_to() -> None:
    events = [MutationEvent(HOLD, 2), MutationEvent(0, 1), MutationEvent(1, 2)]
    assert replays_to([2, 1], events, [1, 2])
    assert not replays_to([2, 1], events, [2, 1])
    assert not replays_to([2, 1], [MutationEvent(5, 0)], [2, 1])


def test_well_formed_exchange_accepted() -> None:
    events = [MutationEvent(HOLD, 2), MutationEvent(0, 1), MutationEvent(1, 2)]
    assert first_malformed_exchange([2, 1], events) is None


def test_exchange_with_wrong_lifted_value_flagged() -> None:
    events = [MutationEvent(HOLD, 9), MutationEvent(0, 1), MutationEvent(1, 9)]
    assert first_malformed_exchange([2, 1], events) == 0


def test_lifted_value_must_be_placed() -> None:
    initial = [3, 1]
    good = [MutationEvent(HOLD, 1), MutationEvent(1, 3), MutationEvent(0, 1)]
    dangling = [MutationEvent(HOLD, 1), MutationEvent(1, 3)]
    assert first_malformed_exchange(initial, good) is None
    assert first_malformed_exchange(initial, dangling) == 0


def test_out_of_range_write_flagged() -> None:
    assert first_malformed_exchange([1], [MutationEvent(1, 0)]) == 0


def test_count_events() -> None:
    events = [MutationEvent(HOLD, 2), MutationEvent(0, 1), MutationEvent(1, 2)]
    assert count_events(events) == {"events": 3, "holds": 1, "writes": 2}
