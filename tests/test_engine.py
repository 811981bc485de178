"""
Tests for the execution adapter: lifecycle, ordering, cancellation,
exclusivity and failure reporting.
"""

from __future__ import annotations

import threading
from typing import List

import pytest
from hypothesis import given, settings, strategies as st

from conftest import ALL_ALGORITHMS, recorder
from sortscope.algorithms import Algorithm, bubble
from sortscope.config import EngineConfig
from sortscope.engine import CancellationSignal, ExecutionResult, RunStatus, SortEngine
from sortscope.errors import ConcurrentRunError, InvalidInputError
from sortscope.events import HOLD, MutationEvent
from sortscope.facade import sorted_copy
from sortscope.validate import is_permutation, replays_to

WAIT = 10.0


def _gated(gate: threading.Event, started: threading.Event):
    """An instrumented routine that blocks until `gate` is set, then bubble-sorts."""

    def routine(seq, should_cancel, emit):
        started.set()
        gate.wait(WAIT)
        bubble.sort(seq, should_cancel, emit)

    return routine


# ------------------------- completion ------------------------- #

def test_bubble_scenario_through_engine(engine: SortEngine) -> None:
    seq = [5, 3, 5, 1]
    events, on_event = recorder()
    results: List[ExecutionResult] = []
    handle = engine.start(seq, Algorithm.BUBBLE, on_event=on_event, on_result=results.append)
    result = handle.wait(WAIT)
    assert result == ExecutionResult.completed()
    assert result.ok
    assert seq == [1, 3, 5, 5]
    assert events[:3] == [MutationEvent(HOLD, 5), MutationEvent(0, 3), MutationEvent(1, 5)]
    assert results == [result]
    assert handle.event_count == len(events)


@pytest.mark.parametrize("algo", ALL_ALGORITHMS, ids=lambda a: a.value)
@pytest.mark.parametrize("a", [[], [7]])
def test_trivial_inputs_complete_without_events(engine: SortEngine, algo: Algorithm, a: List[int]) -> None:
    seq = list(a)
    handle = engine.start(seq, algo)
    assert handle.wait(WAIT).status is RunStatus.COMPLETED
    assert handle.event_count == 0
    assert list(handle.events(timeout=WAIT)) == []
    assert seq == a


@pytest.mark.parametrize("algo", ALL_ALGORITHMS, ids=lambda a: a.value)
@settings(deadline=None, max_examples=15)
@given(a=st.lists(st.integers(min_value=-1000, max_value=1000), max_size=50))
def test_engine_matches_facade(algo: Algorithm, a: List[int]) -> None:
    engine = SortEngine(EngineConfig(pacing_seconds=0.0))
    seq = list(a)
    events, on_event = recorder()
    result = engine.run(seq, algo, on_event=on_event, timeout=WAIT)
    assert result is not None and result.status is RunStatus.COMPLETED
    assert seq == sorted_copy(a, algo)
    assert replays_to(a, events, seq)


def test_names_are_accepted(engine: SortEngine) -> None:
    seq = [3, 2, 1]
    assert engine.run(seq, "Selection", timeout=WAIT).ok
    assert seq == [1, 2, 3]


def test_buffered_events_match_callback_order() -> None:
    engine = SortEngine(EngineConfig(pacing_seconds=0.001))
    seq = [4, 3, 2, 1, 0]
    events, on_event = recorder()
    handle = engine.start(seq, Algorithm.INSERTION, on_event=on_event)
    consumed = list(handle.events(timeout=WAIT))
    assert handle.wait(WAIT).ok
    assert consumed == events
    assert replays_to([4, 3, 2, 1, 0], consumed, seq)
    # a second consumer sees the end marker straight away
    assert list(handle.events(timeout=WAIT)) == []


def test_unbuffered_engine_refuses_event_iteration() -> None:
    engine = SortEngine(EngineConfig(pacing_seconds=0.0, buffer_events=False))
    handle = engine.start([2, 1], Algorithm.BUBBLE)
    assert handle.wait(WAIT).ok
    with pytest.raises(RuntimeError):
        list(handle.events())


def test_result_callback_runs_before_wait_returns(engine: SortEngine) -> None:
    seen: List[ExecutionResult] = []
    handle = engine.start([2, 1], Algorithm.GNOME, on_result=seen.append)
    result = handle.wait(WAIT)
    assert seen == [result]
    assert handle.done()
    assert handle.result is result


# ------------------------- cancellation ------------------------- #

@pytest.mark.parametrize("algo", ALL_ALGORITHMS, ids=lambda a: a.value)
def test_cancelled_before_start(engine: SortEngine, algo: Algorithm) -> None:
    a = list(range(12, 0, -1))
    seq = list(a)
    signal = CancellationSignal()
    signal.set()
    handle = engine.start(seq, algo, signal=signal)
    assert handle.wait(WAIT).status is RunStatus.CANCELLED
    assert handle.event_count == 0
    assert seq != sorted(a)
    assert seq == a


def test_cancel_after_completion_is_a_no_op(engine: SortEngine) -> None:
    seq = [3, 1, 2]
    handle = engine.start(seq, Algorithm.QUICK)
    assert handle.wait(WAIT).ok
    handle.cancel()
    engine.cancel(handle)
    assert handle.cancel_requested
    assert handle.result.status is RunStatus.COMPLETED


def test_cancel_mid_run_leaves_valid_permutation() -> None:
    engine = SortEngine(EngineConfig(pacing_seconds=0.002))
    a = list(range(60, 0, -1))
    seq = list(a)
    events, on_event = recorder()
    first_event = threading.Event()

    def on_first(ev: MutationEvent) -> None:
        on_event(ev)
        first_event.set()

    handle = engine.start(seq, Algorithm.BUBBLE, on_event=on_first)
    assert first_event.wait(WAIT)
    handle.cancel()
    handle.cancel()
    assert handle.wait(WAIT).status is RunStatus.CANCELLED
    assert seq != sorted(a)
    assert is_permutation(a, seq)
    assert replays_to(a, events, seq)


def test_cancel_seen_only_after_last_poll_still_completes(engine: SortEngine) -> None:
    # [1] never polls, so a cancel cannot be observed
    signal = CancellationSignal()
    signal.set()
    assert engine.run([1], Algorithm.BUBBLE, signal=signal, timeout=WAIT).ok


def test_signal_is_one_shot_and_idempotent() -> None:
    signal = CancellationSignal()
    assert not signal.is_set()
    signal.set()
    signal.set()
    assert signal.is_set()


# ------------------------- exclusivity ------------------------- #

def test_second_run_on_held_sequence_is_rejected(engine: SortEngine) -> None:
    gate, started = threading.Event(), threading.Event()
    seq = [3, 2, 1]
    first = engine.start(seq, _gated(gate, started))
    assert started.wait(WAIT)
    assert engine.is_running(seq)

    rejected: List[ExecutionResult] = []
    second = engine.start(seq, Algorithm.QUICK, on_result=rejected.append)
    assert second.done()
    assert second.result.status is RunStatus.FAILED
    assert isinstance(second.result.cause, ConcurrentRunError)
    assert rejected == [second.result]
    assert second.event_count == 0

    gate.set()
    assert first.wait(WAIT).ok
    assert seq == [1, 2, 3]
    assert not engine.is_running(seq)
    assert engine.active_runs() == 0


def test_equal_but_distinct_sequences_run_concurrently(engine: SortEngine) -> None:
    gate, started = threading.Event(), threading.Event()
    a, b = [2, 1], [2, 1]
    first = engine.start(a, _gated(gate, started))
    assert started.wait(WAIT)
    assert engine.run(b, Algorithm.BUBBLE, timeout=WAIT).ok
    gate.set()
    assert first.wait(WAIT).ok
    assert a == b == [1, 2]


def test_sequence_can_be_rerun_after_completion(engine: SortEngine) -> None:
    seq = [2, 1]
    assert engine.run(seq, Algorithm.HEAP, timeout=WAIT).ok
    seq.extend([0, -1])
    assert engine.run(seq, Algorithm.MERGE, timeout=WAIT).ok
    assert seq == [-1, 0, 1, 2]


def test_restart_from_result_callback(engine: SortEngine) -> None:
    seq = [3, 1, 2]
    follow_up: List = []

    def on_result(result: ExecutionResult) -> None:
        follow_up.append(engine.start(seq, Algorithm.COMB))

    engine.start(seq, Algorithm.BUBBLE, on_result=on_result).wait(WAIT)
    assert follow_up[0].wait(WAIT).ok


# ------------------------- failures ------------------------- #

@pytest.mark.parametrize(
    "seq, algo",
    [(None, Algorithm.BUBBLE), ([1, 2], None), ([1, 2], "bogo"), ([1, 2], 42), ((2, 1), Algorithm.BUBBLE)],
)
def test_invalid_input_reported_as_failed(engine: SortEngine, seq, algo) -> None:
    seen: List[ExecutionResult] = []
    handle = engine.start(seq, algo, on_result=seen.append)
    assert handle.done()
    assert handle.result.status is RunStatus.FAILED
    assert isinstance(handle.result.cause, InvalidInputError)
    assert seen == [handle.result]
    assert list(handle.events(timeout=WAIT)) == []
    with pytest.raises(InvalidInputError):
        handle.result.raise_for_status()


def test_algorithm_fault_is_captured(engine: SortEngine) -> None:
    def broken(seq, should_cancel, emit):
        emit(MutationEvent(0, seq[0]))
        raise ZeroDivisionError("boom")

    seq = [1, 2]
    handle = engine.start(seq, broken)
    result = handle.wait(WAIT)
    assert result.status is RunStatus.FAILED
    assert isinstance(result.cause, ZeroDivisionError)
    assert handle.event_count == 1
    assert list(handle.events(timeout=WAIT)) == [MutationEvent(0, 1)]
    assert not engine.is_running(seq)
    with pytest.raises(ZeroDivisionError):
        result.raise_for_status()


def test_observer_fault_fails_the_run(engine: SortEngine) -> None:
    def on_event(ev: MutationEvent) -> None:
        raise RuntimeError("observer broke")

    result = engine.run([2, 1], Algorithm.BUBBLE, on_event=on_event, timeout=WAIT)
    assert result.status is RunStatus.FAILED
    assert isinstance(result.cause, RuntimeError)


def test_result_observer_fault_does_not_change_result(engine: SortEngine) -> None:
    def on_result(result: ExecutionResult) -> None:
        raise RuntimeError("late observer broke")

    handle = engine.start([2, 1], Algorithm.BUBBLE, on_result=on_result)
    assert handle.wait(WAIT).ok


def test_wait_times_out_while_running(engine: SortEngine) -> None:
    gate, started = threading.Event(), threading.Event()
    handle = engine.start([1], _gated(gate, started))
    assert started.wait(WAIT)
    assert handle.wait(0.01) is None
    assert handle.result is None
    gate.set()
    assert handle.wait(WAIT).ok


def test_module_level_helpers_use_default_engine() -> None:
    from sortscope.engine import default_engine, run

    assert default_engine() is default_engine()
    seq = [2, 3, 1]
    assert run(seq, Algorithm.OPPOSITE, timeout=WAIT).ok
    assert seq == [1, 2, 3]
