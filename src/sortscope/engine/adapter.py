"""
Execution adapter: runs one algorithm against one sequence on a dedicated
background thread and reports progress and a single terminal result.

Run lifecycle
-------------
    handle = engine.start(seq, "bubble", on_event=..., on_result=...)
      ├── validation (caller thread) ─ absent/unknown input, sequence already held
      │                                 → handle already FAILED, zero events
      ├── worker thread               ─ routine(seq, should_cancel, emit)
      │     emit: on_event(ev) → buffer ev → sleep(pacing)     (every event)
      ├── claim on seq released
      └── result recorded → on_result(result) → buffer end marker → done

Result rule: FAILED(cause) if the routine raised; else CANCELLED if the
routine's cancellation poll ever answered True; else COMPLETED.

Public API (stable):
    SortEngine
    RunHandle
    default_engine() -> SortEngine
    start(sequence, algorithm, **kwargs) -> RunHandle
    run(sequence, algorithm, **kwargs) -> ExecutionResult
"""

from __future__ import annotations

import itertools
import logging
import queue
import threading
import time
from typing import Any, Callable, Dict, Iterator, MutableSequence, Optional, Union

from sortscope.algorithms import INSTRUMENTED, Algorithm, InstrumentedSort, resolve
from sortscope.config import EngineConfig
from sortscope.errors import ConcurrentRunError, InvalidInputError
from sortscope.events import MutationEvent

from .result import ExecutionResult
from .cancellation import CancellationSignal

logger = logging.getLogger(__name__)

__all__ = ["SortEngine", "RunHandle", "default_engine", "start", "run"]

EventCallback = Callable[[MutationEvent], None]
ResultCallback = Callable[[ExecutionResult], None]
AlgorithmRef = Union[Algorithm, str, InstrumentedSort]

_END = object()


class RunHandle:
    """
    Caller-side view of one run.

    Events are buffered (unless the engine disables buffering) and can be
    consumed in emission order with `events()` on any thread. `result` is
    None until the run has terminated.
    """

    def __init__(
        self,
        run_id: int,
        sequence: Optional[MutableSequence[int]],
        algorithm: Optional[AlgorithmRef],
        signal: CancellationSignal,
        buffered: bool,
    ) -> None:
        self.run_id = run_id
        self.sequence = sequence
        self.algorithm = algorithm
        self._signal = signal
        self._buffer: Optional[queue.Queue] = queue.Queue() if buffered else None
        self._done = threading.Event()
        self._result: Optional[ExecutionResult] = None
        self._event_count = 0

    def __repr__(self) -> str:
        state = self._result.status.value if self._result is not None else "running"
        return f"RunHandle(run_id={self.run_id}, algorithm={self.algorithm!r}, state={state})"

    # ---- caller side ----

    def cancel(self) -> None:
        """Request cancellation. Idempotent; a no-op once the run has finished."""
        self._signal.set()

    @property
    def cancel_requested(self) -> bool:
        return self._signal.is_set()

    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: Optional[float] = None) -> Optional[ExecutionResult]:
        """Block until the run terminates; None if `timeout` expires first."""
        if self._done.wait(timeout):
            return self._result
        return None

    @property
    def result(self) -> Optional[ExecutionResult]:
        return self._result

    @property
    def event_count(self) -> int:
        return self._event_count

    def events(self, timeout: Optional[float] = None) -> Iterator[MutationEvent]:
        """
        Yield buffered events in emission order until the run terminates.

        Intended for a single consumer. `timeout` bounds the wait for each
        next event and raises queue.Empty when exceeded.
        """
        if self._buffer is None:
            raise RuntimeError("event buffering is disabled for this engine")
        while True:
            item = self._buffer.get(timeout=timeout)
            if item is _END:
                # leave the marker for any later consumer
                self._buffer.put(_END)
                return
            yield item

    # ---- worker side ----

    def _deliver(self, event: MutationEvent, on_event: Optional[EventCallback]) -> None:
        self._event_count += 1
        if on_event is not None:
            on_event(event)
        if self._buffer is not None:
            self._buffer.put(event)

    def _finish(self, result: ExecutionResult, on_result: Optional[ResultCallback]) -> None:
        self._result = result
        if on_result is not None:
            try:
                on_result(result)
            except Exception:
                logger.exception("run %d: result observer raised", self.run_id)
        if self._buffer is not None:
            self._buffer.put(_END)
        self._done.set()


class SortEngine:
    """
    Starts runs and enforces that a sequence is held by at most one active run.

    A second start on a sequence that is still running is rejected, not queued.
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config if config is not None else EngineConfig()
        self._lock = threading.Lock()
        self._active: Dict[int, RunHandle] = {}
        self._ids = itertools.count(1)

    def active_runs(self) -> int:
        with self._lock:
            return len(self._active)

    def is_running(self, sequence: Any) -> bool:
        with self._lock:
            return id(sequence) in self._active

    def cancel(self, handle: RunHandle) -> None:
        handle.cancel()

    def start(
        self,
        sequence: Optional[MutableSequence[int]],
        algorithm: Optional[AlgorithmRef],
        *,
        on_event: Optional[EventCallback] = None,
        on_result: Optional[ResultCallback] = None,
        signal: Optional[CancellationSignal] = None,
    ) -> RunHandle:
        """
        Start a run and return its handle without waiting.

        Rejected starts (InvalidInputError, ConcurrentRunError) are never
        scheduled: the returned handle is already done with a FAILED result
        whose cause is the error, and `on_result` has been called.

        Parameters
        ----------
        sequence : MutableSequence[int]
            Sorted in place. Held exclusively until the run terminates.
        algorithm : Algorithm | str | callable
            Registered identifier or name, or an instrumented routine
            `routine(seq, should_cancel, emit)`.
        on_event, on_result : callable, optional
            Called on the worker thread, in emission order.
        signal : CancellationSignal, optional
            Use a caller-owned signal; a fresh one is created otherwise.
        """
        run_id = next(self._ids)
        signal = signal if signal is not None else CancellationSignal()
        handle = RunHandle(run_id, sequence, algorithm, signal, self.config.buffer_events)

        try:
            routine = self._resolve_routine(sequence, algorithm)
        except InvalidInputError as e:
            logger.warning("run %d rejected: %s", run_id, e)
            handle._finish(ExecutionResult.failed(e), on_result)
            return handle

        with self._lock:
            holder = self._active.get(id(sequence))
            if holder is None:
                self._active[id(sequence)] = handle
        if holder is not None:
            err = ConcurrentRunError(f"sequence is already held by run {holder.run_id}")
            logger.warning("run %d rejected: %s", run_id, err)
            handle._finish(ExecutionResult.failed(err), on_result)
            return handle

        worker = threading.Thread(
            target=self._work,
            args=(handle, routine, on_event, on_result),
            name=f"{self.config.thread_name_prefix}-{run_id}",
            daemon=True,
        )
        try:
            worker.start()
        except RuntimeError as e:
            self._release(handle)
            logger.exception("run %d: could not start worker thread", run_id)
            handle._finish(ExecutionResult.failed(e), on_result)
            return handle

        logger.debug("run %d started: %r on %d items", run_id, algorithm, len(sequence))
        return handle

    def run(
        self,
        sequence: Optional[MutableSequence[int]],
        algorithm: Optional[AlgorithmRef],
        *,
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> Optional[ExecutionResult]:
        """Start a run and block until it terminates (or `timeout` expires)."""
        return self.start(sequence, algorithm, **kwargs).wait(timeout)

    # ------------------------- internals ------------------------- #

    @staticmethod
    def _resolve_routine(sequence: Any, algorithm: Any) -> InstrumentedSort:
        if sequence is None:
            raise InvalidInputError("sequence must not be None")
        if not (hasattr(sequence, "__len__") and hasattr(sequence, "__setitem__")):
            raise InvalidInputError(f"sequence must be a mutable sequence; got {type(sequence).__name__}")
        if callable(algorithm) and not isinstance(algorithm, (Algorithm, str)):
            return algorithm
        return INSTRUMENTED[resolve(algorithm)]

    def _release(self, handle: RunHandle) -> None:
        with self._lock:
            if self._active.get(id(handle.sequence)) is handle:
                del self._active[id(handle.sequence)]

    def _work(
        self,
        handle: RunHandle,
        routine: InstrumentedSort,
        on_event: Optional[EventCallback],
        on_result: Optional[ResultCallback],
    ) -> None:
        signal = handle._signal
        pacing = self.config.pacing_seconds
        observed = False

        def should_cancel() -> bool:
            nonlocal observed
            if signal.is_set():
                observed = True
                return True
            return False

        def emit(event: MutationEvent) -> None:
            handle._deliver(event, on_event)
            if pacing > 0:
                time.sleep(pacing)

        t0 = time.perf_counter()
        try:
            routine(handle.sequence, should_cancel, emit)
        except Exception as e:
            logger.exception("run %d: algorithm raised", handle.run_id)
            result = ExecutionResult.failed(e)
        else:
            result = ExecutionResult.cancelled() if observed else ExecutionResult.completed()
        finally:
            self._release(handle)

        logger.debug(
            "run %d finished: %s after %d events in %.3fs",
            handle.run_id,
            result.status.value,
            handle.event_count,
            time.perf_counter() - t0,
        )
        handle._finish(result, on_result)


# ------------------------- module-level convenience ------------------------- #

_default_engine: Optional[SortEngine] = None
_default_lock = threading.Lock()


def default_engine() -> SortEngine:
    """Process-wide engine with the default EngineConfig, created on first use."""
    global _default_engine
    with _default_lock:
        if _default_engine is None:
            _default_engine = SortEngine()
        return _default_engine


def start(sequence: Optional[MutableSequence[int]], algorithm: Optional[AlgorithmRef], **kwargs: Any) -> RunHandle:
    return default_engine().start(sequence, algorithm, **kwargs)


def run(
    sequence: Optional[MutableSequence[int]], algorithm: Optional[AlgorithmRef], **kwargs: Any
) -> Optional[ExecutionResult]:
    return default_engine().run(sequence, algorithm, **kwargs)
