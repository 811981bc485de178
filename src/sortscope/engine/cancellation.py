"""One-shot cooperative cancellation flag."""

from __future__ import annotations

import threading

__all__ = ["CancellationSignal"]


class CancellationSignal:
    """
    Set once by the caller, polled by the running algorithm.

    Once set it stays set; setting it again is a no-op. `is_set()` never blocks.
    """

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationSignal(set={self.is_set()})"
