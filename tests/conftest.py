"""
Shared test setup.

Inserts the project `src/` onto sys.path so tests run without installing the
package, and provides small helpers used across test modules.
"""

from __future__ import annotations

import pathlib
import sys
from typing import Callable, List

import pytest

_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from sortscope.algorithms import Algorithm  # noqa: E402
from sortscope.config import EngineConfig  # noqa: E402
from sortscope.engine import SortEngine  # noqa: E402
from sortscope.events import MutationEvent  # noqa: E402

ALL_ALGORITHMS: List[Algorithm] = list(Algorithm)


def never() -> bool:
    return False


def cancel_after(polls: int) -> Callable[[], bool]:
    """A cancellation predicate that answers True from poll number `polls + 1` on."""
    calls = 0

    def should_cancel() -> bool:
        nonlocal calls
        calls += 1
        return calls > polls

    return should_cancel


def recorder() -> "tuple[List[MutationEvent], Callable[[MutationEvent], None]]":
    events: List[MutationEvent] = []
    return events, events.append


@pytest.fixture
def engine() -> SortEngine:
    """An engine without pacing, so runs finish as fast as the algorithm does."""
    return SortEngine(EngineConfig(pacing_seconds=0.0))
