"""
Error types raised or reported by the engine.

InvalidInputError and ConcurrentRunError are decided before a run is scheduled;
the engine reports them as the `cause` of a Failed result. A routine's own
exception is reported unchanged as the cause, so callers see its original type.
"""

from __future__ import annotations

__all__ = ["SortscopeError", "InvalidInputError", "ConcurrentRunError"]


class SortscopeError(Exception):
    """Base class for errors originating in sortscope."""


class InvalidInputError(SortscopeError, ValueError):
    """Absent sequence, absent algorithm, or an algorithm name that is not registered."""


class ConcurrentRunError(SortscopeError, RuntimeError):
    """The sequence is already held by an active run."""
