"""
Validation utilities public API.

Re-exports:
    - Oracle:
        ORACLE_NAME, oracle_sort, equals_oracle

    - Final-contents properties:
        is_nondecreasing, first_nondecreasing_violation_index,
        is_permutation, permutation_counter_diff

    - Trace audits:
        replays_to, first_malformed_exchange, count_events
"""

from .oracle import ORACLE_NAME, equals_oracle, oracle_sort
from .properties import (
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_permutation,
    permutation_counter_diff,
)
from .trace import count_events, first_malformed_exchange, replays_to

__all__ = [
    "ORACLE_NAME",
    "oracle_sort",
    "equals_oracle",
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "replays_to",
    "first_malformed_exchange",
    "count_events",
]
