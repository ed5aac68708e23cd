"""
Validation utilities public API.

Re-exports:
    - Oracles:
        ORACLE_NAME
        oracle_sort_indices
        oracle_reorder
        oracle_remove_duplicates
        oracle_remove_intersection

    - Property checks:
        is_nondecreasing
        first_nondecreasing_violation_index
        is_stable_order
        same_multiset
        multiset_diff
        assert_no_mutation
"""

from .oracle import (
    ORACLE_NAME,
    oracle_remove_duplicates,
    oracle_remove_intersection,
    oracle_reorder,
    oracle_sort_indices,
)
from .properties import (
    assert_no_mutation,
    first_nondecreasing_violation_index,
    is_nondecreasing,
    is_stable_order,
    multiset_diff,
    same_multiset,
)

__all__ = [
    "ORACLE_NAME",
    "oracle_sort_indices",
    "oracle_reorder",
    "oracle_remove_duplicates",
    "oracle_remove_intersection",
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_stable_order",
    "same_multiset",
    "multiset_diff",
    "assert_no_mutation",
]
