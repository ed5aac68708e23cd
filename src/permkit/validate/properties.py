"""
Property helpers for validating permutation results.

These functions provide lightweight checks used by the tests and, when the
experiment config sets `validate: true`, by the benchmark runner.

Public API (stable):
    is_nondecreasing(xs: Sequence) -> bool
    first_nondecreasing_violation_index(xs: Sequence) -> int | None
    is_stable_order(keys: Sequence, idx: Sequence[int]) -> bool
    same_multiset(a: Sequence, b: Sequence) -> bool
    multiset_diff(a: Sequence, b: Sequence) -> dict
    assert_no_mutation(before: Sequence, after: Sequence) -> None

Notes
-----
- Stability cannot be read off the values alone, which is why
  `is_stable_order` takes the index permutation: among equal keys the indices
  must be increasing.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Hashable, Sequence

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_stable_order",
    "same_multiset",
    "multiset_diff",
    "assert_no_mutation",
]


def is_nondecreasing(xs: Sequence[Any]) -> bool:
    """Return True iff not xs[i+1] < xs[i] for all i."""
    return first_nondecreasing_violation_index(xs) is None


def first_nondecreasing_violation_index(xs: Sequence[Any]) -> int | None:
    """
    Return the first index i where xs[i+1] < xs[i], or None if nondecreasing.

    Only `<` is used, matching what sort_indices requires of its keys.
    """
    for i in range(len(xs) - 1):
        if xs[i + 1] < xs[i]:
            return i
    return None


def is_stable_order(keys: Sequence[Any], idx: Sequence[int]) -> bool:
    """
    Return True iff `idx` sorts `keys` ascending and keeps equal keys in
    original index order.
    """
    for p in range(len(idx) - 1):
        i, j = idx[p], idx[p + 1]
        if keys[j] < keys[i]:
            return False
        if not (keys[i] < keys[j]) and j < i:
            return False
    return True


def same_multiset(a: Sequence[Hashable], b: Sequence[Hashable]) -> bool:
    """Return True iff `a` and `b` hold exactly the same values with multiplicity."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def multiset_diff(a: Sequence[Hashable], b: Sequence[Hashable]) -> Dict[Hashable, int]:
    """
    Return value -> (count in a - count in b), omitting zero entries.

    Empty dict means `a` and `b` are the same multiset.
    """
    diff = Counter(a)
    diff.subtract(Counter(b))
    return {k: d for k, d in diff.items() if d != 0}


def assert_no_mutation(before: Sequence[Any], after: Sequence[Any]) -> None:
    """
    Assert that two sequences are element-wise equal, used to check that a
    read-only argument (keys, a preserved permutation) was left alone.

    Raises AssertionError naming the first differing index.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Input mutated at index {i}: before={x!r}, after={y!r}")
