"""
Correctness tests for the permutation engine.

What we check:
- sort_indices returns the stable ascending order (matches the tuple-keyed oracle)
- reorder and reorder_destructive both produce oracle_reorder's output
- reorder leaves the permutation untouched; reorder_destructive consumes it
- invalid permutations are rejected before anything is mutated
- keys are never mutated
"""

from __future__ import annotations

from typing import Any, List

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from permkit import PermutationError, reorder, reorder_destructive, sort_indices
from permkit.validate import (
    assert_no_mutation,
    is_nondecreasing,
    is_stable_order,
    oracle_reorder,
    oracle_sort_indices,
    same_multiset,
)
from strategies import keys_with_values, tie_heavy_ints, values_with_permutation


# ------------------------- helpers ------------------------- #

def _apply_both(v: List[Any], order: List[int]) -> List[Any]:
    """Run both reorder variants on copies; assert they agree and return the result."""
    order_before = list(order)

    kept = list(v)
    reorder(kept, order)
    assert_no_mutation(order_before, order)

    consumed_order = list(order)
    destroyed = list(v)
    reorder_destructive(consumed_order, destroyed)
    assert consumed_order == [None] * len(order)

    assert kept == destroyed, "reorder variants disagree"
    return kept


# ------------------------- sort_indices ------------------------- #

@pytest.mark.parametrize(
    "keys, expected",
    [
        ([], []),
        ([7], [0]),
        ([5, 4, 3, 2, 0, 1], [4, 5, 3, 2, 1, 0]),
        ([1, 2, 3, 4], [0, 1, 2, 3]),
        ([2, 1, 2, 1], [1, 3, 0, 2]),
        ([3, 3, 3], [0, 1, 2]),
        (["pear", "apple", "fig"], [1, 2, 0]),
        ([0.5, -1.0, 0.5, 2.0], [1, 0, 2, 3]),
    ],
)
def test_sort_indices_unit_cases(keys: List[Any], expected: List[int]) -> None:
    before = list(keys)
    assert sort_indices(keys) == expected
    assert_no_mutation(before, keys)


def test_sort_indices_with_key_and_reverse() -> None:
    assert sort_indices(["bb", "a", "ccc", "d"], key=len) == [1, 3, 0, 2]
    # Descending, but equal keys still in ascending index order
    assert sort_indices([1, 3, 1, 3], reverse=True) == [1, 3, 0, 2]


def test_sort_indices_numpy_matches_list() -> None:
    arr = np.array([3, 1, 2, 1, 3])
    assert sort_indices(arr) == sort_indices(arr.tolist()) == [1, 3, 2, 0, 4]
    assert sort_indices(arr, reverse=True) == sort_indices(arr.tolist(), reverse=True) == [0, 4, 2, 1, 3]
    assert all(type(i) is int for i in sort_indices(arr))


def test_sort_indices_rejects_2d_array() -> None:
    with pytest.raises(ValueError):
        sort_indices(np.zeros((2, 2)))


def test_sort_indices_needs_only_less_than() -> None:
    class Version:
        def __init__(self, major: int) -> None:
            self.major = major

        def __lt__(self, other: "Version") -> bool:
            return self.major < other.major

    keys = [Version(2), Version(1), Version(2), Version(0)]
    assert sort_indices(keys) == [3, 1, 0, 2]


def test_sort_indices_unorderable_raises_type_error() -> None:
    with pytest.raises(TypeError):
        sort_indices([1, "a", 2])


# ------------------------- reorder (both variants) ------------------------- #

def test_reorder_documented_example() -> None:
    assert _apply_both([1, 2, 3, 4], [2, 0, 3, 1]) == [3, 1, 4, 2]


def test_sort_then_reorder_end_to_end() -> None:
    keys = [5, 4, 3, 2, 0, 1]
    v = ["a", "b", "c", "d", "e", "f"]
    reorder(v, sort_indices(keys))
    assert v == ["e", "f", "d", "c", "b", "a"]


@pytest.mark.parametrize(
    "v, order",
    [
        ([], []),
        (["x"], [0]),
        (["x", "y"], [1, 0]),
        ([10, 20, 30, 40, 50], [0, 1, 2, 3, 4]),
        ([10, 20, 30, 40, 50], [4, 3, 2, 1, 0]),
        ([10, 20, 30, 40, 50], [1, 2, 3, 4, 0]),
        ([10, 20, 30, 40, 50], [0, 2, 1, 4, 3]),
        ([7, 7, 8, 8], [3, 2, 1, 0]),
    ],
)
def test_reorder_unit_cases(v: List[Any], order: List[int]) -> None:
    assert _apply_both(v, order) == oracle_reorder(v, order)


def test_identity_leaves_sequence_unchanged() -> None:
    v = list("permutation")
    assert _apply_both(v, list(range(len(v)))) == v


def test_reorder_accepts_numpy_values() -> None:
    v = np.array([1.5, 2.5, 3.5, 4.5])
    reorder(v, [2, 0, 3, 1])
    assert v.tolist() == [3.5, 1.5, 4.5, 2.5]

    w = np.array([1.5, 2.5, 3.5, 4.5])
    reorder_destructive([2, 0, 3, 1], w)
    assert w.tolist() == [3.5, 1.5, 4.5, 2.5]


def test_reorder_rejects_multidimensional_numpy_values() -> None:
    # Rows would be moved through views, duplicating one and losing another.
    v = np.array([[1, 1], [2, 2], [3, 3]])
    order = [1, 2, 0]

    with pytest.raises(ValueError, match="one-dimensional"):
        reorder(v, order)
    assert v.tolist() == [[1, 1], [2, 2], [3, 3]]

    with pytest.raises(ValueError, match="one-dimensional"):
        reorder_destructive(order, v)
    assert v.tolist() == [[1, 1], [2, 2], [3, 3]]
    assert order == [1, 2, 0]


@pytest.mark.parametrize(
    "order",
    [
        [0, 1],           # too short
        [0, 1, 2, 3],     # too long
        [0, 0, 1],        # repeated index
        [0, 1, 3],        # out of range
        [0, -1, 2],       # negative
        [0, 1, 2.0],      # not an integer
        [0, None, 2],     # already consumed
    ],
)
def test_invalid_permutation_rejected_without_mutation(order: List[Any]) -> None:
    v = ["a", "b", "c"]
    order_before = list(order)

    with pytest.raises(PermutationError):
        reorder(v, order)
    assert v == ["a", "b", "c"]
    assert order == order_before

    with pytest.raises(PermutationError):
        reorder_destructive(order, v)
    assert v == ["a", "b", "c"]
    assert order == order_before


def test_permutation_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        reorder([1, 2], [0])


@pytest.mark.parametrize("order", [[0, 1], [0, 1, 2, 3]])
def test_length_mismatch_checked_even_without_validation(order: List[int]) -> None:
    v = [1, 2, 3]
    with pytest.raises(PermutationError):
        reorder(v, order, validate=False)
    with pytest.raises(PermutationError):
        reorder_destructive(list(order), v, validate=False)
    assert v == [1, 2, 3]


@pytest.mark.parametrize("order", [[0, 0, 1], [1, 1, 0], [2, 0, 0], [5, 0, 1], [0, 2, 2]])
def test_destructive_walk_detects_non_bijection(order: List[int]) -> None:
    # Unvalidated input is undefined, but the walk must stop with an error
    # instead of looping or silently returning.
    with pytest.raises(PermutationError):
        reorder_destructive(list(order), ["a", "b", "c"], validate=False)


@pytest.mark.parametrize("order", [[1, 1], [0, 2], [1, -1]])
def test_unvalidated_reorder_stops_on_non_bijection(order: List[int]) -> None:
    with pytest.raises(PermutationError):
        reorder(["a", "b"], order, validate=False)


def test_destructive_requires_assignable_order() -> None:
    with pytest.raises(TypeError):
        reorder_destructive((1, 0), ["a", "b"])  # type: ignore[arg-type]


def test_unvalidated_valid_permutation_still_works() -> None:
    v = list(range(10))
    order = [3, 7, 1, 0, 9, 8, 2, 5, 4, 6]
    reorder(v, order, validate=False)
    assert v == order

    w = list(range(10))
    reorder_destructive(list(order), w, validate=False)
    assert w == order


# ------------------------- property-based tests (randomized) ------------------------- #

@settings(deadline=None, max_examples=150)
@given(st.lists(tie_heavy_ints, min_size=0, max_size=80))
def test_property_sort_indices_matches_oracle(keys: List[int]) -> None:
    before = list(keys)
    idx = sort_indices(keys)
    assert_no_mutation(before, keys)
    assert idx == oracle_sort_indices(keys)
    assert sorted(idx) == list(range(len(keys)))
    assert is_stable_order(keys, idx)


@settings(deadline=None, max_examples=150)
@given(values_with_permutation())
def test_property_variants_match_oracle(case) -> None:
    v, order = case
    out = _apply_both(v, order)
    assert out == oracle_reorder(v, order)
    assert same_multiset(out, v)


@settings(deadline=None, max_examples=100)
@given(keys_with_values())
def test_property_reorder_by_sorted_indices_orders_values(case) -> None:
    keys, values = case
    idx = sort_indices(keys)

    by_keys = list(keys)
    reorder(by_keys, idx)
    assert is_nondecreasing(by_keys)

    tagged = list(values)
    reorder_destructive(list(idx), tagged)
    # Tags of equal keys keep their original relative order
    positions = [int(t[1:]) for t in tagged]
    for p in range(len(positions) - 1):
        if keys[positions[p]] == keys[positions[p + 1]]:
            assert positions[p] < positions[p + 1]
