"""
Tests for remove_duplicates and remove_intersection.

Both are checked against the dict/Counter oracles, for in-place behavior
(callers holding a reference see the result), and for leaving inputs intact
when they raise.
"""

from __future__ import annotations

from typing import Any, List

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from permkit import remove_duplicates, remove_intersection
from permkit.validate import oracle_remove_duplicates, oracle_remove_intersection
from strategies import tie_heavy_ints


# ------------------------- remove_duplicates ------------------------- #

@pytest.mark.parametrize(
    "v, expected",
    [
        ([], []),
        ([1], [1]),
        ([3, 1, 3, 2, 1], [3, 1, 2]),
        ([4, 4, 4, 4], [4]),
        (["b", "a", "b", "c", "a"], ["b", "a", "c"]),
        ([(1, 2), (2, 1), (1, 2)], [(1, 2), (2, 1)]),
    ],
)
def test_remove_duplicates_unit_cases(v: List[Any], expected: List[Any]) -> None:
    alias = v
    n = remove_duplicates(v)
    assert n == len(expected)
    assert alias == expected


def test_remove_duplicates_without_repeats_is_noop_and_idempotent() -> None:
    v = [5, 3, 9, 1]
    assert remove_duplicates(v) == 4
    assert v == [5, 3, 9, 1]

    w = [2, 2, 1, 2, 1]
    remove_duplicates(w)
    once = list(w)
    assert remove_duplicates(w) == len(once)
    assert w == once


def test_remove_duplicates_orderable_but_unhashable() -> None:
    v = [[1], [2], [1]]
    assert remove_duplicates(v) == 2
    assert v == [[1], [2]]

    w = [[2], [1], [2], [3], [1]]
    assert remove_duplicates(w) == 3
    assert w == [[2], [1], [3]]


def test_remove_duplicates_neither_hashable_nor_orderable_leaves_input_intact() -> None:
    v = [{"k": 1}, {"k": 2}, {"k": 1}]
    with pytest.raises(TypeError):
        remove_duplicates(v)
    assert v == [{"k": 1}, {"k": 2}, {"k": 1}]


def test_remove_duplicates_rejects_fixed_size_buffers() -> None:
    with pytest.raises(TypeError):
        remove_duplicates(np.array([1, 1, 2]))
    with pytest.raises(TypeError):
        remove_duplicates((1, 1, 2))  # type: ignore[arg-type]


# ------------------------- remove_intersection ------------------------- #

def test_remove_intersection_documented_example() -> None:
    a = [1, 2, 3, 4]
    b = [2, 4, 5]
    remove_intersection(a, b)
    assert a == [1, 3]
    assert b == [2, 4, 5]


def test_remove_intersection_drops_values_repeated_within_a() -> None:
    a = [1, 1, 2, 3]
    remove_intersection(a, [3])
    assert a == [2]


def test_remove_intersection_accepts_any_iterable_b() -> None:
    a = [1, 2, 3]
    remove_intersection(a, (x for x in [3, 9]))
    assert a == [1, 2]


def test_remove_intersection_symmetric() -> None:
    a = [1, 2, 3, 4]
    b = [2, 4, 5]
    remove_intersection(a, b, symmetric=True)
    assert a == [1, 3]
    assert b == [5]


def test_remove_intersection_symmetric_needs_mutable_b() -> None:
    a = [1, 2]
    with pytest.raises(TypeError):
        remove_intersection(a, (2, 3), symmetric=True)
    assert a == [1, 2]


def test_remove_intersection_same_list_as_both_arguments() -> None:
    a = [1, 2, 3]
    remove_intersection(a, a)
    assert a == []

    b = [4, 5, 4]
    remove_intersection(b, b, symmetric=True)
    assert b == []


def test_remove_intersection_empty_inputs() -> None:
    a: List[int] = []
    remove_intersection(a, [1, 2])
    assert a == []

    b = [1, 2]
    remove_intersection(b, [])
    assert b == [1, 2]


# ------------------------- property-based tests (randomized) ------------------------- #

@settings(deadline=None, max_examples=150)
@given(st.lists(tie_heavy_ints, max_size=60))
def test_property_remove_duplicates_matches_oracle(v: List[int]) -> None:
    expected = oracle_remove_duplicates(v)
    n = remove_duplicates(v)
    assert n == len(expected)
    assert v == expected


@settings(deadline=None, max_examples=100)
@given(st.lists(st.lists(tie_heavy_ints, max_size=2), max_size=30))
def test_property_remove_duplicates_unhashable_matches_hashable(v: List[List[int]]) -> None:
    as_tuples = [tuple(x) for x in v]
    expected = oracle_remove_duplicates(as_tuples)
    assert remove_duplicates(v) == len(expected)
    assert [tuple(x) for x in v] == expected


@settings(deadline=None, max_examples=150)
@given(st.lists(tie_heavy_ints, max_size=40), st.lists(tie_heavy_ints, max_size=40))
def test_property_remove_intersection_matches_oracle(a: List[int], b: List[int]) -> None:
    expected = oracle_remove_intersection(a, b)
    b_before = list(b)
    remove_intersection(a, b)
    assert a == expected
    assert b == b_before
    assert not set(a) & set(b)
