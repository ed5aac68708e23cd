"""
Reference oracles for the permutation engine and the set filters.

Each oracle is the most direct way to compute the expected answer, with no
attention to speed or memory:
- oracle_sort_indices breaks ties with an explicit (key, index) tuple rather
  than relying on sort stability.
- oracle_reorder builds a new list by indexing.
- the set-filter oracles build new lists with dict/Counter.

Public API (stable):
    oracle_sort_indices(keys) -> list[int]
    oracle_reorder(v, order) -> list
    oracle_remove_duplicates(v) -> list
    oracle_remove_intersection(a, b) -> list

Conventions:
- Oracles never mutate their inputs and always return a **new** list.
- permkit's in-place operations should leave their buffers equal to the
  oracle output exactly.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Hashable, Iterable, List, Sequence

ORACLE_NAME: str = "python_tuple_keyed_sorted"

__all__ = [
    "ORACLE_NAME",
    "oracle_sort_indices",
    "oracle_reorder",
    "oracle_remove_duplicates",
    "oracle_remove_intersection",
]


def oracle_sort_indices(keys: Sequence[Any]) -> List[int]:
    """
    Return the stable ascending index order of `keys`.

    Parameters
    ----------
    keys : Sequence
        Orderable values. Not mutated.

    Returns
    -------
    list[int]
        Indices sorted by (keys[i], i).
    """
    decorated = [(keys[i], i) for i in range(len(keys))]
    decorated.sort()
    return [i for _, i in decorated]


def oracle_reorder(v: Sequence[Any], order: Sequence[int]) -> List[Any]:
    """Return [v[j] for j in order] as a new list."""
    return [v[j] for j in order]


def oracle_remove_duplicates(v: Iterable[Hashable]) -> List[Hashable]:
    # dict preserves insertion order and keeps the first occurrence
    return list(dict.fromkeys(v))


def oracle_remove_intersection(
    a: Sequence[Hashable], b: Iterable[Hashable]
) -> List[Hashable]:
    counts = Counter(a) + Counter(b)
    return [x for x in a if counts[x] == 1]
