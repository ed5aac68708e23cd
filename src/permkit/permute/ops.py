"""
Small helpers for working with permutations as plain index lists.

Convention used throughout permkit:
    order[i] = j   means   "position i receives the value currently at j"

so applying `order` to `v` yields `[v[j] for j in order]`.

Public API (stable):
    identity(n) -> list[int]
    is_permutation(order, n=None) -> bool
    check_permutation(order, n) -> None
    invert(order) -> list[int]
    compose(first, second) -> list[int]
    cycles(order) -> list[list[int]]
"""

from __future__ import annotations

import operator
from typing import Any, List, Optional, Sequence

from permkit.errors import PermutationError

__all__ = [
    "identity",
    "is_permutation",
    "check_permutation",
    "invert",
    "compose",
    "cycles",
]


def identity(n: int) -> List[int]:
    if n < 0:
        raise ValueError("n must be nonnegative")
    return list(range(n))


def is_permutation(order: Sequence[Any], n: Optional[int] = None) -> bool:
    """
    Return True iff `order` is a bijection onto range(n).

    `n` defaults to len(order). Never raises, whatever `order` contains.
    """
    try:
        check_permutation(order, len(order) if n is None else n)
    except PermutationError:
        return False
    return True


def check_permutation(order: Sequence[Any], n: int) -> None:
    """
    Raise PermutationError unless `order` is a bijection onto range(n).

    The message names the first offending position so callers get a
    diagnosable error instead of a silently scrambled buffer.
    """
    if len(order) != n:
        raise PermutationError(
            f"permutation length {len(order)} does not match sequence length {n}"
        )
    seen = [False] * n
    for i, j in enumerate(order):
        if isinstance(j, bool) or not _is_index(j):
            raise PermutationError(f"order[{i}] is not an integer index: {j!r}")
        if not (0 <= j < n):
            raise PermutationError(f"order[{i}] = {j} out of range [0, {n})")
        if seen[j]:
            raise PermutationError(f"order[{i}] = {j} repeats an earlier index")
        seen[j] = True


def invert(order: Sequence[int]) -> List[int]:
    """
    Return `inv` with inv[order[i]] = i.

    Applying `inv` after `order` restores the original sequence.
    """
    check_permutation(order, len(order))
    inv = [0] * len(order)
    for i, j in enumerate(order):
        inv[j] = i
    return inv


def compose(first: Sequence[int], second: Sequence[int]) -> List[int]:
    """
    Return one permutation equivalent to applying `first`, then `second`.

    reorder(v, first); reorder(v, second) leaves v[i] == v_old[first[second[i]]].
    """
    check_permutation(first, len(first))
    check_permutation(second, len(first))
    return [int(first[j]) for j in second]


def cycles(order: Sequence[int]) -> List[List[int]]:
    """
    Decompose `order` into disjoint cycles.

    Each cycle starts at its smallest index and lists positions in the order
    the walk visits them (i, order[i], order[order[i]], ...). Fixed points show
    up as one-element cycles. Cycles are sorted by their first element.
    """
    check_permutation(order, len(order))
    done = [False] * len(order)
    out: List[List[int]] = []
    for start in range(len(order)):
        if done[start]:
            continue
        cyc = []
        j = start
        while not done[j]:
            done[j] = True
            cyc.append(j)
            j = int(order[j])
        out.append(cyc)
    return out


def _is_index(x: Any) -> bool:
    # Python ints and NumPy integer scalars
    try:
        operator.index(x)
    except TypeError:
        return False
    return True
