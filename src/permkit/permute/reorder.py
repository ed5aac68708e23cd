"""
Apply a permutation to a mutable sequence in place.

Two variants with the same index convention (`order[i] = j` means position i
receives the value currently at position j, i.e. afterwards v[i] == old[order[i]]):

- reorder(v, order)
    Keeps `order` intact. Uses a local list of "done" flags (O(n) extra).

- reorder_destructive(order, v)
    Uses `order` itself as the visited marker: every slot that has been placed
    is overwritten with None. No auxiliary buffer, but `order` is consumed and
    must not be reused afterwards.

Both check the length up front. With validate=True (default) the bijection is
checked too, before anything is touched, so a rejected call leaves both
buffers as they were. With validate=False an invalid permutation is undefined
input: both variants raise PermutationError as soon as their cycle walk
hits an already placed or out-of-range slot, leaving `v` (and, for the
destructive variant, `order`) partially mutated.

Example:
    v = [1, 2, 3, 4]
    reorder(v, [2, 0, 3, 1])      # v == [3, 1, 4, 2]
"""

from __future__ import annotations

import logging
from typing import Any, MutableSequence, Optional, Sequence

import numpy as np

from permkit.errors import PermutationError
from permkit.permute.ops import check_permutation

__all__ = ["reorder", "reorder_destructive"]

logger = logging.getLogger(__name__)


def reorder(
    v: MutableSequence[Any], order: Sequence[int], *, validate: bool = True
) -> None:
    """
    Reorder `v` in place so that v[i] becomes the old v[order[i]].

    Parameters
    ----------
    v : MutableSequence
        Values to permute (a list, or a 1-D numpy array; other shapes raise
        ValueError before anything moves).
    order : Sequence[int]
        Bijection onto range(len(v)). Not modified.
    validate : bool
        Check the bijection before mutating (O(n)). The length is always checked.

    Raises
    ------
    PermutationError
        On length mismatch, or on an invalid permutation when validate=True.
    ValueError
        If `v` is a numpy array that is not one-dimensional.
    """
    _check_values(v)
    n = len(v)
    _check_length(order, n)
    if validate:
        check_permutation(order, n)

    done = [False] * n
    for i in range(n):
        if done[i]:
            continue
        done[i] = True
        prev_j = i
        j = order[i]
        # Rotate the cycle i -> order[i] -> ... back to i, one swap per step.
        while j != i:
            if not (0 <= j < n) or done[j]:
                raise PermutationError(
                    f"cycle from {i} reached index {j!r}; order is not a bijection"
                )
            v[prev_j], v[j] = v[j], v[prev_j]
            done[j] = True
            prev_j = j
            j = order[j]


def reorder_destructive(
    order: MutableSequence[Optional[int]],
    v: MutableSequence[Any],
    *,
    validate: bool = True,
) -> None:
    """
    Reorder `v` in place by following cycles of `order`, consuming `order`.

    Same result as `reorder(v, order)`. Each slot of `order` is set to None
    once its position has been filled; on return every slot is None.

    Parameters
    ----------
    order : MutableSequence[int | None]
        Bijection onto range(len(v)). Must accept None assignments (a list).
        Invalidated on return.
    v : MutableSequence
        Values to permute (a list, or a 1-D numpy array).
    validate : bool
        Check the bijection before mutating. Costs an O(n) scratch list; pass
        False to keep the call allocation-free when `order` is trusted.

    Raises
    ------
    PermutationError
        On length mismatch; on an invalid permutation when validate=True
        (nothing mutated); or mid-walk when validate=False (partially mutated).
    ValueError
        If `v` is a numpy array that is not one-dimensional.
    """
    _check_values(v)
    n = len(v)
    _check_length(order, n)
    if validate:
        check_permutation(order, n)

    # The last outstanding slot is necessarily a fixed point, so the scan can
    # stop once all others are placed.
    remaining = n - 1
    s = 0
    n_cycles = 0
    while remaining > 0:
        d = order[s]
        if d is None:
            s += 1
            continue
        order[s] = None
        remaining -= 1
        n_cycles += 1

        temp = v[s]
        cur = s
        while d != s:
            nxt = _take(order, d, n)
            v[cur] = v[d]
            remaining -= 1
            cur, d = d, nxt
        v[cur] = temp
        s += 1

    # Untouched tail slots are fixed points.
    for k in range(s, n):
        if order[k] is not None and order[k] != k:
            raise PermutationError(
                f"order[{k}] = {order[k]!r} left unplaced; order is not a bijection"
            )
        order[k] = None
    logger.debug("reorder_destructive: n=%d cycles=%d", n, n_cycles)


# ------------------------- helpers ------------------------- #


def _check_values(v: Any) -> None:
    # Rows of a multi-dimensional array are views; swapping them through the
    # walk would duplicate one row and lose another.
    if isinstance(v, np.ndarray) and v.ndim != 1:
        raise ValueError(f"values must be one-dimensional; got shape {v.shape}")


def _check_length(order: Sequence[Any], n: int) -> None:
    if len(order) != n:
        raise PermutationError(
            f"permutation length {len(order)} does not match sequence length {n}"
        )


def _take(order: MutableSequence[Optional[int]], d: Any, n: int) -> Any:
    """Consume slot `d` of `order` and return what it held."""
    if d is None or not (0 <= d < n):
        raise PermutationError(f"cycle walk reached invalid index {d!r}")
    nxt = order[d]
    if nxt is None:
        raise PermutationError(
            f"cycle walk revisited consumed slot {d}; order is not a bijection"
        )
    order[d] = None
    return nxt
