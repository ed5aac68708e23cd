"""
Permutation builder: the index order that would sort a key sequence.

Public API (stable):
    sort_indices(keys, *, key=None, reverse=False) -> list[int]

Conventions:
- `keys` is never mutated and never reordered; only indices move.
- Stable: equal keys keep their original relative order, also with
  reverse=True.
- Only `<` is required of the keys (Python's sort compares with `__lt__`).
- A one-dimensional numpy array is argsorted with kind="stable"; the result is
  still a plain `list[int]` so it can be fed to either reorder variant.

Example:
    sort_indices([5, 4, 3, 2, 0, 1]) -> [4, 5, 3, 2, 1, 0]
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Protocol, Sequence

import numpy as np

__all__ = ["SupportsLessThan", "sort_indices"]

logger = logging.getLogger(__name__)


class SupportsLessThan(Protocol):
    def __lt__(self, other: Any, /) -> bool: ...


def sort_indices(
    keys: Sequence[Any],
    *,
    key: Optional[Callable[[Any], SupportsLessThan]] = None,
    reverse: bool = False,
) -> List[int]:
    """
    Return the stable permutation that sorts `keys` ascending.

    Parameters
    ----------
    keys : Sequence
        Orderable values. Read-only; may be empty.
    key : callable, optional
        Applied to each element before comparison, as in `sorted`.
    reverse : bool
        Sort descending instead. Ties still break by original index.

    Returns
    -------
    list[int]
        `idx` with keys[idx[0]] <= keys[idx[1]] <= ... (>= when reverse).
    """
    if isinstance(keys, np.ndarray) and key is None:
        return _argsort_ndarray(keys, reverse=reverse)

    n = len(keys)
    if key is None:
        getter = keys.__getitem__
    else:
        def getter(i: int) -> SupportsLessThan:
            return key(keys[i])

    # `sorted` is a stable merge-based sort (timsort), and reverse=True
    # preserves the original order of equal elements.
    idx = sorted(range(n), key=getter, reverse=reverse)
    logger.debug("sort_indices: n=%d reverse=%s", n, reverse)
    return idx


def _argsort_ndarray(keys: np.ndarray, *, reverse: bool) -> List[int]:
    if keys.ndim != 1:
        raise ValueError(f"keys must be one-dimensional; got shape {keys.shape}")
    if not reverse:
        return np.argsort(keys, kind="stable").tolist()
    # Descending but stable: sort the reversed view, then map indices back and
    # reverse so equal keys come out in ascending index order.
    n = keys.shape[0]
    rev = np.argsort(keys[::-1], kind="stable")
    return (n - 1 - rev)[::-1].tolist()
