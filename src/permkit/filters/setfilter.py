"""
Set-based cleanup of sequences.

Public API (stable):
    remove_duplicates(v) -> int
    remove_intersection(a, b, *, symmetric=False) -> None

Both are single stable filter passes: kept elements retain their relative
order, and the sequence is compacted in place (then truncated), so callers
holding a reference to `v` see the result.

remove_duplicates uses a hash set, and falls back to a sorted list searched
with bisect when an element is unhashable, so values that are only orderable
(lists, for instance) are deduplicated too. remove_intersection needs
hashable values.

remove_intersection counts every value of `a` and `b` together; anything
counted more than once is dropped from `a`. That removes values shared with
`b` and also values repeated within `a`:

    a = [1, 2, 3, 4]; b = [2, 4, 5]
    remove_intersection(a, b)     # a == [1, 3], b untouched

Passing the same list as `a` and `b` counts every value twice, so `a` ends
up empty (with symmetric=True, `b` is that same empty list).
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from collections import Counter
from collections.abc import MutableSequence
from typing import Any, Hashable, Iterable, List, Sequence

__all__ = ["remove_duplicates", "remove_intersection"]

logger = logging.getLogger(__name__)


def remove_duplicates(v: MutableSequence[Any]) -> int:
    """
    Drop every element already seen earlier in `v`; return the new length.

    First occurrences win. Running it twice is a no-op the second time.
    Elements need hashing or, failing that, `<` and `==`.

    Raises
    ------
    TypeError
        If elements are neither hashable nor orderable. `v` is left intact.
    """
    _ensure_resizable(v, name="v")
    # Decide everything before touching `v`, so a failure leaves it intact.
    try:
        drop = _repeats_hashed(v)
    except TypeError:
        logger.debug("remove_duplicates: unhashable element, using ordered lookup")
        drop = _repeats_ordered(v)
    return _compact(v, drop)


def remove_intersection(
    a: MutableSequence[Hashable],
    b: Iterable[Hashable],
    *,
    symmetric: bool = False,
) -> None:
    """
    Remove from `a` every element whose value occurs more than once in a + b.

    `a is b` is allowed: every value then counts twice and `a` is emptied.

    Parameters
    ----------
    a : MutableSequence
        Filtered in place.
    b : Iterable
        Only read, unless `symmetric` is True.
    symmetric : bool
        Also filter `b` with the same counts (taken before either is touched).
        `b` must then be a MutableSequence.
    """
    _ensure_resizable(a, name="a")
    if symmetric:
        _ensure_resizable(b, name="b")

    counts = Counter(a)
    counts.update(b)

    def shared(x: Hashable) -> bool:
        return counts[x] > 1

    drop_b = [shared(x) for x in b] if symmetric else None
    kept_a = _compact(a, [shared(x) for x in a])
    if drop_b is not None:
        kept_b = _compact(b, drop_b)  # type: ignore[arg-type]
        logger.debug("remove_intersection: kept a=%d b=%d", kept_a, kept_b)
    else:
        logger.debug("remove_intersection: kept a=%d", kept_a)


# ------------------------- helpers ------------------------- #


def _repeats_hashed(v: Sequence[Hashable]) -> List[bool]:
    seen = set()
    drop = []
    for x in v:
        drop.append(x in seen)
        seen.add(x)
    return drop


def _repeats_ordered(v: Sequence[Any]) -> List[bool]:
    # Sorted list of values seen so far; membership by binary search.
    seen: List[Any] = []
    drop = []
    for x in v:
        i = bisect_left(seen, x)
        if i < len(seen) and seen[i] == x:
            drop.append(True)
        else:
            seen.insert(i, x)
            drop.append(False)
    return drop


def _compact(v: MutableSequence[Any], drop: Sequence[bool]) -> int:
    # Two-pointer remove_if: shift survivors left, then cut the tail.
    w = 0
    for r in range(len(v)):
        if drop[r]:
            continue
        if w != r:
            v[w] = v[r]
        w += 1
    del v[w:]
    return w


def _ensure_resizable(v: Any, *, name: str) -> None:
    if not isinstance(v, MutableSequence):
        raise TypeError(
            f"{name} must be a resizable MutableSequence (e.g. a list); "
            f"got {type(v).__name__}"
        )
