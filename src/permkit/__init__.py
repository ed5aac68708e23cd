"""
permkit: permutation tools for in-memory sequences.

    from permkit import sort_indices, reorder, reorder_destructive
    from permkit import remove_duplicates, remove_intersection

    keys = [5, 4, 3, 2, 0, 1]
    v = ["a", "b", "c", "d", "e", "f"]
    reorder(v, sort_indices(keys))   # v == ["e", "f", "d", "c", "b", "a"]
"""

from .errors import PermutationError
from .filters import remove_duplicates, remove_intersection
from .permute import (
    check_permutation,
    compose,
    cycles,
    identity,
    invert,
    is_permutation,
    reorder,
    reorder_destructive,
    sort_indices,
)

__version__ = "0.1.0"

__all__ = [
    "PermutationError",
    "sort_indices",
    "reorder",
    "reorder_destructive",
    "remove_duplicates",
    "remove_intersection",
    "identity",
    "is_permutation",
    "check_permutation",
    "invert",
    "compose",
    "cycles",
]
