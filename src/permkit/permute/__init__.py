"""
Permutation engine public API.

Re-exports:
    - Builder:
        sort_indices

    - Applicators:
        reorder               (keeps the permutation)
        reorder_destructive   (consumes the permutation, no scratch buffer)

    - Helpers:
        identity, is_permutation, check_permutation, invert, compose, cycles
"""

from .indices import SupportsLessThan, sort_indices
from .ops import check_permutation, compose, cycles, identity, invert, is_permutation
from .reorder import reorder, reorder_destructive

__all__ = [
    "SupportsLessThan",
    "sort_indices",
    "reorder",
    "reorder_destructive",
    "identity",
    "is_permutation",
    "check_permutation",
    "invert",
    "compose",
    "cycles",
]
