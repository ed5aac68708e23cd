"""
Datasets package public API.

Re-export the generators so callers can write:
    from permkit.datasets import make_keys, make_permutation
"""

from .generators import SUPPORTED_DISTS, SUPPORTED_PERMUTATIONS, make_keys, make_permutation

__all__ = ["SUPPORTED_DISTS", "SUPPORTED_PERMUTATIONS", "make_keys", "make_permutation"]
