"""
Exceptions raised by permkit.

Public API (stable):
    PermutationError

Conventions:
- Contract violations (length mismatch, non-bijective permutation) raise
  `PermutationError`. It subclasses `ValueError`, so callers that already
  catch `ValueError` for bad input keep working.
- Element types that cannot be compared or hashed surface as the interpreter's
  own `TypeError`; we do not wrap those.
"""

from __future__ import annotations

__all__ = ["PermutationError"]


class PermutationError(ValueError):
    """An index sequence is not a valid permutation for the target sequence."""
