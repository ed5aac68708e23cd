"""
Set-filter public API.

Re-export the filters so callers can write:
    from permkit.filters import remove_duplicates, remove_intersection
"""

from .setfilter import remove_duplicates, remove_intersection

__all__ = ["remove_duplicates", "remove_intersection"]
