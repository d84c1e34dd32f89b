"""Lazy query pipeline."""

from .operators import (
    filter_entries,
    follow_references,
    limit_entries,
    map_entries,
    skip_entries,
    slice_entries,
)
from .query import IndexQuery

__all__ = [
    "IndexQuery",
    "skip_entries",
    "limit_entries",
    "slice_entries",
    "filter_entries",
    "map_entries",
    "follow_references",
]
