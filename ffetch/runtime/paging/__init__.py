"""Offset/limit paging layer.

Architecture:
    The paging layer consists of:
    - fetcher.py: Single page retrieval (url building, envelope decoding)
    - source.py: Pagination source advancing the offset page by page
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .fetcher import build_page_url, fetch_page
from .source import paginate

__all__ = [
    "build_page_url",
    "fetch_page",
    "paginate",
]
