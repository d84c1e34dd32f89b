"""Pagination source driving the chunk fetcher.

The source is an async generator: each page is requested only when the
consumer has drained the previous one, so at most one page request is
outstanding at any time.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from ...core.context import PipelineContext
from .fetcher import fetch_page
from .telemetry import log_pagination_complete


async def paginate(url: str, context: PipelineContext) -> AsyncIterator[dict[str, Any]]:
    """Yield every entry of an offset/limit index in offset order.

    The traversal ends after a short page, once offset + chunk size reaches
    the total advertised by the latest page, or on the first NotOk page.

    Args:
        url: Index url without paging parameters
        context: Pipeline context supplying fetch, chunk size and sheet

    Yields:
        Entries as returned by the index

    Raises:
        MalformedResponseError: If a 2xx body is not a valid page envelope
    """
    chunk_size = context.chunk_size
    offset = 0
    pages = 0
    rows = 0
    failed = False

    try:
        while True:
            page = await fetch_page(url, offset, context)
            if page is None:
                failed = True
                return

            pages += 1
            for entry in page.data:
                rows += 1
                yield entry

            if not page.has_more(offset, chunk_size):
                return
            offset += chunk_size
    finally:
        log_pagination_complete(url=url, pages=pages, rows=rows, failed=failed)
