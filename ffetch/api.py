"""Entry point for building index queries."""

from __future__ import annotations

from collections.abc import Callable

from .config import resolve_chunk_size
from .core.context import FetchCapability, ParseCapability, PipelineContext
from .pipeline import IndexQuery
from .runtime.rest import fetch_url


def ffetch(
    url: str,
    fetch: FetchCapability | None = None,
    parse: ParseCapability | None = None,
    *,
    prefers_reduced_data: Callable[[], bool] | None = None,
) -> IndexQuery:
    """Create a lazy query over the index at `url`.

    Args:
        url: Index url; paging parameters are appended per request
        fetch: Coroutine function performing a GET (default: fetch_url)
        parse: Converts followed documents into structured values (needed by follow)
        prefers_reduced_data: Optional query; when it returns True pages are
            requested in smaller chunks

    Returns:
        IndexQuery that fetches nothing until it is consumed

    Example:
        >>> async with HTTPClient(base_url="https://example.com") as client:
        ...     titles = await ffetch("/query-index.json", client.fetch).map(
        ...         lambda entry: entry["title"]
        ...     ).all()
    """
    context = PipelineContext(
        fetch=fetch or fetch_url,
        parse=parse,
        chunk_size=resolve_chunk_size(prefers_reduced_data),
    )
    return IndexQuery(url, context)
