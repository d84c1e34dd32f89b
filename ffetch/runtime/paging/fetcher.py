"""Single page retrieval for offset/limit indexes.

This module builds page urls and turns one fetch capability call into either
a decoded PageEnvelope or a NotOk signal (None).
"""

from __future__ import annotations

import json
from time import perf_counter
from urllib.parse import urlencode

from pydantic import ValidationError

from ...core.context import PipelineContext
from ...core.exceptions import MalformedResponseError, TransportError
from ...models import PageEnvelope
from .telemetry import log_page_fetched, log_page_not_ok


def build_page_url(url: str, offset: int, chunk_size: int, sheet: str | None = None) -> str:
    """Append paging parameters to an index url.

    Examples:
        >>> build_page_url("/query-index.json", 0, 255)
        '/query-index.json?offset=0&limit=255'
        >>> build_page_url("/index.json?v=2", 255, 255, sheet="blog")
        '/index.json?v=2&offset=255&limit=255&sheet=blog'
    """
    params: dict[str, str | int] = {"offset": offset, "limit": chunk_size}
    if sheet:
        params["sheet"] = sheet
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode(params)}"


async def fetch_page(
    url: str,
    offset: int,
    context: PipelineContext,
) -> PageEnvelope | None:
    """Fetch one page of the index.

    Args:
        url: Index url without paging parameters
        offset: Zero-based offset of the first requested entry
        context: Pipeline context supplying fetch, chunk size and sheet

    Returns:
        Decoded page, or None if the request failed or returned a non-2xx status

    Raises:
        MalformedResponseError: If a 2xx body is not a valid page envelope
    """
    page_url = build_page_url(url, offset, context.chunk_size, context.sheet)
    started = perf_counter()
    try:
        response = await context.fetch(page_url)
    except TransportError as e:
        log_page_not_ok(url=page_url, offset=offset, status_code=None, error_message=str(e))
        return None

    if not response.ok:
        log_page_not_ok(url=page_url, offset=offset, status_code=response.status)
        return None

    try:
        page = PageEnvelope.model_validate(response.json())
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        raise MalformedResponseError(
            f"Invalid page envelope from {page_url}: {e}",
            url=page_url,
            status_code=response.status,
        ) from e

    log_page_fetched(
        url=url,
        offset=offset,
        chunk_size=context.chunk_size,
        rows=len(page.data),
        total=page.total,
        latency_ms=(perf_counter() - started) * 1000.0,
    )
    return page
