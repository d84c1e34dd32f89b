"""Structured logging for paging operations.

This module provides telemetry hooks for the pagination source and the
reference resolver, emitting structured logs for observability.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    url: str,
    offset: int,
    chunk_size: int,
    rows: int,
    total: int,
    latency_ms: float | None = None,
) -> None:
    """Log a successfully decoded page.

    Args:
        url: Index url (without paging query)
        offset: Offset the page was requested at
        chunk_size: Number of entries requested
        rows: Number of entries returned
        total: Advertised collection size from this page
        latency_ms: Latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={
            "url": url,
            "offset": offset,
            "chunk_size": chunk_size,
            "rows": rows,
            "total": total,
            "latency_ms": latency_ms,
        },
    )


def log_page_not_ok(
    *,
    url: str,
    offset: int,
    status_code: int | None,
    error_message: str | None = None,
) -> None:
    """Log a page request that ended the traversal.

    Args:
        url: Requested url
        offset: Offset the page was requested at
        status_code: HTTP status (None for transport failures)
        error_message: Transport error message, if any
    """
    logger.warning(
        "page_not_ok",
        extra={
            "url": url,
            "offset": offset,
            "status_code": status_code,
            "error_message": error_message,
        },
    )


def log_pagination_complete(
    *,
    url: str,
    pages: int,
    rows: int,
    failed: bool,
) -> None:
    """Log the end of a pagination run.

    Args:
        url: Index url
        pages: Number of pages decoded
        rows: Number of entries yielded
        failed: Whether the run ended on a NotOk page
    """
    logger.info(
        "pagination_complete",
        extra={
            "url": url,
            "pages": pages,
            "rows": rows,
            "failed": failed,
        },
    )


def log_reference_not_found(
    *,
    field: str,
    reference: str,
    status_code: int | None,
) -> None:
    """Log a followed reference that could not be resolved."""
    logger.info(
        "reference_not_found",
        extra={
            "field": field,
            "reference": reference,
            "status_code": status_code,
        },
    )
