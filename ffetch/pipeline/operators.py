"""Lazy operator stages.

Every operator takes an upstream async iterator and returns a new one. Stages
only pull from upstream when they are pulled themselves, and close their
upstream when they finish early, so a satisfied limit stops the whole chain
including the pagination source.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import aclosing
from typing import Any
from urllib.parse import urljoin

from ..config import DEFAULT_MAX_IN_FLIGHT
from ..core.context import PipelineContext
from ..core.exceptions import ConfigurationError, TransportError
from ..runtime.paging.telemetry import log_reference_not_found

Predicate = Callable[[Any], bool]
Mapper = Callable[[Any], Any] | Callable[[Any], Awaitable[Any]]


async def skip_entries(upstream: AsyncIterator[Any], count: int) -> AsyncIterator[Any]:
    """Drop the first `count` entries."""
    skipped = 0
    async with aclosing(upstream):
        async for entry in upstream:
            if skipped < count:
                skipped += 1
                continue
            yield entry


async def limit_entries(upstream: AsyncIterator[Any], count: int) -> AsyncIterator[Any]:
    """Pass at most `count` entries, then stop pulling upstream."""
    if count <= 0:
        await upstream.aclose()
        return
    yielded = 0
    async with aclosing(upstream):
        async for entry in upstream:
            yield entry
            yielded += 1
            if yielded >= count:
                return


def slice_entries(upstream: AsyncIterator[Any], start: int, stop: int) -> AsyncIterator[Any]:
    """Entries with index in [start, stop) of the upstream view."""
    return limit_entries(skip_entries(upstream, start), stop - start)


async def filter_entries(upstream: AsyncIterator[Any], predicate: Predicate) -> AsyncIterator[Any]:
    async with aclosing(upstream):
        async for entry in upstream:
            if predicate(entry):
                yield entry


async def _batches(upstream: AsyncIterator[Any], size: int) -> AsyncIterator[list[Any]]:
    batch: list[Any] = []
    async with aclosing(upstream):
        async for entry in upstream:
            batch.append(entry)
            if len(batch) >= size:
                yield batch
                batch = []
    if batch:
        yield batch


async def _apply(fn: Mapper, entry: Any) -> Any:
    result = fn(entry)
    if inspect.isawaitable(result):
        result = await result
    return result


async def map_entries(
    upstream: AsyncIterator[Any],
    fn: Mapper,
    max_in_flight: int = DEFAULT_MAX_IN_FLIGHT,
) -> AsyncIterator[Any]:
    """Apply `fn` to every entry with bounded concurrency.

    Up to `max_in_flight` entries are collected and mapped concurrently; the
    whole batch is awaited and its results are yielded in upstream order
    before the next batch is admitted. A result of None drops the entry.

    Args:
        upstream: Source iterator
        fn: Sync or async function returning the new value or None
        max_in_flight: Maximum number of concurrent `fn` invocations

    Yields:
        Mapped values, in upstream order
    """
    async with aclosing(_batches(upstream, max_in_flight)) as batches:
        async for batch in batches:
            results = await asyncio.gather(*(_apply(fn, entry) for entry in batch))
            for result in results:
                if result is not None:
                    yield result


async def _resolve_reference(
    field: str,
    reference: str,
    context: PipelineContext,
) -> Any:
    """Fetch and parse a referenced document; None if it cannot be retrieved."""
    try:
        response = await context.fetch(reference)
    except TransportError:
        log_reference_not_found(field=field, reference=reference, status_code=None)
        return None

    if not response.ok:
        log_reference_not_found(field=field, reference=reference, status_code=response.status)
        return None
    return context.parse(response.text())


def follow_references(
    upstream: AsyncIterator[Any],
    field: str,
    context: PipelineContext,
    max_in_flight: int = DEFAULT_MAX_IN_FLIGHT,
    base_url: str | None = None,
) -> AsyncIterator[Any]:
    """Replace `field` of every entry with the document it references.

    References are resolved against `base_url` (the index url), so relative
    paths stored in the index reach the same host as the index itself.

    Entries are never dropped: a missing or empty field, a failed fetch, or a
    non-2xx status all leave the field set to None.

    Raises:
        ConfigurationError: If the context has no parse capability
    """
    if context.parse is None:
        raise ConfigurationError(f"follow({field!r}) requires a parse capability")

    async def resolve(entry: dict[str, Any]) -> dict[str, Any]:
        reference = entry.get(field)
        value = None
        if reference:
            target = urljoin(base_url, reference) if base_url else reference
            value = await _resolve_reference(field, target, context)
        return {**entry, field: value}

    return map_entries(upstream, resolve, max_in_flight)
