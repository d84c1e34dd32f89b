"""Chainable lazy query over a paginated index.

Architecture:
    An IndexQuery is an immutable description of a traversal: the index url,
    the PipelineContext, and an ordered tuple of operator stages. Chain
    methods never modify the receiver; they return a new IndexQuery with one
    more stage or a rebound context. Iterating a query builds a fresh
    pagination source and wraps it in every stage, so each traversal issues
    its own requests and forks of one query are fully independent.

Design Decisions:
    - Stages are bound lazily: nothing is fetched until a consumer pulls
    - Context rebinding (chunks, sheet, capabilities) applies to the whole
      query regardless of where it appears in the chain
    - Terminal consumers close the iterator chain when they return, so a
      satisfied first() or limit() releases the pagination source

Example:
    >>> entries = await (ffetch("/query-index.json", client.fetch)
    ...     .filter(lambda entry: entry["template"] == "blog")
    ...     .map(lambda entry: entry["title"])
    ...     .slice(10, 20)
    ...     .all())
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import aclosing
from typing import Any

from ..config import DEFAULT_MAX_IN_FLIGHT
from ..core.context import FetchCapability, ParseCapability, PipelineContext
from ..runtime.paging import paginate
from .operators import (
    Mapper,
    Predicate,
    filter_entries,
    follow_references,
    limit_entries,
    map_entries,
    skip_entries,
    slice_entries,
)

Stage = Callable[[AsyncIterator[Any], PipelineContext], AsyncIterator[Any]]


def _require_non_negative(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")


def _require_positive(name: str, value: int) -> None:
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")


class IndexQuery:
    """Lazy, chainable sequence of index entries."""

    def __init__(
        self,
        url: str,
        context: PipelineContext,
        stages: tuple[Stage, ...] = (),
    ) -> None:
        self._url = url
        self._context = context
        self._stages = stages

    @property
    def url(self) -> str:
        return self._url

    @property
    def context(self) -> PipelineContext:
        return self._context

    def __repr__(self) -> str:
        return (
            f"IndexQuery(url={self._url!r}, chunk_size={self._context.chunk_size}, "
            f"sheet={self._context.sheet!r}, stages={len(self._stages)})"
        )

    def _with_stage(self, stage: Stage) -> IndexQuery:
        return IndexQuery(self._url, self._context, (*self._stages, stage))

    def _with_context(self, **changes: Any) -> IndexQuery:
        return IndexQuery(self._url, self._context.replace(**changes), self._stages)

    # ----------------------
    # Configuration
    # ----------------------
    def chunks(self, size: int) -> IndexQuery:
        """Request `size` entries per page."""
        _require_positive("chunk size", size)
        return self._with_context(chunk_size=size)

    def sheet(self, name: str | None) -> IndexQuery:
        """Select a named sub-collection of a multi-sheet index."""
        return self._with_context(sheet=name)

    def with_fetch(self, fetch: FetchCapability) -> IndexQuery:
        return self._with_context(fetch=fetch)

    def with_parse(self, parse: ParseCapability) -> IndexQuery:
        return self._with_context(parse=parse)

    # ----------------------
    # Operators
    # ----------------------
    def skip(self, count: int) -> IndexQuery:
        _require_non_negative("skip", count)
        return self._with_stage(lambda upstream, context: skip_entries(upstream, count))

    def limit(self, count: int) -> IndexQuery:
        _require_non_negative("limit", count)
        return self._with_stage(lambda upstream, context: limit_entries(upstream, count))

    def slice(self, start: int, stop: int) -> IndexQuery:
        """Entries with index in [start, stop) of the current view."""
        _require_non_negative("slice start", start)
        stop = max(stop, start)
        return self._with_stage(lambda upstream, context: slice_entries(upstream, start, stop))

    def filter(self, predicate: Predicate) -> IndexQuery:
        return self._with_stage(lambda upstream, context: filter_entries(upstream, predicate))

    def map(self, fn: Mapper, max_in_flight: int = DEFAULT_MAX_IN_FLIGHT) -> IndexQuery:
        """Transform entries with `fn`; a None result drops the entry.

        `fn` may be a coroutine function. At most `max_in_flight` calls run
        concurrently and results keep upstream order.
        """
        _require_positive("max_in_flight", max_in_flight)
        return self._with_stage(
            lambda upstream, context: map_entries(upstream, fn, max_in_flight)
        )

    def follow(self, field: str, max_in_flight: int = DEFAULT_MAX_IN_FLIGHT) -> IndexQuery:
        """Replace `field` with the parsed document it references, or None.

        Relative references are resolved against the index url.
        """
        _require_positive("max_in_flight", max_in_flight)
        url = self._url
        return self._with_stage(
            lambda upstream, context: follow_references(
                upstream, field, context, max_in_flight, base_url=url
            )
        )

    # ----------------------
    # Consumers
    # ----------------------
    def __aiter__(self) -> AsyncIterator[Any]:
        iterator: AsyncIterator[Any] = paginate(self._url, self._context)
        for stage in self._stages:
            iterator = stage(iterator, self._context)
        return iterator

    async def all(self) -> list[Any]:
        """Drain the query into a list."""
        async with aclosing(self.__aiter__()) as entries:
            return [entry async for entry in entries]

    async def first(self) -> Any | None:
        """Return the first entry, or None if the query yields nothing."""
        async with aclosing(self.limit(1).__aiter__()) as entries:
            async for entry in entries:
                return entry
        return None
