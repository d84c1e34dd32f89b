"""Unit tests for the pagination source."""

from __future__ import annotations

import json

import pytest

from ffetch import FetchResponse, MalformedResponseError, PipelineContext
from ffetch.runtime.paging import paginate


async def collect(iterator):
    return [entry async for entry in iterator]


class TestPaginate:
    """Test page sequencing and termination."""

    @pytest.mark.asyncio
    async def test_yields_all_entries_in_order(self, index):
        """Test all entries are yielded once, in offset order."""
        context = PipelineContext(fetch=index, chunk_size=255)

        entries = await collect(paginate("/query-index.json", context))

        assert entries == [{"title": f"Entry {i}"} for i in range(555)]
        assert index.page_requests == [
            "/query-index.json?offset=0&limit=255",
            "/query-index.json?offset=255&limit=255",
            "/query-index.json?offset=510&limit=255",
        ]

    @pytest.mark.asyncio
    async def test_single_page_when_chunk_exceeds_total(self, index):
        """Test a short first page ends the traversal."""
        context = PipelineContext(fetch=index, chunk_size=1000)

        entries = await collect(paginate("/query-index.json", context))

        assert len(entries) == 555
        assert len(index.page_requests) == 1

    @pytest.mark.asyncio
    async def test_stops_at_total_on_full_last_page(self, index):
        """Test no extra request is made when the last page is exactly full."""
        index.add_index("/even.json", 510)
        context = PipelineContext(fetch=index, chunk_size=255)

        entries = await collect(paginate("/even.json", context))

        assert len(entries) == 510
        assert len(index.page_requests) == 2

    @pytest.mark.asyncio
    async def test_empty_index(self, index):
        """Test an empty index yields nothing after one request."""
        index.add_index("/empty.json", 0)
        context = PipelineContext(fetch=index)

        assert await collect(paginate("/empty.json", context)) == []
        assert len(index.page_requests) == 1

    @pytest.mark.asyncio
    async def test_not_found_yields_nothing(self, index):
        """Test a 404 on the first page yields an empty sequence."""
        context = PipelineContext(fetch=index)

        assert await collect(paginate("/not-found.json", context)) == []

    @pytest.mark.asyncio
    async def test_failure_mid_traversal_keeps_earlier_entries(self):
        """Test a NotOk page ends the traversal after the entries already yielded."""
        requests: list[str] = []

        async def fetch(url: str) -> FetchResponse:
            requests.append(url)
            if "offset=0&" in url:
                body = {"total": 30, "offset": 0, "limit": 10, "data": [{"i": i} for i in range(10)]}
                return FetchResponse(url=url, status=200, body=json.dumps(body).encode())
            return FetchResponse(url=url, status=500)

        context = PipelineContext(fetch=fetch, chunk_size=10)

        entries = await collect(paginate("/index.json", context))

        assert entries == [{"i": i} for i in range(10)]
        assert len(requests) == 2

    @pytest.mark.asyncio
    async def test_total_is_reread_per_page(self):
        """Test a total that shrinks mid-traversal stops paging early."""
        requests: list[str] = []

        async def fetch(url: str) -> FetchResponse:
            requests.append(url)
            offset = 0 if "offset=0&" in url else 10
            total = 100 if offset == 0 else 15
            body = {
                "total": total,
                "offset": offset,
                "limit": 10,
                "data": [{"i": offset + i} for i in range(10)],
            }
            return FetchResponse(url=url, status=200, body=json.dumps(body).encode())

        context = PipelineContext(fetch=fetch, chunk_size=10)

        entries = await collect(paginate("/index.json", context))

        assert len(entries) == 20
        assert len(requests) == 2

    @pytest.mark.asyncio
    async def test_fetches_lazily(self, index):
        """Test the next page is only requested once the current one is drained."""
        context = PipelineContext(fetch=index, chunk_size=10)
        source = paginate("/query-index.json", context)

        for _ in range(10):
            await source.__anext__()
        assert len(index.page_requests) == 1

        await source.__anext__()
        assert len(index.page_requests) == 2
        await source.aclose()

    @pytest.mark.asyncio
    async def test_sheet_is_requested(self, index):
        """Test the sheet parameter selects a sub-collection."""
        index.add_index("/query-index.json", 3, lambda i: {"sheet": "blog", "i": i}, sheet="blog")
        context = PipelineContext(fetch=index, sheet="blog")

        entries = await collect(paginate("/query-index.json", context))

        assert entries == [{"sheet": "blog", "i": i} for i in range(3)]
        assert index.page_requests == ["/query-index.json?offset=0&limit=255&sheet=blog"]

    @pytest.mark.asyncio
    async def test_sheet_on_every_page(self, index):
        """Test the sheet parameter is sent with every page request, not just the first."""
        index.add_index("/query-index.json", 25, lambda i: {"i": i}, sheet="blog")
        context = PipelineContext(fetch=index, chunk_size=10, sheet="blog")

        entries = await collect(paginate("/query-index.json", context))

        assert entries == [{"i": i} for i in range(25)]
        assert index.page_requests == [
            "/query-index.json?offset=0&limit=10&sheet=blog",
            "/query-index.json?offset=10&limit=10&sheet=blog",
            "/query-index.json?offset=20&limit=10&sheet=blog",
        ]

    @pytest.mark.asyncio
    async def test_malformed_page_raises(self, index):
        """Test a malformed 2xx page propagates to the consumer."""
        index.add_response("/bad.json", status=200, body="{")
        context = PipelineContext(fetch=index)

        with pytest.raises(MalformedResponseError):
            await collect(paginate("/bad.json", context))
