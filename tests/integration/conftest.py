"""Shared fixtures for integration tests: a local aiohttp index server."""

from __future__ import annotations

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

TOTAL = 555

PAGE_REQUESTS = web.AppKey("page_requests", list)


async def query_index(request: web.Request) -> web.Response:
    offset = int(request.query["offset"])
    limit = int(request.query["limit"])
    data = [{"title": f"Entry {i}", "path": f"/docs/{i}"} for i in range(offset, min(offset + limit, TOTAL))]
    request.app[PAGE_REQUESTS].append((offset, limit))
    return web.json_response({"total": TOTAL, "offset": offset, "limit": limit, "data": data})


async def document(request: web.Request) -> web.Response:
    number = int(request.match_info["number"])
    if number % 2:
        raise web.HTTPNotFound()
    return web.Response(text=f"<h1>Document {number}</h1>", content_type="text/html")


async def latin1_document(request: web.Request) -> web.Response:
    return web.Response(
        body="<p>café</p>".encode("latin-1"),
        content_type="text/html",
        charset="iso-8859-1",
    )


async def latin1_index(request: web.Request) -> web.Response:
    data = [{"path": "/latin1"}]
    return web.json_response({"total": 1, "offset": 0, "limit": 255, "data": data})


@pytest_asyncio.fixture
async def index_server():
    app = web.Application()
    app[PAGE_REQUESTS] = []
    app.router.add_get("/query-index.json", query_index)
    app.router.add_get("/docs/{number}", document)
    app.router.add_get("/latin1-index.json", latin1_index)
    app.router.add_get("/latin1", latin1_document)

    server = TestServer(app)
    await server.start_server()
    try:
        yield server
    finally:
        await server.close()


@pytest.fixture
def page_requests(index_server) -> list:
    """(offset, limit) pairs received by the index route."""
    return index_server.app[PAGE_REQUESTS]
