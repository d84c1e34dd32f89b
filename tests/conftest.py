"""Shared fixtures: an in-memory index served through a fetch capability."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any
from urllib.parse import parse_qs, urlsplit

import pytest

from ffetch import FetchResponse

EntryFactory = Callable[[int], dict[str, Any]]


def title_entry(i: int) -> dict[str, Any]:
    return {"title": f"Entry {i}"}


class FakeIndex:
    """Fetch capability serving paginated indexes and documents from memory.

    Every requested url is recorded so tests can assert on fetch counts.
    """

    def __init__(self) -> None:
        self.requests: list[str] = []
        self._indexes: dict[tuple[str, str | None], tuple[int, EntryFactory]] = {}
        self._responses: dict[str, tuple[int, bytes]] = {}

    def add_index(
        self,
        path: str,
        total: int,
        make_entry: EntryFactory = title_entry,
        sheet: str | None = None,
    ) -> None:
        self._indexes[(path, sheet)] = (total, make_entry)

    def add_response(self, path: str, status: int = 200, body: str | bytes = b"") -> None:
        if isinstance(body, str):
            body = body.encode()
        self._responses[path] = (status, body)

    @property
    def page_requests(self) -> list[str]:
        return [url for url in self.requests if "offset=" in url]

    async def __call__(self, url: str) -> FetchResponse:
        self.requests.append(url)
        parts = urlsplit(url)
        query = parse_qs(parts.query)

        if parts.path in self._responses:
            status, body = self._responses[parts.path]
            return FetchResponse(url=url, status=status, body=body)

        sheet = query.get("sheet", [None])[0]
        if (parts.path, sheet) in self._indexes and "offset" in query:
            total, make_entry = self._indexes[(parts.path, sheet)]
            offset = int(query["offset"][0])
            limit = int(query["limit"][0])
            envelope = {
                "total": total,
                "offset": offset,
                "limit": limit,
                "data": [make_entry(i) for i in range(offset, min(offset + limit, total))],
            }
            return FetchResponse(url=url, status=200, body=json.dumps(envelope).encode())

        return FetchResponse(url=url, status=404, body=b"Not Found")


@pytest.fixture
def make_index() -> type[FakeIndex]:
    return FakeIndex


@pytest.fixture
def index() -> FakeIndex:
    """Index with 555 titled entries at /query-index.json."""
    fake = FakeIndex()
    fake.add_index("/query-index.json", 555)
    return fake
