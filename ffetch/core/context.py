"""Pipeline context and injected capabilities.

Architecture:
    Every query pipeline carries one immutable PipelineContext. It holds the
    capabilities the pipeline needs to talk to the outside world (fetch and
    parse) together with the paging configuration read by the root source
    (chunk size and optional sheet).

Design Decisions:
    - Frozen dataclass: operators never mutate a context, they derive a new
      one with replace(), so a query can be forked safely
    - Capabilities are plain callables: any coroutine function that maps a url
      to a FetchResponse can serve as transport

See Also:
    - IndexQuery: Binds a context to a chain of operator stages
    - HTTPClient: Default aiohttp based fetch capability
"""

from __future__ import annotations

import codecs
import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from typing import Any

from ..config import DEFAULT_CHUNK_SIZE


@dataclass(frozen=True)
class FetchResponse:
    """Buffered HTTP response returned by a fetch capability.

    Attributes:
        url: Requested url
        status: HTTP status code
        body: Raw response body
        encoding: Charset declared by the server (None if not declared)
    """

    url: str
    status: int
    body: bytes = field(default=b"", repr=False)
    encoding: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the status is in the 2xx range."""
        return 200 <= self.status < 300

    def text(self, encoding: str | None = None) -> str:
        """Decode body using `encoding`, the declared charset, or UTF-8."""
        encoding = encoding or self.encoding or "utf-8"
        try:
            codecs.lookup(encoding)
        except LookupError:
            # Unknown charset names in Content-Type fall back to UTF-8
            encoding = "utf-8"
        return self.body.decode(encoding, errors="replace")

    def json(self) -> Any:
        """Decode body as JSON.

        Raises:
            json.JSONDecodeError: If the body is not valid JSON
        """
        return json.loads(self.body)


FetchCapability = Callable[[str], Awaitable[FetchResponse]]
ParseCapability = Callable[[str], Any]


@dataclass(frozen=True)
class PipelineContext:
    """Immutable configuration shared by the stages of one pipeline.

    Attributes:
        fetch: Coroutine function performing a GET for a url
        parse: Converts a followed document body into a structured value
        chunk_size: Number of entries requested per page
        sheet: Optional sub-collection selector added to page requests
    """

    fetch: FetchCapability
    parse: ParseCapability | None = None
    chunk_size: int = DEFAULT_CHUNK_SIZE
    sheet: str | None = None

    def replace(self, **changes: Any) -> PipelineContext:
        """Return a copy of this context with the given fields changed."""
        return replace(self, **changes)
