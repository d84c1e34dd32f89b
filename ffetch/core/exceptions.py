"""Custom exception hierarchy."""

from __future__ import annotations


class FFetchError(Exception):
    """Base exception for all library errors."""

    pass


class TransportError(FFetchError):
    """Request never produced an HTTP response.

    Raised by fetch capabilities for connection level failures (DNS, refused
    connections, timeouts). Traversals treat it like a non-2xx status.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class MalformedResponseError(FFetchError):
    """Successful response whose body is not a valid page envelope."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ConfigurationError(FFetchError):
    """Pipeline is missing a capability it needs."""

    pass
