"""REST runtime abstractions."""

from .http_client import HTTPClient, fetch_url

__all__ = [
    "HTTPClient",
    "fetch_url",
]
