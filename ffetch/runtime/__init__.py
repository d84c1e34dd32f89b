"""Runtime components (transport and paging)."""

from .paging import build_page_url, fetch_page, paginate
from .rest import HTTPClient, fetch_url

__all__ = [
    "HTTPClient",
    "fetch_url",
    "build_page_url",
    "fetch_page",
    "paginate",
]
