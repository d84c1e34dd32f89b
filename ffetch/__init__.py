"""ffetch - Lazy, chainable client for paginated JSON indexes."""

from .api import ffetch
from .config import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_IN_FLIGHT, SAVE_DATA_CHUNK_SIZE
from .core import (
    ConfigurationError,
    FetchCapability,
    FetchResponse,
    FFetchError,
    MalformedResponseError,
    ParseCapability,
    PipelineContext,
    TransportError,
)
from .models import PageEnvelope
from .pipeline import IndexQuery
from .runtime import HTTPClient, fetch_url

__version__ = "0.1.0"

__all__ = [
    "ffetch",
    "IndexQuery",
    "PipelineContext",
    "PageEnvelope",
    "FetchResponse",
    "FetchCapability",
    "ParseCapability",
    "HTTPClient",
    "fetch_url",
    "FFetchError",
    "TransportError",
    "MalformedResponseError",
    "ConfigurationError",
    "DEFAULT_CHUNK_SIZE",
    "SAVE_DATA_CHUNK_SIZE",
    "DEFAULT_MAX_IN_FLIGHT",
]
