"""Core components."""

from .context import FetchCapability, FetchResponse, ParseCapability, PipelineContext
from .exceptions import ConfigurationError, FFetchError, MalformedResponseError, TransportError

__all__ = [
    "PipelineContext",
    "FetchResponse",
    "FetchCapability",
    "ParseCapability",
    "FFetchError",
    "TransportError",
    "MalformedResponseError",
    "ConfigurationError",
]
