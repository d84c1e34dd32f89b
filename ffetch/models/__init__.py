"""Data models."""

from .envelope import PageEnvelope

__all__ = ["PageEnvelope"]
