"""Shared paging defaults.

This module centralizes the chunk sizes and concurrency bounds used by the
pagination source and the operator pipeline, and the adaptive chunk size
heuristic for clients on constrained networks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

# Entries requested per page
DEFAULT_CHUNK_SIZE = 255
# Entries requested per page when the client prefers reduced data usage
SAVE_DATA_CHUNK_SIZE = 64

# Concurrent invocations per map/follow batch
DEFAULT_MAX_IN_FLIGHT = 5

# Total request timeout (seconds) for the default HTTP client
DEFAULT_TIMEOUT = 30.0


def resolve_chunk_size(prefers_reduced_data: Callable[[], bool] | None = None) -> int:
    """Pick the initial chunk size for a new query.

    Args:
        prefers_reduced_data: Optional query reporting whether the host
            environment asked for reduced data usage

    Returns:
        SAVE_DATA_CHUNK_SIZE if the query answers True, DEFAULT_CHUNK_SIZE otherwise

    Examples:
        >>> resolve_chunk_size()
        255
        >>> resolve_chunk_size(lambda: True)
        64
    """
    if prefers_reduced_data is None:
        return DEFAULT_CHUNK_SIZE
    try:
        reduced = prefers_reduced_data() is True
    except Exception as e:
        # The preference is only a hint; an unanswerable query keeps the default
        logger.debug(
            "reduced_data_query_failed",
            extra={"error_type": type(e).__name__, "error_message": str(e)},
        )
        return DEFAULT_CHUNK_SIZE
    return SAVE_DATA_CHUNK_SIZE if reduced else DEFAULT_CHUNK_SIZE
