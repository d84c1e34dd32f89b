"""Page envelope data model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PageEnvelope(BaseModel):
    """One page of an offset/limit index response."""

    total: int = Field(..., ge=0)
    offset: int = Field(..., ge=0)
    limit: int = Field(..., ge=0)
    data: list[dict[str, Any]]

    model_config = ConfigDict(frozen=True)

    def has_more(self, requested_offset: int, chunk_size: int) -> bool:
        """Whether another page should be requested after this one.

        A short page ends the traversal, as does reaching the advertised total.
        The total is taken from this page, so a collection that shrinks while
        being traversed stops early.
        """
        return len(self.data) == chunk_size and requested_offset + chunk_size < self.total
