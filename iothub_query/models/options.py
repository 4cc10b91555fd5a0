"""Caller-supplied continuation options."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class QueryOptions(BaseModel):
    """Options used to resume or force-continue a paginated query.

    A continuation token persisted from ``QueryCursor.get_continuation_token()``
    can be fed back through these options, including from another process.
    """

    model_config = ConfigDict(frozen=True)

    continuation_token: Optional[str] = Field(
        default=None,
        description="Opaque token returned by the service for the next page"
    )
    page_size: int = Field(
        default=0,
        ge=0,
        description="Requested page size, 0 when unset"
    )
