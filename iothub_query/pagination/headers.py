"""Paging headers of the IoT Hub query protocol."""

from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.query_type import QueryType


CONTINUATION_TOKEN_HEADER = "x-ms-continuation"
ITEM_TYPE_HEADER = "x-ms-item-type"
PAGE_SIZE_HEADER = "x-ms-max-item-count"


class ResponseHeaders(BaseModel):
    """Paging metadata read from a query response."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    continuation_token: Optional[str] = Field(default=None, alias=CONTINUATION_TOKEN_HEADER)
    item_type: QueryType = Field(default=QueryType.UNKNOWN, alias=ITEM_TYPE_HEADER)

    @field_validator("continuation_token", mode="before")
    @classmethod
    def empty_token_is_absent(cls, v):
        return v or None

    @field_validator("item_type", mode="before")
    @classmethod
    def parse_item_type(cls, v):
        if isinstance(v, QueryType):
            return v
        return QueryType.from_header(v)

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "ResponseHeaders":
        """Parse paging headers, matching header names case-insensitively."""
        return cls.model_validate({name.lower(): value for name, value in headers.items()})


def build_request_headers(page_size: int, continuation_token: Optional[str] = None) -> Dict[str, str]:
    """Build the paging headers for one query request.

    Args:
        page_size: Requested page size, omitted from the headers when 0
        continuation_token: Token of the page to fetch, if any

    Returns:
        A new header dictionary owned by the caller
    """
    headers: Dict[str, str] = {}
    if continuation_token is not None:
        headers[CONTINUATION_TOKEN_HEADER] = continuation_token
    if page_size > 0:
        headers[PAGE_SIZE_HEADER] = str(page_size)
    return headers
