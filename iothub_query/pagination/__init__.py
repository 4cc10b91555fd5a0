"""Pagination engine for IoT Hub queries."""

from .headers import (
    CONTINUATION_TOKEN_HEADER,
    ITEM_TYPE_HEADER,
    PAGE_SIZE_HEADER,
    ResponseHeaders,
    build_request_headers
)
from .page import QueryPage
from .cursor import CursorState, QueryCursor

__all__ = [
    "CONTINUATION_TOKEN_HEADER",
    "ITEM_TYPE_HEADER",
    "PAGE_SIZE_HEADER",
    "ResponseHeaders",
    "build_request_headers",
    "QueryPage",
    "CursorState",
    "QueryCursor"
]
