"""Decoded rows of a single query page."""

from collections import deque
from typing import Any, List, Optional

from pydantic import TypeAdapter, ValidationError

from ..errors import MalformedResponseError


_ROWS_ADAPTER = TypeAdapter(List[Any])


class QueryPage:
    """Rows of one response page plus the continuation token that came with it."""

    def __init__(self, rows: List[Any], continuation_token: Optional[str] = None):
        self._rows = deque(rows)
        self._continuation_token = continuation_token

    @classmethod
    def from_body(cls, body: bytes, continuation_token: Optional[str] = None) -> "QueryPage":
        """Decode a JSON array response body into a page.

        An empty body is an empty page.

        Raises:
            MalformedResponseError: If the body is not a JSON array
        """
        if not body or not body.strip():
            return cls([], continuation_token)

        try:
            rows = _ROWS_ADAPTER.validate_json(body)
        except ValidationError as e:
            raise MalformedResponseError(f"Query response body is not a JSON array: {e}") from e

        return cls(rows, continuation_token)

    @property
    def continuation_token(self) -> Optional[str]:
        return self._continuation_token

    def has_unread_row(self) -> bool:
        return bool(self._rows)

    def pop_row(self) -> Any:
        """Remove and return the next unread row.

        Raises:
            IndexError: If every row has been read
        """
        if not self._rows:
            raise IndexError("No unread rows left in this page")
        return self._rows.popleft()

    def __len__(self) -> int:
        return len(self._rows)
