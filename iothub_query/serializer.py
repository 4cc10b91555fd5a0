"""Query text validation and request body serialization."""

import re
from typing import Optional

from pydantic import BaseModel, Field

from .errors import InvalidArgumentError


# Required structural keywords of a select-style query
_SELECT_PATTERN = re.compile(r"\bselect\b", re.IGNORECASE)
_FROM_PATTERN = re.compile(r"\bfrom\b", re.IGNORECASE)

LEGACY_SELECT_ALL_BODY = b'{"query":"select * from devices"}'


class QueryRequest(BaseModel):
    """JSON body of a query request."""

    query: str = Field(description="SQL-like query text")


def validate_query(query: Optional[str]) -> str:
    """Check that a query is non-empty and shaped like a select query.

    Only the presence of the ``select`` and ``from`` keywords is checked;
    the query language itself is left to the service.

    Args:
        query: The query text

    Returns:
        The query text unchanged

    Raises:
        InvalidArgumentError: If the query is empty or lacks the keywords
    """
    if query is None or not query.strip():
        raise InvalidArgumentError("Query cannot be null or empty")

    if not _SELECT_PATTERN.search(query) or not _FROM_PATTERN.search(query):
        raise InvalidArgumentError(f"Query is not a valid sql query: {query!r}")

    return query


def serialize_query(query: str) -> bytes:
    """Serialize query text into a ``{"query": ...}`` request body."""
    return QueryRequest(query=query).model_dump_json().encode("utf-8")
