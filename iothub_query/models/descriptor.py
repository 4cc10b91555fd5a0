"""Immutable query descriptor."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors import InvalidArgumentError
from ..serializer import validate_query
from .options import QueryOptions
from .query_type import QueryType


class QueryDescriptor(BaseModel):
    """Request parameters of one logical paginated query.

    Build descriptors through ``from_query``, ``from_page_size`` or
    ``from_options``; each validates its inputs and raises
    ``InvalidArgumentError`` on bad input.
    """

    model_config = ConfigDict(frozen=True)

    query: Optional[str] = Field(default=None, description="SQL-like query text")
    page_size: int = Field(ge=0, description="Requested page size, 0 when unset")
    query_type: QueryType = Field(description="Requested result-kind")
    resume_token: Optional[str] = Field(default=None, description="Continuation token to resume from")
    is_sql_query: bool = Field(default=False, description="Whether the query text is sent in the body")

    @model_validator(mode="after")
    def check_consistency(self):
        """Enforce descriptor invariants on every construction path."""
        if self.is_sql_query != (self.query is not None):
            raise ValueError("is_sql_query must be set exactly when query text is present")
        if self.query_type is QueryType.UNKNOWN:
            raise ValueError("query_type cannot be unknown")
        if self.is_sql_query:
            validate_query(self.query)
        if self.resume_token is not None:
            if not self.resume_token:
                raise ValueError("Continuation token cannot be null or empty")
        elif self.page_size <= 0:
            raise ValueError("Page size cannot be zero or negative")
        return self

    @classmethod
    def from_query(
        cls,
        query: Optional[str],
        page_size: int,
        query_type: Optional[QueryType]
    ) -> "QueryDescriptor":
        """Create a descriptor for an SQL-style query.

        Args:
            query: Query text, must contain ``select`` and ``from``
            page_size: Positive page size
            query_type: Requested result-kind

        Raises:
            InvalidArgumentError: If any input is invalid
        """
        validate_query(query)
        _validate_page_size(page_size)
        _validate_query_type(query_type)

        return cls(
            query=query,
            page_size=page_size,
            query_type=query_type,
            is_sql_query=True
        )

    @classmethod
    def from_page_size(cls, page_size: int, query_type: Optional[QueryType]) -> "QueryDescriptor":
        """Create a descriptor for a raw query without text.

        Raises:
            InvalidArgumentError: If the page size or query type is invalid
        """
        _validate_page_size(page_size)
        _validate_query_type(query_type)

        return cls(page_size=page_size, query_type=query_type)

    @classmethod
    def from_options(cls, options: Optional[QueryOptions], query_type: Optional[QueryType]) -> "QueryDescriptor":
        """Create a descriptor that resumes from a continuation token.

        The page size comes from the options and stays 0 when the caller did not
        set one, in which case no page size is sent and the service decides.

        Raises:
            InvalidArgumentError: If the token is missing or the query type is invalid
        """
        if options is None or not options.continuation_token:
            raise InvalidArgumentError("Continuation token cannot be null or empty")
        _validate_query_type(query_type)

        return cls(
            page_size=options.page_size,
            query_type=query_type,
            resume_token=options.continuation_token
        )


def _validate_page_size(page_size: int) -> None:
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
        raise InvalidArgumentError("Page size cannot be zero or negative")


def _validate_query_type(query_type: Optional[QueryType]) -> None:
    if query_type is None or query_type is QueryType.UNKNOWN:
        raise InvalidArgumentError("Cannot process an unknown type query")
    if not isinstance(query_type, QueryType):
        raise InvalidArgumentError(f"Unsupported query type: {query_type!r}")
