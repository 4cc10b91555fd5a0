"""Exception taxonomy for the paginated query client."""

from typing import Optional

from .problem_details import ProblemDetail


class QueryError(Exception):
    """Base exception for all query cursor failures."""


class InvalidArgumentError(QueryError, ValueError):
    """Raised when a descriptor or dispatch receives malformed input."""


class MalformedResponseError(QueryError, IOError):
    """Raised when a response violates the paging protocol.

    Covers a missing or unknown ``x-ms-item-type`` header, a result-kind that
    does not match the requested one, and page bodies that cannot be decoded.
    """


class ServiceRejectedError(QueryError):
    """Raised when the service answers with a non-success status."""

    def __init__(
        self,
        status: int,
        detail: Optional[str] = None,
        problem: Optional[ProblemDetail] = None,
    ):
        self.status = status
        self.problem = problem
        if detail is None and problem is not None:
            detail = problem.detail or problem.title
        self.detail = detail
        message = f"Query request rejected with status {status}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NoMoreElementsError(QueryError, LookupError):
    """Raised by ``next()`` once every page has been consumed."""


class CursorStateError(QueryError, RuntimeError):
    """Raised when a cursor operation is not valid in the cursor's current state."""
