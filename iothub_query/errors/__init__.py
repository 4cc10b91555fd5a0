"""Error handling module for the IoT Hub query client."""

from .exceptions import (
    QueryError,
    InvalidArgumentError,
    MalformedResponseError,
    ServiceRejectedError,
    NoMoreElementsError,
    CursorStateError
)
from .problem_details import (
    PROBLEM_JSON_CONTENT_TYPE,
    ProblemDetail,
    parse_problem_detail
)

__all__ = [
    "QueryError",
    "InvalidArgumentError",
    "MalformedResponseError",
    "ServiceRejectedError",
    "NoMoreElementsError",
    "CursorStateError",
    "PROBLEM_JSON_CONTENT_TYPE",
    "ProblemDetail",
    "parse_problem_detail"
]
