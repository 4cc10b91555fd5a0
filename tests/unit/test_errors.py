"""Tests for the error taxonomy and Problem Details parsing."""

import pytest

from iothub_query.errors import (
    CursorStateError,
    InvalidArgumentError,
    MalformedResponseError,
    NoMoreElementsError,
    ProblemDetail,
    QueryError,
    ServiceRejectedError,
    parse_problem_detail
)


class TestErrorHierarchy:
    """Test that errors fit both the query and builtin hierarchies."""

    @pytest.mark.parametrize("error_class,builtin", [
        (InvalidArgumentError, ValueError),
        (MalformedResponseError, IOError),
        (NoMoreElementsError, LookupError),
        (CursorStateError, RuntimeError),
    ])
    def test_builtin_bases(self, error_class, builtin):
        """Test builtin base classes."""
        assert issubclass(error_class, QueryError)
        assert issubclass(error_class, builtin)

    def test_service_rejected_is_query_error(self):
        """Test ServiceRejectedError base class."""
        assert issubclass(ServiceRejectedError, QueryError)


class TestServiceRejectedError:
    """Test ServiceRejectedError messages."""

    def test_status_only(self):
        """Test error without detail."""
        exc = ServiceRejectedError(status=500)

        assert exc.status == 500
        assert exc.detail is None
        assert exc.problem is None
        assert str(exc) == "Query request rejected with status 500"

    def test_detail_from_problem(self):
        """Test that the problem detail fills the message."""
        problem = ProblemDetail(title="Bad Request", status=400, detail="Invalid continuation token")
        exc = ServiceRejectedError(status=400, problem=problem)

        assert exc.detail == "Invalid continuation token"
        assert str(exc) == "Query request rejected with status 400: Invalid continuation token"

    def test_title_when_problem_has_no_detail(self):
        """Test falling back to the problem title."""
        exc = ServiceRejectedError(status=401, problem=ProblemDetail(title="Unauthorized", status=401))

        assert exc.detail == "Unauthorized"


class TestParseProblemDetail:
    """Test parse_problem_detail."""

    def test_problem_document(self):
        """Test parsing a full problem document with extensions."""
        problem = parse_problem_detail(
            b'{"type": "about:blank", "title": "Bad Request", "status": 400, '
            b'"detail": "Bad token", "instance": "/devices/query", "error_code": "E1"}'
        )

        assert problem.title == "Bad Request"
        assert problem.status == 400
        assert problem.detail == "Bad token"
        assert problem.instance == "/devices/query"
        assert problem.error_code == "E1"

    @pytest.mark.parametrize("body", [b"", b"not json", b"[]", b'{"detail": "no title"}', b"\xff\xfe"])
    def test_not_a_problem(self, body):
        """Test bodies that are not problem documents."""
        assert parse_problem_detail(body) is None
