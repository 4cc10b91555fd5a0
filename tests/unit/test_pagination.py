"""Tests for paging headers, query pages and request serialization."""

import json

import pytest

from iothub_query.errors import InvalidArgumentError, MalformedResponseError
from iothub_query.models import QueryType
from iothub_query.pagination import QueryPage, ResponseHeaders, build_request_headers
from iothub_query.serializer import serialize_query, validate_query


class TestSerializer:
    """Test query validation and body serialization."""

    def test_serialize_query(self):
        """Test the query body shape."""
        body = serialize_query("select * from devices where tags.site = 'a\"b'")

        assert json.loads(body) == {"query": "select * from devices where tags.site = 'a\"b'"}

    @pytest.mark.parametrize("query", [
        "select * from devices",
        "SELECT deviceId FROM devices",
        "Select * From devices.jobs",
    ])
    def test_valid_queries(self, query):
        """Test queries with the required keywords."""
        assert validate_query(query) == query

    def test_invalid_query_message(self):
        """Test the error message for a non-query."""
        with pytest.raises(InvalidArgumentError, match="not a valid sql query"):
            validate_query("devices")


class TestResponseHeaders:
    """Test response header parsing."""

    def test_parse_paging_headers(self):
        """Test reading token and item type."""
        headers = ResponseHeaders.from_headers({
            "x-ms-continuation": "tok1",
            "x-ms-item-type": "twin",
            "content-type": "application/json",
        })

        assert headers.continuation_token == "tok1"
        assert headers.item_type is QueryType.TWIN

    def test_header_names_are_case_insensitive(self):
        """Test that header name casing does not matter."""
        headers = ResponseHeaders.from_headers({
            "X-Ms-Continuation": "tok1",
            "X-MS-ITEM-TYPE": "deviceJob",
        })

        assert headers.continuation_token == "tok1"
        assert headers.item_type is QueryType.DEVICE_JOB

    def test_missing_headers(self):
        """Test defaults when paging headers are absent."""
        headers = ResponseHeaders.from_headers({})

        assert headers.continuation_token is None
        assert headers.item_type is QueryType.UNKNOWN

    def test_field_names_are_not_header_names(self):
        """Test that only the protocol header names fill the paging fields."""
        headers = ResponseHeaders.from_headers({"item_type": "twin", "continuation_token": "tok"})

        assert headers.continuation_token is None
        assert headers.item_type is QueryType.UNKNOWN

    def test_empty_continuation_is_absent(self):
        """Test that an empty token means no further page."""
        headers = ResponseHeaders.from_headers({"x-ms-continuation": "", "x-ms-item-type": "raw"})

        assert headers.continuation_token is None


class TestBuildRequestHeaders:
    """Test request header construction."""

    def test_page_size_only(self):
        """Test headers without a token."""
        assert build_request_headers(100) == {"x-ms-max-item-count": "100"}

    def test_with_token(self):
        """Test headers with a token."""
        assert build_request_headers(5, "tok") == {
            "x-ms-continuation": "tok",
            "x-ms-max-item-count": "5",
        }

    def test_unset_page_size_is_omitted(self):
        """Test that page size 0 is not sent."""
        assert build_request_headers(0, "tok") == {"x-ms-continuation": "tok"}

    def test_returns_new_dict(self):
        """Test that every call returns a fresh dictionary."""
        assert build_request_headers(1) is not build_request_headers(1)


class TestQueryPage:
    """Test the page buffer."""

    def test_from_body(self):
        """Test decoding rows in order."""
        page = QueryPage.from_body(b'[{"id": "a"}, {"id": "b"}]', "tok")

        assert len(page) == 2
        assert page.continuation_token == "tok"
        assert page.has_unread_row()
        assert page.pop_row() == {"id": "a"}
        assert page.pop_row() == {"id": "b"}
        assert not page.has_unread_row()

    def test_scalar_rows(self):
        """Test that raw queries may return scalar rows."""
        page = QueryPage.from_body(b"[1, \"two\", null]")

        assert [page.pop_row() for _ in range(3)] == [1, "two", None]

    @pytest.mark.parametrize("body", [b"", b"  ", b"[]"])
    def test_empty_page(self, body):
        """Test bodies that carry no rows."""
        page = QueryPage.from_body(body)

        assert not page.has_unread_row()
        assert page.continuation_token is None

    @pytest.mark.parametrize("body", [b"{}", b"not json", b'"text"'])
    def test_malformed_body(self, body):
        """Test bodies that are not JSON arrays."""
        with pytest.raises(MalformedResponseError):
            QueryPage.from_body(body)

    def test_pop_past_end(self):
        """Test popping from an exhausted page."""
        page = QueryPage([])

        with pytest.raises(IndexError):
            page.pop_row()
