"""Cursor over the paginated IoT Hub query protocol."""

import logging
from enum import Enum
from typing import Any, Callable, Iterator, Optional, Union

from pydantic import ValidationError

from ..auth import Credential
from ..config import Settings, get_settings
from ..errors import (
    CursorStateError,
    InvalidArgumentError,
    MalformedResponseError,
    NoMoreElementsError,
    ServiceRejectedError,
    parse_problem_detail
)
from ..models import BoundTransport, QueryDescriptor, QueryOptions, QueryType
from ..serializer import LEGACY_SELECT_ALL_BODY, serialize_query
from ..transport import HttpMethod, Transport
from .headers import ResponseHeaders, build_request_headers
from .page import QueryPage


logger = logging.getLogger(__name__)

PageFactory = Callable[[bytes, Optional[str]], QueryPage]


class CursorState(str, Enum):
    """Position of a cursor in the paging state machine."""

    UNSTARTED = "unstarted"
    ROWS_REMAINING = "rows_remaining"
    EXHAUSTED_WITH_TOKEN = "exhausted_with_token"
    FETCHING = "fetching"
    TERMINAL = "terminal"


class QueryCursor:
    """Pull rows from a query, fetching follow-up pages on demand.

    The first page is requested explicitly with ``send_query_request``. The
    transport parameters of that call are bound to the cursor and reused
    whenever ``has_next()`` finds the current page exhausted while the service
    still holds a continuation token.

    A cursor holds one page at a time and is not safe for concurrent use.
    """

    def __init__(
        self,
        descriptor: QueryDescriptor,
        transport: Transport,
        page_factory: PageFactory = QueryPage.from_body,
        settings: Optional[Settings] = None
    ):
        """Initialize the cursor.

        Args:
            descriptor: Validated query parameters
            transport: Transport used for every page request
            page_factory: Builds a page from a response body and its token
            settings: Client settings, the global settings if omitted
        """
        if descriptor is None:
            raise InvalidArgumentError("Query descriptor cannot be null")
        if transport is None:
            raise InvalidArgumentError("Transport cannot be null")

        self._descriptor = descriptor
        self._transport = transport
        self._page_factory = page_factory
        self._settings = settings or get_settings()

        self._response_query_type = QueryType.UNKNOWN
        self._page: Optional[QueryPage] = None
        self._bound: Optional[BoundTransport] = None
        self._fetching = False
        self._legacy_body_logged = False

    @property
    def descriptor(self) -> QueryDescriptor:
        return self._descriptor

    @property
    def request_query_type(self) -> QueryType:
        return self._descriptor.query_type

    @property
    def response_query_type(self) -> QueryType:
        return self._response_query_type

    @property
    def bound_transport(self) -> Optional[BoundTransport]:
        return self._bound

    @property
    def page(self) -> Optional[QueryPage]:
        return self._page

    @property
    def state(self) -> CursorState:
        if self._fetching:
            return CursorState.FETCHING
        if self._page is None:
            return CursorState.UNSTARTED
        if self._page.has_unread_row():
            return CursorState.ROWS_REMAINING
        if self._page.continuation_token is not None:
            return CursorState.EXHAUSTED_WITH_TOKEN
        return CursorState.TERMINAL

    def send_query_request(
        self,
        credential: Credential,
        endpoint: str,
        method: Union[HttpMethod, str],
        timeout: Optional[float] = None,
        continuation_token: Optional[str] = None
    ) -> None:
        """Request a page and make it the current page of the cursor.

        The transport parameters are bound to the cursor for later
        auto-continuation. Without an explicit token, the descriptor's resume
        token (if any) is sent.

        Args:
            credential: Credential forwarded to the transport
            endpoint: Absolute URL of the query endpoint
            method: HTTP method
            timeout: Timeout in seconds, the transport default if None
            continuation_token: Token of the page to request

        Raises:
            InvalidArgumentError: If credential, endpoint or method is missing
            MalformedResponseError: If the response item type is missing,
                unknown or different from the requested one
            ServiceRejectedError: If the service rejects the request
        """
        if self._fetching:
            raise CursorStateError("A page request is already in flight for this cursor")
        if credential is None or not endpoint or method is None:
            raise InvalidArgumentError("Credential, endpoint and method cannot be null")
        if timeout is not None and timeout <= 0:
            raise InvalidArgumentError("Timeout must be positive")

        try:
            method = HttpMethod(method.upper() if isinstance(method, str) else method)
        except ValueError as e:
            raise InvalidArgumentError(f"Unsupported HTTP method: {method!r}") from e

        try:
            self._bound = BoundTransport(
                credential=credential,
                endpoint=endpoint,
                method=method,
                timeout=timeout
            )
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid transport parameters: {e}") from e

        if continuation_token is None:
            continuation_token = self._descriptor.resume_token

        self._fetch_page(continuation_token)

    def has_next(self, options: Optional[QueryOptions] = None) -> bool:
        """Return whether another row is available.

        When the current page is exhausted and a continuation token remains,
        the next page is fetched with the bound transport parameters. With
        ``options``, the page at ``options.continuation_token`` is fetched
        first regardless of the token the cursor holds.

        Raises:
            CursorStateError: If no page has been requested yet
            MalformedResponseError: If a follow-up response is malformed
            ServiceRejectedError: If the service rejects a follow-up request
        """
        if options is not None:
            self._continue_with(options)

        page = self._require_page()
        followed = set()
        while not page.has_unread_row() and page.continuation_token is not None:
            token = page.continuation_token
            if token in followed:
                raise MalformedResponseError(
                    "Query response returned an empty page with an already followed continuation token"
                )
            followed.add(token)
            self._continue_query(token)
            page = self._require_page()

        return page.has_unread_row()

    def next(self, options: Optional[QueryOptions] = None) -> Any:
        """Return the next row, fetching the next page if needed.

        Raises:
            NoMoreElementsError: If every row has been consumed and no
                continuation token remains
        """
        if self.has_next(options):
            return self._page.pop_row()
        raise NoMoreElementsError("No more elements in the query response")

    def get_continuation_token(self) -> Optional[str]:
        """Return the continuation token of the current page.

        The token can be persisted and later passed back through
        ``QueryOptions`` to resume the query.

        Raises:
            CursorStateError: If no page has been fetched yet
        """
        return self._require_page().continuation_token

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        try:
            return self.next()
        except NoMoreElementsError:
            raise StopIteration from None

    def _continue_with(self, options: QueryOptions) -> None:
        if not options.continuation_token:
            raise InvalidArgumentError("Continuation token cannot be null or empty")
        self._continue_query(options.continuation_token)

    def _continue_query(self, continuation_token: str) -> None:
        """Fetch the page at ``continuation_token`` with the bound transport."""
        if self._bound is None:
            raise CursorStateError("Cursor is not bound to a transport; call send_query_request first")

        logger.info(
            "Continuing %s query at %s",
            self._descriptor.query_type.value,
            self._bound.endpoint
        )
        self._fetch_page(continuation_token)

    def _fetch_page(self, continuation_token: Optional[str]) -> None:
        # Cursor state changes only after the whole response validated
        if self._fetching:
            raise CursorStateError("A page request is already in flight for this cursor")

        bound = self._bound
        self._fetching = True
        try:
            headers = build_request_headers(self._descriptor.page_size, continuation_token)
            logger.debug(
                "Sending %s query request to %s (page size %d, continuation %s)",
                self._descriptor.query_type.value,
                bound.endpoint,
                self._descriptor.page_size,
                "yes" if continuation_token is not None else "no"
            )

            response = self._transport.execute(
                bound.credential,
                bound.endpoint,
                bound.method,
                self._build_body(),
                headers,
                bound.timeout
            )
            if not response.is_success:
                raise ServiceRejectedError(
                    status=response.status_code,
                    problem=parse_problem_detail(response.body)
                )

            paging = ResponseHeaders.from_headers(response.headers)
            if not paging.item_type.is_known:
                logger.warning("Query response from %s has no item type", bound.endpoint)
                raise MalformedResponseError("Query response type is not defined by the service")

            if paging.item_type is not self._descriptor.query_type:
                logger.warning(
                    "Query response type %s does not match requested type %s",
                    paging.item_type.value,
                    self._descriptor.query_type.value
                )
                raise MalformedResponseError("Query response does not match query request")

            page = self._page_factory(response.body, paging.continuation_token)
        finally:
            self._fetching = False

        self._response_query_type, self._page = paging.item_type, page
        logger.debug(
            "Received %s query page (continuation %s)",
            paging.item_type.value,
            "yes" if page.continuation_token is not None else "no"
        )

    def _build_body(self) -> bytes:
        if self._descriptor.is_sql_query:
            return serialize_query(self._descriptor.query)

        if not self._settings.legacy_select_all_body:
            return b""

        if not self._legacy_body_logged:
            logger.warning(
                "Sending legacy 'select * from devices' body for a %s query without text",
                self._descriptor.query_type.value
            )
            self._legacy_body_logged = True
        return LEGACY_SELECT_ALL_BODY

    def _require_page(self) -> QueryPage:
        if self._page is None:
            raise CursorStateError("No query page has been fetched; call send_query_request first")
        return self._page
