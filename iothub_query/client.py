"""High-level entry points that open query cursors against a hub."""

import logging
from typing import Optional

from .auth import Credential
from .config import Settings, get_settings
from .endpoints import jobs_query_url, twin_query_url
from .errors import InvalidArgumentError
from .models import QueryDescriptor, QueryOptions, QueryType
from .pagination import QueryCursor
from .transport import HttpMethod, HttpTransport, Transport


logger = logging.getLogger(__name__)


class QueryClient:
    """Open paginated queries against one IoT hub.

    Each ``query_*`` method sends the first page request and returns a cursor
    that fetches the remaining pages on demand.
    """

    def __init__(
        self,
        host_name: str,
        credential: Credential,
        transport: Optional[Transport] = None,
        settings: Optional[Settings] = None
    ):
        if credential is None:
            raise InvalidArgumentError("Credential cannot be null")

        self.settings = settings or get_settings()
        self.host_name = host_name
        self.credential = credential
        self._owns_transport = transport is None
        self.transport = transport if transport is not None else HttpTransport(
            timeout=self.settings.request_timeout
        )

        # Validates the host name up front
        self._twin_url = twin_query_url(host_name, self.settings.api_version)

    def query_twins(self, query: str, page_size: Optional[int] = None) -> QueryCursor:
        """Run an SQL-style twin query."""
        descriptor = QueryDescriptor.from_query(query, self._page_size(page_size), QueryType.TWIN)
        return self._open(descriptor, self._twin_url, HttpMethod.POST)

    def query_device_jobs(self, query: str, page_size: Optional[int] = None) -> QueryCursor:
        """Run an SQL-style query over device jobs."""
        descriptor = QueryDescriptor.from_query(query, self._page_size(page_size), QueryType.DEVICE_JOB)
        return self._open(descriptor, self._twin_url, HttpMethod.POST)

    def query_raw(self, query: str, page_size: Optional[int] = None) -> QueryCursor:
        """Run an SQL-style query whose rows are returned as raw JSON."""
        descriptor = QueryDescriptor.from_query(query, self._page_size(page_size), QueryType.RAW)
        return self._open(descriptor, self._twin_url, HttpMethod.POST)

    def query_job_responses(
        self,
        job_type: Optional[str] = None,
        job_status: Optional[str] = None,
        page_size: Optional[int] = None
    ) -> QueryCursor:
        """List job responses, optionally filtered by job type and status."""
        descriptor = QueryDescriptor.from_page_size(self._page_size(page_size), QueryType.JOB_RESPONSE)
        url = jobs_query_url(self.host_name, self.settings.api_version, job_type, job_status)
        return self._open(descriptor, url, HttpMethod.GET)

    def resume(self, options: QueryOptions, query_type: QueryType) -> QueryCursor:
        """Resume a query from a continuation token persisted earlier.

        Job response queries resume on the jobs endpoint, every other kind on
        the twin query endpoint.
        """
        descriptor = QueryDescriptor.from_options(options, query_type)
        if query_type is QueryType.JOB_RESPONSE:
            url = jobs_query_url(self.host_name, self.settings.api_version)
            return self._open(descriptor, url, HttpMethod.GET)
        return self._open(descriptor, self._twin_url, HttpMethod.POST)

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> "QueryClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def _page_size(self, page_size: Optional[int]) -> int:
        return self.settings.default_page_size if page_size is None else page_size

    def _open(self, descriptor: QueryDescriptor, url: str, method: HttpMethod) -> QueryCursor:
        cursor = QueryCursor(descriptor, self.transport, settings=self.settings)
        logger.debug("Opening %s query cursor on %s", descriptor.query_type.value, url)
        cursor.send_query_request(
            self.credential,
            url,
            method,
            timeout=self.settings.request_timeout
        )
        return cursor
