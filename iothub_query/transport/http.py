"""httpx-backed transport for IoT Hub query requests."""

import logging
from typing import Dict, Optional

import httpx

from ..auth import Credential
from ..config import get_settings
from ..errors import ServiceRejectedError, parse_problem_detail
from .base import HttpMethod, TransportResponse


logger = logging.getLogger(__name__)


class HttpTransport:
    """Send query requests over HTTP with an ``httpx.Client``.

    The transport owns the client it creates and closes it on ``close()``;
    a client passed in by the caller is left open.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
        api_version: Optional[str] = None
    ):
        """Initialize the transport.

        Args:
            client: Existing client to reuse, a new one is created if omitted
            timeout: Default timeout in seconds when a request does not set one
            api_version: Value for the ``api-version`` query parameter, if not
                already present on the endpoint
        """
        settings = get_settings()
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.api_version = api_version
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=self.timeout)

    def execute(
        self,
        credential: Credential,
        endpoint: str,
        method: HttpMethod,
        body: bytes,
        extra_headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> TransportResponse:
        """Send a query request and return its response.

        Args:
            credential: Credential providing the Authorization header
            endpoint: Absolute URL of the query endpoint
            method: HTTP method
            body: Serialized request body
            extra_headers: Per-request headers such as paging headers
            timeout: Timeout in seconds for this request

        Returns:
            TransportResponse with status, headers and body

        Raises:
            ServiceRejectedError: If the status is not 2xx
            httpx.TransportError: If the request could not be completed
        """
        headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        headers.update(credential.authorization_headers())
        if extra_headers:
            headers.update(extra_headers)

        url = httpx.URL(endpoint)
        if self.api_version and "api-version" not in url.params:
            url = url.copy_merge_params({"api-version": self.api_version})

        response = self._client.request(
            method.value,
            url,
            content=body,
            headers=headers,
            timeout=timeout if timeout is not None else self.timeout
        )

        result = TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content
        )

        if not result.is_success:
            logger.error(
                "Query request to %s failed with status %d",
                url,
                response.status_code
            )
            raise ServiceRejectedError(
                status=response.status_code,
                problem=parse_problem_detail(response.content)
            )

        return result

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
