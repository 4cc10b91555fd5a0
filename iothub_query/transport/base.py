"""Transport contract consumed by the query cursor."""

from enum import Enum
from typing import Dict, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from ..auth import Credential


class HttpMethod(str, Enum):
    """HTTP methods accepted for query requests."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class TransportResponse(BaseModel):
    """Status, headers and raw body of one query response."""

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(description="HTTP status code")
    headers: Dict[str, str] = Field(default_factory=dict, description="Response headers")
    body: bytes = Field(default=b"", description="Raw response body")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class Transport(Protocol):
    """Performs the request/response exchange for a query page.

    Implementations raise ``ServiceRejectedError`` for non-success statuses
    and let transport-level I/O failures propagate.
    """

    def execute(
        self,
        credential: Credential,
        endpoint: str,
        method: HttpMethod,
        body: bytes,
        extra_headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> TransportResponse:
        """Send one request and return the response."""
        ...
