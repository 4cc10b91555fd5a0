"""Transport layer for query requests."""

from .base import HttpMethod, Transport, TransportResponse
from .http import HttpTransport

__all__ = [
    "HttpMethod",
    "Transport",
    "TransportResponse",
    "HttpTransport"
]
