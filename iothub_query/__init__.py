"""Client-side cursor over the paginated IoT Hub query protocol."""

from .auth import Credential, SharedAccessTokenCredential
from .client import QueryClient
from .config import Settings, get_settings
from .errors import (
    QueryError,
    InvalidArgumentError,
    MalformedResponseError,
    ServiceRejectedError,
    NoMoreElementsError,
    CursorStateError
)
from .models import QueryDescriptor, QueryOptions, QueryType
from .pagination import CursorState, QueryCursor, QueryPage
from .transport import HttpMethod, HttpTransport, Transport, TransportResponse

__all__ = [
    "Credential",
    "SharedAccessTokenCredential",
    "QueryClient",
    "Settings",
    "get_settings",
    "QueryError",
    "InvalidArgumentError",
    "MalformedResponseError",
    "ServiceRejectedError",
    "NoMoreElementsError",
    "CursorStateError",
    "QueryDescriptor",
    "QueryOptions",
    "QueryType",
    "CursorState",
    "QueryCursor",
    "QueryPage",
    "HttpMethod",
    "HttpTransport",
    "Transport",
    "TransportResponse"
]
