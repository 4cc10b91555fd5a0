"""Data models for IoT Hub queries."""

from .query_type import QueryType
from .options import QueryOptions
from .descriptor import QueryDescriptor
from .transport_context import BoundTransport

__all__ = [
    "QueryType",
    "QueryOptions",
    "QueryDescriptor",
    "BoundTransport"
]
