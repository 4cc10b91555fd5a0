"""Local emulator of the IoT Hub query endpoints."""

from .app import classify_query, create_app
from .store import QueryStore

__all__ = [
    "classify_query",
    "create_app",
    "QueryStore"
]
