"""Authentication helpers for the query client."""

from .credentials import Credential, SharedAccessTokenCredential

__all__ = [
    "Credential",
    "SharedAccessTokenCredential"
]
