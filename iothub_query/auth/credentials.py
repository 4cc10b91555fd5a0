"""Credentials forwarded to the transport on every query request."""

from typing import Dict, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


@runtime_checkable
class Credential(Protocol):
    """Anything able to authorize a request to the hub."""

    def authorization_headers(self) -> Dict[str, str]:
        """Return the headers that authorize a request."""
        ...


class SharedAccessTokenCredential(BaseModel):
    """Pre-computed shared access signature sent as the Authorization header."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(min_length=1, repr=False, description="Shared access signature")

    def authorization_headers(self) -> Dict[str, str]:
        return {"Authorization": self.token}
