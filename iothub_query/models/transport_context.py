"""Transport parameters bound to a cursor by its last explicit dispatch."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..transport.base import HttpMethod


class BoundTransport(BaseModel):
    """Credential, endpoint, method and timeout reused by auto-continuation.

    The credential is opaque here and only forwarded to the transport.
    """

    model_config = ConfigDict(frozen=True)

    credential: Any = Field(description="Credential forwarded to the transport")
    endpoint: str = Field(min_length=1, description="Absolute URL of the query endpoint")
    method: HttpMethod = Field(description="HTTP method of the query request")
    timeout: Optional[float] = Field(default=None, description="Request timeout in seconds")
