"""Opaque continuation tokens issued by the query emulator."""

import base64
import binascii
import json
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .problems import BadRequestError


class ContinuationData(BaseModel):
    """Position of the next page inside a query result."""

    offset: int = Field(ge=0, description="Index of the first row of the next page")
    collection: str = Field(description="Collection the query reads from")
    item_type: str = Field(description="Item type tag of the result rows")
    job_type: Optional[str] = Field(default=None, description="Job type filter")
    job_status: Optional[str] = Field(default=None, description="Job status filter")


def encode_token(data: ContinuationData) -> str:
    """Encode continuation data as a base64 token."""
    token_json = data.model_dump_json(exclude_none=True)
    return base64.urlsafe_b64encode(token_json.encode("utf-8")).decode("ascii")


def decode_token(token: str) -> ContinuationData:
    """Decode a continuation token.

    Args:
        token: Base64 encoded token

    Returns:
        Decoded continuation data

    Raises:
        BadRequestError: If the token is empty or malformed
    """
    if not token:
        raise BadRequestError("Empty continuation token provided")

    try:
        token_json = base64.urlsafe_b64decode(token.encode("ascii")).decode("utf-8")
        return ContinuationData.model_validate(json.loads(token_json))
    except (ValueError, TypeError, binascii.Error, ValidationError) as e:
        raise BadRequestError(f"Invalid continuation token: {e}")
