"""Problem Details (RFC 9457) model shared by the query client and the emulator."""

import json
from typing import Optional

from pydantic import BaseModel, Field, ValidationError


PROBLEM_JSON_CONTENT_TYPE = "application/problem+json"


class ProblemDetail(BaseModel):
    """Problem Details as defined in RFC 9457."""

    type: str = Field(default="about:blank", description="A URI reference that identifies the problem type")
    title: str = Field(description="A short, human-readable summary of the problem type")
    status: int = Field(description="The HTTP status code")
    detail: Optional[str] = Field(default=None, description="A human-readable explanation specific to this occurrence")
    instance: Optional[str] = Field(default=None, description="A URI reference that identifies the specific occurrence")

    # Allow additional properties for extensions
    model_config = {"extra": "allow"}


def parse_problem_detail(body: bytes) -> Optional[ProblemDetail]:
    """Parse a response body as a Problem Details document.

    Args:
        body: Raw response body

    Returns:
        The parsed ProblemDetail, or None if the body is not a problem document
    """
    if not body:
        return None

    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None

    if not isinstance(payload, dict):
        return None

    try:
        return ProblemDetail.model_validate(payload)
    except ValidationError:
        return None
