"""Result-kind enumeration for IoT Hub queries."""

from enum import Enum
from typing import Optional


class QueryType(str, Enum):
    """Semantic category of a query, as tagged by the ``x-ms-item-type`` header."""

    TWIN = "twin"
    DEVICE_JOB = "deviceJob"
    JOB_RESPONSE = "jobResponse"
    RAW = "raw"
    UNKNOWN = "unknown"

    @classmethod
    def from_header(cls, value: Optional[str]) -> "QueryType":
        """Map a header value to a QueryType.

        Matches the wire value or the member name, ignoring case. Absent or
        unmatched values map to UNKNOWN.
        """
        if not value:
            return cls.UNKNOWN

        candidate = value.strip().lower()
        for member in cls:
            if candidate in (member.value.lower(), member.name.lower()):
                return member
        return cls.UNKNOWN

    @property
    def is_known(self) -> bool:
        return self is not QueryType.UNKNOWN
