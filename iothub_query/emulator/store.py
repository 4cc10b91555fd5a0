"""In-memory rows served by the query emulator."""

from typing import Any, Dict, List, Optional


DEVICES = "devices"
DEVICE_JOBS = "devices.jobs"
JOBS = "jobs"


class QueryStore:
    """Holds twins, device jobs and job responses for the emulator."""

    def __init__(
        self,
        twins: Optional[List[Dict[str, Any]]] = None,
        device_jobs: Optional[List[Dict[str, Any]]] = None,
        jobs: Optional[List[Dict[str, Any]]] = None
    ):
        self._collections: Dict[str, List[Dict[str, Any]]] = {
            DEVICES: list(twins or []),
            DEVICE_JOBS: list(device_jobs or []),
            JOBS: list(jobs or []),
        }

    @classmethod
    def with_sample_devices(cls, count: int) -> "QueryStore":
        """Create a store with ``count`` generated device twins."""
        twins = [
            {
                "deviceId": f"device-{i:04d}",
                "status": "enabled",
                "properties": {"desired": {}, "reported": {}},
            }
            for i in range(count)
        ]
        return cls(twins=twins)

    def rows(
        self,
        collection: str,
        job_type: Optional[str] = None,
        job_status: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Return the rows of a collection, filtered by job type and status."""
        rows = self._collections[collection]
        if job_type:
            rows = [row for row in rows if row.get("type") == job_type]
        if job_status:
            rows = [row for row in rows if row.get("status") == job_status]
        return rows
