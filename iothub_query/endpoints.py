"""URL builders for the IoT Hub query endpoints."""

from typing import Optional
from urllib.parse import urlencode

from .errors import InvalidArgumentError


def _base_url(host_name: str) -> str:
    if not host_name or not host_name.strip():
        raise InvalidArgumentError("Host name cannot be empty")
    host_name = host_name.strip().rstrip("/")
    if "://" in host_name:
        return host_name
    return f"https://{host_name}"


def twin_query_url(host_name: str, api_version: Optional[str] = None) -> str:
    """URL of the twin and device job query endpoint (POST, query text in body)."""
    url = f"{_base_url(host_name)}/devices/query"
    if api_version:
        url += "?" + urlencode({"api-version": api_version})
    return url


def jobs_query_url(
    host_name: str,
    api_version: Optional[str] = None,
    job_type: Optional[str] = None,
    job_status: Optional[str] = None
) -> str:
    """URL of the job response query endpoint (GET, filters in the query string)."""
    params = {}
    if job_type:
        params["jobType"] = job_type
    if job_status:
        params["jobStatus"] = job_status
    if api_version:
        params["api-version"] = api_version

    url = f"{_base_url(host_name)}/jobs/v2/query"
    if params:
        url += "?" + urlencode(params)
    return url
