"""Pytest configuration and shared fixtures for the query client tests."""

import json
import logging
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from iothub_query.auth import SharedAccessTokenCredential
from iothub_query.config import Settings
from iothub_query.emulator import QueryStore, create_app
from iothub_query.transport import HttpTransport, TransportResponse


# Disable logging for cleaner test output
logging.getLogger("httpx").setLevel(logging.WARNING)

TEST_TOKEN = "SharedAccessSignature sr=test-hub&sig=test&se=0&skn=service"
TWIN_QUERY_URL = "https://test-hub.azure-devices.net/devices/query"


def make_response(
    rows: Optional[List[Any]] = None,
    item_type: Optional[str] = "twin",
    continuation: Optional[str] = None,
    status_code: int = 200,
    body: Optional[bytes] = None
) -> TransportResponse:
    """Build a transport response carrying one query page."""
    headers: Dict[str, str] = {}
    if item_type is not None:
        headers["x-ms-item-type"] = item_type
    if continuation is not None:
        headers["x-ms-continuation"] = continuation
    if body is None:
        body = json.dumps(rows if rows is not None else []).encode("utf-8")
    return TransportResponse(status_code=status_code, headers=headers, body=body)


@pytest.fixture
def test_settings() -> Settings:
    """Settings used by unit and integration tests."""
    return Settings(
        default_page_size=100,
        request_timeout=5.0,
        log_level="ERROR",
        legacy_select_all_body=True,
        emulator_token=TEST_TOKEN
    )


@pytest.fixture
def credential() -> SharedAccessTokenCredential:
    """Credential accepted by the emulator."""
    return SharedAccessTokenCredential(token=TEST_TOKEN)


@pytest.fixture
def mock_transport() -> MagicMock:
    """Transport double; set ``execute.side_effect`` to a list of responses."""
    transport = MagicMock()
    transport.execute = MagicMock()
    return transport


# Emulator fixtures
@pytest.fixture
def twins() -> List[Dict[str, Any]]:
    """Five device twins for pagination testing."""
    return [{"deviceId": f"device-{i}", "status": "enabled"} for i in range(5)]


@pytest.fixture
def jobs() -> List[Dict[str, Any]]:
    """Job responses of mixed types and statuses."""
    return [
        {"jobId": "job-1", "type": "scheduleUpdateTwin", "status": "completed"},
        {"jobId": "job-2", "type": "scheduleDeviceMethod", "status": "running"},
        {"jobId": "job-3", "type": "scheduleUpdateTwin", "status": "running"},
        {"jobId": "job-4", "type": "scheduleUpdateTwin", "status": "completed"},
    ]


@pytest.fixture
def device_jobs() -> List[Dict[str, Any]]:
    """Device jobs for the devices.jobs collection."""
    return [
        {"deviceId": "device-0", "jobId": "job-1", "status": "completed"},
        {"deviceId": "device-1", "jobId": "job-1", "status": "failed"},
    ]


@pytest.fixture
def store(twins, jobs, device_jobs) -> QueryStore:
    """Emulator store seeded with sample rows."""
    return QueryStore(twins=twins, device_jobs=device_jobs, jobs=jobs)


@pytest.fixture
def emulator_app(store: QueryStore, test_settings: Settings) -> FastAPI:
    """Emulator application instance."""
    return create_app(store, test_settings)


@pytest.fixture
def emulator_client(emulator_app: FastAPI) -> TestClient:
    """Test client for the emulator; also an httpx.Client."""
    return TestClient(emulator_app)


@pytest.fixture
def emulator_transport(emulator_client: TestClient) -> HttpTransport:
    """HTTP transport routed to the in-process emulator."""
    return HttpTransport(client=emulator_client, timeout=5.0)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
