"""
Pytest configuration and fixtures for connectkit tests.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

# Add the repository root to path for imports
# This allows `from connectkit import ...` to work without installing
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from connectkit.client import BackendClient
from connectkit.config import BackendConfig
from connectkit.telemetry import TelemetryEvent, TelemetryLogger


class RecordingSink:
    """Telemetry sink that keeps every event in memory."""

    def __init__(self):
        self.events: list[TelemetryEvent] = []

    async def send(self, event: TelemetryEvent) -> None:
        self.events.append(event)

    async def close(self) -> None:
        return None


@pytest.fixture
def backend_config():
    """Test backend configuration."""
    return BackendConfig(api_key="ck_test_key", base_url="https://backend.test")


@pytest.fixture
def backend_client(backend_config):
    """Backend client whose request() is never sent over the network."""
    return BackendClient(backend_config)


@pytest.fixture
def mock_request(backend_client):
    """Patch BackendClient.request with an AsyncMock."""
    with patch.object(backend_client, "request", new_callable=AsyncMock) as mocked:
        yield mocked


@pytest.fixture
def telemetry_sink():
    return RecordingSink()


@pytest.fixture
def telemetry(telemetry_sink):
    return TelemetryLogger(telemetry_sink)


@pytest.fixture
def github_app_data():
    """App detail as returned by GET /api/v1/apps/github."""
    return {
        "appId": "app-github-uuid",
        "key": "github",
        "name": "GitHub",
        "description": "Code hosting",
        "logo": "https://logos.test/github.png",
        "categories": ["developer tools"],
        "enabled": True,
        "auth_schemes": [
            {
                "mode": "OAUTH2",
                "name": "github_oauth",
                "fields": [
                    {"name": "client_id", "required": True, "expected_from_customer": False},
                    {"name": "client_secret", "required": True, "expected_from_customer": False},
                    {"name": "scopes", "required": False, "expected_from_customer": False},
                    {"name": "installation_id", "required": False, "expected_from_customer": True},
                ],
            },
            {
                "mode": "API_KEY",
                "fields": [
                    {"name": "api_key", "required": True, "expected_from_customer": True},
                    {"name": "base_url", "required": False},
                ],
            },
        ],
    }


@pytest.fixture
def connected_account_data():
    """Connected account as returned by GET /api/v1/connectedAccounts/{id}."""
    return {
        "id": "ca-123",
        "integrationId": "int-456",
        "status": "INITIATED",
        "clientUniqueUserId": "user-42",
        "appName": "github",
        "createdAt": "2024-01-05T09:30:15.123Z",
    }
