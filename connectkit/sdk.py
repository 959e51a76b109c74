"""
ConnectKit entry point.

Wires one BackendClient and one TelemetryLogger into every resource.

Usage:
    async with ConnectKit(api_key="ck_xxx") as kit:
        apps = await kit.apps.list()
        request = await kit.connected_accounts.initiate(
            {"appName": "github", "authMode": "OAUTH2", "authConfig": {...}}
        )
"""

from __future__ import annotations

import logging

import httpx

from connectkit.client import BackendClient
from connectkit.config import BackendConfig, SDKSettings, get_settings
from connectkit.models.apps import Apps
from connectkit.models.connected_accounts import ConnectedAccounts
from connectkit.models.integrations import Integrations
from connectkit.telemetry import (
    HTTPTelemetrySink,
    LoggingTelemetrySink,
    TelemetryEvents,
    TelemetryLogger,
)

logger = logging.getLogger(__name__)


def build_telemetry(settings: SDKSettings) -> TelemetryLogger:
    """Telemetry logger matching the settings."""
    if not settings.telemetry_enabled:
        return TelemetryLogger.disabled()
    if settings.telemetry_url:
        return TelemetryLogger(HTTPTelemetrySink(settings.telemetry_url))
    return TelemetryLogger(LoggingTelemetrySink())


class ConnectKit:
    """
    Top-level SDK client.

    Attributes:
        apps: App catalog
        integrations: Integration records
        connected_accounts: Connected accounts and connection requests
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        *,
        settings: SDKSettings | None = None,
        telemetry: TelemetryLogger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the SDK.

        Args:
            api_key: Overrides CONNECTKIT_API_KEY
            base_url: Overrides CONNECTKIT_BASE_URL
            settings: Explicit settings (default: read from environment)
            telemetry: Explicit telemetry logger
            transport: Optional httpx transport (used by tests)

        Raises:
            ValueError: If no API key is available
        """
        settings = settings or get_settings()
        base_config = BackendConfig(
            api_key=api_key or settings.api_key.get_secret_value(),
            base_url=base_url or settings.base_url,
            timeout=settings.timeout,
            log_requests=settings.debug,
            log_responses=settings.debug,
        )

        self.settings = settings
        self.backend_client = BackendClient(base_config, transport=transport)
        self.telemetry = telemetry if telemetry is not None else build_telemetry(settings)

        self.apps = Apps(self.backend_client, self.telemetry)
        self.integrations = Integrations(self.backend_client, self.telemetry)
        self.connected_accounts = ConnectedAccounts(
            self.backend_client,
            self.telemetry,
            apps=self.apps,
            integrations=self.integrations,
        )

        logger.debug(f"[connectkit] Initialized for {base_config.base_url}")
        self.telemetry.manual_telemetry(
            TelemetryEvents.SDK_INITIALIZED,
            {"method": "__init__", "file": __name__, "params": {"base_url": base_config.base_url}},
        )

    async def close(self) -> None:
        """Close the HTTP client and flush pending telemetry."""
        await self.telemetry.close()
        await self.backend_client.close()

    async def __aenter__(self) -> ConnectKit:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
