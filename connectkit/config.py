"""
Configuration for connectkit.

Two layers:
- BackendConfig: immutable settings the HTTP client is built from
- SDKSettings: environment-level settings (API key kept as SecretStr)

Environment variables:
    CONNECTKIT_API_KEY             API key sent as x-api-key
    CONNECTKIT_BASE_URL            Backend base URL
    CONNECTKIT_TIMEOUT             Request timeout in seconds
    CONNECTKIT_TELEMETRY_ENABLED   "false" disables telemetry
    CONNECTKIT_TELEMETRY_URL       Optional HTTP endpoint for telemetry events
    CONNECTKIT_DEBUG               "true" logs request and response bodies
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from pydantic import BaseModel, Field, SecretStr

DEFAULT_BASE_URL = "https://backend.composio.dev"


@dataclass(frozen=True, slots=True)
class BackendConfig:
    """Configuration for the backend HTTP client."""

    # Authentication
    api_key: str = ""

    # Connection
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0

    # Observability
    log_requests: bool = False
    log_responses: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if not self.api_key:
            raise ValueError("API key is required")


class SDKSettings(BaseModel):
    """
    SDK settings model.

    Security:
        The API key uses SecretStr to prevent accidental logging.
        Access it with: settings.api_key.get_secret_value()
    """

    api_key: SecretStr = Field(default=SecretStr(""), description="Platform API key")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Backend base URL")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    debug: bool = False

    # Telemetry
    telemetry_enabled: bool = True
    telemetry_url: str | None = None

    def to_backend_config(self) -> BackendConfig:
        """Build the HTTP client configuration."""
        return BackendConfig(
            api_key=self.api_key.get_secret_value(),
            base_url=self.base_url,
            timeout=self.timeout,
            log_requests=self.debug,
            log_responses=self.debug,
        )


@lru_cache()
def get_settings() -> SDKSettings:
    """
    Get SDK settings from environment.

    Uses lru_cache for singleton pattern.
    """
    return SDKSettings(
        api_key=SecretStr(os.getenv("CONNECTKIT_API_KEY", "")),
        base_url=os.getenv("CONNECTKIT_BASE_URL", DEFAULT_BASE_URL),
        timeout=float(os.getenv("CONNECTKIT_TIMEOUT", "30")),
        debug=os.getenv("CONNECTKIT_DEBUG", "false").lower() == "true",
        telemetry_enabled=os.getenv("CONNECTKIT_TELEMETRY_ENABLED", "true").lower() == "true",
        telemetry_url=os.getenv("CONNECTKIT_TELEMETRY_URL") or None,
    )
