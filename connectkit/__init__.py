"""
connectkit - An async Python SDK for a workflow-automation platform's apps,
integrations and connected accounts.

Features:

- **App catalog**: List apps and summarise which credential fields each
  auth scheme needs
- **Connected accounts**: Create, list, fetch and delete connections
- **Connection requests**: Submit end-user credentials and wait for
  activation
- **Unified errors**: Every failure surfaces as an SDKError subclass
- **Telemetry**: Best-effort, fire-and-forget method events

Quick Start:
    >>> from connectkit import ConnectKit
    >>>
    >>> async with ConnectKit(api_key="ck_xxx") as kit:
    ...     summary = await kit.apps.get_required_params("github")
    ...     request = await kit.connected_accounts.initiate(
    ...         {"integrationId": "int-123", "entityId": "user-42"}
    ...     )
    ...     account = await request.wait_until_active(timeout=120)
"""

__version__ = "0.1.0"
__license__ = "MIT"

from connectkit.client import BackendClient
from connectkit.config import BackendConfig, SDKSettings, get_settings
from connectkit.errors import (
    ApiError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    SDKError,
    SDKTimeoutError,
    ValidationError,
    handle_all_error,
)
from connectkit.models import (
    Apps,
    ConnectedAccounts,
    ConnectionRequest,
    Integrations,
)
from connectkit.sdk import ConnectKit

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Entry point
    "ConnectKit",
    # Configuration and transport
    "BackendClient",
    "BackendConfig",
    "SDKSettings",
    "get_settings",
    # Resources
    "Apps",
    "ConnectedAccounts",
    "ConnectionRequest",
    "Integrations",
    # Errors
    "ApiError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "SDKError",
    "SDKTimeoutError",
    "ValidationError",
    "handle_all_error",
]
