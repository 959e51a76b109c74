"""
Resource clients for connectkit.

Each resource is a thin facade over the shared BackendClient:

    models/
    ├── apps.py                # Apps: catalog and auth requirements
    ├── integrations.py        # Integrations: reusable auth configs
    └── connected_accounts.py  # ConnectedAccounts, ConnectionRequest
"""

from connectkit.models.apps import Apps, summarize_auth_scheme
from connectkit.models.connected_accounts import (
    ConnectedAccounts,
    ConnectionRequest,
    generate_integration_name,
)
from connectkit.models.integrations import Integrations

__all__ = [
    "Apps",
    "ConnectedAccounts",
    "ConnectionRequest",
    "Integrations",
    "generate_integration_name",
    "summarize_auth_scheme",
]
