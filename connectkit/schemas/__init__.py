"""
Pydantic schemas for connectkit.

These schemas provide type-safe representations of platform resources
with validation at the HTTP boundary.
"""

from connectkit.schemas.app import (
    App,
    AppList,
    AuthScheme,
    AuthSchemeField,
    GetAppParams,
    GetRequiredParams,
    GetRequiredParamsForAuthScheme,
    RequiredParamsFullResponse,
    RequiredParamsResponse,
)
from connectkit.schemas.connected_account import (
    DEFAULT_ENTITY_ID,
    ConnectedAccount,
    ConnectedAccountList,
    ConnectionInfo,
    ConnectionParameter,
    ConnectionStatus,
    DeleteResponse,
    InitiateConnectionDataReq,
    InitiateConnectionPayload,
    InitiateConnectionResponse,
    ListConnectionsQuery,
    SaveUserAccessDataParam,
    SingleConnectionParams,
)
from connectkit.schemas.integration import (
    AuthMode,
    CreateIntegrationParams,
    Integration,
    IntegrationList,
    ListIntegrationsQuery,
    SingleIntegrationParams,
)

__all__ = [
    "DEFAULT_ENTITY_ID",
    "App",
    "AppList",
    "AuthMode",
    "AuthScheme",
    "AuthSchemeField",
    "ConnectedAccount",
    "ConnectedAccountList",
    "ConnectionInfo",
    "ConnectionParameter",
    "ConnectionStatus",
    "CreateIntegrationParams",
    "DeleteResponse",
    "GetAppParams",
    "GetRequiredParams",
    "GetRequiredParamsForAuthScheme",
    "InitiateConnectionDataReq",
    "InitiateConnectionPayload",
    "InitiateConnectionResponse",
    "Integration",
    "IntegrationList",
    "ListConnectionsQuery",
    "ListIntegrationsQuery",
    "RequiredParamsFullResponse",
    "RequiredParamsResponse",
    "SaveUserAccessDataParam",
    "SingleConnectionParams",
    "SingleIntegrationParams",
]
