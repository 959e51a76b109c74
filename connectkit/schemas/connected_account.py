"""
Pydantic schemas for connected accounts.

The initiate-connection response is modelled with every field optional:
the backend may omit any of them and callers are expected to check.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from connectkit.schemas.integration import AuthMode

DEFAULT_ENTITY_ID = "default"

# =============================================================================
# Enums
# =============================================================================


class ConnectionStatus(str, Enum):
    """Lifecycle states of a connected account."""

    INITIATED = "INITIATED"
    ACTIVE = "ACTIVE"
    FAILED = "FAILED"
    EXPIRED = "EXPIRED"


# =============================================================================
# Request Schemas
# =============================================================================


class ListConnectionsQuery(BaseModel):
    """
    Query parameters for listing connected accounts.

    Unknown filters are kept and sent as-is.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    page: int | None = Field(None, ge=1)
    page_size: int | None = Field(None, ge=1, alias="pageSize")
    app_names: str | None = Field(None, alias="appNames")
    integration_id: str | None = Field(None, alias="integrationId")
    show_active_only: bool | None = Field(None, alias="showActiveOnly")
    status: str | None = None
    user_uuid: str | None = None
    labels: list[str] | None = None

    def to_params(self) -> dict[str, Any]:
        """Convert to query parameters."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SingleConnectionParams(BaseModel):
    """Identifies one connected account."""

    connected_account_id: str = Field(..., min_length=1)


class InitiateConnectionPayload(BaseModel):
    """Fully specified initiate-connection request (integration already known)."""

    model_config = ConfigDict(populate_by_name=True)

    integration_id: str = Field(..., min_length=1, alias="integrationId")
    entity_id: str | None = Field(None, alias="entityId")
    labels: list[str] | None = None
    redirect_uri: str | None = Field(None, alias="redirectUri")
    data: dict[str, Any] | None = None

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to API request format, excluding None values."""
        return self.model_dump(by_alias=True, exclude_none=True)


class InitiateConnectionDataReq(BaseModel):
    """
    Initiate-connection request that may omit the integration id.

    Without integration_id, app_name, auth_mode and auth_config are used to
    create a fresh integration first.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    integration_id: str | None = Field(None, alias="integrationId")
    entity_id: str = Field(DEFAULT_ENTITY_ID, alias="entityId")
    labels: list[str] | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    redirect_uri: str | None = Field(None, alias="redirectUri")
    auth_mode: AuthMode | None = Field(None, alias="authMode")
    auth_config: dict[str, Any] | None = Field(None, alias="authConfig")
    app_name: str | None = Field(None, alias="appName")


class SaveUserAccessDataParam(BaseModel):
    """Credentials supplied by the end user for a pending connection."""

    model_config = ConfigDict(populate_by_name=True)

    field_inputs: dict[str, Any] = Field(..., alias="fieldInputs")
    redirect_url: str | None = Field(None, alias="redirectUrl")
    entity_id: str | None = Field(None, alias="entityId")


# =============================================================================
# Response Schemas
# =============================================================================


class ConnectedAccount(BaseModel):
    """Connected account representation."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    integration_id: str | None = Field(None, alias="integrationId")
    status: str
    entity_id: str | None = Field(None, alias="clientUniqueUserId")
    app_name: str | None = Field(None, alias="appName")
    app_unique_id: str | None = Field(None, alias="appUniqueId")
    labels: list[str] | None = None
    enabled: bool | None = None
    connection_params: dict[str, Any] | None = Field(None, alias="connectionParams")
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")

    @property
    def is_active(self) -> bool:
        return self.status == ConnectionStatus.ACTIVE


class ConnectedAccountList(BaseModel):
    """Paginated list of connected accounts."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    items: list[ConnectedAccount] = Field(default_factory=list)
    page: int = 1
    total_pages: int = Field(0, alias="totalPages")

    @property
    def has_next(self) -> bool:
        """Check if there are more pages."""
        return self.page < self.total_pages


class InitiateConnectionResponse(BaseModel):
    """Response to an initiate-connection call."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    connection_status: str | None = Field(None, alias="connectionStatus")
    connected_account_id: str | None = Field(None, alias="connectedAccountId")
    redirect_url: str | None = Field(None, alias="redirectUrl")


class ConnectionParameter(BaseModel):
    """A header or query parameter needed to call the app on the user's behalf."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    location: str = Field(..., alias="in")
    value: Any = None


class ConnectionInfo(BaseModel):
    """Auth info of a connected account."""

    model_config = ConfigDict(extra="ignore")

    base_url: str | None = None
    parameters: list[ConnectionParameter] = Field(default_factory=list)
    body: dict[str, Any] = Field(default_factory=dict)


class DeleteResponse(BaseModel):
    """Acknowledgment for a deletion."""

    model_config = ConfigDict(extra="ignore")

    status: str | None = None
    count: int | None = None
