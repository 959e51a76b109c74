"""
Pydantic schemas for integrations.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class AuthMode(str, Enum):
    """Authentication modes supported by the platform."""

    OAUTH2 = "OAUTH2"
    OAUTH1 = "OAUTH1"
    OAUTH1A = "OAUTH1A"
    API_KEY = "API_KEY"
    BASIC = "BASIC"
    BEARER_TOKEN = "BEARER_TOKEN"
    GOOGLE_SERVICE_ACCOUNT = "GOOGLE_SERVICE_ACCOUNT"
    NO_AUTH = "NO_AUTH"
    BASIC_WITH_JWT = "BASIC_WITH_JWT"
    COMPOSIO_LINK = "COMPOSIO_LINK"
    CALCOM_AUTH = "CALCOM_AUTH"


# =============================================================================
# Request Schemas
# =============================================================================


class CreateIntegrationParams(BaseModel):
    """Schema for creating an integration."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    app_id: str = Field(..., min_length=1, alias="appId", description="App UUID")
    name: str = Field(..., min_length=1, description="Integration name")
    auth_scheme: AuthMode | None = Field(None, alias="authScheme")
    auth_config: dict[str, Any] | None = Field(None, alias="authConfig")
    use_composio_auth: bool = Field(False, alias="useComposioAuth")

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to API request format, excluding None values."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SingleIntegrationParams(BaseModel):
    """Identifies one integration."""

    integration_id: str = Field(..., min_length=1)


class ListIntegrationsQuery(BaseModel):
    """Query parameters for listing integrations."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    page: int | None = Field(None, ge=1)
    page_size: int | None = Field(None, ge=1, alias="pageSize")
    app_name: str | None = Field(None, alias="appName")
    show_disabled: bool | None = Field(None, alias="showDisabled")

    def to_params(self) -> dict[str, Any]:
        """Convert to query parameters."""
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Response Schemas
# =============================================================================


class Integration(BaseModel):
    """Integration representation."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str | None = None
    app_id: str | None = Field(None, alias="appId")
    app_name: str | None = Field(None, alias="appName")
    auth_scheme: str | None = Field(None, alias="authScheme")
    enabled: bool | None = None
    use_composio_auth: bool | None = Field(None, alias="useComposioAuth")
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")


class IntegrationList(BaseModel):
    """Paginated list of integrations."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    items: list[Integration] = Field(default_factory=list)
    page: int = 1
    total_pages: int = Field(0, alias="totalPages")
