"""
Pydantic schemas for apps.

Response models ignore unknown fields so new backend attributes never break
parsing. Wire names that differ from Python names are declared as aliases.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Request Schemas
# =============================================================================


class GetAppParams(BaseModel):
    """Parameters for fetching a single app."""

    app_key: str = Field(..., min_length=1, description="Unique app key, e.g. 'github'")


class GetRequiredParams(BaseModel):
    """Parameters for summarising an app's auth requirements."""

    app_id: str = Field(..., min_length=1, description="Unique app key")


class GetRequiredParamsForAuthScheme(BaseModel):
    """Parameters for summarising one auth scheme of an app."""

    app_id: str = Field(..., min_length=1, description="Unique app key")
    auth_scheme: str = Field(..., min_length=1, description="Auth mode, e.g. 'OAUTH2'")


# =============================================================================
# Response Schemas
# =============================================================================


class AuthSchemeField(BaseModel):
    """A single credential field of an auth scheme."""

    model_config = ConfigDict(extra="ignore")

    name: str
    display_name: str | None = None
    description: str | None = None
    type: str | None = None
    required: bool = False
    expected_from_customer: bool = True
    default: Any = None


class AuthScheme(BaseModel):
    """A named authentication mode and its fields."""

    model_config = ConfigDict(extra="ignore")

    mode: str
    name: str | None = None
    fields: list[AuthSchemeField] = Field(default_factory=list)


class App(BaseModel):
    """App metadata as returned by the backend."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    app_id: str | None = Field(None, alias="appId")
    key: str
    name: str
    description: str | None = None
    logo: str | None = None
    categories: list[str] | None = None
    auth_schemes: list[AuthScheme] | None = None
    enabled: bool | None = None
    no_auth: bool | None = None
    meta: dict[str, Any] | None = None

    @property
    def auth_modes(self) -> list[str]:
        """Modes of all auth schemes, in backend order."""
        return [scheme.mode for scheme in self.auth_schemes or []]


class AppList(BaseModel):
    """List of apps."""

    model_config = ConfigDict(extra="ignore")

    items: list[App] = Field(default_factory=list)


class RequiredParamsResponse(BaseModel):
    """Field names of one auth scheme, bucketed by who supplies them."""

    required_fields: list[str] = Field(default_factory=list)
    optional_fields: list[str] = Field(default_factory=list)
    expected_from_user: list[str] = Field(default_factory=list)


class RequiredParamsFullResponse(BaseModel):
    """Auth requirement summary for every scheme of an app."""

    available_auth_schemes: list[str] = Field(default_factory=list)
    auth_schemes: dict[str, RequiredParamsResponse] = Field(default_factory=dict)
