"""
Apps resource.

Lists and fetches app metadata and derives, per auth scheme, which
credential fields the integration owner, the end user, or nobody has to
supply.

Usage:
    apps = Apps(backend_client)
    github = await apps.get("github")
    summary = await apps.get_required_params("github")
    summary.auth_schemes["OAUTH2"].expected_from_user
"""

from __future__ import annotations

import logging

from connectkit.client import BackendClient, path_segment
from connectkit.errors import NotFoundError, handle_all_error
from connectkit.schemas.app import (
    App,
    AppList,
    AuthScheme,
    GetAppParams,
    GetRequiredParams,
    GetRequiredParamsForAuthScheme,
    RequiredParamsFullResponse,
    RequiredParamsResponse,
)
from connectkit.telemetry import TelemetryLogger

logger = logging.getLogger(__name__)

APPS_PATH = "/api/v1/apps"


def summarize_auth_scheme(scheme: AuthScheme) -> RequiredParamsResponse:
    """
    Bucket the fields of one auth scheme.

    - expected_from_customer is False and required -> expected_from_user
    - expected_from_customer is False and optional -> optional_fields
    - expected_from_customer is True -> required_fields
    """
    summary = RequiredParamsResponse()
    for field in scheme.fields:
        if field.expected_from_customer is False:
            if field.required:
                summary.expected_from_user.append(field.name)
            else:
                summary.optional_fields.append(field.name)
        else:
            summary.required_fields.append(field.name)
    return summary


class Apps:
    """Client for the app catalog."""

    source = __name__

    def __init__(
        self,
        backend_client: BackendClient,
        telemetry: TelemetryLogger | None = None,
    ):
        self.backend_client = backend_client
        self.telemetry = telemetry if telemetry is not None else TelemetryLogger()

    async def list(self) -> list[App]:
        """
        List all apps available on the platform.

        Returns:
            Apps in backend order; empty when the backend returns none

        Raises:
            ApiError: If the request fails
        """
        self.telemetry.method_invoked("list", self.source, {})
        try:
            data = await self.backend_client.request("GET", APPS_PATH)
            if not data:
                return []
            items = AppList(**data).items
            logger.debug(f"[connectkit] Listed {len(items)} apps")
            return items
        except Exception as e:
            raise handle_all_error(e, method="list", params={}) from e

    async def get(self, app_key: str) -> App:
        """
        Get a single app by its key.

        Args:
            app_key: Unique app key, e.g. "github"

        Raises:
            ValidationError: If app_key is empty
            NotFoundError: If the backend returns no app
        """
        params = {"app_key": app_key}
        self.telemetry.method_invoked("get", self.source, params)
        try:
            request = GetAppParams(**params)
            data = await self.backend_client.request("GET", f"{APPS_PATH}/{path_segment(request.app_key)}")
            if not data:
                raise NotFoundError(f"App not found: {request.app_key}")
            return App(**data)
        except Exception as e:
            raise handle_all_error(e, method="get", params=params) from e

    async def get_required_params(self, app_id: str) -> RequiredParamsFullResponse:
        """
        Summarise the credential fields of every auth scheme of an app.

        Args:
            app_id: Unique app key

        Returns:
            Available auth modes and a per-mode field summary
        """
        params = {"app_id": app_id}
        self.telemetry.method_invoked("get_required_params", self.source, params)
        try:
            request = GetRequiredParams(**params)
            app = await self.get(request.app_id)
            schemes = app.auth_schemes or []

            return RequiredParamsFullResponse(
                available_auth_schemes=[scheme.mode for scheme in schemes],
                auth_schemes={scheme.mode: summarize_auth_scheme(scheme) for scheme in schemes},
            )
        except Exception as e:
            raise handle_all_error(e, method="get_required_params", params=params) from e

    async def get_required_params_for_auth_scheme(
        self,
        app_id: str,
        auth_scheme: str,
    ) -> RequiredParamsResponse | None:
        """
        Summarise the credential fields of one auth scheme.

        Returns:
            The field summary, or None when the app has no such scheme
        """
        params = {"app_id": app_id, "auth_scheme": auth_scheme}
        self.telemetry.method_invoked("get_required_params_for_auth_scheme", self.source, params)
        try:
            request = GetRequiredParamsForAuthScheme(**params)
            summary = await self.get_required_params(request.app_id)
            return summary.auth_schemes.get(request.auth_scheme)
        except Exception as e:
            raise handle_all_error(
                e, method="get_required_params_for_auth_scheme", params=params
            ) from e
