"""
Integrations resource.

An integration is the reusable auth configuration of an app, shared by all
connected accounts created through it.
"""

from __future__ import annotations

import logging
from typing import Any

from connectkit.client import BackendClient, path_segment
from connectkit.errors import NotFoundError, handle_all_error
from connectkit.schemas.integration import (
    CreateIntegrationParams,
    Integration,
    IntegrationList,
    ListIntegrationsQuery,
    SingleIntegrationParams,
)
from connectkit.telemetry import TelemetryLogger

logger = logging.getLogger(__name__)

INTEGRATIONS_PATH = "/api/v1/integrations"


class Integrations:
    """Client for integration records."""

    source = __name__

    def __init__(
        self,
        backend_client: BackendClient,
        telemetry: TelemetryLogger | None = None,
    ):
        self.backend_client = backend_client
        self.telemetry = telemetry if telemetry is not None else TelemetryLogger()

    async def create(self, data: CreateIntegrationParams | dict[str, Any]) -> Integration:
        """
        Create an integration.

        Args:
            data: App id, name, auth scheme and auth config

        Returns:
            Created integration
        """
        self.telemetry.method_invoked("create", self.source, {"data": data})
        try:
            request = (
                data
                if isinstance(data, CreateIntegrationParams)
                else CreateIntegrationParams(**data)
            )

            logger.info(f"[connectkit] Creating integration: {request.name} for app {request.app_id}")

            response = await self.backend_client.request(
                "POST",
                INTEGRATIONS_PATH,
                json=request.to_api_dict(),
            )
            if not response:
                raise NotFoundError("Integration was not returned by the backend")

            integration = Integration(**response)
            logger.info(f"[connectkit] Created integration: {integration.id}")
            return integration
        except Exception as e:
            raise handle_all_error(e, method="create", params={"data": data}) from e

    async def get(self, integration_id: str) -> Integration:
        """Get a single integration by id."""
        params = {"integration_id": integration_id}
        self.telemetry.method_invoked("get", self.source, params)
        try:
            request = SingleIntegrationParams(**params)
            response = await self.backend_client.request(
                "GET", f"{INTEGRATIONS_PATH}/{path_segment(request.integration_id)}"
            )
            if not response:
                raise NotFoundError(f"Integration not found: {request.integration_id}")
            return Integration(**response)
        except Exception as e:
            raise handle_all_error(e, method="get", params=params) from e

    async def list(
        self,
        query: ListIntegrationsQuery | dict[str, Any] | None = None,
        **filters: Any,
    ) -> IntegrationList:
        """
        List integrations, optionally filtered by app name.

        Keyword filters are merged over the query and win on conflict.
        """
        params = {"query": query, **filters}
        self.telemetry.method_invoked("list", self.source, params)
        try:
            base = query if isinstance(query, ListIntegrationsQuery) else ListIntegrationsQuery(**(query or {}))
            merged = {**base.to_params(), **ListIntegrationsQuery(**filters).to_params()}
            response = await self.backend_client.request("GET", INTEGRATIONS_PATH, params=merged)
            return IntegrationList(**(response or {}))
        except Exception as e:
            raise handle_all_error(e, method="list", params=params) from e
