"""
Connected accounts resource.

A connected account links an entity (end user / tenant) to an app through an
integration. Initiating a connection returns a ConnectionRequest, which the
caller uses to supply credentials, read auth info or wait for activation.

Usage:
    request = await client.connected_accounts.initiate(
        {"integrationId": "int-123", "entityId": "user-42"}
    )
    if request.redirect_url:
        print(f"Authorize at {request.redirect_url}")
    account = await request.wait_until_active(timeout=120)
"""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import datetime, timezone
from time import monotonic
from typing import Any

from connectkit.client import BackendClient, path_segment
from connectkit.errors import (
    NotFoundError,
    SDKTimeoutError,
    ValidationError,
    handle_all_error,
)
from connectkit.models.apps import Apps
from connectkit.models.integrations import Integrations
from connectkit.schemas.connected_account import (
    ConnectedAccount,
    ConnectedAccountList,
    ConnectionInfo,
    ConnectionStatus,
    DeleteResponse,
    InitiateConnectionDataReq,
    InitiateConnectionPayload,
    InitiateConnectionResponse,
    ListConnectionsQuery,
    SaveUserAccessDataParam,
    SingleConnectionParams,
)
from connectkit.schemas.integration import CreateIntegrationParams
from connectkit.telemetry import TelemetryLogger

logger = logging.getLogger(__name__)

CONNECTED_ACCOUNTS_PATH = "/api/v1/connectedAccounts"
POLL_INTERVAL_SECONDS = 1.0
DEFAULT_WAIT_TIMEOUT_SECONDS = 60


def generate_integration_name(now: datetime | None = None) -> str:
    """
    Name for an auto-created integration.

    The ISO-8601 UTC timestamp (millisecond precision) is stripped of '-',
    ':' and '.', e.g. integration_20240105T093015123Z.
    """
    now = now or datetime.now(timezone.utc)
    stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    stamp = stamp.replace("+00:00", "Z")
    return f"integration_{re.sub(r'[-:.]', '', stamp)}"


async def _fetch_connected_account(
    backend_client: BackendClient,
    connected_account_id: str,
) -> ConnectedAccount | None:
    data = await backend_client.request(
        "GET", f"{CONNECTED_ACCOUNTS_PATH}/{path_segment(connected_account_id)}"
    )
    return ConnectedAccount(**data) if data else None


async def _initiate_connection(
    backend_client: BackendClient,
    body: dict[str, Any],
) -> InitiateConnectionResponse:
    data = await backend_client.request("POST", CONNECTED_ACCOUNTS_PATH, json=body)
    return InitiateConnectionResponse(**(data or {}))


# =============================================================================
# Connection Request
# =============================================================================


class ConnectionRequest:
    """
    Result of initiating a connection.

    Any field may be None if the backend omitted it. Operations that need the
    account id raise ValidationError when it is missing.
    """

    source = __name__

    def __init__(
        self,
        backend_client: BackendClient,
        *,
        connection_status: str | None = None,
        connected_account_id: str | None = None,
        redirect_url: str | None = None,
        telemetry: TelemetryLogger | None = None,
    ):
        self.backend_client = backend_client
        self.connection_status = connection_status
        self.connected_account_id = connected_account_id
        self.redirect_url = redirect_url
        self.telemetry = telemetry if telemetry is not None else TelemetryLogger()

    @classmethod
    def from_response(
        cls,
        backend_client: BackendClient,
        response: InitiateConnectionResponse,
        telemetry: TelemetryLogger | None = None,
    ) -> ConnectionRequest:
        return cls(
            backend_client,
            connection_status=response.connection_status,
            connected_account_id=response.connected_account_id,
            redirect_url=response.redirect_url,
            telemetry=telemetry,
        )

    def __repr__(self) -> str:
        return (
            f"ConnectionRequest(connection_status={self.connection_status!r}, "
            f"connected_account_id={self.connected_account_id!r}, "
            f"redirect_url={self.redirect_url!r})"
        )

    def _require_account_id(self) -> str:
        if not self.connected_account_id:
            raise ValidationError("Connection request has no connected account id")
        return self.connected_account_id

    async def save_user_access_data(
        self,
        field_inputs: dict[str, Any],
        *,
        redirect_url: str | None = None,
        entity_id: str | None = None,
    ) -> InitiateConnectionResponse:
        """
        Submit credentials collected from the end user.

        Re-initiates the connection on the account's integration with the
        given field inputs as connection data.

        Raises:
            NotFoundError: If the connected account no longer exists
        """
        params = {"field_inputs": field_inputs, "redirect_url": redirect_url, "entity_id": entity_id}
        self.telemetry.method_invoked("save_user_access_data", self.source, params)
        try:
            request = SaveUserAccessDataParam(**params)
            account = await _fetch_connected_account(self.backend_client, self._require_account_id())
            if account is None:
                raise NotFoundError(f"Connected account not found: {self.connected_account_id}")

            body = {
                "integrationId": account.integration_id,
                "data": request.field_inputs,
                "redirectUri": request.redirect_url,
                "userUuid": request.entity_id,
                "entityId": request.entity_id,
            }
            return await _initiate_connection(
                self.backend_client,
                {key: value for key, value in body.items() if value is not None},
            )
        except Exception as e:
            raise handle_all_error(e, method="save_user_access_data", params=params) from e

    async def get_auth_info(self, connected_account_id: str | None = None) -> ConnectionInfo | None:
        """
        Fetch the auth info (base URL, headers/query params, body) of an account.

        Args:
            connected_account_id: Defaults to this request's account

        Returns:
            ConnectionInfo, or None when the backend returns no body
        """
        params = {"connected_account_id": connected_account_id or self.connected_account_id}
        self.telemetry.method_invoked("get_auth_info", self.source, params)
        try:
            request = SingleConnectionParams(**params)
            data = await self.backend_client.request(
                "GET", f"{CONNECTED_ACCOUNTS_PATH}/{path_segment(request.connected_account_id)}/info"
            )
            return ConnectionInfo(**data) if data else None
        except Exception as e:
            raise handle_all_error(e, method="get_auth_info", params=params) from e

    async def wait_until_active(
        self,
        timeout: float = DEFAULT_WAIT_TIMEOUT_SECONDS,
    ) -> ConnectedAccount:
        """
        Poll the connected account until its status is ACTIVE.

        Polls once per second until `timeout` seconds of wall-clock time have
        passed.

        Raises:
            NotFoundError: If the account disappears while waiting
            SDKTimeoutError: If the account is not active before the deadline
        """
        params = {"connected_account_id": self.connected_account_id, "timeout": timeout}
        self.telemetry.method_invoked("wait_until_active", self.source, params)
        try:
            connected_account_id = self._require_account_id()
            deadline = monotonic() + timeout

            while monotonic() < deadline:
                account = await _fetch_connected_account(self.backend_client, connected_account_id)
                if account is None:
                    raise NotFoundError(f"Connected account not found: {connected_account_id}")
                if account.status == ConnectionStatus.ACTIVE:
                    logger.info(f"[connectkit] Connected account active: {connected_account_id}")
                    return account

                logger.debug(
                    f"[connectkit] Connected account {connected_account_id} "
                    f"status={account.status}, polling again"
                )
                await asyncio.sleep(POLL_INTERVAL_SECONDS)

            raise SDKTimeoutError(
                "Connection did not become active within the timeout period."
            )
        except Exception as e:
            raise handle_all_error(e, method="wait_until_active", params=params) from e


# =============================================================================
# Connected Accounts
# =============================================================================


class ConnectedAccounts:
    """Client for connected accounts."""

    source = __name__

    def __init__(
        self,
        backend_client: BackendClient,
        telemetry: TelemetryLogger | None = None,
        *,
        apps: Apps | None = None,
        integrations: Integrations | None = None,
    ):
        self.backend_client = backend_client
        self.telemetry = telemetry if telemetry is not None else TelemetryLogger()
        self.apps = apps or Apps(backend_client, self.telemetry)
        self.integrations = integrations or Integrations(backend_client, self.telemetry)

    def _connection_request(self, response: InitiateConnectionResponse) -> ConnectionRequest:
        return ConnectionRequest.from_response(self.backend_client, response, self.telemetry)

    async def list(
        self,
        query: ListConnectionsQuery | dict[str, Any] | None = None,
        **filters: Any,
    ) -> ConnectedAccountList:
        """
        List connected accounts.

        Filters (a query model or dict, plus keyword arguments that win on
        conflict) are sent verbatim as query parameters.
        """
        params = {"query": query, **filters}
        self.telemetry.method_invoked("list", self.source, params)
        try:
            base = query if isinstance(query, ListConnectionsQuery) else ListConnectionsQuery(**(query or {}))
            merged = {**base.to_params(), **ListConnectionsQuery(**filters).to_params()}
            data = await self.backend_client.request("GET", CONNECTED_ACCOUNTS_PATH, params=merged)
            return ConnectedAccountList(**(data or {}))
        except Exception as e:
            raise handle_all_error(e, method="list", params=params) from e

    async def create(self, data: InitiateConnectionPayload | dict[str, Any]) -> ConnectionRequest:
        """
        Initiate a connection on a known integration.

        Args:
            data: Payload with integrationId and optional entityId, labels,
                redirectUri and data
        """
        params = {"data": data}
        self.telemetry.method_invoked("create", self.source, params)
        try:
            payload = (
                data
                if isinstance(data, InitiateConnectionPayload)
                else InitiateConnectionPayload(**data)
            )
            response = await _initiate_connection(self.backend_client, payload.to_api_dict())
            return self._connection_request(response)
        except Exception as e:
            raise handle_all_error(e, method="create", params=params) from e

    async def get(self, connected_account_id: str) -> ConnectedAccount:
        """
        Get a connected account.

        Raises:
            ValidationError: If the id is empty
            NotFoundError: If the account does not exist
        """
        params = {"connected_account_id": connected_account_id}
        self.telemetry.method_invoked("get", self.source, params)
        try:
            request = SingleConnectionParams(**params)
            account = await _fetch_connected_account(self.backend_client, request.connected_account_id)
            if account is None:
                raise NotFoundError(f"Connected account not found: {request.connected_account_id}")
            return account
        except Exception as e:
            raise handle_all_error(e, method="get", params=params) from e

    async def delete(self, connected_account_id: str) -> DeleteResponse:
        """Delete a connected account."""
        params = {"connected_account_id": connected_account_id}
        self.telemetry.method_invoked("delete", self.source, params)
        try:
            request = SingleConnectionParams(**params)

            logger.info(f"[connectkit] Deleting connected account: {request.connected_account_id}")

            data = await self.backend_client.request(
                "DELETE", f"{CONNECTED_ACCOUNTS_PATH}/{path_segment(request.connected_account_id)}"
            )
            return DeleteResponse(**(data or {}))
        except Exception as e:
            raise handle_all_error(e, method="delete", params=params) from e

    async def initiate(
        self,
        payload: InitiateConnectionDataReq | dict[str, Any],
    ) -> ConnectionRequest:
        """
        Initiate a connection, creating an integration first if needed.

        Without an integration id, app_name, auth_mode and auth_config are
        required: the app is resolved, a new integration is created for it
        with platform-managed auth disabled, and the connection is initiated
        on that integration.

        Raises:
            ValidationError: If a field needed to create the integration is missing
        """
        params = {"payload": payload}
        self.telemetry.method_invoked("initiate", self.source, params)
        try:
            request = (
                payload
                if isinstance(payload, InitiateConnectionDataReq)
                else InitiateConnectionDataReq(**payload)
            )

            integration_id = request.integration_id
            if not integration_id:
                integration_id = await self._create_integration(request)

            body = {
                "integrationId": integration_id,
                "entityId": request.entity_id,
                "labels": request.labels,
                "redirectUri": request.redirect_uri,
                "data": request.data,
            }
            response = await _initiate_connection(
                self.backend_client,
                {key: value for key, value in body.items() if value is not None},
            )
            return self._connection_request(response)
        except Exception as e:
            raise handle_all_error(e, method="initiate", params=params) from e

    async def _create_integration(self, request: InitiateConnectionDataReq) -> str:
        """Create an integration for request.app_name and return its id."""
        for field_name in ("app_name", "auth_mode", "auth_config"):
            if getattr(request, field_name) in (None, ""):
                raise ValidationError(
                    f"{field_name} is required when integration_id is not provided"
                )

        app = await self.apps.get(request.app_name)
        if not app.app_id:
            raise NotFoundError(f"App {request.app_name} has no app id")

        integration = await self.integrations.create(
            CreateIntegrationParams(
                app_id=app.app_id,
                name=generate_integration_name(),
                auth_scheme=request.auth_mode,
                auth_config=request.auth_config,
                use_composio_auth=False,
            )
        )
        return integration.id
