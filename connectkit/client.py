"""
Backend HTTP client for connectkit.

A single BackendClient is shared by every resource (apps, connected accounts,
integrations). It owns the httpx.AsyncClient, injects the API key header and
maps HTTP failures onto the connectkit error taxonomy.

There is no built-in retry: every transport or server error propagates to the
caller on the first failure.

Usage:
    async with BackendClient(BackendConfig(api_key="...")) as client:
        body = await client.request("GET", "/api/v1/apps")
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from connectkit.config import BackendConfig
from connectkit.errors import (
    ApiError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


def path_segment(value: str) -> str:
    """
    Percent-encode a caller-supplied id for use as one URL path segment.

    Raises:
        ValidationError: If the value is empty or a dot segment
    """
    if not isinstance(value, str) or value in ("", ".", ".."):
        raise ValidationError(f"Invalid path segment: {value!r}")
    return quote(value, safe="")


class BackendClient:
    """
    Async client for the platform backend.

    Provides:
    - HTTP client management
    - Authentication header injection
    - Error mapping (status code -> SDKError subtype)
    - Request/response logging
    """

    def __init__(
        self,
        config: BackendConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the backend client.

        Args:
            config: Backend configuration
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _get_auth_headers(self) -> dict[str, str]:
        """Return authentication headers for requests."""
        return {API_KEY_HEADER: self.config.api_key}

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                transport=self._transport,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    **self._get_auth_headers(),
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make an HTTP request and decode the JSON body.

        Args:
            method: HTTP method (GET, POST, DELETE)
            path: URL path (appended to base_url)
            params: Query parameters
            json: JSON body

        Returns:
            Decoded JSON body, or None when the response has no body

        Raises:
            SDKError: Mapped from the HTTP status or transport failure
        """
        response = await self._do_request(method, path, params=params, json=json)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                f"Invalid JSON response from {method} {path}",
                status_code=response.status_code,
                response_body=response.text[:500],
            ) from e

    async def _do_request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Execute a single HTTP request."""
        client = await self._get_client()

        if self.config.log_requests:
            logger.debug(f"[connectkit] {method} {path} params={params} body={json}")

        try:
            response = await client.request(
                method=method,
                url=path,
                params=params,
                json=json,
            )
        except httpx.TimeoutException as e:
            raise ApiError(f"Request timeout: {e}") from e
        except httpx.NetworkError as e:
            raise ApiError(f"Network error: {e}") from e

        if self.config.log_responses:
            logger.debug(
                f"[connectkit] Response: status={response.status_code} "
                f"body={response.text[:500] if response.text else 'empty'}"
            )

        self._check_response(response)
        return response

    def _check_response(self, response: httpx.Response) -> None:
        """
        Check response for errors and raise appropriate exceptions.

        Raises:
            AuthenticationError: For 401/403
            RateLimitError: For 429
            NotFoundError: For 404
            ValidationError: For 400/422
            ApiError: For other errors
        """
        if response.is_success:
            return

        status = response.status_code
        body = response.text

        if status == 401 or status == 403:
            raise AuthenticationError(
                f"Authentication failed: {body}",
                status_code=status,
                response_body=body,
            )

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                "Rate limit exceeded",
                status_code=status,
                response_body=body,
                retry_after=float(retry_after) if retry_after else None,
            )

        if status == 404:
            raise NotFoundError(
                f"Resource not found: {body}",
                status_code=status,
                response_body=body,
            )

        if status == 400 or status == 422:
            raise ValidationError(
                f"Validation error: {body}",
                status_code=status,
                response_body=body,
            )

        raise ApiError(
            f"Request failed: {body}",
            status_code=status,
            response_body=body,
        )

    async def __aenter__(self) -> BackendClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
