"""
Tests for BackendClient.

Uses httpx.MockTransport so requests never leave the process.
"""

import json

import httpx
import pytest

from connectkit.client import BackendClient, path_segment
from connectkit.config import BackendConfig
from connectkit.errors import (
    ApiError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)


def make_client(handler) -> BackendClient:
    config = BackendConfig(api_key="ck_test_key", base_url="https://backend.test")
    return BackendClient(config, transport=httpx.MockTransport(handler))


class TestBackendConfig:
    """Tests for BackendConfig."""

    def test_defaults(self):
        config = BackendConfig(api_key="ck_xxx")
        assert config.base_url == "https://backend.composio.dev"
        assert config.timeout == 30.0
        assert not config.log_requests

    def test_requires_api_key(self):
        with pytest.raises(ValueError, match="API key is required"):
            BackendConfig(api_key="")

    def test_immutable(self):
        config = BackendConfig(api_key="ck_xxx")
        with pytest.raises(AttributeError):
            config.api_key = "other"


class TestRequest:
    """Tests for BackendClient.request."""

    @pytest.mark.asyncio
    async def test_sends_auth_header_and_decodes_json(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["api_key"] = request.headers.get("x-api-key")
            return httpx.Response(200, json={"items": []})

        async with make_client(handler) as client:
            body = await client.request("GET", "/api/v1/apps", params={"page": 2})

        assert body == {"items": []}
        assert seen["url"] == "https://backend.test/api/v1/apps?page=2"
        assert seen["api_key"] == "ck_test_key"

    @pytest.mark.asyncio
    async def test_sends_json_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"connectedAccountId": "ca-1"})

        async with make_client(handler) as client:
            body = await client.request(
                "POST", "/api/v1/connectedAccounts", json={"integrationId": "int-1"}
            )

        assert seen == {"method": "POST", "body": {"integrationId": "int-1"}}
        assert body == {"connectedAccountId": "ca-1"}

    @pytest.mark.asyncio
    async def test_empty_body_returns_none(self):
        async with make_client(lambda request: httpx.Response(200)) as client:
            assert await client.request("GET", "/api/v1/apps/x") is None

    @pytest.mark.asyncio
    async def test_invalid_json_is_api_error(self):
        async with make_client(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(ApiError, match="Invalid JSON"):
                await client.request("GET", "/api/v1/apps")


class TestErrorMapping:
    """Status codes map onto the error taxonomy."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, error_type",
        [
            (400, ValidationError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NotFoundError),
            (422, ValidationError),
            (500, ApiError),
            (503, ApiError),
        ],
    )
    async def test_status_mapping(self, status, error_type):
        async with make_client(lambda request: httpx.Response(status, text="nope")) as client:
            with pytest.raises(error_type) as exc_info:
                await client.request("GET", "/api/v1/connectedAccounts/ca-1")

        assert exc_info.value.status_code == status
        assert exc_info.value.response_body == "nope"

    @pytest.mark.asyncio
    async def test_rate_limit_retry_after(self):
        def handler(request):
            return httpx.Response(429, headers={"Retry-After": "12"})

        async with make_client(handler) as client:
            with pytest.raises(RateLimitError) as exc_info:
                await client.request("GET", "/api/v1/apps")

        assert exc_info.value.retry_after == 12.0

    @pytest.mark.asyncio
    async def test_network_error_is_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(ApiError, match="Network error"):
                await client.request("GET", "/api/v1/apps")

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_timeout_is_api_error(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        async with make_client(handler) as client:
            with pytest.raises(ApiError, match="Request timeout"):
                await client.request("GET", "/api/v1/apps")


class TestLifecycle:
    """Tests for client lifecycle."""

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        client = make_client(lambda request: httpx.Response(200, json={}))
        await client.request("GET", "/api/v1/apps")
        await client.close()
        await client.close()
        assert client._client is None


class TestPathSegment:
    """Tests for path_segment."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("ca-123", "ca-123"),
            ("ca-1?force=true", "ca-1%3Fforce%3Dtrue"),
            ("ca-1/../ca-2", "ca-1%2F..%2Fca-2"),
            ("a#b c", "a%23b%20c"),
            ("50%", "50%25"),
        ],
    )
    def test_escapes_reserved_characters(self, value, expected):
        assert path_segment(value) == expected

    @pytest.mark.parametrize("value", ["", ".", ".."])
    def test_rejects_empty_and_dot_segments(self, value):
        with pytest.raises(ValidationError):
            path_segment(value)
