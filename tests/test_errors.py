"""
Tests for error normalization.
"""

import httpx
import pydantic
import pytest

from connectkit.errors import (
    ApiError,
    NotFoundError,
    SDKError,
    SDKTimeoutError,
    ValidationError,
    handle_all_error,
)
from connectkit.schemas.app import GetAppParams


class TestSDKError:
    """Tests for the error base class."""

    def test_str_without_context(self):
        assert str(SDKError("boom")) == "boom"

    def test_str_with_method_and_status(self):
        error = ApiError("Request failed", status_code=502, method="list")
        assert str(error) == "[list] Request failed (status=502)"

    def test_codes(self):
        assert ApiError.code == "API_ERROR"
        assert NotFoundError.code == "NOT_FOUND"
        assert SDKTimeoutError.code == "TIMEOUT"

    def test_timeout_is_builtin_timeout(self):
        assert issubclass(SDKTimeoutError, TimeoutError)
        assert issubclass(SDKTimeoutError, SDKError)


class TestHandleAllError:
    """Tests for handle_all_error."""

    def test_sdk_error_gets_context(self):
        error = NotFoundError("App not found")
        normalized = handle_all_error(error, method="get", params={"app_key": "x"})

        assert normalized is error
        assert normalized.method == "get"
        assert normalized.params == {"app_key": "x"}

    def test_existing_context_is_kept(self):
        error = NotFoundError("App not found", method="get", params={"app_key": "x"})
        normalized = handle_all_error(error, method="get_required_params", params={"app_id": "x"})

        assert normalized.method == "get"

    def test_pydantic_error_becomes_validation_error(self):
        with pytest.raises(pydantic.ValidationError) as exc_info:
            GetAppParams(app_key="")

        normalized = handle_all_error(exc_info.value, method="get", params={"app_key": ""})

        assert isinstance(normalized, ValidationError)
        assert normalized.validation_errors[0]["loc"] == ("app_key",)
        assert "GetAppParams" in normalized.message

    def test_httpx_errors_become_api_errors(self):
        request = httpx.Request("GET", "https://backend.test")

        timeout = handle_all_error(httpx.ReadTimeout("slow", request=request), method="list")
        network = handle_all_error(httpx.ConnectError("refused", request=request), method="list")

        assert isinstance(timeout, ApiError)
        assert "timeout" in timeout.message.lower()
        assert isinstance(network, ApiError)

    def test_unknown_error_becomes_sdk_error(self):
        normalized = handle_all_error(KeyError("id"), method="delete", params={})

        assert type(normalized) is SDKError
        assert normalized.message == "KeyError: 'id'"
