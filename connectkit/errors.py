"""
Error taxonomy for connectkit.

Every public SDK method funnels failures through `handle_all_error`, so
callers only ever see `SDKError` subclasses:

    SDKError
    ├── ApiError              transport / server failures
    │   ├── AuthenticationError   401 / 403
    │   └── RateLimitError        429
    ├── ValidationError       input schema failures, backend 400 / 422
    ├── NotFoundError         expected entity absent, backend 404
    └── SDKTimeoutError       polling deadline exceeded
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
import pydantic

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class SDKError(Exception):
    """Base exception for all connectkit errors."""

    code = "SDK_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_body: str | None = None,
        method: str | None = None,
        params: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.method = method
        self.params = params

    def __str__(self) -> str:
        parts = [f"[{self.method}] {self.message}" if self.method else self.message]
        if self.status_code:
            parts.append(f"(status={self.status_code})")
        return " ".join(parts)

    def with_context(self, method: str, params: dict[str, Any] | None) -> SDKError:
        """Attach call context unless an inner call already did."""
        if self.method is None:
            self.method = method
            self.params = params
        return self


class ApiError(SDKError):
    """Raised for transport failures and unexpected backend responses."""

    code = "API_ERROR"


class AuthenticationError(ApiError):
    """Raised when the backend rejects the API key (401/403)."""

    code = "AUTHENTICATION_ERROR"


class RateLimitError(ApiError):
    """Raised when rate limit is exceeded (429)."""

    code = "RATE_LIMIT_ERROR"

    def __init__(self, message: str, *, retry_after: float | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ValidationError(SDKError):
    """Raised when input fails schema validation."""

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        *,
        validation_errors: list[dict[str, Any]] | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.validation_errors = validation_errors or []


class NotFoundError(SDKError):
    """Raised when an expected entity is absent."""

    code = "NOT_FOUND"


class SDKTimeoutError(SDKError, TimeoutError):
    """Raised when a polling deadline passes."""

    code = "TIMEOUT"


# =============================================================================
# Normalization
# =============================================================================


def handle_all_error(
    error: BaseException,
    *,
    method: str,
    params: dict[str, Any] | None = None,
) -> SDKError:
    """
    Convert any exception raised inside an SDK method into an SDKError.

    Args:
        error: The exception that was raised
        method: Name of the public SDK method
        params: Parameters the method was called with

    Returns:
        SDKError carrying the method name and params
    """
    if isinstance(error, SDKError):
        normalized = error.with_context(method, params)
    elif isinstance(error, pydantic.ValidationError):
        normalized = ValidationError(
            f"Invalid input: {error.error_count()} validation error(s) for {error.title}",
            validation_errors=error.errors(include_url=False),
            method=method,
            params=params,
        )
    elif isinstance(error, httpx.TimeoutException):
        normalized = ApiError(f"Request timeout: {error}", method=method, params=params)
    elif isinstance(error, httpx.HTTPError):
        normalized = ApiError(f"Network error: {error}", method=method, params=params)
    else:
        normalized = SDKError(
            f"{type(error).__name__}: {error}", method=method, params=params
        )

    logger.debug(f"[connectkit] {method} failed: {normalized!r}")
    return normalized
