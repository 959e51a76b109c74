"""
Telemetry sinks.

A sink receives TelemetryEvent records and ships them somewhere. Sinks are
best-effort: TelemetryLogger isolates callers from any exception they raise.

Implementations:
- LoggingTelemetrySink: one JSON log line per event
- HTTPTelemetrySink: POSTs events to an HTTP endpoint
- NullTelemetrySink: drops everything
"""

from __future__ import annotations

import json
import logging
from typing import Protocol

import httpx

from connectkit.telemetry.events import TelemetryEvent


class TelemetrySink(Protocol):
    """Protocol for telemetry transports."""

    async def send(self, event: TelemetryEvent) -> None:
        """Deliver one event."""
        ...

    async def close(self) -> None:
        """Release any resources held by the sink."""
        ...


class NullTelemetrySink:
    """Sink that discards events."""

    async def send(self, event: TelemetryEvent) -> None:
        return None

    async def close(self) -> None:
        return None


class LoggingTelemetrySink:
    """
    Sink that writes JSON-formatted events to a Python logger.

    Example output:
        {"event": "SDK_METHOD_INVOKED", "method": "list",
         "source": "connectkit.models.apps", "params": {}, ...}
    """

    def __init__(self, name: str = "connectkit.telemetry", level: int = logging.DEBUG):
        self._logger = logging.getLogger(name)
        self._level = level

    async def send(self, event: TelemetryEvent) -> None:
        self._logger.log(self._level, json.dumps(event.to_dict(), default=str))

    async def close(self) -> None:
        return None


class HTTPTelemetrySink:
    """Sink that POSTs each event as JSON to a collector endpoint."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 5.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self._timeout = timeout
        self._headers = headers or {}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=self._headers,
                transport=self._transport,
            )
        return self._client

    async def send(self, event: TelemetryEvent) -> None:
        client = await self._get_client()
        payload = json.loads(json.dumps(event.to_dict(), default=str))
        response = await client.post(self.url, json=payload)
        response.raise_for_status()

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
