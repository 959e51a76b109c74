"""
Fire-and-forget telemetry.

TelemetryLogger schedules each event as a background asyncio task and returns
immediately. Sink failures are logged at DEBUG and never reach the caller.

Example:
    telemetry = TelemetryLogger(LoggingTelemetrySink())
    telemetry.manual_telemetry(
        TelemetryEvents.SDK_METHOD_INVOKED,
        {"method": "list", "file": "connectkit.models.apps", "params": {}},
    )
    await telemetry.flush()
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel

from connectkit.telemetry.events import TelemetryEvent, TelemetryEvents
from connectkit.telemetry.sinks import LoggingTelemetrySink, NullTelemetrySink, TelemetrySink

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    """Reduce params to plain JSON-compatible values."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_json_safe(v) for v in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


class TelemetryLogger:
    """Best-effort telemetry emitter backed by a TelemetrySink."""

    def __init__(self, sink: TelemetrySink | None = None, *, enabled: bool = True):
        self.sink: TelemetrySink = sink if sink is not None else LoggingTelemetrySink()
        self.enabled = enabled
        self._pending: set[asyncio.Task[None]] = set()

    @classmethod
    def disabled(cls) -> TelemetryLogger:
        return cls(NullTelemetrySink(), enabled=False)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def manual_telemetry(self, event_name: str, payload: dict[str, Any]) -> None:
        """
        Emit an event without waiting for delivery.

        Args:
            event_name: Event name (see TelemetryEvents)
            payload: Dict with optional "method", "file" and "params" keys
        """
        if not self.enabled:
            return

        try:
            event = TelemetryEvent(
                name=event_name,
                method=str(payload.get("method", "")),
                source=str(payload.get("file", "")),
                params=_json_safe(payload.get("params") or {}),
            )
            loop = asyncio.get_running_loop()
        except Exception as e:
            logger.debug(f"[connectkit] Telemetry event dropped: {e}")
            return

        task = loop.create_task(self._send(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def method_invoked(self, method: str, source: str, params: dict[str, Any]) -> None:
        """Emit SDK_METHOD_INVOKED for a public SDK method."""
        self.manual_telemetry(
            TelemetryEvents.SDK_METHOD_INVOKED,
            {"method": method, "file": source, "params": params},
        )

    async def _send(self, event: TelemetryEvent) -> None:
        try:
            await self.sink.send(event)
        except Exception as e:
            logger.debug(f"[connectkit] Telemetry sink failed for {event.name}: {e}")

    async def flush(self) -> None:
        """Wait for all scheduled events to be delivered (or fail)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close(self) -> None:
        await self.flush()
        try:
            await self.sink.close()
        except Exception as e:
            logger.debug(f"[connectkit] Telemetry sink close failed: {e}")
