"""Telemetry event names and payload type."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


class TelemetryEvents:
    SDK_INITIALIZED = "SDK_INITIALIZED"
    SDK_METHOD_INVOKED = "SDK_METHOD_INVOKED"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class TelemetryEvent:
    """A single telemetry record."""

    name: str
    method: str = ""
    source: str = ""
    params: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": self.name,
            "method": self.method,
            "source": self.source,
            "params": self.params,
            "timestamp": self.timestamp.isoformat(),
        }
