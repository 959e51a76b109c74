"""
Telemetry for connectkit.

Every public SDK method emits one SDK_METHOD_INVOKED event through an
injected TelemetryLogger. Delivery is asynchronous and best-effort.
"""

from connectkit.telemetry.events import TelemetryEvent, TelemetryEvents
from connectkit.telemetry.logger import TelemetryLogger
from connectkit.telemetry.sinks import (
    HTTPTelemetrySink,
    LoggingTelemetrySink,
    NullTelemetrySink,
    TelemetrySink,
)

__all__ = [
    "HTTPTelemetrySink",
    "LoggingTelemetrySink",
    "NullTelemetrySink",
    "TelemetryEvent",
    "TelemetryEvents",
    "TelemetryLogger",
    "TelemetrySink",
]
