"""
Tests for telemetry sinks and TelemetryLogger.
"""

import json
import logging

import httpx
import pytest

from connectkit.schemas.app import GetAppParams
from connectkit.telemetry import (
    HTTPTelemetrySink,
    LoggingTelemetrySink,
    NullTelemetrySink,
    TelemetryEvent,
    TelemetryEvents,
    TelemetryLogger,
)


class TestTelemetryEvent:
    """Tests for TelemetryEvent."""

    def test_to_dict(self):
        event = TelemetryEvent(name="X", method="list", source="connectkit.models.apps")
        data = event.to_dict()

        assert data["event"] == "X"
        assert data["method"] == "list"
        assert data["params"] == {}
        assert data["timestamp"].endswith("+00:00")


class TestTelemetryLogger:
    """Tests for TelemetryLogger."""

    @pytest.mark.asyncio
    async def test_method_invoked(self, telemetry, telemetry_sink):
        telemetry.method_invoked("get", "connectkit.models.apps", {"app_key": "github"})
        await telemetry.flush()

        [event] = telemetry_sink.events
        assert event.name == TelemetryEvents.SDK_METHOD_INVOKED
        assert event.params == {"app_key": "github"}
        assert telemetry.pending_count == 0

    @pytest.mark.asyncio
    async def test_params_are_json_safe(self, telemetry, telemetry_sink):
        telemetry.method_invoked(
            "get",
            "connectkit.models.apps",
            {"params": GetAppParams(app_key="github"), "tags": ("a", "b"), "obj": object()},
        )
        await telemetry.flush()

        params = telemetry_sink.events[0].params
        assert params["params"] == {"app_key": "github"}
        assert params["tags"] == ["a", "b"]
        assert isinstance(params["obj"], str)
        json.dumps(params)

    @pytest.mark.asyncio
    async def test_disabled_logger_sends_nothing(self, telemetry_sink):
        telemetry = TelemetryLogger(telemetry_sink, enabled=False)
        telemetry.method_invoked("list", "x", {})
        await telemetry.flush()

        assert telemetry_sink.events == []

    def test_without_running_loop_is_dropped(self, telemetry, telemetry_sink):
        telemetry.method_invoked("list", "x", {})
        assert telemetry.pending_count == 0

    @pytest.mark.asyncio
    async def test_sink_failure_is_swallowed(self):
        class BrokenSink:
            async def send(self, event):
                raise ConnectionError("down")

            async def close(self):
                raise ConnectionError("down")

        telemetry = TelemetryLogger(BrokenSink())
        telemetry.method_invoked("list", "x", {})
        await telemetry.close()


class TestSinks:
    """Tests for the sink implementations."""

    @pytest.mark.asyncio
    async def test_null_sink(self):
        sink = NullTelemetrySink()
        await sink.send(TelemetryEvent(name="X"))
        await sink.close()

    @pytest.mark.asyncio
    async def test_logging_sink_writes_json(self, caplog):
        sink = LoggingTelemetrySink(level=logging.INFO)

        with caplog.at_level(logging.INFO, logger="connectkit.telemetry"):
            await sink.send(TelemetryEvent(name="X", method="list"))

        record = json.loads(caplog.records[-1].getMessage())
        assert record["event"] == "X"
        assert record["method"] == "list"

    @pytest.mark.asyncio
    async def test_http_sink_posts_event(self):
        received = []

        def handler(request: httpx.Request) -> httpx.Response:
            received.append(json.loads(request.content))
            return httpx.Response(204)

        sink = HTTPTelemetrySink(
            "https://telemetry.test/events", transport=httpx.MockTransport(handler)
        )
        await sink.send(TelemetryEvent(name="X", params={"a": 1}))
        await sink.close()

        assert received[0]["event"] == "X"
        assert received[0]["params"] == {"a": 1}

    @pytest.mark.asyncio
    async def test_http_sink_raises_on_error_status(self):
        sink = HTTPTelemetrySink(
            "https://telemetry.test/events",
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )

        with pytest.raises(httpx.HTTPStatusError):
            await sink.send(TelemetryEvent(name="X"))
        await sink.close()
