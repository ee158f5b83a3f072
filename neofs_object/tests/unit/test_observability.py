"""Unit tests for logging context and tracing setup."""

from unittest.mock import patch

import pytest
import structlog
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor

from neofs_object.domain.value_objects import ObjectID, SplitID
from neofs_object.infrastructure.config import Config, ObservabilityConfig
from neofs_object.infrastructure.logging import add_service_context, log_context
from neofs_object.infrastructure.tracing import span_processor


@pytest.mark.unit
class TestLogContext:
    """Test identifier binding for log records."""

    def test_binds_identifiers_inside_block(self):
        split_id = SplitID(b"\x01" * 16)
        with log_context(split_id=split_id, strategy="chain", object_id=None):
            assert structlog.contextvars.get_contextvars() == {
                "split_id": str(split_id),
                "strategy": "chain",
            }
        assert "split_id" not in structlog.contextvars.get_contextvars()

    def test_nested_blocks_restore_outer_values(self):
        outer = ObjectID(b"\x02" * 32)
        with log_context(object_id=outer):
            with log_context(strategy="link"):
                assert structlog.contextvars.get_contextvars()["object_id"] == outer.to_hex()
            assert "strategy" not in structlog.contextvars.get_contextvars()

    def test_service_context(self):
        event = add_service_context(None, "info", {"event": "x"})
        assert event["service"] == "neofs_object"
        assert event["version"] == "0.1.0"


@pytest.mark.unit
class TestSpanProcessor:
    """Test span export selection."""

    def test_console_export_is_synchronous(self):
        processor = span_processor(Config())
        try:
            assert isinstance(processor, SimpleSpanProcessor)
        finally:
            processor.shutdown()

    def test_collector_export_is_batched(self):
        config = Config(observability=ObservabilityConfig(otlp_endpoint="localhost:4317"))
        with patch("neofs_object.infrastructure.tracing.OTLPSpanExporter") as exporter:
            processor = span_processor(config)
            try:
                assert isinstance(processor, BatchSpanProcessor)
                exporter.assert_called_once_with(endpoint="localhost:4317", insecure=True)
            finally:
                processor.shutdown()
