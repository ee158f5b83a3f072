"""Unit tests for object model metrics."""

from unittest.mock import patch

import pytest

from neofs_object.infrastructure import metrics as metrics_module


@pytest.mark.unit
class TestMetrics:
    """Test metric registration and exposition."""

    def test_isolated_registry(self, metrics, metrics_registry):
        metrics.objects_split.inc()
        metrics.assemblies.labels(strategy="chain", result="success").inc(2)

        assert metrics_registry.get_sample_value("neofs_object_objects_split_total") == 1.0
        assert metrics_registry.get_sample_value(
            "neofs_object_assemblies_total", {"strategy": "chain", "result": "success"}
        ) == 2.0

    def test_start_metrics_server_uses_configured_port(self, test_config, metrics):
        with patch("neofs_object.infrastructure.config.get_config", return_value=test_config), \
                patch.object(metrics_module, "get_metrics", return_value=metrics), \
                patch.object(metrics_module, "start_http_server") as server:
            assert metrics_module.start_metrics_server() is metrics

        server.assert_called_once_with(test_config.observability.metrics_port, registry=metrics_module.REGISTRY)
