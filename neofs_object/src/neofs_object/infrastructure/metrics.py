"""Prometheus metrics for the object model."""

from prometheus_client import Counter, Histogram, Info, CollectorRegistry, REGISTRY, start_http_server


class ObjectModelMetrics:
    """Metrics collector for identity, split and assembly operations."""

    def __init__(self, registry: CollectorRegistry = REGISTRY):
        # Identity
        self.identities_derived = Counter(
            "neofs_object_identities_derived_total",
            "Total object identifiers derived",
            ["operation"],
            registry=registry,
        )
        self.integrity_errors = Counter(
            "neofs_object_integrity_errors_total",
            "Total integrity mismatches detected",
            ["field"],
            registry=registry,
        )
        self.attribute_violations = Counter(
            "neofs_object_attribute_violations_total",
            "Total attribute validation failures",
            ["error_type"],
            registry=registry,
        )

        # Splitting
        self.objects_split = Counter(
            "neofs_object_objects_split_total",
            "Total objects split into part chains",
            registry=registry,
        )
        self.split_parts_created = Counter(
            "neofs_object_split_parts_created_total",
            "Total part objects created by splitting",
            registry=registry,
        )

        # Assembly
        self.assemblies = Counter(
            "neofs_object_assemblies_total",
            "Total split-chain assemblies",
            ["strategy", "result"],
            registry=registry,
        )
        self.assembly_parts_fetched = Counter(
            "neofs_object_assembly_parts_fetched_total",
            "Total parts joined into assembled objects",
            ["strategy"],
            registry=registry,
        )
        self.assembled_bytes = Counter(
            "neofs_object_assembled_bytes_total",
            "Total payload bytes assembled",
            registry=registry,
        )
        self.assembly_latency = Histogram(
            "neofs_object_assembly_latency_seconds",
            "Split-chain assembly latency",
            ["strategy"],
            buckets=[0.001, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0],
            registry=registry,
        )

        # Errors
        self.operation_errors = Counter(
            "neofs_object_operation_errors_total",
            "Total operation errors",
            ["operation", "error_type"],
            registry=registry,
        )

        # System Info
        self.system_info = Info(
            "neofs_object",
            "Object model library information",
            registry=registry,
        )


_metrics: ObjectModelMetrics | None = None


def get_metrics() -> ObjectModelMetrics:
    """Get the singleton metrics instance."""
    global _metrics
    if _metrics is None:
        _metrics = ObjectModelMetrics()
    return _metrics


def start_metrics_server(port: int | None = None) -> ObjectModelMetrics:
    """Expose the default registry over HTTP for Prometheus scraping."""
    if port is None:
        from neofs_object.infrastructure.config import get_config

        port = get_config().observability.metrics_port
    metrics = get_metrics()
    start_http_server(port, registry=REGISTRY)
    return metrics
