"""OpenTelemetry tracing configuration for the object model."""

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanProcessor,
)

from neofs_object import __version__
from neofs_object.infrastructure.config import Config, get_config

TRACER_NAME = "neofs_object"


def span_processor(config: Config) -> SpanProcessor:
    """Batch export to the OTLP collector, or write each span to the console.

    The console path exports synchronously so no spans are pending when
    the process (or a test session) closes stdout.
    """
    endpoint = config.observability.otlp_endpoint
    if endpoint:
        return BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True))
    return SimpleSpanProcessor(ConsoleSpanExporter())


def setup_tracing() -> trace.Tracer:
    """Configure OpenTelemetry tracing for the object model."""
    config = get_config()

    resource = Resource.create(
        {
            "service.name": TRACER_NAME,
            "service.version": __version__,
            "deployment.environment": config.observability.environment,
            "neofs.object.max_size": config.limits.max_object_size,
        }
    )

    provider = TracerProvider(resource=resource)
    provider.add_span_processor(span_processor(config))
    trace.set_tracer_provider(provider)

    return trace.get_tracer(TRACER_NAME)


def get_tracer(name: str = TRACER_NAME) -> trace.Tracer:
    """Get a tracer instance."""
    return trace.get_tracer(name)
