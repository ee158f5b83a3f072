"""Dependency injection container for the object model."""

from dataclasses import dataclass

import structlog
from opentelemetry import trace

from neofs_object import __version__
from neofs_object.adapters.outbound.protobuf_codec import ProtobufCodec
from neofs_object.infrastructure.config import Config, get_config
from neofs_object.infrastructure.logging import setup_logging
from neofs_object.infrastructure.metrics import ObjectModelMetrics, get_metrics
from neofs_object.infrastructure.tracing import setup_tracing


@dataclass
class Container:
    """Dependency injection container for object model components."""

    config: Config
    logger: structlog.stdlib.BoundLogger
    tracer: trace.Tracer
    metrics: ObjectModelMetrics
    codec: ProtobufCodec

    _instance: "Container | None" = None

    @classmethod
    def create(cls) -> "Container":
        """Create and initialize the container with all dependencies."""
        if cls._instance is not None:
            return cls._instance

        config = get_config()
        logger = setup_logging()
        tracer = setup_tracing()
        metrics = get_metrics()

        metrics.system_info.info(
            {
                "version": __version__,
                "environment": config.observability.environment,
                "max_object_size": str(config.limits.max_object_size),
            }
        )

        cls._instance = cls(
            config=config,
            logger=logger,
            tracer=tracer,
            metrics=metrics,
            codec=ProtobufCodec(),
        )

        logger.info(
            "neofs_object_container_initialized",
            environment=config.observability.environment,
            max_object_size=config.limits.max_object_size,
            max_parallel_fetches=config.assembly.max_parallel_fetches,
        )

        return cls._instance

    @classmethod
    def get(cls) -> "Container":
        """Get the singleton container instance."""
        if cls._instance is None:
            return cls.create()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the container (useful for testing)."""
        cls._instance = None


def get_container() -> Container:
    """Get the dependency injection container."""
    return Container.get()
