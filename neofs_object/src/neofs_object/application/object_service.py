"""Object Service Application Coordinator.

Orchestrates the domain services (attribute validation, identity
derivation, splitting and split-chain assembly) and adds observability:
structured logs, Prometheus metrics and OpenTelemetry spans.

References:
    - domain/services (core algorithms)
    - ports/inbound (ObjectServicePort)
"""

from __future__ import annotations

import threading
import time
from typing import Optional

from opentelemetry import trace

from neofs_object.adapters.outbound.protobuf_codec import ProtobufCodec
from neofs_object.adapters.outbound.retrying_fetcher import RetryingFetcher
from neofs_object.domain.entities import AssembledObject, Header, Object, SplitInfo
from neofs_object.domain.errors import (
    DuplicateAttributeError,
    EmptyAttributeValueError,
    IntegrityMismatchError,
    InvalidAttributeKeyError,
    ObjectModelError,
)
from neofs_object.domain.services import (
    STRATEGY_CHAIN,
    STRATEGY_LINK,
    AttributeValidator,
    IdentityDeriver,
    ObjectSplitter,
    SplitChainAssembler,
    SplitResult,
)
from neofs_object.domain.value_objects import ObjectID, Signature
from neofs_object.infrastructure.config import Config, get_config
from neofs_object.infrastructure.logging import get_logger, log_context
from neofs_object.infrastructure.metrics import ObjectModelMetrics
from neofs_object.infrastructure.tracing import get_tracer
from neofs_object.ports.outbound import ObjectFetcherPort, SignerPort, SplitInfoResolverPort

_ATTRIBUTE_ERRORS = (DuplicateAttributeError, EmptyAttributeValueError, InvalidAttributeKeyError)


class ObjectService:
    """Coordinates object model operations with full observability.

    Implements ObjectServicePort.
    """

    def __init__(
        self,
        fetcher: ObjectFetcherPort,
        config: Optional[Config] = None,
        codec: Optional[ProtobufCodec] = None,
        metrics: Optional[ObjectModelMetrics] = None,
        tracer: Optional[trace.Tracer] = None,
        split_resolver: Optional[SplitInfoResolverPort] = None,
    ) -> None:
        """Initialize the service.

        Args:
            fetcher: Storage collaborator for fetching objects.
            config: Configuration; the cached global one if omitted.
            codec: Wire codec used as the canonical header encoder.
            metrics: Prometheus metrics; disabled if omitted.
            tracer: OpenTelemetry tracer; the global one if omitted.
            split_resolver: Split info lookup; the fetcher itself is used
                if it implements SplitInfoResolverPort.
        """
        self._config = config or get_config()
        self._codec = codec or ProtobufCodec()
        self._metrics = metrics
        self._tracer = tracer or get_tracer()
        self._logger = get_logger("object_service")

        if split_resolver is None and isinstance(fetcher, SplitInfoResolverPort):
            split_resolver = fetcher
        self._split_resolver = split_resolver

        fetch_cfg = self._config.fetch
        self._fetcher = RetryingFetcher(
            fetcher,
            max_attempts=fetch_cfg.max_attempts,
            backoff_base_seconds=fetch_cfg.backoff_base_seconds,
            backoff_max_seconds=fetch_cfg.backoff_max_seconds,
        )

        self._validator = AttributeValidator()
        self._deriver = IdentityDeriver(self._codec, self._validator)
        self._splitter = ObjectSplitter(self._deriver, self._config.limits.max_object_size)
        self._assembler = SplitChainAssembler(
            self._fetcher,
            self._deriver,
            max_parallel_fetches=self._config.assembly.max_parallel_fetches,
            max_chain_length=self._config.assembly.max_chain_length,
            verify_parts=self._config.limits.verify_part_identity,
        )

    @classmethod
    def from_container(cls, fetcher: ObjectFetcherPort, container=None) -> "ObjectService":
        """Build a service from the dependency injection container."""
        if container is None:
            from neofs_object.infrastructure.container import get_container

            container = get_container()
        return cls(
            fetcher,
            config=container.config,
            codec=container.codec,
            metrics=container.metrics,
            tracer=container.tracer,
        )

    @property
    def codec(self) -> ProtobufCodec:
        return self._codec

    @property
    def deriver(self) -> IdentityDeriver:
        return self._deriver

    def seal_object(
        self,
        header: Header,
        payload: bytes,
        signature: Optional[Signature] = None,
    ) -> Object:
        with self._tracer.start_as_current_span("neofs_object.seal") as span:
            span.set_attribute("object.payload_size", len(payload))
            try:
                obj = self._deriver.seal(header, payload, signature)
            except ObjectModelError as e:
                self._record_error("seal", e)
                raise
            span.set_attribute("object.id", str(obj.object_id))

        if self._metrics:
            self._metrics.identities_derived.labels(operation="seal").inc()
        self._logger.debug("object_sealed", object_id=str(obj.object_id), size=len(payload))
        return obj

    def verify_object(self, obj: Object) -> ObjectID:
        with self._tracer.start_as_current_span("neofs_object.verify") as span:
            try:
                object_id = self._deriver.verify(obj)
            except ObjectModelError as e:
                self._record_error("verify", e)
                raise
            span.set_attribute("object.id", str(object_id))

        if self._metrics:
            self._metrics.identities_derived.labels(operation="verify").inc()
        return object_id

    def object_id_of(self, header: Header) -> ObjectID:
        try:
            object_id = self._deriver.header_id(header)
        except ObjectModelError as e:
            self._record_error("header_id", e)
            raise
        if self._metrics:
            self._metrics.identities_derived.labels(operation="header_id").inc()
        return object_id

    def split_object(
        self,
        header: Header,
        payload: bytes,
        signer: Optional[SignerPort] = None,
    ) -> SplitResult:
        with self._tracer.start_as_current_span("neofs_object.split") as span:
            span.set_attribute("object.payload_size", len(payload))
            try:
                result = self._splitter.split(header, payload, signer)
            except ObjectModelError as e:
                self._record_error("split", e)
                raise
            span.set_attribute("split.parts", len(result.parts))

        if result.is_split:
            if self._metrics:
                self._metrics.objects_split.inc()
                self._metrics.split_parts_created.inc(len(result.parts))
            self._logger.info(
                "object_split",
                object_id=str(result.parent.object_id),
                split_id=str(result.split_id),
                parts=len(result.parts),
                size=len(payload),
            )
        return result

    def assemble(
        self,
        split_info: SplitInfo,
        cancel: Optional[threading.Event] = None,
    ) -> AssembledObject:
        strategy = STRATEGY_LINK if split_info.link is not None else STRATEGY_CHAIN
        start = time.perf_counter()

        with log_context(split_id=split_info.split_id, strategy=strategy), \
                self._tracer.start_as_current_span("neofs_object.assemble") as span:
            span.set_attribute("assembly.strategy", strategy)
            try:
                assembled = self._assembler.assemble(split_info, cancel)
            except ObjectModelError as e:
                self._record_error("assemble", e)
                if self._metrics:
                    self._metrics.assemblies.labels(strategy=strategy, result="failed").inc()
                self._logger.warning(
                    "assembly_failed",
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise
            span.set_attribute("object.id", str(assembled.object_id))
            span.set_attribute("assembly.parts", len(assembled.parts))

        elapsed = time.perf_counter() - start
        if self._metrics:
            self._metrics.assemblies.labels(strategy=strategy, result="success").inc()
            self._metrics.assembly_parts_fetched.labels(strategy=strategy).inc(len(assembled.parts))
            self._metrics.assembled_bytes.inc(len(assembled.payload))
            self._metrics.assembly_latency.labels(strategy=strategy).observe(elapsed)

        self._logger.info(
            "object_assembled",
            object_id=str(assembled.object_id),
            strategy=strategy,
            parts=len(assembled.parts),
            size=len(assembled.payload),
            duration_ms=round(elapsed * 1000, 3),
        )
        return assembled

    def get_object(self, object_id: ObjectID) -> Optional[Object]:
        with log_context(object_id=object_id):
            return self._get_object(object_id)

    def _get_object(self, object_id: ObjectID) -> Optional[Object]:
        obj = self._fetcher.fetch(object_id)
        if obj is not None:
            return obj

        if self._split_resolver is None:
            return None
        split_info = self._split_resolver.split_info(object_id)
        if split_info is None:
            return None

        self._logger.debug("object_stored_as_split")
        assembled = self.assemble(split_info)
        if assembled.object_id != object_id:
            error = IntegrityMismatchError("object_id", object_id, assembled.object_id, object_id)
            self._record_error("get", error)
            raise error
        return assembled.to_object()

    def _record_error(self, operation: str, error: ObjectModelError) -> None:
        if not self._metrics:
            return
        self._metrics.operation_errors.labels(
            operation=operation, error_type=type(error).__name__
        ).inc()
        if isinstance(error, IntegrityMismatchError):
            self._metrics.integrity_errors.labels(field=error.field).inc()
        elif isinstance(error, _ATTRIBUTE_ERRORS):
            self._metrics.attribute_violations.labels(error_type=type(error).__name__).inc()
