"""Pytest configuration and shared fixtures for object model tests."""

import pytest
from unittest.mock import patch

from prometheus_client import CollectorRegistry

from neofs_object.adapters.outbound import InMemoryObjectStore, ProtobufCodec
from neofs_object.domain.entities import Header
from neofs_object.domain.services import IdentityDeriver
from neofs_object.domain.value_objects import ContainerID, OwnerID, Signature, Version
from neofs_object.infrastructure.config import Config
from neofs_object.infrastructure.container import Container
from neofs_object.infrastructure.metrics import ObjectModelMetrics


@pytest.fixture(autouse=True)
def reset_container():
    """Reset the DI container before each test."""
    Container.reset()
    yield
    Container.reset()


@pytest.fixture
def test_config() -> Config:
    """Provide a test configuration."""
    return Config()


@pytest.fixture
def codec() -> ProtobufCodec:
    return ProtobufCodec()


@pytest.fixture
def deriver(codec: ProtobufCodec) -> IdentityDeriver:
    return IdentityDeriver(codec)


@pytest.fixture
def store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def base_header() -> Header:
    """Provide a header with provenance fields and no payload binding."""
    return Header(
        version=Version(2, 11),
        container_id=ContainerID(bytes(range(32))),
        owner_id=OwnerID(b"\x35" + b"\x07" * 24),
        creation_epoch=42,
    )


@pytest.fixture
def sample_payload() -> bytes:
    """Provide sample object data for testing."""
    return b"Hello, World! This is test data for the object model."


@pytest.fixture
def metrics_registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def metrics(metrics_registry: CollectorRegistry) -> ObjectModelMetrics:
    """Metrics bound to an isolated registry."""
    return ObjectModelMetrics(registry=metrics_registry)


class FakeSigner:
    """Signer producing deterministic fake signatures."""

    def __init__(self, key: bytes = b"\x02" + b"\x11" * 32):
        self.key = key
        self.signed = []

    def sign(self, object_id):
        self.signed.append(object_id)
        return Signature(key=self.key, sign=b"sig:" + object_id.value[:8])


@pytest.fixture
def signer() -> FakeSigner:
    return FakeSigner()


@pytest.fixture
def container(test_config: Config, metrics: ObjectModelMetrics) -> Container:
    """Provide a configured container for testing."""
    with patch("neofs_object.infrastructure.container.get_config", return_value=test_config), \
            patch("neofs_object.infrastructure.logging.get_config", return_value=test_config), \
            patch("neofs_object.infrastructure.tracing.get_config", return_value=test_config), \
            patch("neofs_object.infrastructure.container.get_metrics", return_value=metrics):
        return Container.create()


# Pytest markers
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
