"""Outbound adapters: wire codec and storage collaborators."""

from neofs_object.adapters.outbound.memory_object_store import InMemoryObjectStore
from neofs_object.adapters.outbound.protobuf_codec import ProtobufCodec
from neofs_object.adapters.outbound.retrying_fetcher import RetryingFetcher

__all__ = [
    "InMemoryObjectStore",
    "ProtobufCodec",
    "RetryingFetcher",
]
