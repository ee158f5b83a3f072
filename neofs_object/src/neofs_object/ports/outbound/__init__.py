"""Outbound ports - collaborators the object model core depends on.

The core never talks to storage, the wire codec or key material
directly. Adapters implementing these protocols are injected instead:

- ObjectFetcherPort: retrieve stored objects by identifier
- SplitInfoResolverPort: find split metadata for a parent identifier
- HeaderEncoderPort: canonical, order-preserving header encoding
- SignerPort: sign object identifiers
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Optional, Protocol, runtime_checkable

from neofs_object.domain.entities import Header, Object, SplitInfo
from neofs_object.domain.value_objects import ObjectID, Signature


class ObjectFetchError(Exception):
    """Transient failure while fetching an object.

    Raised by storage adapters after their own retries are exhausted.
    """

    def __init__(self, object_id: ObjectID, reason: str = "fetch failed") -> None:
        self.object_id = object_id
        self.reason = reason
        super().__init__(f"Failed to fetch {object_id}: {reason}")


@runtime_checkable
class ObjectFetcherPort(Protocol):
    """Protocol for retrieving objects by identifier.

    Thread Safety:
        Implementations must allow concurrent fetches; the assembler
        fetches linking-object children in parallel.
    """

    @abstractmethod
    def fetch(self, object_id: ObjectID) -> Optional[Object]:
        """Fetch an object.

        Args:
            object_id: Object identifier.

        Returns:
            The object, or None if it does not exist.

        Raises:
            ObjectFetchError: On transient failure.
        """
        ...


@runtime_checkable
class SplitInfoResolverPort(Protocol):
    """Protocol for looking up how a split object can be assembled."""

    @abstractmethod
    def split_info(self, parent_id: ObjectID) -> Optional[SplitInfo]:
        """Get split info for a parent object.

        Args:
            parent_id: Identifier of the logical (parent) object.

        Returns:
            Split info, or None if no split parts are known.
        """
        ...


@runtime_checkable
class HeaderEncoderPort(Protocol):
    """Protocol for canonical header encoding.

    The encoding must be deterministic and use the wire format rules, so
    identifiers derived from it are reproducible across implementations.
    """

    @abstractmethod
    def encode_header(self, header: Header) -> bytes:
        """Encode a header to canonical bytes."""
        ...


@runtime_checkable
class SignerPort(Protocol):
    """Protocol for signing object identifiers with the owner's key."""

    @abstractmethod
    def sign(self, object_id: ObjectID) -> Signature:
        """Sign an object identifier."""
        ...


__all__ = [
    "ObjectFetchError",
    "ObjectFetcherPort",
    "SplitInfoResolverPort",
    "HeaderEncoderPort",
    "SignerPort",
]
