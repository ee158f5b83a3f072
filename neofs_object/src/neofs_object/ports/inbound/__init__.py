"""Inbound ports - API contracts for the object model.

Inbound ports define the interfaces that clients and upper layers use to
create, verify and reassemble content-addressed objects.
"""

from __future__ import annotations

import threading
from abc import abstractmethod
from typing import Optional, Protocol, runtime_checkable

from neofs_object.domain.entities import AssembledObject, Header, Object, SplitInfo
from neofs_object.domain.services.splitter import SplitResult
from neofs_object.domain.value_objects import ObjectID, Signature
from neofs_object.ports.outbound import SignerPort


@runtime_checkable
class ObjectServicePort(Protocol):
    """Protocol for object identity and split assembly operations.

    Thread Safety:
        All methods must be thread-safe. Assemblies are independent and
        may run in parallel with each other.

    Integrity:
        Identifiers are SHA-256 digests of the canonical header encoding;
        headers embed the SHA-256 of the payload.

    Example:
        result = service.split_object(header, payload)
        for obj in result.stored_objects:
            store.put(obj)
        assembled = service.assemble(result.split_info)
        assert assembled.object_id == result.parent.object_id
    """

    @abstractmethod
    def seal_object(
        self,
        header: Header,
        payload: bytes,
        signature: Optional[Signature] = None,
    ) -> Object:
        """Bind a header to a payload and derive the identifier.

        Args:
            header: Object header.
            payload: Payload bytes.
            signature: Signature over the identifier, if known.

        Returns:
            Identified object.
        """
        ...

    @abstractmethod
    def verify_object(self, obj: Object) -> ObjectID:
        """Verify an object's identifier against its content.

        Args:
            obj: Object to verify.

        Returns:
            The verified identifier.
        """
        ...

    @abstractmethod
    def object_id_of(self, header: Header) -> ObjectID:
        """Derive an identifier from a header alone.

        Args:
            header: Object header.

        Returns:
            Object identifier.
        """
        ...

    @abstractmethod
    def split_object(
        self,
        header: Header,
        payload: bytes,
        signer: Optional[SignerPort] = None,
    ) -> SplitResult:
        """Seal an object, splitting it if it exceeds the size limit.

        Args:
            header: Parent header.
            payload: Full payload.
            signer: Signs produced identifiers.

        Returns:
            Split result.
        """
        ...

    @abstractmethod
    def assemble(
        self,
        split_info: SplitInfo,
        cancel: Optional[threading.Event] = None,
    ) -> AssembledObject:
        """Reassemble a split object.

        Args:
            split_info: Split metadata.
            cancel: Event that abandons the assembly when set.

        Returns:
            Reconstructed parent object.
        """
        ...

    @abstractmethod
    def get_object(self, object_id: ObjectID) -> Optional[Object]:
        """Get an object, assembling it if it is stored as a split chain.

        Args:
            object_id: Object ID.

        Returns:
            Object or None if not found.
        """
        ...


__all__ = [
    "ObjectServicePort",
]
