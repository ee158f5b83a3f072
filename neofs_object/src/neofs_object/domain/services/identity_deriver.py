"""Identity derivation for content-addressed objects.

The object identifier is the SHA-256 digest of the canonical header
encoding. The header embeds the payload hash, so the identifier binds
both header and payload.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from neofs_object.domain.entities import Header, Object
from neofs_object.domain.errors import IntegrityMismatchError, MalformedHeaderError
from neofs_object.domain.services.attribute_validator import AttributeValidator
from neofs_object.domain.value_objects import (
    UNKNOWN_PAYLOAD_LENGTH,
    Checksum,
    ChecksumType,
    ObjectID,
    Signature,
)
from neofs_object.ports.outbound import HeaderEncoderPort

logger = logging.getLogger(__name__)

REQUIRED_HEADER_FIELDS = ("version", "container_id", "owner_id", "payload_hash")


class IdentityDeriver:
    """Computes and verifies object identifiers.

    Pure: no state beyond the injected encoder and validator.
    """

    def __init__(
        self,
        encoder: HeaderEncoderPort,
        validator: Optional[AttributeValidator] = None,
    ) -> None:
        """Initialize the deriver.

        Args:
            encoder: Canonical header encoder (wire format rules).
            validator: Attribute validator; a default one if omitted.
        """
        self._encoder = encoder
        self._validator = validator or AttributeValidator()

    def derive(self, header: Header, payload: bytes) -> ObjectID:
        """Derive the identifier of an object.

        Args:
            header: Fully populated header.
            payload: Actual payload bytes.

        Returns:
            Deterministic object identifier.

        Raises:
            MalformedHeaderError: If a required field is absent.
            IntegrityMismatchError: If the payload does not match the
                header's payload hash or length.
            ObjectModelError: If attributes are invalid.
        """
        self.check_header(header)
        self.check_payload(header, payload)
        return self.header_id(header)

    def header_id(self, header: Header) -> ObjectID:
        """Derive the identifier from the header alone.

        Used when the payload is unavailable (e.g. header-only requests).
        Required fields and attributes are still checked.
        """
        self.check_header(header)
        return ObjectID.digest(self._encoder.encode_header(header))

    def check_header(self, header: Header) -> None:
        """Check required fields and attribute rules of ``header``."""
        for name in REQUIRED_HEADER_FIELDS:
            if getattr(header, name) is None:
                raise MalformedHeaderError(name)
        self._validator.validate(header.attributes)

    def check_payload(self, header: Header, payload: bytes) -> None:
        """Check that ``payload`` matches the hash and length in ``header``."""
        expected = header.payload_hash
        if expected is None:
            raise MalformedHeaderError("payload_hash")
        if expected.type != ChecksumType.SHA256:
            raise MalformedHeaderError("payload_hash", f"of unsupported type {expected.type.name}")

        actual = Checksum.sha256(payload)
        if actual.sum != expected.sum:
            raise IntegrityMismatchError("payload_hash", expected, actual)

        if header.payload_length != UNKNOWN_PAYLOAD_LENGTH and header.payload_length != len(payload):
            raise IntegrityMismatchError("payload_length", header.payload_length, len(payload))

    def verify(self, obj: Object) -> ObjectID:
        """Verify that an object's stored identifier matches its content.

        Args:
            obj: Object with ``object_id`` set.

        Returns:
            The verified identifier.

        Raises:
            MalformedHeaderError: If the object has no identifier.
            IntegrityMismatchError: If the identifier or payload hash differ.
        """
        if obj.object_id is None:
            raise MalformedHeaderError("object_id")
        try:
            derived = self.derive(obj.header, obj.payload)
        except IntegrityMismatchError as e:
            raise IntegrityMismatchError(e.field, e.expected, e.actual, obj.object_id) from e
        if derived != obj.object_id:
            logger.debug(f"Object {obj.object_id} derives to {derived}")
            raise IntegrityMismatchError("object_id", obj.object_id, derived, obj.object_id)
        return derived

    def seal(
        self,
        header: Header,
        payload: bytes,
        signature: Optional[Signature] = None,
    ) -> Object:
        """Bind a header to a payload and compute the identifier.

        Payload hash and length are set from ``payload``.

        Args:
            header: Header without payload hash.
            payload: Payload bytes.
            signature: Signature over the identifier, if already known.

        Returns:
            Identified object.
        """
        bound = replace(header, payload_length=len(payload), payload_hash=Checksum.sha256(payload))
        object_id = self.derive(bound, payload)
        return Object(object_id=object_id, signature=signature, header=bound, payload=payload)
