"""Value objects for the object model domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    Identifiers:
        - ObjectID, ContainerID, OwnerID: Type-safe references
        - SplitID: Correlates the parts of one split operation
        - UNKNOWN_PAYLOAD_LENGTH: Sentinel for unknown payload size

    Integrity:
        - Checksum, ChecksumType: Typed payload hashes
        - Signature: Public key and signature pair
        - Version: Object format version
"""

from neofs_object.domain.value_objects.identifiers import (
    CONTAINER_ID_SIZE,
    OBJECT_ID_SIZE,
    SPLIT_ID_SIZE,
    UNKNOWN_PAYLOAD_LENGTH,
    Checksum,
    ChecksumType,
    ContainerID,
    ObjectID,
    OwnerID,
    Signature,
    SplitID,
    Version,
)

__all__ = [
    # Identifiers
    "ObjectID",
    "ContainerID",
    "OwnerID",
    "SplitID",
    "OBJECT_ID_SIZE",
    "CONTAINER_ID_SIZE",
    "SPLIT_ID_SIZE",
    "UNKNOWN_PAYLOAD_LENGTH",
    # Integrity
    "Checksum",
    "ChecksumType",
    "Signature",
    "Version",
]
