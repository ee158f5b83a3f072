"""Content-addressed object identity and split assembly for NeoFS v2 objects."""

from neofs_object.domain.entities import (
    AssembledObject,
    Attribute,
    Header,
    Object,
    ObjectType,
    SplitInfo,
    SplitMetadata,
    Tombstone,
)
from neofs_object.domain.errors import (
    AssemblyCancelledError,
    AssemblyIncompleteError,
    ChainBrokenError,
    CodecError,
    DuplicateAttributeError,
    EmptyAttributeValueError,
    IntegrityMismatchError,
    InvalidAttributeKeyError,
    MalformedHeaderError,
    ObjectModelError,
    ObjectTooLargeError,
    SplitIdMismatchError,
)
from neofs_object.domain.value_objects import (
    Checksum,
    ChecksumType,
    ContainerID,
    ObjectID,
    OwnerID,
    Signature,
    SplitID,
    Version,
)

__version__ = "0.1.0"

__all__ = [
    "Object",
    "Header",
    "Attribute",
    "ObjectType",
    "SplitMetadata",
    "SplitInfo",
    "AssembledObject",
    "Tombstone",
    "ObjectID",
    "ContainerID",
    "OwnerID",
    "SplitID",
    "Version",
    "Checksum",
    "ChecksumType",
    "Signature",
    "ObjectModelError",
    "MalformedHeaderError",
    "IntegrityMismatchError",
    "DuplicateAttributeError",
    "EmptyAttributeValueError",
    "InvalidAttributeKeyError",
    "ChainBrokenError",
    "SplitIdMismatchError",
    "AssemblyIncompleteError",
    "AssemblyCancelledError",
    "ObjectTooLargeError",
    "CodecError",
]
