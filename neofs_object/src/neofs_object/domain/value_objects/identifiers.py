"""Type-safe identifiers and reference types for the object model.

These value objects mirror the ``neo.fs.v2.refs`` messages. They are
immutable and hashable so they can be used as dict keys and set members.

References:
    - refs/types.proto (ObjectID, ContainerID, OwnerID, Checksum, Signature)
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import IntEnum
from typing import Self
from uuid import UUID, uuid4

# SHA-256 digest size; object and container identifiers are digests.
OBJECT_ID_SIZE = 32
CONTAINER_ID_SIZE = 32

# UUIDv4 shared by every part of one split operation.
SPLIT_ID_SIZE = 16

# `payload_length` value meaning "unknown".
UNKNOWN_PAYLOAD_LENGTH = 0xFFFFFFFFFFFFFFFF


def _check_bytes(kind: str, value: bytes, size: int | None = None) -> None:
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError(f"{kind} must be bytes, got {type(value).__name__}")
    if size is not None and len(value) != size:
        raise ValueError(f"{kind} must be {size} bytes, got {len(value)}")
    if size is None and not value:
        raise ValueError(f"{kind} cannot be empty")


@dataclass(frozen=True, slots=True)
class ObjectID:
    """Content address of an object: SHA-256 of its canonical header."""

    value: bytes

    def __post_init__(self) -> None:
        _check_bytes("ObjectID", self.value, OBJECT_ID_SIZE)
        object.__setattr__(self, "value", bytes(self.value))

    @classmethod
    def from_hex(cls, text: str) -> Self:
        """Parse an ObjectID from its hex string form."""
        return cls(bytes.fromhex(text))

    @classmethod
    def digest(cls, data: bytes) -> Self:
        """Create an ObjectID as the SHA-256 digest of ``data``."""
        return cls(hashlib.sha256(data).digest())

    def to_hex(self) -> str:
        return self.value.hex()

    def __str__(self) -> str:
        return self.value.hex()

    def __repr__(self) -> str:
        return f"ObjectID({self.value.hex()[:16]}...)"


@dataclass(frozen=True, slots=True)
class ContainerID:
    """Identifier of the container holding an object."""

    value: bytes

    def __post_init__(self) -> None:
        _check_bytes("ContainerID", self.value, CONTAINER_ID_SIZE)
        object.__setattr__(self, "value", bytes(self.value))

    @classmethod
    def from_hex(cls, text: str) -> Self:
        return cls(bytes.fromhex(text))

    def __str__(self) -> str:
        return self.value.hex()


@dataclass(frozen=True, slots=True)
class OwnerID:
    """Identifier of an object's owner (opaque wallet script hash)."""

    value: bytes

    def __post_init__(self) -> None:
        _check_bytes("OwnerID", self.value)
        object.__setattr__(self, "value", bytes(self.value))

    def __str__(self) -> str:
        return self.value.hex()


@dataclass(frozen=True, slots=True)
class SplitID:
    """16-byte UUID correlating all parts of one split operation."""

    value: bytes

    def __post_init__(self) -> None:
        _check_bytes("SplitID", self.value, SPLIT_ID_SIZE)
        object.__setattr__(self, "value", bytes(self.value))

    @classmethod
    def generate(cls) -> Self:
        """Generate a new random SplitID using UUID4."""
        return cls(uuid4().bytes)

    @classmethod
    def from_uuid(cls, uuid: UUID) -> Self:
        return cls(uuid.bytes)

    def to_uuid(self) -> UUID:
        return UUID(bytes=self.value)

    def __str__(self) -> str:
        return str(self.to_uuid())


@dataclass(frozen=True, slots=True)
class Version:
    """Object format version (the API library version used to create it)."""

    major: int
    minor: int

    def __post_init__(self) -> None:
        if self.major < 0 or self.minor < 0:
            raise ValueError("Version components cannot be negative")

    def __str__(self) -> str:
        return f"v{self.major}.{self.minor}"


class ChecksumType(IntEnum):
    """Checksum algorithm."""

    UNSPECIFIED = 0
    TZ = 1  # Tillich-Zemor homomorphic hash
    SHA256 = 2


@dataclass(frozen=True, slots=True)
class Checksum:
    """A typed checksum value."""

    type: ChecksumType
    sum: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", ChecksumType(self.type))
        object.__setattr__(self, "sum", bytes(self.sum))

    @classmethod
    def sha256(cls, data: bytes) -> Self:
        """Compute the SHA-256 checksum of ``data``."""
        return cls(ChecksumType.SHA256, hashlib.sha256(data).digest())

    def matches(self, data: bytes) -> bool:
        """Check ``data`` against this checksum.

        Only SHA-256 can be recomputed here; other types never match.
        """
        if self.type != ChecksumType.SHA256:
            return False
        return hashlib.sha256(data).digest() == self.sum

    def __str__(self) -> str:
        return f"{self.type.name}:{self.sum.hex()}"


@dataclass(frozen=True, slots=True)
class Signature:
    """Public key and signature bytes. Verification is done elsewhere."""

    key: bytes
    sign: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", bytes(self.key))
        object.__setattr__(self, "sign", bytes(self.sign))
