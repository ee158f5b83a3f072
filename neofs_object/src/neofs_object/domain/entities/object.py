"""Object, Header and split entities.

An object is immutable and content-addressed: its identifier is the hash
of its header, and the header embeds the hash of the payload. Changing
either one changes the identifier.

Bigger objects are split into a chain of smaller REGULAR objects. The
position of a part within the split hierarchy lives in the optional
``Header.split`` value; its absence means the object is not a split part.

References:
    - object/types.proto (Header, Header.Split, ShortHeader, Object, SplitInfo)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Optional

from neofs_object.domain.value_objects import (
    UNKNOWN_PAYLOAD_LENGTH,
    Checksum,
    ContainerID,
    ObjectID,
    OwnerID,
    Signature,
    SplitID,
    Version,
)

# Attributes with this prefix are interpreted by the system.
RESERVED_ATTRIBUTE_PREFIX = "__NEOFS__"

# Marks smaller parts of a split bigger object
ATTRIBUTE_UPLOAD_ID = "__NEOFS__UPLOAD_ID"
# Tells GC to delete object after that epoch
ATTRIBUTE_EXPIRATION_EPOCH = "__NEOFS__EXPIRATION_EPOCH"

# Well-known application attributes
ATTRIBUTE_NAME = "Name"
ATTRIBUTE_FILE_NAME = "FileName"
ATTRIBUTE_TIMESTAMP = "Timestamp"


class ObjectType(IntEnum):
    """Type of the object payload content."""

    REGULAR = 0
    TOMBSTONE = 1
    STORAGE_GROUP = 2

    @property
    def is_splittable(self) -> bool:
        """Only REGULAR objects can be split."""
        return self is ObjectType.REGULAR

    @property
    def display_name(self) -> str:
        """PascalCased string presentation (e.g. ``StorageGroup``)."""
        return "".join(part.capitalize() for part in self.name.split("_"))


class SearchMatchType(IntEnum):
    """Match expression of an object search filter."""

    UNSPECIFIED = 0
    STRING_EQUAL = 1


@dataclass(frozen=True, slots=True)
class Attribute:
    """User-defined key-value metadata pair."""

    key: str
    value: str

    @property
    def is_reserved(self) -> bool:
        return self.key.startswith(RESERVED_ATTRIBUTE_PREFIX)


@dataclass(frozen=True)
class SplitMetadata:
    """Position of an object in a split hierarchy."""

    split_id: Optional[SplitID]
    previous: Optional[ObjectID] = None
    parent: Optional[ObjectID] = None  # Known only to the last part
    parent_signature: Optional[Signature] = None
    parent_header: Optional[Header] = None
    children: tuple[ObjectID, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_first_part(self) -> bool:
        return self.previous is None and not self.children

    @property
    def is_linking(self) -> bool:
        """A linking object lists every child of the split."""
        return bool(self.children)

    @property
    def carries_parent(self) -> bool:
        return self.parent_header is not None


@dataclass(frozen=True)
class Header:
    """Object metadata.

    ``version``, ``container_id``, ``owner_id`` and ``payload_hash`` are
    required for identity derivation; they are optional here so decoded
    or partially built headers can be represented and rejected explicitly.
    """

    version: Optional[Version]
    container_id: Optional[ContainerID]
    owner_id: Optional[OwnerID]
    creation_epoch: int = 0
    payload_length: int = 0
    payload_hash: Optional[Checksum] = None
    object_type: ObjectType = ObjectType.REGULAR
    homomorphic_hash: Optional[Checksum] = None
    session_token: Optional[bytes] = None  # Encoded SessionToken message
    attributes: tuple[Attribute, ...] = ()
    split: Optional[SplitMetadata] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "object_type", ObjectType(self.object_type))
        object.__setattr__(self, "attributes", tuple(self.attributes))
        if not 0 <= self.payload_length <= UNKNOWN_PAYLOAD_LENGTH:
            raise ValueError(f"payload_length out of range: {self.payload_length}")
        if self.creation_epoch < 0:
            raise ValueError("creation_epoch cannot be negative")

    @property
    def is_split_part(self) -> bool:
        return self.split is not None

    @property
    def payload_length_known(self) -> bool:
        return self.payload_length != UNKNOWN_PAYLOAD_LENGTH

    def attribute(self, key: str) -> Optional[str]:
        """Get the value of the first attribute with ``key``."""
        for attr in self.attributes:
            if attr.key == key:
                return attr.value
        return None

    @property
    def user_attributes(self) -> tuple[Attribute, ...]:
        """Attributes that are opaque to the system."""
        return tuple(a for a in self.attributes if not a.is_reserved)

    @property
    def expiration_epoch(self) -> Optional[int]:
        """Epoch after which GC may delete the object, if set."""
        value = self.attribute(ATTRIBUTE_EXPIRATION_EPOCH)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @property
    def upload_id(self) -> Optional[str]:
        return self.attribute(ATTRIBUTE_UPLOAD_ID)

    def is_expired(self, current_epoch: int) -> bool:
        expiration = self.expiration_epoch
        return expiration is not None and current_epoch > expiration

    def with_payload(self, payload: bytes) -> Header:
        """Return a copy bound to ``payload`` (hash and length updated)."""
        return replace(
            self,
            payload_length=len(payload),
            payload_hash=Checksum.sha256(payload),
        )

    def with_attribute(self, key: str, value: str) -> Header:
        """Return a copy with an attribute set, replacing any with ``key``."""
        kept = tuple(a for a in self.attributes if a.key != key)
        return replace(self, attributes=kept + (Attribute(key, value),))

    def with_expiration(self, epoch: int) -> Header:
        return self.with_attribute(ATTRIBUTE_EXPIRATION_EPOCH, str(epoch))

    def without_split(self) -> Header:
        return replace(self, split=None)

    def short(self) -> ShortHeader:
        """Return the fields listed in object search results."""
        return ShortHeader(
            version=self.version,
            creation_epoch=self.creation_epoch,
            owner_id=self.owner_id,
            object_type=self.object_type,
            payload_length=self.payload_length,
            payload_hash=self.payload_hash,
            homomorphic_hash=self.homomorphic_hash,
        )


@dataclass(frozen=True)
class ShortHeader:
    """Header subset without container, session, attributes or split data."""

    version: Optional[Version]
    creation_epoch: int = 0
    owner_id: Optional[OwnerID] = None
    object_type: ObjectType = ObjectType.REGULAR
    payload_length: int = 0
    payload_hash: Optional[Checksum] = None
    homomorphic_hash: Optional[Checksum] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "object_type", ObjectType(self.object_type))

    @property
    def payload_length_known(self) -> bool:
        return self.payload_length != UNKNOWN_PAYLOAD_LENGTH


@dataclass(frozen=True)
class Object:
    """Immutable, content-addressed unit of storage."""

    object_id: Optional[ObjectID]
    signature: Optional[Signature]
    header: Header
    payload: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", bytes(self.payload))

    @property
    def split(self) -> Optional[SplitMetadata]:
        return self.header.split

    @property
    def size(self) -> int:
        return len(self.payload)


@dataclass(frozen=True)
class SplitInfo:
    """Assembly metadata for an object stored only as a split chain."""

    split_id: Optional[SplitID] = None
    last_part: Optional[ObjectID] = None
    link: Optional[ObjectID] = None

    @property
    def is_assemblable(self) -> bool:
        """At least one of ``last_part`` or ``link`` must be set."""
        return self.last_part is not None or self.link is not None


@dataclass(frozen=True)
class AssembledObject:
    """Parent object reconstructed from its split parts."""

    object_id: ObjectID
    header: Header
    signature: Optional[Signature]
    payload: bytes
    parts: tuple[ObjectID, ...] = field(default_factory=tuple)
    strategy: str = "chain"

    def to_object(self) -> Object:
        return Object(
            object_id=self.object_id,
            signature=self.signature,
            header=self.header,
            payload=self.payload,
        )
