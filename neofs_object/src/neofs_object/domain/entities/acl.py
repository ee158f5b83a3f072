"""Extended ACL and bearer token records.

These are structured data only: evaluating them against requests is done
by the access-control layer before any object operation proceeds.

References:
    - acl/types.proto (EACLRecord, EACLTable, BearerToken)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from neofs_object.domain.value_objects import ContainerID, OwnerID, Signature, Version

# Prefix for filter keys addressing object header fields instead of attributes
OBJECT_HEADER_FILTER_PREFIX = "$Object:"


class Role(IntEnum):
    """Target role of an access control rule."""

    UNSPECIFIED = 0
    USER = 1  # container owner
    SYSTEM = 2  # storage or inner ring node
    OTHERS = 3


class MatchType(IntEnum):
    UNSPECIFIED = 0
    STRING_EQUAL = 1
    STRING_NOT_EQUAL = 2


class Operation(IntEnum):
    """Request verb an access rule applies to."""

    UNSPECIFIED = 0
    GET = 1
    HEAD = 2
    PUT = 3
    DELETE = 4
    SEARCH = 5
    GETRANGE = 6
    GETRANGEHASH = 7


class Action(IntEnum):
    UNSPECIFIED = 0
    ALLOW = 1
    DENY = 2


class HeaderType(IntEnum):
    """Source of headers a filter is applied to."""

    UNSPECIFIED = 0
    REQUEST = 1
    OBJECT = 2


@dataclass(frozen=True)
class EACLFilter:
    header_type: HeaderType
    match_type: MatchType
    key: str
    value: str

    @property
    def targets_object_header(self) -> bool:
        """True if the key names a header field rather than an attribute."""
        return self.key.startswith(OBJECT_HEADER_FILTER_PREFIX)


@dataclass(frozen=True)
class EACLTarget:
    """Subjects a rule applies to: a role class or explicit public keys."""

    role: Role = Role.UNSPECIFIED
    keys: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", tuple(self.keys))


@dataclass(frozen=True)
class EACLRecord:
    operation: Operation
    action: Action
    filters: tuple[EACLFilter, ...] = ()
    targets: tuple[EACLTarget, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", tuple(self.filters))
        object.__setattr__(self, "targets", tuple(self.targets))


@dataclass(frozen=True)
class EACLTable:
    """Extended ACL rules attached to a container or bearer token."""

    version: Optional[Version]
    container_id: Optional[ContainerID]
    records: tuple[EACLRecord, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records))

    def records_for(self, operation: Operation) -> tuple[EACLRecord, ...]:
        """Records applicable to ``operation`` in table order."""
        return tuple(r for r in self.records if r.operation == operation)


@dataclass(frozen=True)
class TokenLifetime:
    """Token validity window in epochs (names follow RFC 7519)."""

    exp: int = 0
    nbf: int = 0
    iat: int = 0

    def is_valid_at(self, epoch: int) -> bool:
        return self.nbf <= epoch <= self.exp


@dataclass(frozen=True)
class BearerToken:
    """Signed eACL table issued by the container owner."""

    eacl_table: Optional[EACLTable]
    owner_id: Optional[OwnerID] = None  # empty means any bearer
    lifetime: TokenLifetime = TokenLifetime()
    signature: Optional[Signature] = None

    def is_issued_to(self, owner_id: OwnerID) -> bool:
        return self.owner_id is None or self.owner_id == owner_id
