"""Domain entities."""

from neofs_object.domain.entities.acl import (
    Action,
    BearerToken,
    EACLFilter,
    EACLRecord,
    EACLTable,
    EACLTarget,
    HeaderType,
    MatchType,
    Operation,
    Role,
    TokenLifetime,
)
from neofs_object.domain.entities.object import (
    ATTRIBUTE_EXPIRATION_EPOCH,
    ATTRIBUTE_FILE_NAME,
    ATTRIBUTE_NAME,
    ATTRIBUTE_TIMESTAMP,
    ATTRIBUTE_UPLOAD_ID,
    RESERVED_ATTRIBUTE_PREFIX,
    AssembledObject,
    Attribute,
    Header,
    Object,
    ObjectType,
    SearchMatchType,
    ShortHeader,
    SplitInfo,
    SplitMetadata,
)
from neofs_object.domain.entities.tombstone import Tombstone

__all__ = [
    "Object",
    "Header",
    "ShortHeader",
    "Attribute",
    "ObjectType",
    "SearchMatchType",
    "SplitMetadata",
    "SplitInfo",
    "AssembledObject",
    "Tombstone",
    "RESERVED_ATTRIBUTE_PREFIX",
    "ATTRIBUTE_UPLOAD_ID",
    "ATTRIBUTE_EXPIRATION_EPOCH",
    "ATTRIBUTE_NAME",
    "ATTRIBUTE_FILE_NAME",
    "ATTRIBUTE_TIMESTAMP",
    "Role",
    "MatchType",
    "Operation",
    "Action",
    "HeaderType",
    "EACLFilter",
    "EACLTarget",
    "EACLRecord",
    "EACLTable",
    "TokenLifetime",
    "BearerToken",
]
