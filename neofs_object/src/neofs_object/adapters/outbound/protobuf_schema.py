"""Protobuf descriptors for the NeoFS v2 wire schema.

Message classes are built at runtime from descriptors that mirror the
``neo.fs.v2.refs``, ``neo.fs.v2.object``, ``neo.fs.v2.tombstone`` and
``neo.fs.v2.acl`` schemas field for field, so encodings are wire
compatible with other implementations.

The session token (Header field 9) is declared as ``bytes``: a
length-delimited bytes field and an embedded message share one wire
representation, so an already-encoded SessionToken passes through as is.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

_FD = descriptor_pb2.FieldDescriptorProto

REFS_PACKAGE = "neo.fs.v2.refs"
OBJECT_PACKAGE = "neo.fs.v2.object"
TOMBSTONE_PACKAGE = "neo.fs.v2.tombstone"
ACL_PACKAGE = "neo.fs.v2.acl"

_REFS_FILE = "neofs/refs/types.proto"
_OBJECT_FILE = "neofs/object/types.proto"
_TOMBSTONE_FILE = "neofs/tombstone/types.proto"
_ACL_FILE = "neofs/acl/types.proto"


def _ref(package: str, name: str) -> str:
    return f".{package}.{name}"


def _field(message, name: str, number: int, type_: int, type_name: str = "", repeated: bool = False):
    field = message.field.add(
        name=name,
        number=number,
        type=type_,
        label=_FD.LABEL_REPEATED if repeated else _FD.LABEL_OPTIONAL,
    )
    if type_name:
        field.type_name = type_name
    return field


def _enum(container, name: str, values: list[tuple[str, int]]) -> None:
    enum = container.enum_type.add(name=name)
    for value_name, number in values:
        enum.value.add(name=value_name, number=number)


def _new_file(name: str, package: str, *dependencies: str) -> descriptor_pb2.FileDescriptorProto:
    fdp = descriptor_pb2.FileDescriptorProto(name=name, package=package, syntax="proto3")
    fdp.dependency.extend(dependencies)
    return fdp


def _refs_file() -> descriptor_pb2.FileDescriptorProto:
    fdp = _new_file(_REFS_FILE, REFS_PACKAGE)

    version = fdp.message_type.add(name="Version")
    _field(version, "major", 1, _FD.TYPE_UINT32)
    _field(version, "minor", 2, _FD.TYPE_UINT32)

    for name in ("OwnerID", "ContainerID", "ObjectID"):
        ref = fdp.message_type.add(name=name)
        _field(ref, "value", 1, _FD.TYPE_BYTES)

    _enum(fdp, "ChecksumType", [("CHECKSUM_TYPE_UNSPECIFIED", 0), ("TZ", 1), ("SHA256", 2)])
    checksum = fdp.message_type.add(name="Checksum")
    _field(checksum, "type", 1, _FD.TYPE_ENUM, _ref(REFS_PACKAGE, "ChecksumType"))
    _field(checksum, "sum", 2, _FD.TYPE_BYTES)

    signature = fdp.message_type.add(name="Signature")
    _field(signature, "key", 1, _FD.TYPE_BYTES)
    _field(signature, "sign", 2, _FD.TYPE_BYTES)
    return fdp


def _object_file() -> descriptor_pb2.FileDescriptorProto:
    fdp = _new_file(_OBJECT_FILE, OBJECT_PACKAGE, _REFS_FILE)
    _enum(fdp, "ObjectType", [("REGULAR", 0), ("TOMBSTONE", 1), ("STORAGE_GROUP", 2)])
    _enum(fdp, "MatchType", [("MATCH_TYPE_UNSPECIFIED", 0), ("STRING_EQUAL", 1)])

    short_header = fdp.message_type.add(name="ShortHeader")
    _field(short_header, "version", 1, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "Version"))
    _field(short_header, "creation_epoch", 2, _FD.TYPE_UINT64)
    _field(short_header, "owner_id", 3, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "OwnerID"))
    _field(short_header, "object_type", 4, _FD.TYPE_ENUM, _ref(OBJECT_PACKAGE, "ObjectType"))
    _field(short_header, "payload_length", 5, _FD.TYPE_UINT64)
    _field(short_header, "payload_hash", 6, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "Checksum"))
    _field(short_header, "homomorphic_hash", 7, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "Checksum"))

    header = fdp.message_type.add(name="Header")
    _field(header, "version", 1, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "Version"))
    _field(header, "container_id", 2, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "ContainerID"))
    _field(header, "owner_id", 3, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "OwnerID"))
    _field(header, "creation_epoch", 4, _FD.TYPE_UINT64)
    _field(header, "payload_length", 5, _FD.TYPE_UINT64)
    _field(header, "payload_hash", 6, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "Checksum"))
    _field(header, "object_type", 7, _FD.TYPE_ENUM, _ref(OBJECT_PACKAGE, "ObjectType"))
    _field(header, "homomorphic_hash", 8, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "Checksum"))
    _field(header, "session_token", 9, _FD.TYPE_BYTES)

    attribute = header.nested_type.add(name="Attribute")
    _field(attribute, "key", 1, _FD.TYPE_STRING)
    _field(attribute, "value", 2, _FD.TYPE_STRING)
    _field(header, "attributes", 10, _FD.TYPE_MESSAGE, _ref(OBJECT_PACKAGE, "Header.Attribute"), repeated=True)

    split = header.nested_type.add(name="Split")
    _field(split, "parent", 1, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "ObjectID"))
    _field(split, "previous", 2, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "ObjectID"))
    _field(split, "parent_signature", 3, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "Signature"))
    _field(split, "parent_header", 4, _FD.TYPE_MESSAGE, _ref(OBJECT_PACKAGE, "Header"))
    _field(split, "children", 5, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "ObjectID"), repeated=True)
    _field(split, "split_id", 6, _FD.TYPE_BYTES)
    _field(header, "split", 11, _FD.TYPE_MESSAGE, _ref(OBJECT_PACKAGE, "Header.Split"))

    obj = fdp.message_type.add(name="Object")
    _field(obj, "object_id", 1, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "ObjectID"))
    _field(obj, "signature", 2, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "Signature"))
    _field(obj, "header", 3, _FD.TYPE_MESSAGE, _ref(OBJECT_PACKAGE, "Header"))
    _field(obj, "payload", 4, _FD.TYPE_BYTES)

    split_info = fdp.message_type.add(name="SplitInfo")
    _field(split_info, "split_id", 1, _FD.TYPE_BYTES)
    _field(split_info, "last_part", 2, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "ObjectID"))
    _field(split_info, "link", 3, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "ObjectID"))
    return fdp


def _tombstone_file() -> descriptor_pb2.FileDescriptorProto:
    fdp = _new_file(_TOMBSTONE_FILE, TOMBSTONE_PACKAGE, _REFS_FILE)
    tombstone = fdp.message_type.add(name="Tombstone")
    _field(tombstone, "expiration_epoch", 1, _FD.TYPE_UINT64)
    _field(tombstone, "split_id", 2, _FD.TYPE_BYTES)
    _field(tombstone, "members", 3, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "ObjectID"), repeated=True)
    return fdp


def _acl_file() -> descriptor_pb2.FileDescriptorProto:
    fdp = _new_file(_ACL_FILE, ACL_PACKAGE, _REFS_FILE)
    _enum(fdp, "Role", [("ROLE_UNSPECIFIED", 0), ("USER", 1), ("SYSTEM", 2), ("OTHERS", 3)])
    _enum(fdp, "MatchType", [("MATCH_TYPE_UNSPECIFIED", 0), ("STRING_EQUAL", 1), ("STRING_NOT_EQUAL", 2)])
    _enum(fdp, "Operation", [
        ("OPERATION_UNSPECIFIED", 0), ("GET", 1), ("HEAD", 2), ("PUT", 3),
        ("DELETE", 4), ("SEARCH", 5), ("GETRANGE", 6), ("GETRANGEHASH", 7),
    ])
    _enum(fdp, "Action", [("ACTION_UNSPECIFIED", 0), ("ALLOW", 1), ("DENY", 2)])
    _enum(fdp, "HeaderType", [("HEADER_UNSPECIFIED", 0), ("REQUEST", 1), ("OBJECT", 2)])

    record = fdp.message_type.add(name="EACLRecord")
    _field(record, "operation", 1, _FD.TYPE_ENUM, _ref(ACL_PACKAGE, "Operation"))
    _field(record, "action", 2, _FD.TYPE_ENUM, _ref(ACL_PACKAGE, "Action"))
    filter_ = record.nested_type.add(name="Filter")
    _field(filter_, "header_type", 1, _FD.TYPE_ENUM, _ref(ACL_PACKAGE, "HeaderType"))
    _field(filter_, "match_type", 2, _FD.TYPE_ENUM, _ref(ACL_PACKAGE, "MatchType"))
    _field(filter_, "key", 3, _FD.TYPE_STRING)
    _field(filter_, "value", 4, _FD.TYPE_STRING)
    _field(record, "filters", 3, _FD.TYPE_MESSAGE, _ref(ACL_PACKAGE, "EACLRecord.Filter"), repeated=True)
    target = record.nested_type.add(name="Target")
    _field(target, "role", 1, _FD.TYPE_ENUM, _ref(ACL_PACKAGE, "Role"))
    _field(target, "keys", 2, _FD.TYPE_BYTES, repeated=True)
    _field(record, "targets", 4, _FD.TYPE_MESSAGE, _ref(ACL_PACKAGE, "EACLRecord.Target"), repeated=True)

    table = fdp.message_type.add(name="EACLTable")
    _field(table, "version", 1, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "Version"))
    _field(table, "container_id", 2, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "ContainerID"))
    _field(table, "records", 3, _FD.TYPE_MESSAGE, _ref(ACL_PACKAGE, "EACLRecord"), repeated=True)

    token = fdp.message_type.add(name="BearerToken")
    body = token.nested_type.add(name="Body")
    _field(body, "eacl_table", 1, _FD.TYPE_MESSAGE, _ref(ACL_PACKAGE, "EACLTable"))
    _field(body, "owner_id", 2, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "OwnerID"))
    lifetime = body.nested_type.add(name="TokenLifetime")
    _field(lifetime, "exp", 1, _FD.TYPE_UINT64)
    _field(lifetime, "nbf", 2, _FD.TYPE_UINT64)
    _field(lifetime, "iat", 3, _FD.TYPE_UINT64)
    _field(body, "lifetime", 3, _FD.TYPE_MESSAGE, _ref(ACL_PACKAGE, "BearerToken.Body.TokenLifetime"))
    _field(token, "body", 1, _FD.TYPE_MESSAGE, _ref(ACL_PACKAGE, "BearerToken.Body"))
    _field(token, "signature", 2, _FD.TYPE_MESSAGE, _ref(REFS_PACKAGE, "Signature"))
    return fdp


@dataclass(frozen=True)
class WireMessages:
    """Generated message classes for the wire schema."""

    header: Any
    short_header: Any
    object: Any
    split_info: Any
    tombstone: Any
    eacl_table: Any
    bearer_token: Any


@lru_cache
def wire_messages() -> WireMessages:
    """Build the descriptor pool once and return the message classes."""
    pool = descriptor_pool.DescriptorPool()
    for fdp in (_refs_file(), _object_file(), _tombstone_file(), _acl_file()):
        pool.AddSerializedFile(fdp.SerializeToString())

    def message_class(package: str, name: str):
        return message_factory.GetMessageClass(pool.FindMessageTypeByName(f"{package}.{name}"))

    return WireMessages(
        header=message_class(OBJECT_PACKAGE, "Header"),
        short_header=message_class(OBJECT_PACKAGE, "ShortHeader"),
        object=message_class(OBJECT_PACKAGE, "Object"),
        split_info=message_class(OBJECT_PACKAGE, "SplitInfo"),
        tombstone=message_class(TOMBSTONE_PACKAGE, "Tombstone"),
        eacl_table=message_class(ACL_PACKAGE, "EACLTable"),
        bearer_token=message_class(ACL_PACKAGE, "BearerToken"),
    )
