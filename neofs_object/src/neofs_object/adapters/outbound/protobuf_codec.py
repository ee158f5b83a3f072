"""Protobuf wire codec for object model messages.

Converts domain entities to and from the NeoFS v2 wire format. Header
encoding is deterministic (fields in number order, defaults omitted), so
it doubles as the canonical encoding hashed into object identifiers.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from google.protobuf.message import DecodeError

from neofs_object.adapters.outbound.protobuf_schema import wire_messages
from neofs_object.domain.entities import (
    Action,
    Attribute,
    BearerToken,
    EACLFilter,
    EACLRecord,
    EACLTable,
    EACLTarget,
    Header,
    HeaderType,
    MatchType,
    Object,
    ObjectType,
    Operation,
    Role,
    ShortHeader,
    SplitInfo,
    SplitMetadata,
    TokenLifetime,
    Tombstone,
)
from neofs_object.domain.errors import CodecError
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

T = TypeVar("T")


class ProtobufCodec:
    """Encodes and decodes object model messages.

    Implements HeaderEncoderPort.
    """

    def __init__(self) -> None:
        self._messages = wire_messages()

    # =========================================================================
    # Header
    # =========================================================================

    def encode_header(self, header: Header) -> bytes:
        msg = self._messages.header()
        _fill_header(msg, header)
        return msg.SerializeToString(deterministic=True)

    def decode_header(self, data: bytes) -> Header:
        msg = self._parse(self._messages.header, data)
        return _convert(_read_header, msg)

    def encode_short_header(self, short: ShortHeader) -> bytes:
        msg = self._messages.short_header()
        if short.version is not None:
            _set_version(msg.version, short.version)
        msg.creation_epoch = short.creation_epoch
        if short.owner_id is not None:
            msg.owner_id.SetInParent()
            msg.owner_id.value = short.owner_id.value
        msg.object_type = int(short.object_type)
        msg.payload_length = short.payload_length
        if short.payload_hash is not None:
            _set_checksum(msg.payload_hash, short.payload_hash)
        if short.homomorphic_hash is not None:
            _set_checksum(msg.homomorphic_hash, short.homomorphic_hash)
        return msg.SerializeToString(deterministic=True)

    def decode_short_header(self, data: bytes) -> ShortHeader:
        msg = self._parse(self._messages.short_header, data)

        def read(m) -> ShortHeader:
            return ShortHeader(
                version=Version(m.version.major, m.version.minor) if m.HasField("version") else None,
                creation_epoch=m.creation_epoch,
                owner_id=OwnerID(m.owner_id.value) if m.HasField("owner_id") else None,
                object_type=ObjectType(m.object_type),
                payload_length=m.payload_length,
                payload_hash=_read_checksum(m.payload_hash) if m.HasField("payload_hash") else None,
                homomorphic_hash=(
                    _read_checksum(m.homomorphic_hash) if m.HasField("homomorphic_hash") else None
                ),
            )

        return _convert(read, msg)

    # =========================================================================
    # Object
    # =========================================================================

    def encode_object(self, obj: Object) -> bytes:
        msg = self._messages.object()
        if obj.object_id is not None:
            _set_object_id(msg.object_id, obj.object_id)
        if obj.signature is not None:
            _set_signature(msg.signature, obj.signature)
        msg.header.SetInParent()
        _fill_header(msg.header, obj.header)
        msg.payload = obj.payload
        return msg.SerializeToString(deterministic=True)

    def decode_object(self, data: bytes) -> Object:
        msg = self._parse(self._messages.object, data)

        def read(m) -> Object:
            return Object(
                object_id=ObjectID(m.object_id.value) if m.HasField("object_id") else None,
                signature=_read_signature(m.signature) if m.HasField("signature") else None,
                header=_read_header(m.header),
                payload=m.payload,
            )

        return _convert(read, msg)

    # =========================================================================
    # SplitInfo
    # =========================================================================

    def encode_split_info(self, info: SplitInfo) -> bytes:
        msg = self._messages.split_info()
        if info.split_id is not None:
            msg.split_id = info.split_id.value
        if info.last_part is not None:
            _set_object_id(msg.last_part, info.last_part)
        if info.link is not None:
            _set_object_id(msg.link, info.link)
        return msg.SerializeToString(deterministic=True)

    def decode_split_info(self, data: bytes) -> SplitInfo:
        msg = self._parse(self._messages.split_info, data)

        def read(m) -> SplitInfo:
            return SplitInfo(
                split_id=SplitID(m.split_id) if m.split_id else None,
                last_part=ObjectID(m.last_part.value) if m.HasField("last_part") else None,
                link=ObjectID(m.link.value) if m.HasField("link") else None,
            )

        return _convert(read, msg)

    # =========================================================================
    # Tombstone
    # =========================================================================

    def encode_tombstone(self, tombstone: Tombstone) -> bytes:
        msg = self._messages.tombstone()
        msg.expiration_epoch = tombstone.expiration_epoch
        if tombstone.split_id is not None:
            msg.split_id = tombstone.split_id.value
        for member in tombstone.members:
            msg.members.add(value=member.value)
        return msg.SerializeToString(deterministic=True)

    def decode_tombstone(self, data: bytes) -> Tombstone:
        msg = self._parse(self._messages.tombstone, data)

        def read(m) -> Tombstone:
            return Tombstone(
                expiration_epoch=m.expiration_epoch,
                split_id=SplitID(m.split_id) if m.split_id else None,
                members=tuple(ObjectID(member.value) for member in m.members),
            )

        return _convert(read, msg)

    # =========================================================================
    # Extended ACL
    # =========================================================================

    def encode_eacl_table(self, table: EACLTable) -> bytes:
        msg = self._messages.eacl_table()
        _fill_eacl_table(msg, table)
        return msg.SerializeToString(deterministic=True)

    def decode_eacl_table(self, data: bytes) -> EACLTable:
        msg = self._parse(self._messages.eacl_table, data)
        return _convert(_read_eacl_table, msg)

    def encode_bearer_token(self, token: BearerToken) -> bytes:
        msg = self._messages.bearer_token()
        body = msg.body
        body.SetInParent()
        if token.eacl_table is not None:
            body.eacl_table.SetInParent()
            _fill_eacl_table(body.eacl_table, token.eacl_table)
        if token.owner_id is not None:
            body.owner_id.SetInParent()
            body.owner_id.value = token.owner_id.value
        body.lifetime.SetInParent()
        body.lifetime.exp = token.lifetime.exp
        body.lifetime.nbf = token.lifetime.nbf
        body.lifetime.iat = token.lifetime.iat
        if token.signature is not None:
            _set_signature(msg.signature, token.signature)
        return msg.SerializeToString(deterministic=True)

    def decode_bearer_token(self, data: bytes) -> BearerToken:
        msg = self._parse(self._messages.bearer_token, data)

        def read(m) -> BearerToken:
            body = m.body
            return BearerToken(
                eacl_table=_read_eacl_table(body.eacl_table) if body.HasField("eacl_table") else None,
                owner_id=OwnerID(body.owner_id.value) if body.HasField("owner_id") else None,
                lifetime=TokenLifetime(
                    exp=body.lifetime.exp,
                    nbf=body.lifetime.nbf,
                    iat=body.lifetime.iat,
                ),
                signature=_read_signature(m.signature) if m.HasField("signature") else None,
            )

        return _convert(read, msg)

    @staticmethod
    def _parse(message_class, data: bytes):
        msg = message_class()
        try:
            msg.ParseFromString(data)
        except DecodeError as e:
            raise CodecError(f"Cannot decode {message_class.DESCRIPTOR.name}: {e}") from e
        return msg


def _convert(reader: Callable[..., T], msg) -> T:
    # Invalid identifiers or enum values surface as ValueError/TypeError.
    try:
        return reader(msg)
    except (ValueError, TypeError) as e:
        raise CodecError(f"Invalid {msg.DESCRIPTOR.name} message: {e}") from e


# =============================================================================
# Field helpers
# =============================================================================


def _set_object_id(target, object_id: ObjectID) -> None:
    target.SetInParent()
    target.value = object_id.value


def _set_signature(target, signature: Signature) -> None:
    target.SetInParent()
    target.key = signature.key
    target.sign = signature.sign


def _set_checksum(target, checksum: Checksum) -> None:
    target.SetInParent()
    target.type = int(checksum.type)
    target.sum = checksum.sum


def _set_version(target, version: Version) -> None:
    target.SetInParent()
    target.major = version.major
    target.minor = version.minor


def _read_signature(msg) -> Signature:
    return Signature(key=msg.key, sign=msg.sign)


def _read_checksum(msg) -> Checksum:
    return Checksum(ChecksumType(msg.type), msg.sum)


def _fill_header(msg, header: Header) -> None:
    if header.version is not None:
        _set_version(msg.version, header.version)
    if header.container_id is not None:
        msg.container_id.SetInParent()
        msg.container_id.value = header.container_id.value
    if header.owner_id is not None:
        msg.owner_id.SetInParent()
        msg.owner_id.value = header.owner_id.value
    msg.creation_epoch = header.creation_epoch
    msg.payload_length = header.payload_length
    if header.payload_hash is not None:
        _set_checksum(msg.payload_hash, header.payload_hash)
    msg.object_type = int(header.object_type)
    if header.homomorphic_hash is not None:
        _set_checksum(msg.homomorphic_hash, header.homomorphic_hash)
    if header.session_token is not None:
        msg.session_token = header.session_token
    for attr in header.attributes:
        msg.attributes.add(key=attr.key, value=attr.value)
    if header.split is not None:
        _fill_split(msg.split, header.split)


def _fill_split(msg, split: SplitMetadata) -> None:
    msg.SetInParent()
    if split.parent is not None:
        _set_object_id(msg.parent, split.parent)
    if split.previous is not None:
        _set_object_id(msg.previous, split.previous)
    if split.parent_signature is not None:
        _set_signature(msg.parent_signature, split.parent_signature)
    if split.parent_header is not None:
        msg.parent_header.SetInParent()
        _fill_header(msg.parent_header, split.parent_header)
    for child in split.children:
        msg.children.add(value=child.value)
    if split.split_id is not None:
        msg.split_id = split.split_id.value


def _read_header(msg) -> Header:
    return Header(
        version=Version(msg.version.major, msg.version.minor) if msg.HasField("version") else None,
        container_id=ContainerID(msg.container_id.value) if msg.HasField("container_id") else None,
        owner_id=OwnerID(msg.owner_id.value) if msg.HasField("owner_id") else None,
        creation_epoch=msg.creation_epoch,
        payload_length=msg.payload_length,
        payload_hash=_read_checksum(msg.payload_hash) if msg.HasField("payload_hash") else None,
        object_type=ObjectType(msg.object_type),
        homomorphic_hash=_read_checksum(msg.homomorphic_hash) if msg.HasField("homomorphic_hash") else None,
        session_token=msg.session_token or None,
        attributes=tuple(Attribute(a.key, a.value) for a in msg.attributes),
        split=_read_split(msg.split) if msg.HasField("split") else None,
    )


def _read_split(msg) -> SplitMetadata:
    return SplitMetadata(
        split_id=SplitID(msg.split_id) if msg.split_id else None,
        previous=ObjectID(msg.previous.value) if msg.HasField("previous") else None,
        parent=ObjectID(msg.parent.value) if msg.HasField("parent") else None,
        parent_signature=_read_signature(msg.parent_signature) if msg.HasField("parent_signature") else None,
        parent_header=_read_header(msg.parent_header) if msg.HasField("parent_header") else None,
        children=tuple(ObjectID(child.value) for child in msg.children),
    )


def _fill_eacl_table(msg, table: EACLTable) -> None:
    if table.version is not None:
        _set_version(msg.version, table.version)
    if table.container_id is not None:
        msg.container_id.SetInParent()
        msg.container_id.value = table.container_id.value
    for record in table.records:
        record_msg = msg.records.add(operation=int(record.operation), action=int(record.action))
        for flt in record.filters:
            record_msg.filters.add(
                header_type=int(flt.header_type),
                match_type=int(flt.match_type),
                key=flt.key,
                value=flt.value,
            )
        for target in record.targets:
            record_msg.targets.add(role=int(target.role), keys=list(target.keys))


def _read_eacl_table(msg) -> EACLTable:
    records = []
    for record in msg.records:
        records.append(
            EACLRecord(
                operation=Operation(record.operation),
                action=Action(record.action),
                filters=tuple(
                    EACLFilter(
                        header_type=HeaderType(f.header_type),
                        match_type=MatchType(f.match_type),
                        key=f.key,
                        value=f.value,
                    )
                    for f in record.filters
                ),
                targets=tuple(EACLTarget(role=Role(t.role), keys=tuple(t.keys)) for t in record.targets),
            )
        )
    return EACLTable(
        version=Version(msg.version.major, msg.version.minor) if msg.HasField("version") else None,
        container_id=ContainerID(msg.container_id.value) if msg.HasField("container_id") else None,
        records=tuple(records),
    )


__all__ = ["ProtobufCodec"]
