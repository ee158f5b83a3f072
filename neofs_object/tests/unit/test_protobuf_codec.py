"""Unit tests for the protobuf wire codec."""

import pytest

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
    SearchMatchType,
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


def minimal_header(**overrides) -> Header:
    fields = dict(
        version=Version(2, 11),
        container_id=ContainerID(b"\x01" * 32),
        owner_id=OwnerID(b"\x02" * 3),
        payload_hash=Checksum(ChecksumType.SHA256, b"\x03" * 32),
    )
    fields.update(overrides)
    return Header(**fields)


MINIMAL_HEADER_BYTES = (
    bytes.fromhex("0a040802100b")
    + bytes.fromhex("12220a20") + b"\x01" * 32
    + bytes.fromhex("1a050a03020202")
    + bytes.fromhex("322408021220") + b"\x03" * 32
)


@pytest.mark.unit
class TestCanonicalHeaderEncoding:
    """Test the header encoding hashed into identifiers."""

    def test_minimal_header_exact_bytes(self, codec):
        """Fields appear in number order and zero values are omitted."""
        assert codec.encode_header(minimal_header()) == MINIMAL_HEADER_BYTES

    def test_attribute_bytes(self, codec):
        header = minimal_header(attributes=(Attribute("a", "1"),))
        assert codec.encode_header(header) == MINIMAL_HEADER_BYTES + bytes.fromhex("52060a0161120131")

    def test_session_token_passes_through(self, codec):
        token = bytes.fromhex("0a00")
        header = minimal_header(session_token=token)
        encoded = codec.encode_header(header)
        assert encoded == MINIMAL_HEADER_BYTES + b"\x4a\x02" + token
        assert codec.decode_header(encoded).session_token == token

    def test_encoding_is_stable(self, codec):
        header = minimal_header(
            creation_epoch=7,
            payload_length=100,
            attributes=(Attribute("b", "2"), Attribute("a", "1")),
        )
        assert codec.encode_header(header) == codec.encode_header(header)
        assert codec.encode_header(codec.decode_header(codec.encode_header(header))) == codec.encode_header(header)

    def test_attribute_order_is_preserved(self, codec):
        header = minimal_header(attributes=(Attribute("b", "2"), Attribute("a", "1")))
        assert codec.decode_header(codec.encode_header(header)).attributes == header.attributes


@pytest.mark.unit
class TestRoundTrips:
    """Test decoding returns what was encoded."""

    def test_split_part_header(self, codec):
        parent = minimal_header(payload_length=10, attributes=(Attribute("Name", "big"),))
        header = minimal_header(
            creation_epoch=3,
            object_type=ObjectType.REGULAR,
            homomorphic_hash=Checksum(ChecksumType.TZ, b"\x09" * 64),
            split=SplitMetadata(
                split_id=SplitID(b"\x05" * 16),
                previous=ObjectID(b"\x06" * 32),
                parent=ObjectID(b"\x07" * 32),
                parent_signature=Signature(b"key", b"sign"),
                parent_header=parent,
            ),
        )
        assert codec.decode_header(codec.encode_header(header)) == header

    def test_object(self, codec):
        obj = Object(
            object_id=ObjectID(b"\x0a" * 32),
            signature=Signature(b"k", b"s"),
            header=minimal_header(object_type=ObjectType.TOMBSTONE),
            payload=b"payload",
        )
        assert codec.decode_object(codec.encode_object(obj)) == obj

    def test_object_without_identifier(self, codec):
        obj = Object(object_id=None, signature=None, header=minimal_header())
        decoded = codec.decode_object(codec.encode_object(obj))
        assert decoded.object_id is None
        assert decoded.signature is None

    def test_split_info(self, codec):
        info = SplitInfo(split_id=SplitID(b"\x01" * 16), link=ObjectID(b"\x02" * 32))
        assert codec.decode_split_info(codec.encode_split_info(info)) == info

    def test_tombstone(self, codec):
        tombstone = Tombstone(
            expiration_epoch=100,
            split_id=SplitID(b"\x01" * 16),
            members=(ObjectID(b"\x02" * 32), ObjectID(b"\x03" * 32)),
        )
        assert codec.decode_tombstone(codec.encode_tombstone(tombstone)) == tombstone

    def test_bearer_token(self, codec):
        table = EACLTable(
            version=Version(2, 11),
            container_id=ContainerID(b"\x04" * 32),
            records=(
                EACLRecord(
                    operation=Operation.GET,
                    action=Action.DENY,
                    filters=(EACLFilter(HeaderType.OBJECT, MatchType.STRING_EQUAL, "Name", "secret"),),
                    targets=(EACLTarget(Role.OTHERS),),
                ),
            ),
        )
        token = BearerToken(
            eacl_table=table,
            owner_id=OwnerID(b"\x05" * 25),
            lifetime=TokenLifetime(exp=10, nbf=1, iat=1),
            signature=Signature(b"k", b"s"),
        )
        assert codec.decode_bearer_token(codec.encode_bearer_token(token)) == token


@pytest.mark.unit
class TestShortHeader:
    """Test the search-result header subset."""

    def test_exact_bytes(self, codec):
        short = minimal_header(creation_epoch=7, attributes=(Attribute("a", "1"),)).short()
        expected = (
            bytes.fromhex("0a040802100b")
            + bytes.fromhex("1007")
            + bytes.fromhex("1a050a03020202")
            + bytes.fromhex("322408021220") + b"\x03" * 32
        )
        assert codec.encode_short_header(short) == expected

    def test_round_trip(self, codec):
        short = minimal_header(
            creation_epoch=9,
            payload_length=1024,
            object_type=ObjectType.STORAGE_GROUP,
            homomorphic_hash=Checksum(ChecksumType.TZ, b"\x08" * 64),
        ).short()
        assert codec.decode_short_header(codec.encode_short_header(short)) == short

    def test_search_match_type_matches_wire_enum(self):
        enum = wire_messages().short_header.DESCRIPTOR.file.enum_types_by_name["MatchType"]
        assert {v.name: v.number for v in enum.values} == {
            "MATCH_TYPE_UNSPECIFIED": SearchMatchType.UNSPECIFIED,
            "STRING_EQUAL": SearchMatchType.STRING_EQUAL,
        }

    def test_bad_owner(self, codec):
        with pytest.raises(CodecError):
            codec.decode_short_header(bytes.fromhex("1a00"))


@pytest.mark.unit
class TestDecodeErrors:
    """Test malformed input surfaces as CodecError."""

    def test_truncated_header(self, codec):
        with pytest.raises(CodecError):
            codec.decode_header(b"\x0a\x05\x01")

    def test_bad_object_id_length(self, codec):
        with pytest.raises(CodecError):
            codec.decode_object(bytes.fromhex("0a050a03010203"))

    def test_unknown_object_type(self, codec):
        with pytest.raises(CodecError):
            codec.decode_header(bytes.fromhex("3863"))

    def test_bad_split_id_length(self, codec):
        with pytest.raises(CodecError):
            codec.decode_split_info(bytes.fromhex("0a03010203"))

    def test_empty_input_decodes_to_empty_header(self, codec):
        header = codec.decode_header(b"")
        assert header.version is None
        assert header.attributes == ()
