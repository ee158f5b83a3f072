"""Unit tests for identity derivation."""

from dataclasses import replace

import pytest

from neofs_object.domain.entities import Attribute, Header, Object
from neofs_object.domain.errors import (
    DuplicateAttributeError,
    IntegrityMismatchError,
    MalformedHeaderError,
)
from neofs_object.domain.value_objects import (
    UNKNOWN_PAYLOAD_LENGTH,
    Checksum,
    ChecksumType,
    ObjectID,
)


@pytest.mark.unit
class TestDerive:
    """Test identifier derivation."""

    def test_deterministic(self, deriver, base_header, sample_payload):
        """Same header and payload always give the same identifier."""
        header = base_header.with_payload(sample_payload)
        assert deriver.derive(header, sample_payload) == deriver.derive(header, sample_payload)

    def test_identifier_is_hash_of_canonical_header(self, deriver, codec, base_header, sample_payload):
        header = base_header.with_payload(sample_payload)
        expected = ObjectID.digest(codec.encode_header(header))
        assert deriver.derive(header, sample_payload) == expected

    def test_payload_change_changes_identifier(self, deriver, base_header, sample_payload):
        """A modified payload re-embedded in the header yields a new identifier."""
        modified = bytes([sample_payload[0] ^ 0x01]) + sample_payload[1:]
        original_id = deriver.derive(base_header.with_payload(sample_payload), sample_payload)
        modified_id = deriver.derive(base_header.with_payload(modified), modified)
        assert original_id != modified_id

    def test_header_change_changes_identifier(self, deriver, base_header, sample_payload):
        header = base_header.with_payload(sample_payload)
        other = replace(header, creation_epoch=header.creation_epoch + 1)
        assert deriver.derive(header, sample_payload) != deriver.derive(other, sample_payload)

    def test_payload_hash_mismatch(self, deriver, base_header, sample_payload):
        """A payload not matching the embedded hash fails."""
        header = base_header.with_payload(sample_payload)
        with pytest.raises(IntegrityMismatchError) as exc_info:
            deriver.derive(header, sample_payload + b"!")
        assert exc_info.value.field == "payload_hash"

    def test_payload_length_mismatch(self, deriver, base_header, sample_payload):
        header = replace(base_header.with_payload(sample_payload), payload_length=1)
        with pytest.raises(IntegrityMismatchError) as exc_info:
            deriver.derive(header, sample_payload)
        assert exc_info.value.field == "payload_length"

    def test_unknown_payload_length_accepted(self, deriver, base_header, sample_payload):
        header = replace(base_header.with_payload(sample_payload), payload_length=UNKNOWN_PAYLOAD_LENGTH)
        deriver.derive(header, sample_payload)

    def test_empty_payload(self, deriver, base_header):
        header = base_header.with_payload(b"")
        assert isinstance(deriver.derive(header, b""), ObjectID)

    @pytest.mark.parametrize("field", ["version", "container_id", "owner_id", "payload_hash"])
    def test_missing_required_field(self, deriver, base_header, sample_payload, field):
        """Each required field is reported by name."""
        header = replace(base_header.with_payload(sample_payload), **{field: None})
        with pytest.raises(MalformedHeaderError) as exc_info:
            deriver.derive(header, sample_payload)
        assert exc_info.value.field == field

    def test_unsupported_payload_hash_type(self, deriver, base_header, sample_payload):
        header = replace(
            base_header.with_payload(sample_payload),
            payload_hash=Checksum(ChecksumType.TZ, b"\x00" * 64),
        )
        with pytest.raises(MalformedHeaderError):
            deriver.derive(header, sample_payload)

    def test_invalid_attributes_rejected(self, deriver, base_header, sample_payload):
        header = replace(
            base_header.with_payload(sample_payload),
            attributes=(Attribute("a", "1"), Attribute("a", "2")),
        )
        with pytest.raises(DuplicateAttributeError):
            deriver.derive(header, sample_payload)

    def test_attribute_order_is_significant(self, deriver, base_header):
        first = replace(base_header, attributes=(Attribute("a", "1"), Attribute("b", "2")))
        second = replace(base_header, attributes=(Attribute("b", "2"), Attribute("a", "1")))
        first = first.with_payload(b"x")
        second = second.with_payload(b"x")
        assert deriver.derive(first, b"x") != deriver.derive(second, b"x")


@pytest.mark.unit
class TestVerifyAndSeal:
    """Test object verification and sealing."""

    def test_seal_binds_payload(self, deriver, base_header, sample_payload):
        obj = deriver.seal(base_header, sample_payload)
        assert obj.header.payload_length == len(sample_payload)
        assert obj.header.payload_hash == Checksum.sha256(sample_payload)
        assert obj.object_id == deriver.derive(obj.header, sample_payload)

    def test_verify_sealed_object(self, deriver, base_header, sample_payload):
        obj = deriver.seal(base_header, sample_payload)
        assert deriver.verify(obj) == obj.object_id

    def test_verify_detects_modified_payload(self, deriver, base_header, sample_payload):
        """An unmodified identifier with a modified payload fails."""
        obj = deriver.seal(base_header, sample_payload)
        tampered = replace(obj, payload=b"X" + sample_payload[1:])
        with pytest.raises(IntegrityMismatchError) as exc_info:
            deriver.verify(tampered)
        assert exc_info.value.object_id == obj.object_id

    def test_verify_detects_wrong_identifier(self, deriver, base_header, sample_payload):
        obj = deriver.seal(base_header, sample_payload)
        wrong = replace(obj, object_id=ObjectID(b"\x01" * 32))
        with pytest.raises(IntegrityMismatchError) as exc_info:
            deriver.verify(wrong)
        assert exc_info.value.field == "object_id"

    def test_verify_requires_identifier(self, deriver, base_header, sample_payload):
        obj = Object(object_id=None, signature=None, header=base_header.with_payload(sample_payload))
        with pytest.raises(MalformedHeaderError):
            deriver.verify(obj)

    def test_header_id_without_payload(self, deriver, base_header, sample_payload):
        obj = deriver.seal(base_header, sample_payload)
        assert deriver.header_id(obj.header) == obj.object_id

    def test_header_id_requires_fields(self, deriver):
        with pytest.raises(MalformedHeaderError):
            deriver.header_id(Header(version=None, container_id=None, owner_id=None))
