"""Unit tests for the in-memory object store."""

import pytest

from neofs_object.domain.entities import Object
from neofs_object.domain.services import ObjectSplitter
from neofs_object.ports.outbound import ObjectFetcherPort, SplitInfoResolverPort


@pytest.mark.unit
class TestInMemoryObjectStore:
    """Test storage and split indexing."""

    def test_implements_ports(self, store):
        assert isinstance(store, ObjectFetcherPort)
        assert isinstance(store, SplitInfoResolverPort)

    def test_put_and_fetch(self, store, deriver, base_header, sample_payload):
        obj = deriver.seal(base_header, sample_payload)
        assert store.put(obj) == obj.object_id
        assert store.fetch(obj.object_id) == obj
        assert obj.object_id in store
        assert len(store) == 1

    def test_put_requires_identifier(self, store, base_header):
        with pytest.raises(ValueError):
            store.put(Object(object_id=None, signature=None, header=base_header))

    def test_split_info_indexed_by_parent(self, store, deriver, base_header):
        result = ObjectSplitter(deriver, max_object_size=4).split(base_header, b"abcdefghij")
        store.put_many(result.stored_objects)

        assert store.fetch(result.parent.object_id) is None
        assert store.split_info(result.parent.object_id) == result.split_info

    def test_split_info_without_link(self, store, deriver, base_header):
        result = ObjectSplitter(deriver, max_object_size=4).split(base_header, b"abcdefghij")
        store.put_many(result.parts)

        info = store.split_info(result.parent.object_id)
        assert info.last_part == result.parts[-1].object_id
        assert info.link is None

    def test_delete_updates_split_index(self, store, deriver, base_header):
        result = ObjectSplitter(deriver, max_object_size=4).split(base_header, b"abcdefghij")
        store.put_many(result.stored_objects)

        assert store.delete(result.link.object_id)
        assert store.split_info(result.parent.object_id).link is None
        assert store.delete(result.parts[-1].object_id)
        assert store.split_info(result.parent.object_id) is None
        assert not store.delete(result.link.object_id)

    def test_unknown_parent(self, store, deriver, base_header):
        assert store.split_info(deriver.seal(base_header, b"x").object_id) is None
