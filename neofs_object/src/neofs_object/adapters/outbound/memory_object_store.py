"""In-memory object store.

Thread-safe dict-backed storage implementing the fetch and split-info
ports. Split parts are indexed by the parent they reconstruct, so a
request for a parent that exists only as a split chain can be answered
with split info.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from neofs_object.domain.entities import Object, SplitInfo
from neofs_object.domain.value_objects import ObjectID, SplitID


@dataclass
class _SplitIndexEntry:
    split_id: Optional[SplitID] = None
    last_part: Optional[ObjectID] = None
    link: Optional[ObjectID] = None


class InMemoryObjectStore:
    """Object store kept in process memory."""

    def __init__(self) -> None:
        self._objects: dict[ObjectID, Object] = {}
        self._splits: dict[ObjectID, _SplitIndexEntry] = {}
        self._lock = threading.RLock()

    def put(self, obj: Object) -> ObjectID:
        """Store an object.

        Args:
            obj: Object with ``object_id`` set.

        Returns:
            The stored object's identifier.
        """
        if obj.object_id is None:
            raise ValueError("Cannot store an object without object_id")

        with self._lock:
            self._objects[obj.object_id] = obj
            split = obj.header.split
            if split is not None and split.parent is not None:
                entry = self._splits.setdefault(split.parent, _SplitIndexEntry())
                entry.split_id = split.split_id
                if split.is_linking:
                    entry.link = obj.object_id
                else:
                    entry.last_part = obj.object_id
        return obj.object_id

    def put_many(self, objects) -> list[ObjectID]:
        return [self.put(obj) for obj in objects]

    def fetch(self, object_id: ObjectID) -> Optional[Object]:
        with self._lock:
            return self._objects.get(object_id)

    def split_info(self, parent_id: ObjectID) -> Optional[SplitInfo]:
        with self._lock:
            entry = self._splits.get(parent_id)
            if entry is None:
                return None
            return SplitInfo(split_id=entry.split_id, last_part=entry.last_part, link=entry.link)

    def delete(self, object_id: ObjectID) -> bool:
        """Delete an object.

        Args:
            object_id: Object ID.

        Returns:
            True if deleted.
        """
        with self._lock:
            obj = self._objects.pop(object_id, None)
            if obj is None:
                return False
            split = obj.header.split
            if split is not None and split.parent is not None:
                entry = self._splits.get(split.parent)
                if entry is not None:
                    if entry.link == object_id:
                        entry.link = None
                    if entry.last_part == object_id:
                        entry.last_part = None
                    if entry.link is None and entry.last_part is None:
                        del self._splits[split.parent]
            return True

    def __contains__(self, object_id: ObjectID) -> bool:
        with self._lock:
            return object_id in self._objects

    def __len__(self) -> int:
        with self._lock:
            return len(self._objects)
