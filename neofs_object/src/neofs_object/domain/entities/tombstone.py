"""Tombstone entity.

A tombstone keeps record of deleted objects for a few epochs until they
are purged from the network. Removal itself is done lazily by GC.

References:
    - tombstone/types.proto
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from neofs_object.domain.value_objects import ObjectID, SplitID


@dataclass(frozen=True)
class Tombstone:
    """Record marking a set of objects as logically deleted."""

    expiration_epoch: int
    split_id: Optional[SplitID] = None
    members: tuple[ObjectID, ...] = ()

    def __post_init__(self) -> None:
        if self.expiration_epoch < 0:
            raise ValueError("expiration_epoch cannot be negative")
        object.__setattr__(self, "members", tuple(self.members))

    @classmethod
    def for_objects(
        cls,
        members: Iterable[ObjectID],
        expiration_epoch: int,
        split_id: Optional[SplitID] = None,
    ) -> Tombstone:
        """Create a tombstone for ``members``, dropping duplicates."""
        unique = tuple(dict.fromkeys(members))
        return cls(expiration_epoch=expiration_epoch, split_id=split_id, members=unique)

    def covers(self, object_id: ObjectID) -> bool:
        return object_id in self.members

    def is_expired(self, current_epoch: int) -> bool:
        """Check if the tombstone lifetime is over.

        Args:
            current_epoch: Current network epoch.

        Returns:
            True once ``current_epoch`` is past the expiration epoch.
        """
        return current_epoch > self.expiration_epoch
