"""Object splitting.

Cuts a payload larger than the maximum object size into a chain of
REGULAR part objects plus a linking object. The last part and the link
carry a full copy of the parent header and signature, so the parent can
be reconstructed without ever being stored itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from neofs_object.domain.entities import Header, Object, SplitInfo, SplitMetadata, Tombstone
from neofs_object.domain.errors import ObjectTooLargeError
from neofs_object.domain.services.identity_deriver import IdentityDeriver
from neofs_object.domain.value_objects import ObjectID, Signature, SplitID
from neofs_object.ports.outbound import SignerPort

logger = logging.getLogger(__name__)

DEFAULT_MAX_OBJECT_SIZE = 64 * 1024 * 1024  # 64 MiB


@dataclass(frozen=True)
class SplitResult:
    """Objects produced by a split operation."""

    parent: Object
    parts: tuple[Object, ...]
    link: Optional[Object] = None
    split_id: Optional[SplitID] = None

    @property
    def is_split(self) -> bool:
        return self.split_id is not None

    @property
    def stored_objects(self) -> tuple[Object, ...]:
        """Objects to persist: the parts and the link (or the lone object)."""
        if self.link is None:
            return self.parts
        return self.parts + (self.link,)

    @property
    def split_info(self) -> Optional[SplitInfo]:
        if not self.is_split:
            return None
        return SplitInfo(
            split_id=self.split_id,
            last_part=self.parts[-1].object_id,
            link=self.link.object_id if self.link else None,
        )

    def tombstone(self, expiration_epoch: int) -> Tombstone:
        """Tombstone covering every object of this split, parent included."""
        members = [obj.object_id for obj in self.stored_objects]
        members.append(self.parent.object_id)
        return Tombstone.for_objects(members, expiration_epoch, self.split_id)


class ObjectSplitter:
    """Splits large payloads into part objects."""

    def __init__(
        self,
        deriver: IdentityDeriver,
        max_object_size: int = DEFAULT_MAX_OBJECT_SIZE,
    ) -> None:
        if max_object_size < 1:
            raise ValueError("max_object_size must be positive")
        self._deriver = deriver
        self.max_object_size = max_object_size

    def split(
        self,
        header: Header,
        payload: bytes,
        signer: Optional[SignerPort] = None,
        split_id: Optional[SplitID] = None,
    ) -> SplitResult:
        """Seal an object, splitting it if it exceeds the size limit.

        Args:
            header: Parent header (payload hash and length are filled in).
            payload: Full payload.
            signer: Signs every produced identifier, if given.
            split_id: Split ID to use; a random one if None.

        Returns:
            Split result. A small object yields a single part and no link.

        Raises:
            ObjectTooLargeError: If a non-REGULAR object exceeds the limit.
        """
        header = header.without_split()
        parent = self._seal(header, payload, signer)

        if len(payload) <= self.max_object_size:
            return SplitResult(parent=parent, parts=(parent,))

        if not header.object_type.is_splittable:
            raise ObjectTooLargeError(header.object_type.name, len(payload), self.max_object_size)

        split_id = split_id or SplitID.generate()
        chunks = [
            payload[offset:offset + self.max_object_size]
            for offset in range(0, len(payload), self.max_object_size)
        ]

        base = self._part_header(header)
        parts: list[Object] = []
        previous: Optional[ObjectID] = None
        for index, chunk in enumerate(chunks):
            split = SplitMetadata(split_id=split_id, previous=previous)
            if index == len(chunks) - 1:
                split = replace(
                    split,
                    parent=parent.object_id,
                    parent_signature=parent.signature,
                    parent_header=parent.header,
                )
            part = self._seal(replace(base, split=split), chunk, signer)
            parts.append(part)
            previous = part.object_id

        link_split = SplitMetadata(
            split_id=split_id,
            parent=parent.object_id,
            parent_signature=parent.signature,
            parent_header=parent.header,
            children=tuple(p.object_id for p in parts),
        )
        link = self._seal(replace(base, split=link_split), b"", signer)

        logger.info(
            f"Split object {parent.object_id} ({len(payload)} bytes) into "
            f"{len(parts)} parts, split {split_id}"
        )
        return SplitResult(parent=parent, parts=tuple(parts), link=link, split_id=split_id)

    @staticmethod
    def _part_header(parent: Header) -> Header:
        # Parts keep provenance only; attributes belong to the parent.
        return Header(
            version=parent.version,
            container_id=parent.container_id,
            owner_id=parent.owner_id,
            creation_epoch=parent.creation_epoch,
            session_token=parent.session_token,
        )

    def _seal(self, header: Header, payload: bytes, signer: Optional[SignerPort]) -> Object:
        obj = self._deriver.seal(header, payload)
        if signer is None:
            return obj
        signature: Signature = signer.sign(obj.object_id)
        return replace(obj, signature=signature)
