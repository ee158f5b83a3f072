"""Split-chain assembly.

Reconstructs an original object from its split parts. Two strategies,
in preference order:

1. Linking object: its ``children`` list every part in order, so all
   parts are known upfront and are fetched concurrently.
2. Chain walk: start from the last part and follow ``previous`` links
   back to the first part. Each step depends on the previous fetch, so
   this is strictly sequential.

Every fetched part must carry the split ID being assembled, and (unless
disabled) its identifier is recomputed before it is linked.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import replace
from typing import Optional, Sequence

from neofs_object.domain.entities import AssembledObject, Object, SplitInfo, SplitMetadata
from neofs_object.domain.errors import (
    AssemblyCancelledError,
    AssemblyIncompleteError,
    ChainBrokenError,
    IntegrityMismatchError,
    SplitIdMismatchError,
)
from neofs_object.domain.services.identity_deriver import IdentityDeriver
from neofs_object.domain.value_objects import ObjectID, SplitID
from neofs_object.ports.outbound import ObjectFetchError, ObjectFetcherPort

logger = logging.getLogger(__name__)

STRATEGY_LINK = "link"
STRATEGY_CHAIN = "chain"

# Expected split ID not yet taken from any fetched object. Once pinned, even
# None must match exactly.
_UNPINNED = object()


class SplitChainAssembler:
    """Reassembles split objects from their parts."""

    def __init__(
        self,
        fetcher: ObjectFetcherPort,
        deriver: IdentityDeriver,
        max_parallel_fetches: int = 8,
        max_chain_length: int = 100_000,
        verify_parts: bool = True,
    ) -> None:
        """Initialize the assembler.

        Args:
            fetcher: Storage collaborator used to fetch parts.
            deriver: Identity deriver for part and parent verification.
            max_parallel_fetches: Worker limit for linking-object fetches.
            max_chain_length: Upper bound on parts walked in a chain.
            verify_parts: Recompute each part's identifier before use.
        """
        if max_parallel_fetches < 1:
            raise ValueError("max_parallel_fetches must be at least 1")
        if max_chain_length < 1:
            raise ValueError("max_chain_length must be at least 1")
        self._fetcher = fetcher
        self._deriver = deriver
        self._max_parallel_fetches = max_parallel_fetches
        self._max_chain_length = max_chain_length
        self._verify_parts = verify_parts

    def assemble(
        self,
        split_info: SplitInfo,
        cancel: Optional[threading.Event] = None,
    ) -> AssembledObject:
        """Assemble the object described by ``split_info``.

        Args:
            split_info: Split metadata naming the last part and/or link.
            cancel: Event that abandons further fetches when set.

        Returns:
            Reconstructed parent with a verified identifier.

        Raises:
            AssemblyIncompleteError: If neither ``last_part`` nor ``link``
                is set, or the parts do not form a complete object.
            SplitIdMismatchError: If any part belongs to another split.
            ChainBrokenError: If a referenced part cannot be fetched.
            AssemblyCancelledError: If ``cancel`` is set.
        """
        if not split_info.is_assemblable:
            raise AssemblyIncompleteError("split info has neither last part nor link")

        expected = _pin(split_info.split_id)
        if split_info.link is not None:
            if split_info.last_part is not None:
                # Both present: they must agree before the link is trusted.
                last = self._fetch(split_info.last_part, None, cancel)
                expected = self._check_split_id(last, expected)
            return self._from_link(split_info.link, expected, cancel)
        return self._from_chain(split_info.last_part, expected, cancel)

    def assemble_from_link(
        self,
        link_id: ObjectID,
        split_id: Optional[SplitID] = None,
        cancel: Optional[threading.Event] = None,
    ) -> AssembledObject:
        """Assemble using a linking object's ordered children.

        Args:
            link_id: Identifier of the linking object.
            split_id: Expected split ID; taken from the link if None.
            cancel: Cancellation event.

        Returns:
            Reconstructed parent.
        """
        return self._from_link(link_id, _pin(split_id), cancel)

    def _from_link(
        self,
        link_id: ObjectID,
        expected: object,
        cancel: Optional[threading.Event],
    ) -> AssembledObject:
        link = self._fetch(link_id, None, cancel)
        expected = self._check_split_id(link, expected)
        children = link.split.children
        if not children:
            raise AssemblyIncompleteError("linking object lists no children", link_id)

        parts = self._fetch_all(children, link_id, cancel)
        for part in parts:
            self._check_split_id(part, expected)

        parent_split = link.split if link.split.carries_parent else parts[-1].split
        logger.debug(f"Assembling {len(parts)} parts from link {link_id}")
        return self._finish(parent_split, parts, STRATEGY_LINK, link_id, cancel)

    def assemble_from_chain(
        self,
        last_part_id: ObjectID,
        split_id: Optional[SplitID] = None,
        cancel: Optional[threading.Event] = None,
    ) -> AssembledObject:
        """Assemble by walking ``previous`` links back from the last part.

        Args:
            last_part_id: Identifier of the last part in the chain.
            split_id: Expected split ID; taken from the last part if None.
            cancel: Cancellation event.

        Returns:
            Reconstructed parent.
        """
        return self._from_chain(last_part_id, _pin(split_id), cancel)

    def _from_chain(
        self,
        last_part_id: ObjectID,
        expected: object,
        cancel: Optional[threading.Event],
    ) -> AssembledObject:
        parts: list[Object] = []
        seen: set[ObjectID] = set()
        parent_split: Optional[SplitMetadata] = None
        current = last_part_id
        referenced_by: Optional[ObjectID] = None

        while True:
            if current in seen:
                raise AssemblyIncompleteError("cycle in split chain", current)
            if len(parts) >= self._max_chain_length:
                raise AssemblyIncompleteError(
                    f"chain exceeds {self._max_chain_length} parts without reaching the first part",
                    current,
                )
            seen.add(current)

            part = self._fetch(current, referenced_by, cancel)
            expected = self._check_split_id(part, expected)
            if parent_split is None and part.split.carries_parent:
                parent_split = part.split
            parts.append(part)

            if part.split.previous is None:
                break
            referenced_by, current = current, part.split.previous

        parts.reverse()
        logger.debug(f"Walked {len(parts)} parts back from {last_part_id}")
        return self._finish(parent_split, parts, STRATEGY_CHAIN, last_part_id, cancel)

    def _finish(
        self,
        parent_split: Optional[SplitMetadata],
        parts: Sequence[Object],
        strategy: str,
        source_id: ObjectID,
        cancel: Optional[threading.Event],
    ) -> AssembledObject:
        self._check_cancel(cancel)
        if parent_split is None or parent_split.parent_header is None:
            raise AssemblyIncompleteError("no part carries the parent header", source_id)

        header = parent_split.parent_header
        payload = b"".join(part.payload for part in parts)
        object_id = self._deriver.derive(header, payload)

        if parent_split.parent is not None and parent_split.parent != object_id:
            raise IntegrityMismatchError("parent", parent_split.parent, object_id, parent_split.parent)

        return AssembledObject(
            object_id=object_id,
            header=header,
            signature=parent_split.parent_signature,
            payload=payload,
            parts=tuple(part.object_id for part in parts),
            strategy=strategy,
        )

    def _fetch_all(
        self,
        object_ids: Sequence[ObjectID],
        referenced_by: ObjectID,
        cancel: Optional[threading.Event],
    ) -> list[Object]:
        workers = min(self._max_parallel_fetches, len(object_ids))
        if workers <= 1:
            return [self._fetch(oid, referenced_by, cancel) for oid in object_ids]

        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="split-fetch")
        try:
            futures = [
                executor.submit(self._fetch, oid, referenced_by, cancel) for oid in object_ids
            ]
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            for future in futures:
                if future in done and future.exception() is not None:
                    raise future.exception()
            return [future.result() for future in futures]
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def _fetch(
        self,
        object_id: ObjectID,
        referenced_by: Optional[ObjectID],
        cancel: Optional[threading.Event],
    ) -> Object:
        self._check_cancel(cancel)
        try:
            obj = self._fetcher.fetch(object_id)
        except ObjectFetchError as e:
            raise ChainBrokenError(object_id, referenced_by, e.reason) from e
        if obj is None:
            raise ChainBrokenError(object_id, referenced_by)

        if obj.object_id is None:
            obj = replace(obj, object_id=object_id)
        elif obj.object_id != object_id:
            raise IntegrityMismatchError("object_id", object_id, obj.object_id, object_id)

        if self._verify_parts:
            self._deriver.verify(obj)
        return obj

    @staticmethod
    def _check_split_id(obj: Object, expected: object) -> Optional[SplitID]:
        split = obj.header.split
        actual = split.split_id if split is not None else None
        if split is None or (expected is not _UNPINNED and actual != expected):
            shown = None if expected is _UNPINNED else expected
            raise SplitIdMismatchError(obj.object_id, shown, actual)
        return actual

    @staticmethod
    def _check_cancel(cancel: Optional[threading.Event]) -> None:
        if cancel is not None and cancel.is_set():
            raise AssemblyCancelledError("assembly cancelled")


def _pin(split_id: Optional[SplitID]) -> object:
    return _UNPINNED if split_id is None else split_id
