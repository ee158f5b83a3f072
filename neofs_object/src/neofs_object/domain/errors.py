"""Error taxonomy for the object model.

All errors here are non-retryable: they indicate malformed input or a
broken invariant, not a transient failure. Each carries the offending
identifier or field so callers can diagnose without re-deriving state.
"""

from __future__ import annotations

from typing import Any, Optional

from neofs_object.domain.value_objects import ObjectID, SplitID


class ObjectModelError(Exception):
    """Base class for object model errors."""

    pass


class MalformedHeaderError(ObjectModelError):
    """A required header field is absent or invalid."""

    def __init__(self, field: str, reason: str = "missing") -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Malformed header: field '{field}' is {reason}")


class IntegrityMismatchError(ObjectModelError):
    """A stored hash or identifier disagrees with the recomputed one."""

    def __init__(
        self,
        field: str,
        expected: Any,
        actual: Any,
        object_id: Optional[ObjectID] = None,
    ) -> None:
        self.field = field
        self.expected = expected
        self.actual = actual
        self.object_id = object_id
        where = f" in object {object_id}" if object_id else ""
        super().__init__(
            f"Integrity mismatch on '{field}'{where}: expected {expected}, got {actual}"
        )


class DuplicateAttributeError(ObjectModelError):
    """Two attributes share the same key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Duplicate attribute key: {key!r}")


class EmptyAttributeValueError(ObjectModelError):
    """An attribute has an empty value."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Empty value for attribute {key!r}")


class InvalidAttributeKeyError(ObjectModelError):
    """An attribute key is empty or not valid UTF-8."""

    def __init__(self, key: Any, reason: str = "not valid UTF-8") -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid attribute key {key!r}: {reason}")


class ChainBrokenError(ObjectModelError):
    """A split part reference does not resolve to an existing object."""

    def __init__(
        self,
        object_id: ObjectID,
        referenced_by: Optional[ObjectID] = None,
        reason: str = "not found",
    ) -> None:
        self.object_id = object_id
        self.referenced_by = referenced_by
        self.reason = reason
        source = f" (referenced by {referenced_by})" if referenced_by else ""
        super().__init__(f"Split chain broken at {object_id}{source}: {reason}")


class SplitIdMismatchError(ObjectModelError):
    """A part's split ID differs from the split being assembled."""

    def __init__(
        self,
        object_id: Optional[ObjectID],
        expected: Optional[SplitID],
        actual: Optional[SplitID],
    ) -> None:
        self.object_id = object_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Split ID mismatch for {object_id}: expected {expected}, got {actual}"
        )


class AssemblyIncompleteError(ObjectModelError):
    """Assembly cannot produce a complete object."""

    def __init__(self, reason: str, object_id: Optional[ObjectID] = None) -> None:
        self.reason = reason
        self.object_id = object_id
        where = f" at {object_id}" if object_id else ""
        super().__init__(f"Assembly incomplete{where}: {reason}")


class AssemblyCancelledError(ObjectModelError):
    """Assembly was cancelled by the caller."""

    pass


class ObjectTooLargeError(ObjectModelError):
    """An object that cannot be split exceeds the maximum object size."""

    def __init__(self, object_type: Any, size: int, limit: int) -> None:
        self.object_type = object_type
        self.size = size
        self.limit = limit
        super().__init__(
            f"{object_type} object of {size} bytes exceeds the {limit} byte limit"
        )


class CodecError(ObjectModelError):
    """Wire encoding or decoding failed."""

    pass


__all__ = [
    "ObjectModelError",
    "MalformedHeaderError",
    "IntegrityMismatchError",
    "DuplicateAttributeError",
    "EmptyAttributeValueError",
    "InvalidAttributeKeyError",
    "ChainBrokenError",
    "SplitIdMismatchError",
    "AssemblyIncompleteError",
    "AssemblyCancelledError",
    "ObjectTooLargeError",
    "CodecError",
]
