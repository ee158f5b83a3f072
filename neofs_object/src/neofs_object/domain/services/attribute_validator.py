"""Attribute validation.

Enforces the object attribute rules: keys are unique (exact,
case-sensitive match) and valid UTF-8, values are non-empty. Reserved
``__NEOFS__`` keys are ordinary attributes here and pass through unchanged.
"""

from __future__ import annotations

import logging
from typing import Iterable

from neofs_object.domain.entities import Attribute
from neofs_object.domain.errors import (
    DuplicateAttributeError,
    EmptyAttributeValueError,
    InvalidAttributeKeyError,
    ObjectModelError,
)

logger = logging.getLogger(__name__)


class AttributeValidator:
    """Validates ordered attribute sequences."""

    def validate(self, attributes: Iterable[Attribute]) -> None:
        """Validate attributes, stopping at the first violation.

        Args:
            attributes: Ordered (key, value) pairs.

        Raises:
            InvalidAttributeKeyError: If a key is empty or not valid UTF-8.
            DuplicateAttributeError: If two entries share a key.
            EmptyAttributeValueError: If a value is empty.
        """
        for error in self._check(attributes):
            raise error

    def violations(self, attributes: Iterable[Attribute]) -> list[ObjectModelError]:
        """Collect every violation instead of stopping at the first.

        Args:
            attributes: Ordered (key, value) pairs.

        Returns:
            List of errors in encounter order (empty if valid).
        """
        return list(self._check(attributes))

    def is_valid(self, attributes: Iterable[Attribute]) -> bool:
        return not self.violations(attributes)

    def _check(self, attributes: Iterable[Attribute]):
        seen: set[str] = set()
        for attr in attributes:
            key = attr.key
            if isinstance(key, (bytes, bytearray)):
                try:
                    key = bytes(key).decode("utf-8")
                except UnicodeDecodeError:
                    logger.debug(f"Attribute key {attr.key!r} is not UTF-8")
                    yield InvalidAttributeKeyError(attr.key)
                    continue
            elif not isinstance(key, str):
                yield InvalidAttributeKeyError(key, "not a string")
                continue
            else:
                try:
                    key.encode("utf-8")
                except UnicodeEncodeError:
                    yield InvalidAttributeKeyError(key)
                    continue

            if not key:
                yield InvalidAttributeKeyError(key, "empty key")
                continue

            if key in seen:
                yield DuplicateAttributeError(key)
            seen.add(key)

            if not attr.value:
                yield EmptyAttributeValueError(key)
