"""Fetcher decorator retrying transient failures with exponential backoff."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from neofs_object.domain.entities import Object
from neofs_object.domain.value_objects import ObjectID
from neofs_object.ports.outbound import ObjectFetchError, ObjectFetcherPort

logger = logging.getLogger(__name__)


class RetryingFetcher:
    """Wraps a fetcher and retries ObjectFetchError.

    A missing object (None) is an answer, not a failure, and is never
    retried. Once attempts are exhausted the last error propagates.
    """

    def __init__(
        self,
        fetcher: ObjectFetcherPort,
        max_attempts: int = 3,
        backoff_base_seconds: float = 0.05,
        backoff_max_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._fetcher = fetcher
        self._max_attempts = max_attempts
        self._backoff_base = backoff_base_seconds
        self._backoff_max = backoff_max_seconds
        self._sleep = sleep

    def backoff(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (1-based)."""
        return min(self._backoff_base * (2 ** (attempt - 1)), self._backoff_max)

    def fetch(self, object_id: ObjectID) -> Optional[Object]:
        attempt = 1
        while True:
            try:
                return self._fetcher.fetch(object_id)
            except ObjectFetchError as e:
                if attempt >= self._max_attempts:
                    logger.warning(f"Giving up on {object_id} after {attempt} attempts: {e.reason}")
                    raise
                delay = self.backoff(attempt)
                logger.debug(f"Fetch of {object_id} failed ({e.reason}), retrying in {delay:.3f}s")
                self._sleep(delay)
                attempt += 1
