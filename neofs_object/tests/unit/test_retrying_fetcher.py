"""Unit tests for the retrying fetcher."""

import pytest

from neofs_object.adapters.outbound import RetryingFetcher
from neofs_object.domain.value_objects import ObjectID
from neofs_object.ports.outbound import ObjectFetchError

OID = ObjectID(b"\x01" * 32)


class FlakyFetcher:
    """Fails a fixed number of times, then answers."""

    def __init__(self, failures: int, result=None):
        self.failures = failures
        self.result = result
        self.calls = 0

    def fetch(self, object_id):
        self.calls += 1
        if self.calls <= self.failures:
            raise ObjectFetchError(object_id, f"attempt {self.calls} failed")
        return self.result


@pytest.mark.unit
class TestRetryingFetcher:
    """Test retry and backoff behavior."""

    def test_recovers_from_transient_failures(self, deriver, base_header):
        obj = deriver.seal(base_header, b"data")
        inner = FlakyFetcher(failures=2, result=obj)
        delays = []
        fetcher = RetryingFetcher(inner, max_attempts=3, sleep=delays.append)

        assert fetcher.fetch(OID) is obj
        assert inner.calls == 3
        assert delays == [0.05, 0.1]

    def test_gives_up_after_max_attempts(self):
        inner = FlakyFetcher(failures=5)
        fetcher = RetryingFetcher(inner, max_attempts=3, sleep=lambda _: None)

        with pytest.raises(ObjectFetchError) as exc_info:
            fetcher.fetch(OID)

        assert inner.calls == 3
        assert exc_info.value.reason == "attempt 3 failed"

    def test_missing_object_is_not_retried(self):
        inner = FlakyFetcher(failures=0, result=None)
        fetcher = RetryingFetcher(inner, sleep=lambda _: pytest.fail("unexpected sleep"))

        assert fetcher.fetch(OID) is None
        assert inner.calls == 1

    def test_backoff_is_capped(self):
        fetcher = RetryingFetcher(FlakyFetcher(0), backoff_base_seconds=0.5, backoff_max_seconds=1.5)
        assert [fetcher.backoff(n) for n in (1, 2, 3, 4)] == [0.5, 1.0, 1.5, 1.5]

    def test_single_attempt(self):
        inner = FlakyFetcher(failures=1)
        with pytest.raises(ObjectFetchError):
            RetryingFetcher(inner, max_attempts=1).fetch(OID)
        assert inner.calls == 1

    def test_invalid_attempts(self):
        with pytest.raises(ValueError):
            RetryingFetcher(FlakyFetcher(0), max_attempts=0)
