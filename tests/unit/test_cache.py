"""Tests for the evidence detail cache."""

import threading

import pytest

from knows.utils.cache import DetailCache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class TestDetailCache:
    """Tests for DetailCache."""

    def test_get_missing(self, clock):
        """Test a missing key is not found."""
        cache = DetailCache(ttl=60, max_entries=10, clock=clock)
        assert cache.get("PAPER:ev-1:false") == (None, False)

    def test_set_then_get(self, clock):
        """Test a fresh entry is returned."""
        cache = DetailCache(ttl=60, max_entries=10, clock=clock)
        cache.set("PAPER:ev-1:false", {"title": "Aspirin"})
        clock.advance(59)
        assert cache.get("PAPER:ev-1:false") == ({"title": "Aspirin"}, True)

    def test_expired_entry_is_evicted(self, clock):
        """Test an expired entry misses and stops counting toward capacity."""
        cache = DetailCache(ttl=60, max_entries=10, clock=clock)
        cache.set("a", 1)
        clock.advance(61)

        assert cache.get("a") == (None, False)
        assert len(cache) == 0

    def test_evicts_first_inserted_at_capacity(self, clock):
        """Test inserting into a full cache removes the oldest insert."""
        cache = DetailCache(ttl=60, max_entries=2, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)

        assert cache.get("a") == (None, False)
        assert cache.get("b") == (2, True)
        assert cache.get("c") == (3, True)
        assert len(cache) == 2

    def test_reads_do_not_change_eviction_order(self, clock):
        """Test eviction is by insertion, not by access."""
        cache = DetailCache(ttl=60, max_entries=2, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)

        assert cache.get("a")[1] is False
        assert cache.get("b")[1] is True

    def test_update_keeps_insertion_position(self, clock):
        """Test overwriting a key refreshes value and TTL but not its position."""
        cache = DetailCache(ttl=60, max_entries=2, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        clock.advance(50)
        cache.set("a", 10)

        clock.advance(20)
        assert cache.get("a") == (10, True)

        cache.set("c", 3)
        assert cache.get("a")[1] is False
        assert len(cache) == 2

    def test_disabled_when_capacity_not_positive(self, clock):
        """Test zero capacity disables caching."""
        cache = DetailCache(ttl=60, max_entries=0, clock=clock)
        cache.set("a", 1)

        assert cache.enabled is False
        assert cache.get("a") == (None, False)
        assert len(cache) == 0

    def test_clear(self, clock):
        """Test clearing removes every entry."""
        cache = DetailCache(ttl=60, max_entries=5, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0

    def test_make_key(self):
        """Test keys combine kind, identifier and flag."""
        assert DetailCache.make_key("PAPER", "ev-1", True) == "PAPER:ev-1:true"
        assert DetailCache.make_key("GUIDE", "g-1") == "GUIDE:g-1:false"

    def test_concurrent_writers_respect_capacity(self):
        """Test capacity holds under concurrent writes from threads."""
        cache = DetailCache(ttl=60, max_entries=50)

        def writer(prefix: str) -> None:
            for i in range(200):
                cache.set(f"{prefix}-{i}", i)

        threads = [threading.Thread(target=writer, args=(f"t{n}",)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(cache) == 50
