"""Unit tests for the search result cache."""

from propsearch.core.cache import PropertyCache


class TestPropertyCache:
    """Tests for PropertyCache TTL behaviour."""

    def test_get_missing_key_returns_none(self, cache):
        assert cache.get("nope") is None

    def test_set_then_get_within_ttl(self, cache, clock, empty_result):
        cache.set("k", empty_result)
        clock.advance(3599)

        assert cache.get("k") is empty_result

    def test_entry_expires_at_ttl_and_is_removed(self, cache, clock, empty_result):
        cache.set("k", empty_result)
        clock.advance(3600)

        assert cache.get("k") is None
        assert "k" not in cache
        assert len(cache) == 0

    def test_set_overwrites_and_restarts_ttl(self, cache, clock, empty_result):
        cache.set("k", "first")
        clock.advance(3000)
        cache.set("k", empty_result)
        clock.advance(3000)

        assert cache.get("k") is empty_result

    def test_no_size_bound(self, clock):
        cache = PropertyCache(ttl_seconds=60, timer=clock)
        for i in range(10_000):
            cache.set(f"k{i}", i)

        assert len(cache) == 10_000
        assert cache.get("k0") == 0

    def test_clear(self, cache, empty_result):
        cache.set("k", empty_result)
        cache.clear()

        assert cache.get("k") is None
