# tests/test_cache.py

"""
Tests for the in-memory cache behind the categories list.
"""

from datetime import datetime, timedelta

from core.cache import SimpleCache, cache_clear, cache_delete, cache_get, cache_set


def test_cache_set_and_get():
    cache_set("categories:list", [{"name": "Seeds"}], ttl_seconds=60)
    assert cache_get("categories:list") == [{"name": "Seeds"}]


def test_cache_expiration():
    cache = SimpleCache()
    cache.set("expiring_key", "value", ttl_seconds=60)

    # Move the entry's expiry into the past instead of sleeping
    cache._cache["expiring_key"].expires_at = datetime.now() - timedelta(seconds=1)

    assert cache.get("expiring_key") is None
    assert "expiring_key" not in cache._cache


def test_zero_ttl_disables_caching():
    cache = SimpleCache()
    cache.set("key", "value", ttl_seconds=0)
    assert cache.get("key") is None


def test_cache_delete():
    cache_set("delete_key", "delete_value")
    cache_delete("delete_key")
    assert cache_get("delete_key") is None


def test_cache_clear():
    cache_set("key1", "value1")
    cache_set("key2", "value2")

    cache_clear()

    assert cache_get("key1") is None
    assert cache_get("key2") is None
