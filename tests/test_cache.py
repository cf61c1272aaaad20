"""
Unit tests for the catalog cache freshness rules.
"""
from app.core.cache import CatalogCache
from app.core.constants import CacheConfig
from app.models import ChannelStats, VideoRecord


def _stats() -> ChannelStats:
    return ChannelStats(subscriber_count=10, total_view_count=20, video_count=2)


def _videos(*ids: str) -> list[VideoRecord]:
    return [VideoRecord(id=i, title=f"Video {i}") for i in ids]


def test_empty_cache_is_not_fresh(cache):
    """A cache that was never written has no freshness window."""
    assert cache.fetched_at is None
    assert not cache.is_fresh()
    assert not cache.has_full()


def test_put_full_is_fresh_until_ttl(cache, clock):
    """put_full opens a window that closes exactly at fetched_at + TTL."""
    cache.put_full(_stats(), _videos("a", "b"))
    assert cache.is_fresh()

    clock.advance(CacheConfig.TTL_SECONDS - 1)
    assert cache.is_fresh()

    clock.advance(1)
    assert not cache.is_fresh()


def test_put_full_restarts_window(cache, clock):
    """A second put_full always restamps the entry."""
    cache.put_full(_stats(), _videos("a"))
    first = cache.fetched_at
    clock.advance(100)
    cache.put_full(_stats(), _videos("b"))
    assert cache.fetched_at == first + 100


def test_put_collection_stamps_only_when_unset(cache, clock):
    """The first collection write stamps the entry; later ones leave it alone."""
    cache.put_collection("htb", _videos("a"))
    first = cache.fetched_at
    assert first == clock.now
    assert cache.is_fresh()

    clock.advance(300)
    cache.put_collection("thm", _videos("b"))
    assert cache.fetched_at == first

    clock.advance(300)
    assert not cache.is_fresh()


def test_put_collection_after_full_keeps_timestamp(cache, clock):
    """Collection traffic never extends the full catalog's window."""
    cache.put_full(_stats(), _videos("a"))
    stamped = cache.fetched_at
    clock.advance(599)
    cache.put_collection("ad", _videos("b"))
    assert cache.fetched_at == stamped
    clock.advance(1)
    assert not cache.is_fresh()


def test_collection_only_cache_has_no_full_payload(cache):
    cache.put_collection("ctf", _videos("a"))
    assert not cache.has_full()
    assert cache.get_collection("ctf")[0].id == "a"
    assert cache.get_collection("cloud") is None


def test_stale_data_is_kept(cache, clock):
    """Expiry only affects freshness; the data stays readable."""
    cache.put_full(_stats(), _videos("a", "b"))
    clock.advance(CacheConfig.TTL_SECONDS * 3)
    entry = cache.get()
    assert not cache.is_fresh()
    assert [v.id for v in entry.all_videos] == ["a", "b"]
    assert entry.channel_stats.subscriber_count == 10


def test_invalidate_clears_timestamp_only(cache):
    cache.put_full(_stats(), _videos("a"))
    cache.invalidate()
    assert cache.fetched_at is None
    assert not cache.is_fresh()
    assert cache.has_full()


def test_snapshot_is_isolated_from_cache(cache):
    """Mutating a snapshot does not alter the cache."""
    cache.put_full(_stats(), _videos("a"))
    cache.put_collection("ad", _videos("b"))
    entry = cache.get()
    entry.all_videos.clear()
    entry.collections["ad"].clear()
    entry.collections["new"] = []

    again = cache.get()
    assert len(again.all_videos) == 1
    assert len(again.collections["ad"]) == 1
    assert "new" not in again.collections


def test_default_ttl_matches_constant():
    assert CatalogCache().ttl_seconds == CacheConfig.TTL_SECONDS == 600
