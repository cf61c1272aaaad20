"""
In-memory catalog cache with a single shared time-to-live.

One instance lives for the lifetime of its owner: the proxy process on the
server side, the page session on the client side. Nothing is persisted and
there is no locking; each instance assumes a single logical writer.
"""
import time
from typing import Callable, Dict, List, Optional

from app.core.constants import CacheConfig
from app.models.youtube import CacheEntry, ChannelStats, VideoRecord


class CatalogCache:
    """
    Holds channel stats, the full video list and per-collection lists.

    Freshness is tracked by one timestamp for the whole entry:

    - ``put_full`` always restarts the freshness window.
    - ``put_collection`` starts it only when it is unset, so collection-only
      traffic never postpones expiry of the full catalog.

    Stale data is never purged; it is only reported as not fresh until it is
    overwritten.
    """

    def __init__(
        self,
        ttl_seconds: float = CacheConfig.TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize an empty cache.

        Args:
            ttl_seconds: How long a stamped entry stays fresh.
            clock: Monotonic time source in seconds (injectable for tests).
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._channel_stats: Optional[ChannelStats] = None
        self._all_videos: Optional[List[VideoRecord]] = None
        self._collections: Dict[str, List[VideoRecord]] = {}
        self._fetched_at: Optional[float] = None

    @property
    def fetched_at(self) -> Optional[float]:
        return self._fetched_at

    def is_fresh(self) -> bool:
        """True iff the entry has been stamped and the TTL has not elapsed."""
        if self._fetched_at is None:
            return False
        return self._clock() - self._fetched_at < self.ttl_seconds

    def has_full(self) -> bool:
        """True if stats and the full video list are both present, fresh or not."""
        return self._channel_stats is not None and self._all_videos is not None

    def get(self) -> CacheEntry:
        """Return a snapshot of the current entry."""
        return CacheEntry(
            channel_stats=self._channel_stats,
            all_videos=list(self._all_videos) if self._all_videos is not None else None,
            collections={tag: list(videos) for tag, videos in self._collections.items()},
            fetched_at=self._fetched_at,
        )

    def get_collection(self, tag: str) -> Optional[List[VideoRecord]]:
        videos = self._collections.get(tag)
        return list(videos) if videos is not None else None

    def put_full(self, channel_stats: ChannelStats, videos: List[VideoRecord]) -> None:
        """Replace stats and the full video list together and restart the window."""
        self._channel_stats = channel_stats
        self._all_videos = list(videos)
        self._fetched_at = self._clock()

    def put_collection(self, tag: str, videos: List[VideoRecord]) -> None:
        """Replace one collection; stamp the entry only if it was never stamped."""
        self._collections[tag] = list(videos)
        if self._fetched_at is None:
            self._fetched_at = self._clock()

    def invalidate(self) -> None:
        """Forget the timestamp so the next read refetches. Data is kept for fallback."""
        self._fetched_at = None
