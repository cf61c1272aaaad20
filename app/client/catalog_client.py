"""
Client-side fetch layer for the catalog proxy.

Keeps its own TTL cache and never raises to the presentation layer: every
failure resolves to stale cached data or to the hardcoded fallback stats.
"""
import asyncio
from typing import Awaitable, Callable, List, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from app.core.cache import CatalogCache
from app.core.constants import CacheConfig, FallbackConfig
from app.core.exceptions import NetworkError
from app.models import CatalogData, CatalogResponse, ChannelCatalog, ChannelStats, DataSource, VideoRecord

CatalogListener = Callable[[ChannelCatalog], Awaitable[None]]

FALLBACK_STATS = ChannelStats(
    subscriber_count=FallbackConfig.SUBSCRIBER_COUNT,
    total_view_count=FallbackConfig.TOTAL_VIEW_COUNT,
    video_count=FallbackConfig.VIDEO_COUNT,
    subscriber_display=FallbackConfig.SUBSCRIBER_DISPLAY,
    views_display=FallbackConfig.VIEWS_DISPLAY,
)


class CatalogClient:
    """
    Fetches the catalog from the proxy through a fallback ladder.

    Ladder for fetch_all:
    1. Fresh local cache.
    2. Live fetching disabled -> fallback stats, no videos.
    3. Proxy call succeeds -> update local cache, return it.
    4. Proxy call fails -> stale local cache if any.
    5. Otherwise -> fallback stats, no videos.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        endpoint: str,
        use_live_api: bool = True,
        cache: Optional[CatalogCache] = None,
        refresh_interval: float = CacheConfig.TTL_SECONDS,
    ):
        """
        Initialize the CatalogClient.

        Args:
            http_client: Async HTTP client used to reach the proxy.
            endpoint: URL of the proxy endpoint.
            use_live_api: When False, never call the proxy.
            cache: Local cache; a new one with the shared TTL by default.
            refresh_interval: Seconds between advisory refreshes of the refresh timer.
        """
        self.http = http_client
        self.endpoint = endpoint
        self.use_live_api = use_live_api
        self.cache = cache if cache is not None else CatalogCache()
        self.refresh_interval = refresh_interval
        self._listener: Optional[CatalogListener] = None
        self._refresh_task: Optional[asyncio.Task] = None

    async def fetch_all(self) -> ChannelCatalog:
        """Return channel stats, all videos and known collections. Never raises."""
        if self.cache.has_full() and self.cache.is_fresh():
            logger.info("Using locally cached data")
            return self._from_cache(DataSource.LOCAL_CACHE)

        if not self.use_live_api:
            logger.info("Live API disabled, using fallback data")
            return self._fallback(DataSource.DISABLED)

        try:
            logger.info(f"Fetching catalog from {self.endpoint}")
            result = await self._request()
            data = result.data or CatalogData()
            if data.channel_stats is None or data.videos is None:
                raise NetworkError("Proxy response is missing channel stats or videos")
        except NetworkError as e:
            logger.error(f"Error fetching catalog: {e}")
            if self.cache.has_full():
                logger.warning("Using expired cache as fallback")
                return self._from_cache(DataSource.STALE_CACHE)
            logger.warning("Using hardcoded fallback data")
            return self._fallback(DataSource.FALLBACK)

        logger.info(f"Catalog received (cached on server: {result.cached})")
        if not result.cached and result.quota_used:
            logger.info(f"Quota used: {result.quota_used} units")

        self.cache.put_full(data.channel_stats, data.videos)
        for tag, videos in (data.playlists or {}).items():
            self.cache.put_collection(tag, videos)
        return self._from_cache(DataSource.LIVE)

    async def fetch_collection(self, tag: str) -> List[VideoRecord]:
        """Return the videos of one collection, or an empty list. Never raises."""
        cached = self.cache.get_collection(tag)
        if cached is not None and self.cache.is_fresh():
            logger.info(f"Using cached collection data for {tag}")
            return cached

        if not self.use_live_api:
            return []

        try:
            logger.info(f"Fetching collection {tag} from {self.endpoint}")
            result = await self._request(params={"collection": tag})
            videos = result.data.videos if result.data else None
            if videos is None:
                raise NetworkError("Proxy response is missing videos")
        except NetworkError as e:
            logger.error(f"Error fetching collection {tag}: {e}")
            if cached is not None:
                logger.warning(f"Using expired cache for collection {tag}")
                return cached
            return []

        self.cache.put_collection(tag, videos)
        logger.info(f"Fetched {len(videos)} videos from collection {tag}")
        return list(videos)

    async def _request(self, params: Optional[dict] = None) -> CatalogResponse:
        """
        Call the proxy and validate the envelope.

        Raises:
            NetworkError: On transport errors, non-2xx statuses, malformed
                bodies, or an envelope reporting failure.
        """
        try:
            response = await self.http.get(self.endpoint, params=params)
        except (httpx.HTTPError, httpx.InvalidURL, RuntimeError) as e:
            # RuntimeError: the underlying client was already closed.
            raise NetworkError(f"Request to proxy failed: {e}") from e

        if not response.is_success:
            raise NetworkError(f"API request failed: {response.status_code}")

        try:
            result = CatalogResponse.model_validate(response.json())
        except (ValidationError, ValueError) as e:
            raise NetworkError(f"Malformed response from proxy: {e}") from e

        if not result.success:
            raise NetworkError(result.error or "Unknown error from API")
        return result

    def _from_cache(self, source: DataSource) -> ChannelCatalog:
        entry = self.cache.get()
        return ChannelCatalog(
            channel_stats=entry.channel_stats,
            videos=entry.all_videos or [],
            collections=entry.collections,
            source=source,
        )

    def _fallback(self, source: DataSource) -> ChannelCatalog:
        return ChannelCatalog(
            channel_stats=FALLBACK_STATS,
            videos=[],
            collections=self.cache.get().collections,
            source=source,
        )

    # --- Periodic refresh ---

    async def start_refresh_timer(self, listener: Optional[CatalogListener] = None) -> None:
        """Start refreshing the catalog every refresh_interval seconds."""
        if self._refresh_task is not None:
            logger.warning("Catalog refresh timer already running")
            return
        self._listener = listener
        self._refresh_task = asyncio.create_task(self._refresh_loop())
        logger.info("Catalog refresh timer started")

    async def stop_refresh_timer(self) -> None:
        """Stop the refresh timer."""
        if self._refresh_task is None:
            return
        self._refresh_task.cancel()
        try:
            await self._refresh_task
        except asyncio.CancelledError:
            pass
        self._refresh_task = None
        logger.info("Catalog refresh timer stopped")

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self.refresh_interval)
            try:
                await self.refresh()
            except Exception as e:
                logger.error(f"Error in catalog refresh listener: {e}")

    async def refresh(self) -> ChannelCatalog:
        """Expire the local timestamp and refetch; cached data stays available for fallback."""
        logger.info("Cache expired, refreshing data")
        self.cache.invalidate()
        catalog = await self.fetch_all()
        if self._listener is not None:
            await self._listener(catalog)
        return catalog


def search_videos(videos: List[VideoRecord], term: str) -> List[VideoRecord]:
    """Case-insensitive match of term against video titles and descriptions."""
    needle = term.strip().lower()
    if not needle:
        return list(videos)
    return [
        video
        for video in videos
        if needle in video.title.lower() or needle in video.description.lower()
    ]


async def _print_catalog() -> None:
    from app.core.config import settings
    from app.core.logging import setup_logging

    setup_logging()
    async with httpx.AsyncClient(timeout=settings.CATALOG_TIMEOUT_SECONDS) as http_client:
        client = CatalogClient(
            http_client=http_client,
            endpoint=settings.CATALOG_API_ENDPOINT,
            use_live_api=settings.CATALOG_USE_LIVE_API,
        )
        catalog = await client.fetch_all()
    stats = catalog.channel_stats
    logger.info(
        f"[{catalog.source.value}] {stats.subscriber_display} subscribers, "
        f"{stats.views_display} views, {len(catalog.videos)} videos"
    )


if __name__ == "__main__":
    asyncio.run(_print_catalog())
