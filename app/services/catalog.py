"""
Aggregator behind the proxy endpoint: cache check, upstream refetch, envelope.
"""
from typing import Dict, List, Mapping, Optional

import httpx
from loguru import logger

from app.core.cache import CatalogCache
from app.core.constants import COLLECTIONS, QuotaConfig
from app.core.exceptions import (
    ConfigurationError,
    InternalServerError,
    InvalidRequestError,
    UpstreamError,
)
from app.models import CatalogData, CatalogResponse, VideoRecord
from app.services.youtube import YouTubeClient


class CatalogService:
    """
    Serves the channel catalog from the process cache, refetching on a miss.

    A refetch is all-or-nothing: either the whole payload is fetched and
    cached, or the request fails and the cache is left untouched.
    """

    def __init__(
        self,
        cache: CatalogCache,
        youtube_client: YouTubeClient,
        channel_id: str,
        collections: Mapping[str, str] = COLLECTIONS,
        prefetch_collections: bool = False,
    ):
        """
        Initialize the CatalogService.

        Args:
            cache: The process-wide catalog cache.
            youtube_client: Upstream client; its api_key may be missing.
            channel_id: Channel whose stats and uploads are served.
            collections: Registry of collection tag -> upstream playlist id.
            prefetch_collections: Also refresh every registered collection on a full refetch.
        """
        self.cache = cache
        self.youtube = youtube_client
        self.channel_id = channel_id
        self.collections = collections
        self.prefetch_collections = prefetch_collections

    async def get_catalog(self, collection_tag: Optional[str] = None) -> CatalogResponse:
        """
        Return the full catalog, or one collection when a tag is given.

        Args:
            collection_tag: Optional registered collection tag.

        Returns:
            CatalogResponse: Success envelope, flagged cached or with quota used.

        Raises:
            ConfigurationError: The upstream API key is not configured.
            InvalidRequestError: The tag is not in the registry.
            InternalServerError: Any upstream failure.
        """
        cached = self._from_cache(collection_tag)
        if cached is not None:
            return cached

        if not self.youtube.api_key:
            logger.error("YOUTUBE_API_KEY environment variable not set")
            raise ConfigurationError()

        if collection_tag and collection_tag not in self.collections:
            logger.warning(f"Rejected unknown collection tag: {collection_tag!r}")
            raise InvalidRequestError()

        logger.info("Fetching fresh data from YouTube API")
        try:
            if collection_tag:
                return await self._refresh_collection(collection_tag)
            return await self._refresh_full()
        except (UpstreamError, httpx.HTTPError, ValueError) as e:
            logger.error(f"Error refreshing catalog from YouTube: {e}")
            raise InternalServerError(str(e) or type(e).__name__) from e

    def _from_cache(self, collection_tag: Optional[str]) -> Optional[CatalogResponse]:
        if not self.cache.is_fresh():
            return None

        if collection_tag:
            videos = self.cache.get_collection(collection_tag)
            if videos is None:
                return None
            logger.info(f"Returning cached collection: {collection_tag}")
            return CatalogResponse(
                success=True,
                cached=True,
                data=CatalogData(playlist_id=collection_tag, videos=videos),
            )

        if not self.cache.has_full():
            return None
        entry = self.cache.get()
        logger.info("Returning cached channel data")
        return CatalogResponse(
            success=True,
            cached=True,
            data=CatalogData(
                channel_stats=entry.channel_stats,
                videos=entry.all_videos,
                playlists=entry.collections,
            ),
        )

    async def _refresh_collection(self, collection_tag: str) -> CatalogResponse:
        collection_id = self.collections[collection_tag]
        logger.info(f"Fetching collection: {collection_tag} ({collection_id})")
        videos, pages = await self.youtube.fetch_collection(collection_id)
        self.cache.put_collection(collection_tag, videos)

        quota_used = pages * QuotaConfig.PLAYLIST_ITEMS_LIST
        logger.info(f"Quota used: {quota_used} units")
        return CatalogResponse(
            success=True,
            cached=False,
            quota_used=quota_used,
            data=CatalogData(playlist_id=collection_tag, videos=videos),
        )

    async def _refresh_full(self) -> CatalogResponse:
        channel_stats, uploads_id = await self.youtube.describe_channel(self.channel_id)
        quota_used = QuotaConfig.CHANNELS_LIST

        videos, pages = await self.youtube.fetch_collection(uploads_id)
        quota_used += pages * QuotaConfig.PLAYLIST_ITEMS_LIST

        prefetched: Dict[str, List[VideoRecord]] = {}
        if self.prefetch_collections:
            prefetched, prefetch_pages = await self._fetch_registered_collections()
            quota_used += prefetch_pages * QuotaConfig.PLAYLIST_ITEMS_LIST

        # Cache only once everything above succeeded.
        self.cache.put_full(channel_stats, videos)
        for tag, collection_videos in prefetched.items():
            self.cache.put_collection(tag, collection_videos)

        logger.info(f"Fetched {len(videos)} videos; quota used: {quota_used} units")
        return CatalogResponse(
            success=True,
            cached=False,
            quota_used=quota_used,
            data=CatalogData(
                channel_stats=channel_stats,
                videos=videos,
                playlists=self.cache.get().collections,
            ),
        )

    async def _fetch_registered_collections(self) -> tuple[Dict[str, List[VideoRecord]], int]:
        """Fetch each distinct registered playlist once and fan it out to its tags."""
        by_id: Dict[str, List[VideoRecord]] = {}
        pages_total = 0
        for tag, collection_id in self.collections.items():
            if collection_id not in by_id:
                logger.info(f"Prefetching collection: {tag} ({collection_id})")
                by_id[collection_id], pages = await self.youtube.fetch_collection(collection_id)
                pages_total += pages
        return {tag: by_id[cid] for tag, cid in self.collections.items()}, pages_total
