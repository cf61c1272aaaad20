"""
YouTube Data API v3 client for channel statistics and playlist items.
"""
from typing import List, Optional, Tuple

import httpx
from loguru import logger

from app.core.constants import UpstreamConfig
from app.core.exceptions import ChannelNotFoundError, UpstreamError
from app.models import ChannelListResponse, ChannelStats, PlaylistItemsPage, VideoRecord
from app.models.youtube import PlaylistItem, best_thumbnail_url
from app.services.formatting import format_count


class YouTubeClient:
    """
    Thin async client over the two upstream read endpoints the proxy needs.

    This client handles:
    1. Describing the channel (statistics, metadata, uploads playlist id).
    2. Walking a playlist page by page, up to a hard page cap.
    3. Normalizing raw playlist items into VideoRecord objects.

    Every non-success upstream status raises UpstreamError; nothing is retried.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: Optional[str],
        base_url: str = "https://www.googleapis.com/youtube/v3",
    ):
        """
        Initialize the YouTubeClient.

        Args:
            http_client: Shared async HTTP client; its timeout is the per-request deadline.
            api_key: YouTube Data API key. May be None; callers check before fetching.
            base_url: Root of the YouTube Data API.
        """
        self.http = http_client
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    async def _get(self, resource: str, params: dict) -> dict:
        response = await self.http.get(
            f"{self.base_url}/{resource}",
            params={**params, "key": self.api_key},
        )
        if not response.is_success:
            logger.error(
                f"YouTube API error on {resource}: {response.status_code} {response.text}"
            )
            raise UpstreamError(response.status_code, response.text)
        return response.json()

    async def describe_channel(self, channel_id: str) -> Tuple[ChannelStats, str]:
        """
        Fetch channel statistics and the id of its uploads playlist.

        Costs QuotaConfig.CHANNELS_LIST units.

        Args:
            channel_id: The YouTube channel id.

        Returns:
            A (ChannelStats, uploads playlist id) pair.

        Raises:
            UpstreamError: On a non-success status.
            ChannelNotFoundError: If the channel does not exist.
        """
        raw = await self._get(
            "channels",
            {"part": "statistics,contentDetails,snippet", "id": channel_id},
        )
        parsed = ChannelListResponse.model_validate(raw)
        if not parsed.items:
            raise ChannelNotFoundError(channel_id)

        channel = parsed.items[0]
        stats = channel.statistics
        channel_stats = ChannelStats(
            subscriber_count=stats.subscriber_count,
            total_view_count=stats.view_count,
            video_count=stats.video_count,
            subscriber_display=format_count(stats.subscriber_count),
            views_display=format_count(stats.view_count),
            title=channel.snippet.title,
            description=channel.snippet.description,
            thumbnail_url=best_thumbnail_url(channel.snippet.thumbnails),
        )
        logger.info(
            f"Channel stats: {channel_stats.subscriber_count} subs, "
            f"{channel_stats.video_count} videos"
        )
        return channel_stats, channel.content_details.related_playlists.uploads

    async def fetch_collection(self, collection_id: str) -> Tuple[List[VideoRecord], int]:
        """
        Fetch every video of a playlist, one page at a time.

        Pages are requested strictly in sequence: the token returned by page N
        is required to ask for page N+1. The walk stops when upstream stops
        returning a token or after UpstreamConfig.MAX_PAGES pages, whichever
        comes first. Hitting the cap truncates silently (logged only).

        Args:
            collection_id: The upstream playlist id.

        Returns:
            A (videos, pages fetched) pair; each page is one playlistItems request.

        Raises:
            UpstreamError: On any non-success page; earlier pages are discarded.
        """
        videos: List[VideoRecord] = []
        page_token = ""
        pages = 0

        while True:
            raw = await self._get(
                "playlistItems",
                {
                    "part": "snippet,contentDetails",
                    "playlistId": collection_id,
                    "maxResults": UpstreamConfig.MAX_RESULTS_PER_PAGE,
                    "pageToken": page_token,
                },
            )
            pages += 1
            page = PlaylistItemsPage.model_validate(raw)
            videos.extend(self._normalize_items(page.items))

            page_token = page.next_page_token or ""
            if not page_token:
                break
            if pages >= UpstreamConfig.MAX_PAGES:
                logger.warning(
                    f"Reached page limit ({UpstreamConfig.MAX_PAGES} pages) for {collection_id}; "
                    f"returning first {len(videos)} videos"
                )
                break

        logger.info(f"Fetched {len(videos)} videos from {collection_id} in {pages} page(s)")
        return videos, pages

    @staticmethod
    def _normalize_items(items: List[PlaylistItem]) -> List[VideoRecord]:
        """Map raw playlist items to VideoRecords, dropping private/deleted placeholders."""
        records: List[VideoRecord] = []
        for item in items:
            if item.snippet.title in UpstreamConfig.PLACEHOLDER_TITLES:
                continue
            video_id = item.video_id
            if not video_id:
                logger.debug(f"Skipping playlist item without a video id: {item.snippet.title!r}")
                continue
            records.append(
                VideoRecord(
                    id=video_id,
                    title=item.snippet.title,
                    description=item.snippet.description,
                    thumbnail_url=best_thumbnail_url(item.snippet.thumbnails),
                    published_at=item.snippet.published_at,
                    channel_title=item.snippet.channel_title,
                )
            )
        return records
