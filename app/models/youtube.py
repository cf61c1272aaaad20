from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from app.core.constants import UpstreamConfig

# --- Internal Parsing Models (YouTube Data API v3) ---


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)


class Thumbnail(_UpstreamModel):
    url: str
    width: Optional[int] = None
    height: Optional[int] = None


class ResourceId(_UpstreamModel):
    video_id: Optional[str] = None


class PlaylistItemSnippet(_UpstreamModel):
    title: str = ""
    description: str = ""
    published_at: Optional[datetime] = None
    channel_title: Optional[str] = None
    thumbnails: Dict[str, Thumbnail] = Field(default_factory=dict)
    resource_id: Optional[ResourceId] = None


class PlaylistItemContentDetails(_UpstreamModel):
    video_id: Optional[str] = None


class PlaylistItem(_UpstreamModel):
    snippet: PlaylistItemSnippet
    content_details: Optional[PlaylistItemContentDetails] = None

    @property
    def video_id(self) -> Optional[str]:
        if self.content_details and self.content_details.video_id:
            return self.content_details.video_id
        if self.snippet.resource_id:
            return self.snippet.resource_id.video_id
        return None


class PlaylistItemsPage(_UpstreamModel):
    items: List[PlaylistItem] = Field(default_factory=list)
    next_page_token: Optional[str] = None


class ChannelStatistics(_UpstreamModel):
    # Counts arrive as strings; subscriberCount is omitted when hidden.
    subscriber_count: int = 0
    view_count: int = 0
    video_count: int = 0


class RelatedPlaylists(_UpstreamModel):
    uploads: str


class ChannelContentDetails(_UpstreamModel):
    related_playlists: RelatedPlaylists


class ChannelSnippet(_UpstreamModel):
    title: str = ""
    description: str = ""
    thumbnails: Dict[str, Thumbnail] = Field(default_factory=dict)


class ChannelItem(_UpstreamModel):
    id: str
    snippet: ChannelSnippet
    statistics: ChannelStatistics = Field(default_factory=ChannelStatistics)
    content_details: ChannelContentDetails


class ChannelListResponse(_UpstreamModel):
    items: List[ChannelItem] = Field(default_factory=list)


def best_thumbnail_url(thumbnails: Dict[str, Thumbnail]) -> Optional[str]:
    """Pick the first available thumbnail in preference order."""
    for key in UpstreamConfig.THUMBNAIL_PREFERENCE:
        thumbnail = thumbnails.get(key)
        if thumbnail and thumbnail.url:
            return thumbnail.url
    return None


# --- Core Data Models ---


class ChannelStats(BaseModel):
    """Snapshot of the channel's public counters and metadata."""

    subscriber_count: int = Field(default=0, ge=0)
    total_view_count: int = Field(default=0, ge=0)
    video_count: int = Field(default=0, ge=0)
    subscriber_display: str = "0"
    views_display: str = "0"
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class VideoRecord(BaseModel):
    id: str
    title: str = ""
    description: str = ""
    thumbnail_url: Optional[str] = None
    published_at: Optional[datetime] = None
    channel_title: Optional[str] = None

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    @computed_field
    @property
    def url(self) -> str:
        """Canonical watch URL derived from the video id."""
        return UpstreamConfig.WATCH_URL.format(video_id=self.id)


class CacheEntry(BaseModel):
    """Point-in-time copy of a catalog cache."""

    channel_stats: Optional[ChannelStats] = None
    all_videos: Optional[List[VideoRecord]] = None
    collections: Dict[str, List[VideoRecord]] = Field(default_factory=dict)
    fetched_at: Optional[float] = None
