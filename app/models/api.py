"""
Pydantic models for the proxy response envelope and the client-facing catalog.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.enums import DataSource
from app.models.youtube import ChannelStats, VideoRecord


class CatalogData(BaseModel):
    """Payload of a successful proxy response."""

    channel_stats: Optional[ChannelStats] = None
    videos: Optional[List[VideoRecord]] = None
    playlist_id: Optional[str] = None
    playlists: Optional[Dict[str, List[VideoRecord]]] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CatalogResponse(BaseModel):
    """Envelope returned by the proxy endpoint for every request."""

    success: bool
    cached: bool = False
    quota_used: Optional[int] = None
    data: Optional[CatalogData] = None
    error: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChannelCatalog(BaseModel):
    """Catalog handed to the presentation layer by the client fetch layer."""

    channel_stats: ChannelStats
    videos: List[VideoRecord] = Field(default_factory=list)
    collections: Dict[str, List[VideoRecord]] = Field(default_factory=dict)
    source: DataSource

    model_config = ConfigDict(frozen=True)
