"""
Dependency injection factories for FastAPI.

The catalog cache is created once per process and shared by every request
that process handles; everything else is built per request around it.
"""
from functools import lru_cache
from typing import AsyncIterator

import httpx
from fastapi import Depends

from app.core.cache import CatalogCache
from app.core.config import settings
from app.core.constants import CacheConfig, COLLECTIONS
from app.services.catalog import CatalogService
from app.services.youtube import YouTubeClient


@lru_cache
def get_catalog_cache() -> CatalogCache:
    """Get the process-wide catalog cache (created on first use)."""
    return CatalogCache(ttl_seconds=CacheConfig.TTL_SECONDS)


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Get an HTTP client bounded by the upstream per-request deadline."""
    async with httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT_SECONDS) as client:
        yield client


def get_youtube_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> YouTubeClient:
    """Get the YouTube Data API client."""
    return YouTubeClient(
        http_client=http_client,
        api_key=settings.YOUTUBE_API_KEY,
        base_url=settings.YOUTUBE_API_BASE_URL,
    )


def get_catalog_service(
    cache: CatalogCache = Depends(get_catalog_cache),
    youtube_client: YouTubeClient = Depends(get_youtube_client),
) -> CatalogService:
    """Get the catalog aggregator wired to the shared cache."""
    return CatalogService(
        cache=cache,
        youtube_client=youtube_client,
        channel_id=settings.YOUTUBE_CHANNEL_ID,
        collections=COLLECTIONS,
        prefetch_collections=settings.PREFETCH_COLLECTIONS,
    )
