"""
Shared pytest fixtures and configuration.
"""
import httpx
import pytest
import pytest_asyncio

from app.main import app
from app.api.dependencies import get_catalog_service
from app.core.cache import CatalogCache
from app.services.catalog import CatalogService
from app.services.youtube import YouTubeClient
from tests.utils.youtube_api import API_BASE, CHANNEL_ID, FakeClock, FakeYouTubeAPI


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return CatalogCache(clock=clock)


@pytest.fixture
def fake_api():
    return FakeYouTubeAPI()


@pytest_asyncio.fixture
async def youtube_client(fake_api):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_api.handler)) as http_client:
        yield YouTubeClient(http_client=http_client, api_key="test-key", base_url=API_BASE)


@pytest.fixture
def catalog_service(cache, youtube_client):
    return CatalogService(cache=cache, youtube_client=youtube_client, channel_id=CHANNEL_ID)


@pytest.fixture
def override_dependencies(catalog_service):
    """Route the endpoint to a service backed by the fake upstream and a fresh cache."""
    app.dependency_overrides[get_catalog_service] = lambda: catalog_service

    yield

    app.dependency_overrides.clear()
