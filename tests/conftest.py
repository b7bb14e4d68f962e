"""
pytest configuration and shared fixtures for the YouTube Statistics API tests.

Key concern: tests must not need a real YouTube API key or network access.
We achieve this by:
  1. Building YouTubeService / ProxyClient against fixed fake base URLs
     and overriding the app's get_* dependencies with them.
  2. Mocking every outbound request with respx (the `respx_mock` fixture
     comes from respx's pytest plugin).
  3. Entering the app lifespan so anything not overridden still has the
     real, lifespan-built objects on app.state.
"""

import os

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from tests import PROXY_BASE, YT_BASE

# Set env vars BEFORE importing the app so Settings picks them up correctly
os.environ.setdefault("ENVIRONMENT", "test")


@pytest.fixture()
async def http_client():
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture()
def youtube_service(http_client):
    from ytstats.services.youtube_client import YouTubeService

    return YouTubeService(api_key="test-key", http_client=http_client, base_url=YT_BASE)


@pytest.fixture()
def proxy_client(http_client):
    from ytstats.services.proxy_client import ProxyClient

    return ProxyClient(base_url=PROXY_BASE, http_client=http_client, timeout=10.0)


@pytest.fixture()
async def app(youtube_service, proxy_client):
    """
    The FastAPI app with its lifespan running and the upstream clients
    swapped for the test ones. Rate-limit counters start from zero.
    """
    from ytstats.core.rate_limit import limiter
    from ytstats.main import app as fastapi_app
    from ytstats.services.proxy_client import get_proxy_client
    from ytstats.services.youtube_client import get_youtube_service

    limiter.reset()

    async with fastapi_app.router.lifespan_context(fastapi_app):
        fastapi_app.dependency_overrides[get_youtube_service] = lambda: youtube_service
        fastapi_app.dependency_overrides[get_proxy_client] = lambda: proxy_client
        yield fastapi_app
        fastapi_app.dependency_overrides.clear()


@pytest.fixture()
async def client(app):
    """
    HTTPX async test client wired to the FastAPI app.

    Usage:
        async def test_something(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
