"""
Tests for the app shell: root, /health, error envelopes, CORS and rate limiting.

Verifies:
  - Root / and /health return the liveness payloads
  - Unknown routes (and wrong methods on known ones) get {error: "Route not found", path}
  - Uncaught exceptions get {error: "Something went wrong!", message}
  - CORS allows the configured origins and preview deployments
  - Exceeding the rate limit returns 429
"""

from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from tests import VIDEO_ID
from ytstats.services.youtube_client import get_youtube_service


class TestRootAndHealth:
    async def test_root_endpoint(self, client):
        """Root / must return the liveness message with a UTC timestamp."""
        r = await client.get("/")
        assert r.status_code == 200

        data = r.json()
        assert data["message"] == "YouTube Statistics Backend API is running!"
        assert data["status"] == "success"
        assert data["timestamp"].endswith("Z")

    async def test_health_returns_200(self, client):
        """Health endpoint must always return 200 if the API process is alive."""
        r = await client.get("/health")
        assert r.status_code == 200

    async def test_health_response_schema(self, client):
        """Health response must contain status, a non-negative uptime and a timestamp."""
        data = (await client.get("/health")).json()

        assert data["status"] == "healthy"
        assert isinstance(data["uptime"], float)
        assert data["uptime"] >= 0
        assert "timestamp" in data

    async def test_docs_available_in_test_env(self, client):
        """OpenAPI docs are served outside ENVIRONMENT=production."""
        r = await client.get("/docs")
        assert r.status_code == 200


class TestErrorEnvelopes:
    async def test_unknown_route_returns_404_with_path(self, client):
        """Unknown routes return 404 with the requested path, query included."""
        r = await client.get("/does-not-exist", params={"q": "1"})
        assert r.status_code == 404
        assert r.json() == {"error": "Route not found", "path": "/does-not-exist?q=1"}

    @pytest.mark.parametrize(
        "method, path",
        [
            ("POST", "/api/youtube/stats"),
            ("PUT", "/api/youtube/video-stats"),
            ("DELETE", "/api/proxy/youtube/stats"),
            ("POST", "/health"),
        ],
    )
    async def test_wrong_method_is_route_not_found(self, client, method, path):
        """A method a known path doesn't serve gets the same 404 envelope as an unknown path."""
        r = await client.request(method, path)
        assert r.status_code == 404
        assert r.json() == {"error": "Route not found", "path": path}

    async def test_unhandled_error_returns_generic_500(self, app):
        """An exception outside the APIError taxonomy becomes the generic 500 envelope."""
        class BrokenService:
            is_configured = True

            async def get_complete_stats(self, video_id):
                raise RuntimeError("boom")

        app.dependency_overrides[get_youtube_service] = lambda: BrokenService()

        # The server error middleware re-raises after responding; keep the response.
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            r = await ac.get("/api/youtube/stats", params={"videoId": VIDEO_ID})

        assert r.status_code == 500
        assert r.json() == {"error": "Something went wrong!", "message": "boom"}


class TestCors:
    @pytest.mark.parametrize(
        "origin",
        ["http://localhost:3000", "https://my-app-git-feature-x.vercel.app"],
    )
    async def test_allowed_origins(self, client, origin):
        """Listed origins and preview deployments pass the CORS preflight."""
        r = await client.options(
            "/api/youtube/stats",
            headers={"Origin": origin, "Access-Control-Request-Method": "GET"},
        )
        assert r.status_code == 200
        assert r.headers["access-control-allow-origin"] == origin

    async def test_unknown_origin_is_rejected(self, client):
        """Origins outside the allow-list get no allow-origin header."""
        r = await client.options(
            "/api/youtube/stats",
            headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "GET"},
        )
        assert "access-control-allow-origin" not in r.headers


class TestRateLimit:
    """
    Simulate bucket exhaustion by patching the limiter's `hit` method to
    return False (= limit exceeded) for the duration of each test.
    """

    @pytest.mark.parametrize(
        "path",
        ["/api/youtube/stats", "/api/youtube/video-stats", "/api/proxy/youtube/stats"],
    )
    async def test_429_when_limit_exceeded(self, client, path):
        """Every API route answers 429 once its bucket is full."""
        from ytstats.core.rate_limit import limiter

        with patch.object(limiter.limiter, "hit", return_value=False):
            r = await client.get(path, params={"videoId": VIDEO_ID})

        assert r.status_code == 429
        assert "Rate limit exceeded" in r.json()["error"]

    async def test_health_is_not_rate_limited(self, client):
        """Liveness probes must never be throttled."""
        from ytstats.core.rate_limit import limiter

        with patch.object(limiter.limiter, "hit", return_value=False):
            r = await client.get("/health")

        assert r.status_code == 200
