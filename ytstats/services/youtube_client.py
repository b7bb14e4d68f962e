"""
YouTubeService — Async client for the YouTube Data API v3 statistics endpoints.

Two upstream reads:
  - GET /videos   (snippet, statistics, contentDetails) → VideoStatistics
  - GET /channels (statistics)                          → ChannelStatistics

and one composition, get_complete_stats(), which chains them.

The service is constructed explicitly (main.py lifespan) with the API key
and a shared httpx.AsyncClient, then injected into routes via
get_youtube_service(). Nothing here reads global settings, so tests build
their own instance against a mocked transport.

No retries and no caching: every failure surfaces on first occurrence as a
YouTubeAPIError subclass carrying the upstream message.
"""

import logging
from typing import Any

import httpx
from fastapi import Request

from ytstats.core.errors import (
    ChannelNotFoundError,
    ServerConfigError,
    VideoNotFoundError,
    YouTubeAPIError,
)
from ytstats.models.youtube import (
    ChannelStatistics,
    CompleteStatistics,
    VideoCounts,
    VideoStatistics,
)

logger = logging.getLogger(__name__)

YOUTUBE_API_BASE_URL = "https://www.googleapis.com/youtube/v3"

_VIDEO_PARTS = "snippet,statistics,contentDetails"
_CHANNEL_PARTS = "statistics"
_DESCRIPTION_LEN = 200


class YouTubeService:
    """
    Thin async wrapper around the YouTube Data API v3 REST endpoints.

    The key goes in the X-Goog-Api-Key header rather than the query string
    so it never shows up in logged URLs.
    """

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        base_url: str = YOUTUBE_API_BASE_URL,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._http = http_client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def get_video_stats(self, video_id: str) -> VideoStatistics:
        """
        Fetch title, channel, counts and thumbnail for one video.

        Raises:
            ServerConfigError:  no API key configured.
            VideoNotFoundError: upstream returned zero items.
            YouTubeAPIError:    any other upstream or transport failure.
        """
        try:
            items = await self._list("videos", part=_VIDEO_PARTS, resource_id=video_id)
            if not items:
                raise VideoNotFoundError("Video not found or invalid video ID")
        except YouTubeAPIError as exc:
            logger.error("YouTube API error for video %s: %s", video_id, exc.message)
            raise type(exc)(f"Failed to fetch video statistics: {exc.message}") from exc

        return _parse_video(video_id, items[0])

    async def get_channel_stats(self, channel_id: str) -> ChannelStatistics:
        """
        Fetch subscriber, video and view totals for one channel.

        Raises the same errors as get_video_stats(), with ChannelNotFoundError
        for zero items.
        """
        try:
            items = await self._list("channels", part=_CHANNEL_PARTS, resource_id=channel_id)
            if not items:
                raise ChannelNotFoundError("Channel not found")
        except YouTubeAPIError as exc:
            logger.error("YouTube API error for channel %s: %s", channel_id, exc.message)
            raise type(exc)(f"Failed to fetch channel statistics: {exc.message}") from exc

        return _parse_channel(items[0])

    async def get_complete_stats(self, video_id: str) -> CompleteStatistics:
        """
        Video statistics plus the owning channel's statistics.

        The channel ID comes from the video response already fetched, so
        this costs two upstream calls. Either failing fails the whole call.
        """
        video = await self.get_video_stats(video_id)

        if not video.channel_id:
            logger.error("Video %s has no channel ID in its snippet", video_id)
            raise ChannelNotFoundError(
                "Failed to fetch channel statistics: Video has no channel ID"
            )

        channel = await self.get_channel_stats(video.channel_id)
        return CompleteStatistics(**video.model_dump(), channel_statistics=channel)

    async def _list(self, resource: str, *, part: str, resource_id: str) -> list[dict[str, Any]]:
        """Call `GET /{resource}?part=...&id=...` and return its `items` list."""
        if not self.is_configured:
            raise ServerConfigError("YouTube API key not configured")

        try:
            response = await self._http.get(
                f"{self.base_url}/{resource}",
                params={"part": part, "id": resource_id},
                headers={"X-Goog-Api-Key": self.api_key},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise YouTubeAPIError(_upstream_message(exc.response)) from exc
        except httpx.HTTPError as exc:
            raise YouTubeAPIError(str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            raise YouTubeAPIError("Invalid JSON in YouTube API response") from exc

        return data.get("items") or []


def get_youtube_service(request: Request) -> YouTubeService:
    """FastAPI dependency: the YouTubeService built in the app lifespan."""
    return request.app.state.youtube_service


# ─── Parsing ───────────────────────────────────────────────────────────────────

def _to_int(value: Any) -> int:
    """Counts arrive as strings; absent, hidden or malformed → 0."""
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def _pick_thumbnail(thumbnails: dict[str, Any]) -> str | None:
    for size in ("high", "default"):
        url = (thumbnails.get(size) or {}).get("url")
        if url:
            return url
    return None


def _parse_video(video_id: str, item: dict[str, Any]) -> VideoStatistics:
    snippet = item.get("snippet") or {}
    stats = item.get("statistics") or {}
    details = item.get("contentDetails") or {}

    # Always appends the ellipsis, even to short descriptions.
    description = snippet.get("description")
    if description is not None:
        description = description[:_DESCRIPTION_LEN] + "..."

    return VideoStatistics(
        video_id=video_id,
        channel_id=snippet.get("channelId"),
        title=snippet.get("title") or "",
        channel_title=snippet.get("channelTitle") or "",
        published_at=snippet.get("publishedAt"),
        thumbnail=_pick_thumbnail(snippet.get("thumbnails") or {}),
        statistics=VideoCounts(
            view_count=_to_int(stats.get("viewCount")),
            like_count=_to_int(stats.get("likeCount")),
            comment_count=_to_int(stats.get("commentCount")),
        ),
        duration=details.get("duration"),
        description=description,
    )


def _parse_channel(item: dict[str, Any]) -> ChannelStatistics:
    stats = item.get("statistics") or {}
    return ChannelStatistics(
        subscriber_count=_to_int(stats.get("subscriberCount")),
        video_count=_to_int(stats.get("videoCount")),
        view_count=_to_int(stats.get("viewCount")),
    )


def _upstream_message(response: httpx.Response) -> str:
    """Google APIs put a readable reason in {"error": {"message": ...}}."""
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"YouTube API returned HTTP {response.status_code}"
