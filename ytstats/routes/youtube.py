"""
youtube.py — YouTube statistics endpoints.

Routes:
  GET /api/youtube/stats?videoId=|url=
    Video statistics plus the owning channel's statistics (subscribers,
    total views, video count).

  GET /api/youtube/video-stats?videoId=|url=
    Video statistics only: one upstream call, no subscriber count.

HOW A REQUEST IS CHECKED
────────────────────────
1. No YouTube API key configured → 500, whatever the parameters.
2. Neither `videoId` nor `url` given → 400.
3. `url` wins over `videoId`; either is run through extract_video_id().
   Nothing extractable → 400.
4. Upstream failures (not found, bad key, quota, network) → 500 with the
   upstream message. Raised as APIError subclasses and rendered by the
   handler in main.py.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request

from ytstats.core.config import settings
from ytstats.core.errors import (
    InvalidVideoIdentifierError,
    MissingParameterError,
    ServerConfigError,
)
from ytstats.core.rate_limit import limiter
from ytstats.models.youtube import CompleteStatsResponse, VideoStatsResponse
from ytstats.services.video_id import extract_video_id
from ytstats.services.youtube_client import YouTubeService, get_youtube_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/youtube", tags=["youtube"])

_STATS_EXAMPLE = "/api/youtube/stats?videoId=dQw4w9WgXcQ"


def resolve_video_id(video_id: str | None, url: str | None, *, example: str | None = None) -> str:
    """Turn the `videoId` / `url` query params into one video ID or raise a 400."""
    if not video_id and not url:
        raise MissingParameterError(
            "Please provide either 'videoId' or 'url' parameter",
            example=example,
        )

    extracted = extract_video_id(url) if url else extract_video_id(video_id)
    if not extracted:
        logger.info("Rejected unextractable identifier: url=%r videoId=%r", url, video_id)
        raise InvalidVideoIdentifierError(
            "Could not extract valid video ID from provided URL or videoId"
        )
    return extracted


def _require_configured(youtube: YouTubeService) -> None:
    if not youtube.is_configured:
        raise ServerConfigError("YouTube API key not configured")


@router.get("/stats", response_model=CompleteStatsResponse, status_code=200)
@limiter.limit(settings.rate_limit)
async def get_stats(
    request: Request,
    video_id: str | None = Query(None, alias="videoId", description="11-character video ID"),
    url: str | None = Query(None, description="Any watch, youtu.be, embed or /v/ URL"),
    youtube: YouTubeService = Depends(get_youtube_service),
):
    """
    Video and channel statistics for one video.

    Makes two sequential YouTube API calls (video, then channel). Either
    failing fails the request; there are no partial results.
    """
    _require_configured(youtube)
    vid = resolve_video_id(video_id, url, example=_STATS_EXAMPLE)

    logger.info("Fetching complete stats for %s", vid)
    stats = await youtube.get_complete_stats(vid)
    return CompleteStatsResponse(data=stats)


@router.get("/video-stats", response_model=VideoStatsResponse, status_code=200)
@limiter.limit(settings.rate_limit)
async def get_video_stats(
    request: Request,
    video_id: str | None = Query(None, alias="videoId", description="11-character video ID"),
    url: str | None = Query(None, description="Any watch, youtu.be, embed or /v/ URL"),
    youtube: YouTubeService = Depends(get_youtube_service),
):
    """Video statistics only (no channel subscriber count)."""
    _require_configured(youtube)
    vid = resolve_video_id(video_id, url)

    logger.info("Fetching video stats for %s", vid)
    stats = await youtube.get_video_stats(vid)
    return VideoStatsResponse(data=stats)
