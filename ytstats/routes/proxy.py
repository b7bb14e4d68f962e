"""
proxy.py — Relay a stats request through another deployment of this API.

Route:
  GET /api/proxy/youtube/stats?videoId=|url=
    Forwards the query to {PROXY_BASE_URL}/api/youtube/stats with a
    timeout (PROXY_TIMEOUT_SECONDS, default 10 s) and wraps the remote
    `data` in {success, data, timestamp, source: "vercel-proxy"}.

Remote errors keep the remote status code; a timeout becomes 504 and any
other network failure 500 (see ProxyClient).
"""

import logging

from fastapi import APIRouter, Depends, Query, Request

from ytstats.core.config import settings
from ytstats.core.errors import MissingParameterError
from ytstats.core.rate_limit import limiter
from ytstats.models.youtube import ProxyStatsResponse
from ytstats.services.proxy_client import ProxyClient, get_proxy_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/proxy/youtube", tags=["proxy"])


@router.get("/stats", response_model=ProxyStatsResponse, status_code=200)
@limiter.limit(settings.rate_limit)
async def proxy_stats(
    request: Request,
    video_id: str | None = Query(None, alias="videoId"),
    url: str | None = Query(None),
    proxy: ProxyClient = Depends(get_proxy_client),
):
    """Complete statistics fetched by the remote deployment."""
    if not video_id and not url:
        raise MissingParameterError("Please provide either 'videoId' or 'url' parameter")

    # The remote does its own identifier validation.
    params = {"videoId": video_id, "url": url}
    data = await proxy.fetch_stats({k: v for k, v in params.items() if v})
    return ProxyStatsResponse(data=data)
