"""
ProxyClient — Forward a stats request to another deployment of this API.

Used when the remote deployment (e.g. on Vercel) should make the YouTube
calls instead of this instance. The remote's /api/youtube/stats JSON is
relayed back; its failures are mapped to three distinct errors:

  remote non-2xx  → ProxyUpstreamError (same status code)
  timeout         → ProxyTimeoutError  (504)
  other transport → ProxyNetworkError  (500)
"""

import asyncio
import logging
from typing import Any

import httpx
from fastapi import Request

from ytstats.core.errors import (
    ProxyNetworkError,
    ProxyTimeoutError,
    ProxyUpstreamError,
    ServerConfigError,
)

logger = logging.getLogger(__name__)

_REMOTE_STATS_PATH = "/api/youtube/stats"


class ProxyClient:
    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http_client

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)

    async def fetch_stats(self, params: dict[str, str]) -> Any:
        """
        GET the remote stats endpoint with *params* and return its `data`.

        Falls back to the whole JSON body if the remote didn't wrap it.
        """
        if not self.is_configured:
            raise ServerConfigError("Proxy target URL not configured")

        url = f"{self.base_url}{_REMOTE_STATS_PATH}"
        logger.info("Proxying stats request to %s", url)

        # httpx timeouts are per phase; wait_for bounds the whole exchange.
        try:
            response = await asyncio.wait_for(
                self._http.get(url, params=params, timeout=self.timeout),
                timeout=self.timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            logger.error("Proxy request to %s timed out after %ss", url, self.timeout)
            raise ProxyTimeoutError(
                f"The remote API did not respond within {self.timeout:g} seconds"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Proxy request to %s failed: %s", url, exc)
            raise ProxyNetworkError(str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            message = _remote_message(response)
            logger.error("Remote API error %s: %s", response.status_code, message)
            raise ProxyUpstreamError(message, response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProxyNetworkError("Remote API returned invalid JSON") from exc

        if isinstance(payload, dict) and "data" in payload:
            return payload["data"]
        return payload


def get_proxy_client(request: Request) -> ProxyClient:
    """FastAPI dependency: the ProxyClient built in the app lifespan."""
    return request.app.state.proxy_client


def _remote_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or f"Remote API returned HTTP {response.status_code}"

    if isinstance(body, dict):
        for key in ("message", "error"):
            if isinstance(body.get(key), str):
                return body[key]
    return f"Remote API returned HTTP {response.status_code}"
