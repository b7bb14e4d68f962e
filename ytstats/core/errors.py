"""
errors.py — Exception taxonomy for the statistics API.

Every error the API reports on purpose derives from APIError. Each class
fixes its HTTP status and the short `error` label of the JSON envelope;
the exception message becomes the envelope's `message`.

main.py registers one handler for APIError, so routes and services just
raise and never build error responses themselves:

    raise InvalidVideoIdentifierError("Could not extract valid video ID")
    →  400 {"error": "Invalid video identifier", "message": "...", "timestamp": "..."}
"""

from typing import Any


class APIError(Exception):
    """Base class for errors rendered as an ErrorResponse envelope."""

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str, *, example: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.example = example

    def to_payload(self) -> dict[str, Any]:
        """Fields of the error envelope, minus the timestamp."""
        payload: dict[str, Any] = {"error": self.error, "message": self.message}
        if self.example is not None:
            payload["example"] = self.example
        return payload


# ─── Client input (400) ────────────────────────────────────────────────────────

class MissingParameterError(APIError):
    status_code = 400
    error = "Missing required parameter"


class InvalidVideoIdentifierError(APIError):
    status_code = 400
    error = "Invalid video identifier"


# ─── Server configuration (500) ────────────────────────────────────────────────

class ServerConfigError(APIError):
    status_code = 500
    error = "Server configuration error"


# ─── YouTube Data API (500) ────────────────────────────────────────────────────

class YouTubeAPIError(APIError):
    """Upstream failure: bad key, quota, transport error or missing resource."""

    status_code = 500
    error = "Failed to fetch video statistics"


class VideoNotFoundError(YouTubeAPIError):
    pass


class ChannelNotFoundError(YouTubeAPIError):
    pass


# ─── Proxy hop ─────────────────────────────────────────────────────────────────

class ProxyUpstreamError(APIError):
    """The remote deployment answered with a non-2xx status; relay it."""

    error = "Vercel API Error"

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code

    def to_payload(self) -> dict[str, Any]:
        return {**super().to_payload(), "status": self.status_code}


class ProxyTimeoutError(APIError):
    status_code = 504
    error = "Request Timeout"


class ProxyNetworkError(APIError):
    status_code = 500
    error = "Proxy Request Failed"
