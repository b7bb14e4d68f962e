"""
Health check endpoint.

Used by:
  - Container HEALTHCHECK / platform liveness probes
  - Front-end to check API connectivity

The API has no database or background workers, so "healthy" simply means
the process is up and serving requests.
"""

import time

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ytstats.models.youtube import iso_timestamp

router = APIRouter()

# Process start, for the uptime figure.
_STARTED_AT = time.monotonic()


class HealthResponse(BaseModel):
    status: str  # Always "healthy" if the API process is alive
    uptime: float  # seconds since the process started
    timestamp: str = Field(default_factory=iso_timestamp)


@router.get("", response_model=HealthResponse, summary="API health check")
async def health_check() -> HealthResponse:
    """Returns the liveness status and uptime of the API process."""
    return HealthResponse(status="healthy", uptime=time.monotonic() - _STARTED_AT)
