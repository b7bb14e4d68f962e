"""
youtube.py — Pydantic models for the YouTube statistics API.

Python attributes are snake_case; the JSON wire format is camelCase
(alias generator), matching what the frontend already consumes.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def iso_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2025-01-01T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── Statistics ────────────────────────────────────────────────────────────────

class VideoCounts(CamelModel):
    view_count:    int = Field(0, ge=0)
    like_count:    int = Field(0, ge=0)
    comment_count: int = Field(0, ge=0)
    # Subscriber count is channel-level, see ChannelStatistics


class VideoStatistics(CamelModel):
    video_id:      str
    channel_id:    str | None = None
    title:         str = ""
    channel_title: str = ""
    published_at:  str | None = None
    thumbnail:     str | None = None   # high-res URL if available, else default
    statistics:    VideoCounts = Field(default_factory=VideoCounts)
    duration:      str | None = None   # ISO-8601, e.g. "PT3M33S"
    description:   str | None = None   # first 200 chars + "..."


class ChannelStatistics(CamelModel):
    subscriber_count: int = Field(0, ge=0)
    video_count:      int = Field(0, ge=0)
    view_count:       int = Field(0, ge=0)


class CompleteStatistics(VideoStatistics):
    channel_statistics: ChannelStatistics


# ─── Envelopes ─────────────────────────────────────────────────────────────────

class VideoStatsResponse(BaseModel):
    success:   bool = True
    data:      VideoStatistics
    timestamp: str = Field(default_factory=iso_timestamp)


class CompleteStatsResponse(BaseModel):
    success:   bool = True
    data:      CompleteStatistics
    timestamp: str = Field(default_factory=iso_timestamp)


class ProxyStatsResponse(BaseModel):
    success:   bool = True
    data:      Any
    timestamp: str = Field(default_factory=iso_timestamp)
    source:    str = "vercel-proxy"


class ErrorResponse(BaseModel):
    error:     str
    message:   str
    timestamp: str = Field(default_factory=iso_timestamp)
    example:   str | None = None   # only on missing-parameter errors
    status:    int | None = None   # only on relayed proxy errors
