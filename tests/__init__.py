"""Shared constants and YouTube Data API payload builders for the tests."""

YT_BASE = "https://youtube.test/youtube/v3"
PROXY_BASE = "https://remote-stats.test"

VIDEO_ID = "dQw4w9WgXcQ"
CHANNEL_ID = "UCuAXFkgsw1L7xaCfnd5JJOw"


def video_item(
    video_id: str = VIDEO_ID,
    *,
    statistics: dict | None = None,
    description: str | None = "Official music video.",
    thumbnails: dict | None = None,
    channel_id: str | None = CHANNEL_ID,
) -> dict:
    """One `items[]` entry as returned by GET /videos."""
    snippet = {
        "publishedAt": "2009-10-25T06:57:33Z",
        "title": "Never Gonna Give You Up",
        "channelTitle": "Rick Astley",
        "thumbnails": thumbnails if thumbnails is not None else {
            "default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"},
            "high": {"url": f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"},
        },
    }
    if channel_id is not None:
        snippet["channelId"] = channel_id
    if description is not None:
        snippet["description"] = description

    return {
        "id": video_id,
        "snippet": snippet,
        "statistics": statistics if statistics is not None else {
            "viewCount": "1500000000",
            "likeCount": "17000000",
            "commentCount": "2300000",
        },
        "contentDetails": {"duration": "PT3M33S"},
    }


def channel_item(statistics: dict | None = None) -> dict:
    """One `items[]` entry as returned by GET /channels."""
    return {
        "id": CHANNEL_ID,
        "statistics": statistics if statistics is not None else {
            "subscriberCount": "4200000",
            "videoCount": "250",
            "viewCount": "2600000000",
        },
    }
