"""YouTube Statistics API — video and channel stats from the YouTube Data API v3."""

__version__ = "1.0.0"
