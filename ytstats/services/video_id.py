"""
video_id.py — Extract a YouTube video ID from a raw ID or a URL.

Accepted inputs:
  dQw4w9WgXcQ                                      (already an ID)
  https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10s
  https://youtu.be/dQw4w9WgXcQ
  https://www.youtube.com/embed/dQw4w9WgXcQ
  https://www.youtube.com/v/dQw4w9WgXcQ
  https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ

No existence check is made here; the YouTube API decides that.
"""

import re

_RAW_ID_RE = re.compile(r"[A-Za-z0-9_-]+")
_RAW_ID_LEN = 11

# Tried in order; the capture stops at the first &, newline, ? or #.
_URL_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)"),
    re.compile(r"youtube\.com/v/([^&\n?#]+)"),
    re.compile(r"youtube\.com/watch\?.*v=([^&\n?#]+)"),
)


def extract_video_id(url_or_id: str | None) -> str | None:
    """
    Return the video ID in *url_or_id*, or None if none can be found.

    An 11-character string of letters, digits, `_` and `-` is returned
    unchanged. Anything else must match one of the known URL shapes.
    """
    if not url_or_id:
        return None

    if len(url_or_id) == _RAW_ID_LEN and _RAW_ID_RE.fullmatch(url_or_id):
        return url_or_id

    for pattern in _URL_PATTERNS:
        m = pattern.search(url_or_id)
        if m:
            return m.group(1)

    return None
