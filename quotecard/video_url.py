"""YouTube URL parsing."""

import re
from typing import Optional

from .errors import InvalidUrlError

VIDEO_ID_LENGTH = 11

# Order matters: the generic "any path with v=" pattern goes last.
_PATTERNS = [
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/watch\?v=([^#&?]*)"),
    re.compile(r"(?:https?://)?(?:www\.)?youtu\.be/([^#&?]*)"),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/embed/([^#&?]*)"),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/v/([^#&?]*)"),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/.*[?&]v=([^#&?]*)"),
]


def extract_video_id(url: Optional[str]) -> Optional[str]:
    """Return the 11-character video ID in ``url``, or None.

    Accepts watch, youtu.be, embed, /v/, mobile (m.youtube.com) and watch
    URLs carrying extra query parameters.
    """
    if not url:
        return None
    url = url.strip().replace("m.youtube.com", "youtube.com")

    for pattern in _PATTERNS:
        match = pattern.search(url)
        if match and len(match.group(1)) == VIDEO_ID_LENGTH:
            return match.group(1)
    return None


def require_video_id(url: Optional[str]) -> str:
    """Like extract_video_id, but raise InvalidUrlError when nothing matches."""
    video_id = extract_video_id(url)
    if video_id is None:
        raise InvalidUrlError(url or "")
    return video_id


def thumbnail_url(video_id: str) -> str:
    """Max-resolution thumbnail URL, used as a card background."""
    return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
