"""Display formatting for YouTube API values."""

import html
import re
from datetime import datetime, timezone
from typing import Optional

_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")
_TAG_RE = re.compile(r"<[^>]*>")
_SYMBOL_RE = re.compile(r"[#$@]")
_MULTI_DIGIT_RE = re.compile(r"\b\d{2,}\b")
_SPACES_RE = re.compile(r"\s+")


def format_count(count: int) -> str:
    """Abbreviate a count: 1234 -> "1.2K", 3400000 -> "3.4M"."""
    if count >= 1_000_000_000:
        return f"{count / 1_000_000_000:.1f}B"
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K"
    return str(count)


def format_duration(duration: str) -> str:
    """Convert an ISO-8601 duration (PT1H2M3S) to H:MM:SS or M:SS."""
    match = _DURATION_RE.match(duration or "")
    if not match:
        return ""
    hours, minutes, seconds = (int(part) if part else 0 for part in match.groups())
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def relative_time(published_at: str, now: Optional[datetime] = None) -> str:
    """Describe an RFC 3339 timestamp relative to now ("3 days ago")."""
    published = datetime.fromisoformat(published_at.replace("Z", "+00:00"))
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    seconds = max(0, int((now - published).total_seconds()))
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    units = [
        ("year", days // 365),
        ("month", days // 30),
        ("day", days),
        ("hour", hours),
        ("minute", minutes),
    ]
    for unit, value in units:
        if value > 0:
            return f"{value} {unit}{'s' if value > 1 else ''} ago"
    return f"{seconds} second{'s' if seconds > 1 else ''} ago"


def sanitize_comment_text(text: str) -> str:
    """Reduce a comment's textDisplay to plain, renderer-safe text.

    Strips markup, the symbols ``# $ @``, standalone numbers of two or more
    digits, and collapses runs of whitespace.
    """
    text = html.unescape(_TAG_RE.sub("", text))
    text = _SYMBOL_RE.sub("", text)
    text = _MULTI_DIGIT_RE.sub("", text)
    text = _SPACES_RE.sub(" ", text)
    return text.strip()
