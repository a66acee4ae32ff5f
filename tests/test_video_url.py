"""Tests for YouTube URL parsing."""

import pytest

from quotecard.errors import InvalidUrlError
from quotecard.video_url import extract_video_id, require_video_id, thumbnail_url


@pytest.mark.parametrize(
    "url",
    [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/embed/dQw4w9WgXcQ",
        "https://www.youtube.com/v/dQw4w9WgXcQ",
        "https://m.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
        "youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
        "  https://youtu.be/dQw4w9WgXcQ  ",
    ],
)
def test_extract_video_id_shapes(url: str) -> None:
    assert extract_video_id(url) == "dQw4w9WgXcQ"


def test_extract_video_id_ignores_query_after_short_link() -> None:
    assert extract_video_id("https://youtu.be/dQw4w9WgXcQ?t=30") == "dQw4w9WgXcQ"


@pytest.mark.parametrize(
    "url",
    [
        "not a url",
        "",
        None,
        "https://www.youtube.com/watch?v=short",
        "https://vimeo.com/123456789",
    ],
)
def test_extract_video_id_rejects(url) -> None:
    assert extract_video_id(url) is None


def test_require_video_id_raises() -> None:
    with pytest.raises(InvalidUrlError):
        require_video_id("not a url")


def test_thumbnail_url() -> None:
    assert thumbnail_url("dQw4w9WgXcQ") == "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"
