"""Shared fixtures: in-process image loader, sample records, fonts."""

import io
from typing import Optional

import pytest
from PIL import Image

from quotecard.canvas import FontBook
from quotecard.images import ImageFetchFailed, ImageLoader
from quotecard.models import Comment, VideoMetadata


def png_bytes(color=(200, 40, 40), size=(16, 16)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, "PNG")
    return buffer.getvalue()


def strip_cache_buster(url: str) -> str:
    if "_=" not in url:
        return url
    return url[: url.rindex("_=") - 1]


class FakeImageLoader(ImageLoader):
    """ImageLoader serving bytes from a dict instead of the network.

    ``failures`` maps a URL to how many leading attempts fail before it
    starts serving. URLs missing from ``images`` always fail.
    """

    def __init__(
        self,
        images: Optional[dict[str, bytes]] = None,
        failures: Optional[dict[str, int]] = None,
        max_retries: int = 2,
    ):
        super().__init__(max_retries=max_retries)
        self.images = images or {}
        self.failures = dict(failures or {})
        self.requested: list[str] = []

    def _read_bytes(self, url: str) -> bytes:
        self.requested.append(url)
        key = strip_cache_buster(url)
        if self.failures.get(key, 0) > 0:
            self.failures[key] -= 1
            raise ImageFetchFailed(f"simulated failure for {key}")
        if key not in self.images:
            raise ImageFetchFailed(f"unreachable: {key}")
        return self.images[key]


AVATAR_URL = "https://x/a.png"
CHANNEL_URL = "https://x/channel.png"
THUMBNAIL_URL = "https://x/thumb.jpg"


@pytest.fixture
def comment() -> Comment:
    return Comment(text="Great video!", author_name="Ana", author_profile_image_url=AVATAR_URL)


@pytest.fixture
def video() -> VideoMetadata:
    return VideoMetadata(
        title="Test Video",
        channel_title="Test Channel",
        channel_thumbnail_url=CHANNEL_URL,
        video_thumbnail_url=THUMBNAIL_URL,
        view_count="1.2K",
        like_count="340",
        comment_count="12",
        published_at="2 days ago",
        duration="3:45",
        is_verified=False,
    )


@pytest.fixture
def loader() -> FakeImageLoader:
    return FakeImageLoader({
        AVATAR_URL: png_bytes((30, 120, 200)),
        CHANNEL_URL: png_bytes((40, 160, 80)),
        THUMBNAIL_URL: png_bytes((90, 90, 90), (64, 36)),
    })


@pytest.fixture(scope="session")
def fonts() -> FontBook:
    return FontBook()
