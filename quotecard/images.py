"""Image acquisition with bounded retry and fallback substitution."""

import asyncio
import io
import time
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests
from PIL import Image, UnidentifiedImageError

from .canvas import decode_data_uri
from .errors import ImageLoadError
from .utils import get_logger, image_retrying

logger = get_logger(__name__)

DEFAULT_MAX_RETRIES = 2

_HEADERS = {
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
}


class ImageFetchFailed(Exception):
    """A single fetch/decode attempt failed."""


def cache_busted(url: str) -> str:
    """Append a unique ``_`` query parameter so a cached failure is bypassed."""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}_={time.monotonic_ns()}"


def _is_remote(url: str) -> bool:
    return urlparse(url).scheme in ("http", "https")


class ImageLoader:
    """Loads images into RGBA bitmaps.

    Accepts http(s) URLs, base64 ``data:`` URIs and local file paths. Every
    call is independent: no cache is kept between calls.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 15.0,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.max_retries = max_retries

    async def acquire(self, url: str, fallback_url: Optional[str] = None) -> Image.Image:
        """Load ``url``, retrying, then ``fallback_url`` once.

        Raises:
            ImageLoadError: if every attempt failed
        """
        try:
            return await self._acquire_with_retries(url)
        except ImageFetchFailed as e:
            last_error: ImageFetchFailed = e

        if fallback_url:
            logger.info(f"Using fallback image for {url}")
            try:
                return await self._fetch(fallback_url)
            except ImageFetchFailed as e:
                last_error = e

        raise ImageLoadError(url, self.max_retries, str(last_error)) from last_error

    async def _acquire_with_retries(self, url: str) -> Image.Image:
        async for attempt in image_retrying(self.max_retries, ImageFetchFailed):
            with attempt:
                if attempt.retry_state.attempt_number > 1 and _is_remote(url):
                    return await self._fetch(cache_busted(url))
                return await self._fetch(url)

    async def _fetch(self, url: str) -> Image.Image:
        return await asyncio.to_thread(self._fetch_sync, url)

    def _fetch_sync(self, url: str) -> Image.Image:
        data = self._read_bytes(url)
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise ImageFetchFailed(f"Cannot decode image from {url[:80]}: {e}") from e
        return image.convert("RGBA")

    def _read_bytes(self, url: str) -> bytes:
        if url.startswith("data:"):
            try:
                return decode_data_uri(url)
            except ValueError as e:
                raise ImageFetchFailed(f"Bad data URI: {e}") from e

        if _is_remote(url):
            try:
                response = self.session.get(url, headers=_HEADERS, timeout=self.timeout)
                response.raise_for_status()
            except requests.RequestException as e:
                raise ImageFetchFailed(f"HTTP fetch failed for {url}: {e}") from e
            return response.content

        try:
            return Path(url).expanduser().read_bytes()
        except OSError as e:
            raise ImageFetchFailed(f"Cannot read image file {url}: {e}") from e
