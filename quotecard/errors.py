"""Exception hierarchy for quote card generation."""


class QuoteCardError(Exception):
    """Base class for all quotecard errors."""


class ImageLoadError(QuoteCardError):
    """An image could not be loaded after all retries (and fallback)."""

    def __init__(self, url: str, retries: int, reason: str = ""):
        self.url = url
        self.retries = retries
        self.reason = reason
        message = f"Failed to load image after {retries} retries: {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class SurfaceUnavailableError(QuoteCardError):
    """No drawable raster could be created for a render pass."""


class MetadataFetchError(QuoteCardError):
    """Video, channel or comment lookup failed."""


class VideoNotFound(MetadataFetchError):
    """The video ID did not resolve to a video."""

    def __init__(self, video_id: str):
        self.video_id = video_id
        super().__init__(f"Video not found: {video_id}")


class ChannelNotFound(MetadataFetchError):
    """The video's channel could not be resolved."""

    def __init__(self, channel_id: str):
        self.channel_id = channel_id
        super().__init__(f"Channel not found: {channel_id}")


class InvalidUrlError(QuoteCardError):
    """User input is not a recognizable YouTube video URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid YouTube URL: {url!r}")
