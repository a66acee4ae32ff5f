"""YouTube adapter interface and implementations.

This module provides an abstraction layer for the two lookups a quote
card needs: display metadata for one video and its top-level comments.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..errors import ChannelNotFound, MetadataFetchError, VideoNotFound
from ..formatting import format_count, format_duration, relative_time, sanitize_comment_text
from ..models import Comment, VideoMetadata
from ..utils import get_logger, youtube_retry

logger = get_logger(__name__)

# YouTube Data API quota costs (for reference):
# - videos.list: 1 unit
# - channels.list: 1 unit
# - commentThreads.list: 1 unit
# - Default daily quota: 10,000 units

MAX_COMMENT_RESULTS = 100


def _https(url: str) -> str:
    return url.replace("http://", "https://")


def _count(statistics: dict, key: str) -> str:
    try:
        return format_count(int(statistics.get(key, 0)))
    except (TypeError, ValueError):
        return "0"


class YouTubeAdapter(ABC):
    """Abstract base class for YouTube data access.

    Implement this interface to support different data sources:
    - YouTube Data API (official)
    - Mock adapter for testing
    """

    @abstractmethod
    def get_video_details(self, video_id: str) -> VideoMetadata:
        """Fetch display metadata for a video and its channel.

        Args:
            video_id: 11-character YouTube video ID

        Returns:
            VideoMetadata with counts, duration and publish time preformatted
        """
        pass

    @abstractmethod
    def get_comments(self, video_id: str, max_results: int = 99) -> list[Comment]:
        """Fetch top-level comments for a video.

        Args:
            video_id: 11-character YouTube video ID
            max_results: Maximum number of comments to return (max 100)

        Returns:
            List of sanitized Comment objects
        """
        pass


class YouTubeDataAPIAdapter(YouTubeAdapter):
    """YouTube Data API v3 implementation.

    A video lookup costs two quota units (videos.list + channels.list);
    a comment lookup costs one.
    """

    def __init__(
        self,
        api_key: Optional[str],
        verified_threshold: int = 100_000,
        client: Any = None,
    ):
        """Initialize the YouTube Data API client.

        Args:
            api_key: YouTube Data API key
            verified_threshold: Subscriber count at which a channel is shown as verified
            client: Prebuilt API resource (tests); built from api_key when omitted
        """
        if client is None and not api_key:
            raise MetadataFetchError(
                "YouTube API key required. Set YOUTUBE_API_KEY environment variable."
            )
        self.verified_threshold = verified_threshold
        self._youtube = client or build(
            "youtube", "v3", developerKey=api_key, cache_discovery=False
        )

    @youtube_retry
    def _execute(self, request) -> dict:
        return request.execute()

    def _call(self, request, what: str) -> dict:
        try:
            return self._execute(request)
        except HttpError as e:
            logger.error(f"YouTube API error fetching {what}: {e}")
            raise MetadataFetchError(f"Failed to fetch {what}: {e}") from e

    def get_video_details(self, video_id: str) -> VideoMetadata:
        """Fetch video + channel metadata.

        Raises:
            VideoNotFound: no video with this ID
            ChannelNotFound: the video's channel did not resolve
            MetadataFetchError: the API call failed
        """
        response = self._call(
            self._youtube.videos().list(part="snippet,statistics,contentDetails", id=video_id),
            "video data",
        )
        items = response.get("items") or []
        if not items:
            raise VideoNotFound(video_id)

        video = items[0]
        snippet = video.get("snippet", {})
        statistics = video.get("statistics", {})
        content_details = video.get("contentDetails", {})
        channel_id = snippet.get("channelId", "")

        channel_response = self._call(
            self._youtube.channels().list(part="snippet,statistics", id=channel_id),
            "channel data",
        )
        channels = channel_response.get("items") or []
        if not channels:
            raise ChannelNotFound(channel_id)
        channel = channels[0]

        thumbnails = snippet.get("thumbnails", {})
        video_thumbnail = (
            thumbnails.get("maxres", {}).get("url")
            or thumbnails.get("high", {}).get("url", "")
        )
        channel_thumbnail = channel.get("snippet", {}).get("thumbnails", {}).get("default", {}).get("url", "")
        subscribers = int(channel.get("statistics", {}).get("subscriberCount", 0) or 0)

        metadata = VideoMetadata(
            title=snippet.get("title", ""),
            channel_title=snippet.get("channelTitle", ""),
            channel_thumbnail_url=_https(channel_thumbnail),
            video_thumbnail_url=video_thumbnail,
            view_count=_count(statistics, "viewCount"),
            like_count=_count(statistics, "likeCount"),
            comment_count=_count(statistics, "commentCount"),
            published_at=relative_time(snippet["publishedAt"]) if snippet.get("publishedAt") else "",
            duration=format_duration(content_details.get("duration", "")),
            is_verified=subscribers >= self.verified_threshold,
        )
        logger.info(f"Fetched metadata for {video_id}: {metadata.title!r} ({metadata.channel_title})")
        return metadata

    def get_comments(self, video_id: str, max_results: int = 99) -> list[Comment]:
        """Fetch top-level comments via commentThreads.list.

        Raises:
            MetadataFetchError: the API call failed or returned no comment list
        """
        response = self._call(
            self._youtube.commentThreads().list(
                part="snippet",
                videoId=video_id,
                maxResults=min(max_results, MAX_COMMENT_RESULTS),
            ),
            "comments",
        )
        if "items" not in response:
            raise MetadataFetchError(f"No comments found for {video_id}")

        comments = []
        for item in response["items"]:
            top = item.get("snippet", {}).get("topLevelComment", {}).get("snippet", {})
            comments.append(Comment(
                text=sanitize_comment_text(top.get("textDisplay", "")),
                author_name=top.get("authorDisplayName", ""),
                author_profile_image_url=_https(top.get("authorProfileImageUrl", "")),
            ))

        logger.info(f"Fetched {len(comments)} comments for {video_id}")
        return comments
