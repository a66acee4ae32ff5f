"""Tests for the YouTube Data API adapter using a mocked API client."""

from unittest.mock import MagicMock

import httplib2
import pytest
from googleapiclient.errors import HttpError

from quotecard.adapters import YouTubeDataAPIAdapter
from quotecard.errors import ChannelNotFound, MetadataFetchError, VideoNotFound


def video_response(thumbnails=None):
    return {
        "items": [{
            "id": "dQw4w9WgXcQ",
            "snippet": {
                "title": "Test Video",
                "channelId": "UC123",
                "channelTitle": "Test Channel",
                "publishedAt": "2020-01-01T00:00:00Z",
                "thumbnails": thumbnails or {
                    "high": {"url": "https://i.ytimg.com/vi/x/hqdefault.jpg"},
                    "maxres": {"url": "https://i.ytimg.com/vi/x/maxresdefault.jpg"},
                },
            },
            "statistics": {"viewCount": "1234", "likeCount": "340", "commentCount": "12"},
            "contentDetails": {"duration": "PT3M45S"},
        }]
    }


def channel_response(subscribers="250000"):
    return {
        "items": [{
            "snippet": {"thumbnails": {"default": {"url": "http://yt3.ggpht.com/avatar.jpg"}}},
            "statistics": {"subscriberCount": subscribers},
        }]
    }


def make_client(videos=None, channels=None, comments=None) -> MagicMock:
    client = MagicMock()
    client.videos.return_value.list.return_value.execute.return_value = videos or video_response()
    client.channels.return_value.list.return_value.execute.return_value = channels or channel_response()
    client.commentThreads.return_value.list.return_value.execute.return_value = comments or {"items": []}
    return client


def test_missing_api_key_raises() -> None:
    with pytest.raises(MetadataFetchError):
        YouTubeDataAPIAdapter(api_key=None)


def test_video_details_are_formatted() -> None:
    adapter = YouTubeDataAPIAdapter(None, client=make_client())

    video = adapter.get_video_details("dQw4w9WgXcQ")

    assert video.title == "Test Video"
    assert video.channel_title == "Test Channel"
    assert video.view_count == "1.2K"
    assert video.like_count == "340"
    assert video.comment_count == "12"
    assert video.duration == "3:45"
    assert video.published_at.endswith("years ago")
    assert video.video_thumbnail_url.endswith("maxresdefault.jpg")
    assert video.channel_thumbnail_url == "https://yt3.ggpht.com/avatar.jpg"
    assert video.is_verified is True


def test_thumbnail_falls_back_to_high() -> None:
    client = make_client(videos=video_response({"high": {"url": "https://i.ytimg.com/vi/x/hq.jpg"}}))

    video = YouTubeDataAPIAdapter(None, client=client).get_video_details("dQw4w9WgXcQ")

    assert video.video_thumbnail_url == "https://i.ytimg.com/vi/x/hq.jpg"


def test_verified_threshold() -> None:
    client = make_client(channels=channel_response(subscribers="99999"))

    video = YouTubeDataAPIAdapter(None, client=client).get_video_details("dQw4w9WgXcQ")

    assert video.is_verified is False


def test_video_not_found() -> None:
    client = make_client(videos={"items": []})

    with pytest.raises(VideoNotFound):
        YouTubeDataAPIAdapter(None, client=client).get_video_details("missing0000")


def test_channel_not_found() -> None:
    client = make_client(channels={"items": []})

    with pytest.raises(ChannelNotFound):
        YouTubeDataAPIAdapter(None, client=client).get_video_details("dQw4w9WgXcQ")


def test_http_error_becomes_metadata_error() -> None:
    client = make_client()
    client.videos.return_value.list.return_value.execute.side_effect = HttpError(
        httplib2.Response({"status": 403, "reason": "Forbidden"}), b""
    )

    with pytest.raises(MetadataFetchError):
        YouTubeDataAPIAdapter(None, client=client).get_video_details("dQw4w9WgXcQ")


def test_comments_are_sanitized_and_capped() -> None:
    comments = {
        "items": [{
            "snippet": {"topLevelComment": {"snippet": {
                "textDisplay": "Loved it <br>@host 2024 #best",
                "authorDisplayName": "Ana",
                "authorProfileImageUrl": "http://yt3.ggpht.com/ana.jpg",
            }}}
        }]
    }
    client = make_client(comments=comments)

    result = YouTubeDataAPIAdapter(None, client=client).get_comments("dQw4w9WgXcQ", max_results=500)

    assert len(result) == 1
    assert result[0].text == "Loved it host best"
    assert result[0].author_name == "Ana"
    assert result[0].author_profile_image_url == "https://yt3.ggpht.com/ana.jpg"
    kwargs = client.commentThreads.return_value.list.call_args.kwargs
    assert kwargs["maxResults"] == 100
    assert kwargs["videoId"] == "dQw4w9WgXcQ"


def test_comments_without_items_raise() -> None:
    client = make_client(comments={"kind": "youtube#commentThreadListResponse"})

    with pytest.raises(MetadataFetchError):
        YouTubeDataAPIAdapter(None, client=client).get_comments("dQw4w9WgXcQ")
