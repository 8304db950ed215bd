"""
Configuration for pytest tests.
"""

import pytest
from unittest.mock import MagicMock

from tubescout.models.video import VideoRecord

VALID_YOUTUBE_KEY = "AIza" + "x" * 35


def make_video_item(video_id, title=None, duration="PT10M", width=320, height=180, **snippet_extra):
    """Build a ``videos.list`` item the way the API returns it."""
    snippet = {
        "title": title or f"Video {video_id}",
        "description": f"About {video_id}",
        "channelTitle": "Test Channel",
        "publishedAt": "2024-01-01T00:00:00Z",
        "categoryId": "27",
        "thumbnails": {},
    }
    if width is not None or height is not None:
        snippet["thumbnails"]["medium"] = {"url": "https://i.ytimg.com/x.jpg", "width": width, "height": height}
    snippet.update(snippet_extra)
    return {
        "id": video_id,
        "snippet": snippet,
        "contentDetails": {"duration": duration},
        "statistics": {"viewCount": "1234", "likeCount": "56", "commentCount": "7"},
    }


def make_channel_item(channel_id="UC123", uploads="UU123", title="Test Channel"):
    return {
        "id": channel_id,
        "snippet": {"title": title, "description": "A channel", "customUrl": "@test"},
        "statistics": {"subscriberCount": "1000", "videoCount": "42", "viewCount": "99999"},
        "contentDetails": {"relatedPlaylists": {"uploads": uploads}},
    }


def make_playlist_page(video_ids, next_page_token=None):
    page = {"items": [{"snippet": {"resourceId": {"videoId": vid}}} for vid in video_ids]}
    if next_page_token:
        page["nextPageToken"] = next_page_token
    return page


def make_video(video_id="abcdefghijk", **kwargs):
    return VideoRecord.from_api(make_video_item(video_id, **kwargs))


@pytest.fixture
def youtube_client():
    """Mock of the discovery client: ``client.videos().list(...).execute()``."""
    client = MagicMock()
    for resource in ("videos", "channels", "playlists", "playlistItems", "search"):
        getattr(client, resource).return_value.list.return_value.execute.return_value = {"items": []}
    return client


@pytest.fixture
def video():
    return make_video("dQw4w9WgXcQ", title="Never Gonna Give You Up")


@pytest.fixture
def test_config():
    """Configuration with valid-looking keys and no waiting."""
    return {
        "youtube_api_key": VALID_YOUTUBE_KEY,
        "gemini_api_key": "test_gemini_key",
        "gemini_model": "gemini-2.5-flash",
        "summary_max_attempts": 3,
        "summary_base_delay_seconds": 2.0,
        "batch_delay_seconds": 0,
        "media_api_url": "https://media.example.com/api/json",
        "media_api_timeout": 5,
    }
