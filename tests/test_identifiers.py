"""
Tests for query classification.
"""

import pytest

from tubescout.models.reference import (
    ChannelReference,
    PlaylistReference,
    SearchReference,
    VideoReference,
)
from tubescout.utils.identifiers import (
    classify,
    extract_channel_identifier,
    extract_playlist_id,
    extract_video_id,
)

VIDEO_ID = "dQw4w9WgXcQ"


@pytest.mark.parametrize("url", [
    f"https://www.youtube.com/watch?v={VIDEO_ID}",
    f"https://www.youtube.com/watch?v={VIDEO_ID}&t=42s",
    f"https://youtu.be/{VIDEO_ID}",
    f"https://youtu.be/{VIDEO_ID}?si=-InVol0JhtWji-6R",
    f"https://www.youtube.com/embed/{VIDEO_ID}",
    f"https://www.youtube.com/v/{VIDEO_ID}",
    f"https://www.youtube.com/u/w/{VIDEO_ID}",
    f"https://www.youtube.com/watch?feature=share&v={VIDEO_ID}",
])
def test_video_urls_yield_exact_id(url):
    """Every supported URL shape gives back the embedded id."""
    assert extract_video_id(url) == VIDEO_ID
    assert classify(url) == VideoReference(VIDEO_ID)


def test_wrong_length_id_is_not_a_video():
    assert extract_video_id("https://www.youtube.com/watch?v=tooShort") is None
    assert extract_video_id("https://www.youtube.com/watch?v=waytoolongvideoid") is None


def test_playlist_url():
    url = "https://www.youtube.com/playlist?list=PLabc123_-XYZ"
    assert extract_playlist_id(url) == "PLabc123_-XYZ"
    assert classify(url) == PlaylistReference("PLabc123_-XYZ")


def test_video_wins_over_playlist():
    """A watch URL inside a playlist is treated as the single video."""
    url = f"https://www.youtube.com/watch?v={VIDEO_ID}&list=PLabc123"
    assert extract_playlist_id(url) == "PLabc123"
    assert classify(url) == VideoReference(VIDEO_ID)


def test_channel_id_url():
    url = "https://www.youtube.com/channel/UC_x5XG1OV2P6uZZ5FSM9Ttw"
    assert extract_channel_identifier(url) == ("id", "UC_x5XG1OV2P6uZZ5FSM9Ttw")
    assert classify(url) == ChannelReference("id", "UC_x5XG1OV2P6uZZ5FSM9Ttw")


def test_channel_handle_url():
    url = "https://www.youtube.com/@GoogleDevelopers/videos"
    assert extract_channel_identifier(url) == ("handle", "GoogleDevelopers")
    assert classify(url) == ChannelReference("handle", "GoogleDevelopers")


def test_free_text_becomes_search():
    assert classify("  lofi hip hop radio  ") == SearchReference("lofi hip hop radio")


@pytest.mark.parametrize("text", ["", "   ", None])
def test_blank_input_is_unclassified(text):
    assert classify(text) is None
