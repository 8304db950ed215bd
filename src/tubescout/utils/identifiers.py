"""Parse free-form input into video, playlist or channel references.

Precedence is video, then playlist, then channel. A watch URL that also
carries ``list=`` is therefore treated as a single video.
"""

import re
from typing import Optional, Tuple

from tubescout.models.reference import (
    ChannelReference,
    PlaylistReference,
    Reference,
    SearchReference,
    VideoReference,
)

VIDEO_ID_LENGTH = 11

_VIDEO_RE = re.compile(r"^.*(youtu.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")
_SHORT_VIDEO_RE = re.compile(r"youtu\.be/([^#&?]{11})")
_PLAYLIST_RE = re.compile(r"[?&]list=([^#&?]+)")
_CHANNEL_ID_RE = re.compile(r"youtube\.com/channel/([a-zA-Z0-9_-]+)")
_CHANNEL_HANDLE_RE = re.compile(r"youtube\.com/@([a-zA-Z0-9_.-]+)")


def extract_video_id(text: str) -> Optional[str]:
    if not text:
        return None
    match = _VIDEO_RE.match(text)
    if match and len(match.group(2)) == VIDEO_ID_LENGTH:
        return match.group(2)
    short = _SHORT_VIDEO_RE.search(text)
    if short:
        return short.group(1)
    return None


def extract_playlist_id(text: str) -> Optional[str]:
    if not text:
        return None
    match = _PLAYLIST_RE.search(text)
    return match.group(1) if match else None


def extract_channel_identifier(text: str) -> Optional[Tuple[str, str]]:
    """Return ``('id', value)`` or ``('handle', value)`` for channel URLs."""
    if not text:
        return None
    match = _CHANNEL_ID_RE.search(text)
    if match:
        return 'id', match.group(1)
    match = _CHANNEL_HANDLE_RE.search(text)
    if match:
        return 'handle', match.group(1)
    return None


def classify(text: str) -> Optional[Reference]:
    """Classify a query. Returns None only for blank input."""
    if not text or not text.strip():
        return None

    video_id = extract_video_id(text)
    if video_id:
        return VideoReference(video_id)

    playlist_id = extract_playlist_id(text)
    if playlist_id:
        return PlaylistReference(playlist_id)

    channel = extract_channel_identifier(text)
    if channel:
        kind, value = channel
        return ChannelReference(kind, value)

    return SearchReference(text.strip())
