"""Video, channel and playlist data models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tubescout.utils.errors import UnexpectedResponseError
from tubescout.utils.filters import duration_seconds


def _to_int(value: Any) -> Optional[int]:
    """Statistics arrive as numeric strings; missing ones stay None."""
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _require(item: Dict, key: str, kind: str) -> Any:
    value = item.get(key)
    if value is None:
        raise UnexpectedResponseError(f"{kind} payload is missing '{key}'")
    return value


@dataclass(frozen=True)
class VideoRecord:
    """A video as returned by the YouTube Data API ``videos`` endpoint."""

    video_id: str
    title: str
    description: str = ""
    duration: str = ""  # ISO-8601, e.g. PT1H2M3S
    thumbnail_width: Optional[int] = None  # medium thumbnail
    thumbnail_height: Optional[int] = None
    channel_title: str = ""
    published_at: str = ""
    category_id: str = ""
    tags: List[str] = field(default_factory=list)
    view_count: Optional[int] = None
    like_count: Optional[int] = None
    comment_count: Optional[int] = None
    raw: Dict = field(default_factory=dict, repr=False, compare=False)

    @property
    def duration_seconds(self) -> int:
        return duration_seconds(self.duration)

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"

    @classmethod
    def from_api(cls, item: Dict) -> 'VideoRecord':
        """Create a record from a ``videos.list`` item."""
        video_id = _require(item, 'id', 'Video')
        snippet = _require(item, 'snippet', 'Video')
        content_details = _require(item, 'contentDetails', 'Video')
        statistics = item.get('statistics') or {}
        medium = (snippet.get('thumbnails') or {}).get('medium') or {}

        return cls(
            video_id=video_id,
            title=snippet.get('title', 'Unknown Title'),
            description=snippet.get('description', ''),
            duration=content_details.get('duration', ''),
            thumbnail_width=_to_int(medium.get('width')),
            thumbnail_height=_to_int(medium.get('height')),
            channel_title=snippet.get('channelTitle', ''),
            published_at=snippet.get('publishedAt', ''),
            category_id=snippet.get('categoryId', ''),
            tags=list(snippet.get('tags') or []),
            view_count=_to_int(statistics.get('viewCount')),
            like_count=_to_int(statistics.get('likeCount')),
            comment_count=_to_int(statistics.get('commentCount')),
            raw=item,
        )


@dataclass(frozen=True)
class ChannelRecord:
    """A channel as returned by the ``channels`` endpoint."""

    channel_id: str
    title: str
    uploads_playlist_id: str
    description: str = ""
    custom_url: str = ""
    subscriber_count: Optional[int] = None
    video_count: Optional[int] = None
    view_count: Optional[int] = None
    raw: Dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, item: Dict) -> 'ChannelRecord':
        """Create a record from a ``channels.list`` item."""
        channel_id = _require(item, 'id', 'Channel')
        snippet = item.get('snippet') or {}
        statistics = item.get('statistics') or {}
        related = (item.get('contentDetails') or {}).get('relatedPlaylists') or {}
        uploads = related.get('uploads')
        if not uploads:
            raise UnexpectedResponseError(
                f"Channel {channel_id} has no uploads playlist in its payload"
            )

        return cls(
            channel_id=channel_id,
            title=snippet.get('title', 'Unknown Channel'),
            uploads_playlist_id=uploads,
            description=snippet.get('description', ''),
            custom_url=snippet.get('customUrl', ''),
            subscriber_count=_to_int(statistics.get('subscriberCount')),
            video_count=_to_int(statistics.get('videoCount')),
            view_count=_to_int(statistics.get('viewCount')),
            raw=item,
        )


@dataclass(frozen=True)
class PlaylistRecord:
    """A playlist as returned by the ``playlists`` endpoint."""

    playlist_id: str
    title: str
    description: str = ""
    channel_title: str = ""
    raw: Dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, item: Dict) -> 'PlaylistRecord':
        playlist_id = _require(item, 'id', 'Playlist')
        snippet = item.get('snippet') or {}
        return cls(
            playlist_id=playlist_id,
            title=snippet.get('title', 'Untitled Playlist'),
            description=snippet.get('description', ''),
            channel_title=snippet.get('channelTitle', ''),
            raw=item,
        )


@dataclass(frozen=True)
class SearchHit:
    """First search result, resolved to full details."""

    kind: str  # 'video' or 'channel'
    record: Any


@dataclass(frozen=True)
class DirectLink:
    """A stream candidate returned by the media-resolution service."""

    url: str
    quality: str
    type: str
