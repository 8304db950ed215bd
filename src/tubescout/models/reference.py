"""Classified references parsed from a user query."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class VideoReference:
    video_id: str


@dataclass(frozen=True)
class PlaylistReference:
    playlist_id: str


@dataclass(frozen=True)
class ChannelReference:
    """A channel pointer, either a ``UC...`` id or an ``@handle``."""

    kind: str  # 'id' or 'handle'
    value: str


@dataclass(frozen=True)
class SearchReference:
    """Free text that matched no URL shape; resolved via search."""

    text: str


Reference = Union[VideoReference, PlaylistReference, ChannelReference, SearchReference]
